from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

from pydantic import BaseModel

from topoctl.control.dispatcher import CommandDispatcher, EventCallback
from topoctl.control.guard import Decision, StateGuard
from topoctl.control.resolver import resolve_master_location
from topoctl.control.runtime_config import encode_runtime_config
from topoctl.control.transport import Transport
from topoctl.core.commands import COMMAND_SPECS, Command
from topoctl.core.context import TopoctlContext
from topoctl.core.models import TunnelConfig
from topoctl.statemgr.store import CoordinationStore, FileStateStore


class CommandStatus(str, Enum):
    APPLIED = "applied"
    ALREADY_SATISFIED = "already_satisfied"


class CommandResult(BaseModel):
    """Outcome of one control command."""

    job_id: str
    command: Command
    status: CommandStatus
    message: str


class TopologyController:
    """Entry point for topology lifecycle transitions and runtime config pushes."""

    def __init__(
        self,
        store: CoordinationStore,
        transport: Optional[Transport] = None,
        tunnel_config: Optional[TunnelConfig] = None,
        scheme: str = "http",
        on_event: Optional[EventCallback] = None,
    ) -> None:
        self.store = store
        self.tunnel_config = tunnel_config or TunnelConfig()
        self.guard = StateGuard(store)
        self.dispatcher = CommandDispatcher(store, transport=transport, scheme=scheme, on_event=on_event)

    @classmethod
    def from_context(
        cls,
        context: TopoctlContext,
        base_dir: Path,
        transport: Optional[Transport] = None,
        on_event: Optional[EventCallback] = None,
    ) -> "TopologyController":
        """Build a controller over the file-backed store configured in context."""
        return cls(
            store=FileStateStore(context.state_root(base_dir)),
            transport=transport,
            tunnel_config=context.transport.tunnel,
            scheme=context.transport.scheme,
            on_event=on_event,
        )

    def activate(self, job_id: str) -> CommandResult:
        return self.transition_state(job_id, Command.ACTIVATE)

    def deactivate(self, job_id: str) -> CommandResult:
        return self.transition_state(job_id, Command.DEACTIVATE)

    def transition_state(self, job_id: str, command: Command) -> CommandResult:
        """
        Move a topology between lifecycle states, skipping commands that are already satisfied.

        The master location is resolved before the state is read, so a topology with no
        master record fails with ResolutionError even when it is already in the expected
        state. The dispatch itself resolves the location again.
        """
        spec = COMMAND_SPECS[command]
        if not spec.requires_state_check:
            raise ValueError(f"Command {command.name} is not a state transition.")

        # A job without a reachable master is reported as such before its state is read.
        resolve_master_location(self.store, job_id, command=command.name)

        decision = self.guard.check_and_advance(
            job_id,
            start_state=spec.start_state,
            expected_state=spec.expected_state,
            command=command.name,
        )

        if decision == Decision.ALREADY_SATISFIED:
            message = (
                f"Topology {command.name} command received but topology '{job_id}' "
                f"already in state {spec.expected_state.value}"
            )
            self.dispatcher.emit(job_id, command.name, message, severity="warning")
            return CommandResult(
                job_id=job_id,
                command=command,
                status=CommandStatus.ALREADY_SATISFIED,
                message=message,
            )

        self.dispatcher.dispatch(job_id, command, tunnel_config=self.tunnel_config)
        return self._completed(job_id, command)

    def push_runtime_config(self, job_id: str, configs: Sequence[str]) -> CommandResult:
        """Send runtime 'key=value' config entries to the master; no state precondition."""
        arguments = encode_runtime_config(configs)
        self.dispatcher.dispatch(
            job_id,
            Command.RUNTIME_CONFIG_UPDATE,
            arguments,
            tunnel_config=self.tunnel_config,
        )
        return self._completed(job_id, Command.RUNTIME_CONFIG_UPDATE)

    def _completed(self, job_id: str, command: Command) -> CommandResult:
        message = f"Topology command {command.name} completed successfully."
        self.dispatcher.emit(job_id, command.name, message, severity="success")
        return CommandResult(
            job_id=job_id,
            command=command,
            status=CommandStatus.APPLIED,
            message=message,
        )
