from __future__ import annotations

import http.client
from dataclasses import dataclass
from http import HTTPStatus
from typing import Callable, Optional, Sequence, Union

from topoctl.control.request import build_request_target
from topoctl.control.resolver import resolve_master_location
from topoctl.control.transport import HttpTransport, Transport, TransportError
from topoctl.core.commands import Command
from topoctl.core.models import TunnelConfig
from topoctl.statemgr.store import CoordinationStore
from topoctl.utils.diagnostics import DispatchError


@dataclass(frozen=True)
class DispatchLifecycleEvent:
    """Host-facing progress event emitted while a command is handled."""

    job_id: str
    command: str
    message: str
    severity: str = "debug"


EventCallback = Callable[[DispatchLifecycleEvent], None]


def command_name(command: Union[Command, str]) -> str:
    return command.name if isinstance(command, Command) else command


class CommandDispatcher:
    """
    Sends one command to a topology master and classifies the answer.

    Holds no per-job state: the master location is resolved again on every call.
    """

    def __init__(
        self,
        store: CoordinationStore,
        transport: Optional[Transport] = None,
        scheme: str = "http",
        on_event: Optional[EventCallback] = None,
    ) -> None:
        self.store = store
        self.transport = transport or HttpTransport()
        self.scheme = scheme
        self.on_event = on_event

    def dispatch(
        self,
        job_id: str,
        command: Union[Command, str],
        arguments: Sequence[str] = (),
        tunnel_config: Optional[TunnelConfig] = None,
    ) -> None:
        """Resolve the master, build the request target and send it. Only HTTP 200 succeeds."""
        name = command_name(command)
        tunnel_config = tunnel_config or TunnelConfig()

        self.emit(job_id, name, f"Fetching master location for topology: {job_id}")
        location = resolve_master_location(self.store, job_id, command=name)
        self.emit(job_id, name, f"Fetched master location for topology: {job_id}")

        target = build_request_target(location, command, arguments, scheme=self.scheme, job_id=job_id)
        self.emit(job_id, name, f"HTTP URL for master: {target}")

        self._send(job_id, name, target, tunnel_config)

    def _send(self, job_id: str, name: str, target: str, tunnel_config: TunnelConfig) -> None:
        try:
            connection = self.transport.open_connection(target, tunnel_config)
        except (TransportError, OSError) as exc:
            raise DispatchError(
                f"Failed to open HTTP connection to master for topology '{job_id}' "
                f"using command `{name}`: {exc}",
                job_id=job_id,
                command=name,
            ) from exc

        if connection is None:
            raise DispatchError(
                f"Failed to get a HTTP connection to master for topology '{job_id}' "
                f"using command `{name}`: {target}",
                job_id=job_id,
                command=name,
            )
        self.emit(job_id, name, "Successfully opened HTTP connection to master")

        try:
            self.transport.send_request(connection)
            status = connection.status_code()
        except (TransportError, OSError, http.client.HTTPException) as exc:
            raise DispatchError(
                f"Failed to receive HTTP response from master for topology '{job_id}' "
                f"using command `{name}`: {exc}",
                job_id=job_id,
                command=name,
            ) from exc
        finally:
            connection.close()

        if status != HTTPStatus.OK:
            raise DispatchError(
                f"Non OK HTTP response {status} from master for topology '{job_id}' "
                f"for command {name}",
                job_id=job_id,
                command=name,
            )

        self.emit(job_id, name, f"Successfully got a HTTP response from master using command: {name}")

    def emit(self, job_id: str, name: str, message: str, severity: str = "debug") -> None:
        if self.on_event is not None:
            self.on_event(
                DispatchLifecycleEvent(job_id=job_id, command=name, message=message, severity=severity)
            )
