from __future__ import annotations

from enum import Enum
from typing import Optional

from topoctl.core.models import TopologyState
from topoctl.statemgr.store import CoordinationStore
from topoctl.utils.diagnostics import InvalidStateError, UninitializedError, using_command


class Decision(str, Enum):
    """Outcome of a state precondition check."""

    PROCEED = "proceed"
    ALREADY_SATISFIED = "already_satisfied"


class StateGuard:
    """Checks a topology's lifecycle state before a transition command is sent."""

    def __init__(self, store: CoordinationStore) -> None:
        self.store = store

    def current_state(self, job_id: str, command: Optional[str] = None) -> TopologyState:
        """Read the lifecycle state from the job's physical plan."""
        plan = self.store.get_physical_plan(job_id)
        if plan is None:
            raise UninitializedError(
                f"Failed to get physical plan for topology '{job_id}'{using_command(command)}",
                job_id=job_id,
                command=command,
            )

        if plan.topology.state is None:
            raise UninitializedError(
                f"Topology '{job_id}' is not initialized yet{using_command(command)}",
                job_id=job_id,
                command=command,
            )

        return plan.topology.state

    def check_and_advance(
        self,
        job_id: str,
        start_state: TopologyState,
        expected_state: TopologyState,
        command: Optional[str] = None,
    ) -> Decision:
        """
        Decide whether a transition from start_state to expected_state may be sent.

        A job already in expected_state is accepted as ALREADY_SATISFIED even though
        it no longer matches start_state, so that check runs first.
        """
        state = self.current_state(job_id, command=command)

        if state == expected_state:
            return Decision.ALREADY_SATISFIED

        if state != start_state:
            raise InvalidStateError(
                f"Topology '{job_id}' is in state '{state.value}', "
                f"command {command or 'transition'} requires '{start_state.value}'",
                job_id=job_id,
                command=command,
                observed_state=state.value,
                required_state=start_state.value,
            )

        return Decision.PROCEED
