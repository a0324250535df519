import itertools

import pytest

from conftest import make_plan
from topoctl.control.guard import Decision, StateGuard
from topoctl.core.models import TopologyState
from topoctl.statemgr.store import InMemoryStateStore
from topoctl.utils.diagnostics import InvalidStateError, UninitializedError


def _guard_for(state: TopologyState | None) -> StateGuard:
    return StateGuard(InMemoryStateStore(plans={"job": make_plan("job", state)}))


@pytest.mark.parametrize(
    "start_state, expected_state, current_state",
    list(itertools.product(TopologyState, repeat=3)),
)
def test_check_and_advance_decision_table(start_state, expected_state, current_state):
    guard = _guard_for(current_state)

    if current_state == expected_state:
        assert guard.check_and_advance("job", start_state, expected_state) == Decision.ALREADY_SATISFIED
    elif current_state == start_state:
        assert guard.check_and_advance("job", start_state, expected_state) == Decision.PROCEED
    else:
        with pytest.raises(InvalidStateError):
            guard.check_and_advance("job", start_state, expected_state)


def test_already_satisfied_wins_over_start_state_mismatch():
    guard = _guard_for(TopologyState.PAUSED)

    decision = guard.check_and_advance("job", TopologyState.RUNNING, TopologyState.PAUSED)

    assert decision == Decision.ALREADY_SATISFIED


def test_invalid_state_error_carries_observed_and_required_state():
    guard = _guard_for(TopologyState.KILLED)

    with pytest.raises(InvalidStateError) as exc_info:
        guard.check_and_advance("job", TopologyState.PAUSED, TopologyState.RUNNING, command="ACTIVATE")

    error = exc_info.value
    assert error.job_id == "job"
    assert error.command == "ACTIVATE"
    assert error.observed_state == "KILLED"
    assert error.required_state == "PAUSED"
    assert "KILLED" in str(error) and "PAUSED" in str(error)


def test_missing_plan_is_uninitialized():
    guard = StateGuard(InMemoryStateStore())

    with pytest.raises(UninitializedError) as exc_info:
        guard.check_and_advance("ghost", TopologyState.PAUSED, TopologyState.RUNNING)

    assert "ghost" in str(exc_info.value)


def test_plan_without_state_is_uninitialized():
    guard = _guard_for(None)

    with pytest.raises(UninitializedError) as exc_info:
        guard.check_and_advance("job", TopologyState.PAUSED, TopologyState.RUNNING)

    assert "not initialized" in str(exc_info.value)
