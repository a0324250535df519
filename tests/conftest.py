import pytest
import sys
from pathlib import Path

# Ensure src/ is in the python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from topoctl.core.models import (  # noqa: E402
    MasterLocation,
    PhysicalPlan,
    TopologySnapshot,
    TopologyState,
)
from topoctl.statemgr.store import InMemoryStateStore  # noqa: E402


class FakeConnection:
    def __init__(self, target: str, status: int = 200, status_error: Exception | None = None):
        self.target = target
        self.status = status
        self.status_error = status_error
        self.close_calls = 0

    def status_code(self) -> int:
        if self.status_error is not None:
            raise self.status_error
        return self.status

    def close(self) -> None:
        self.close_calls += 1


class RecordingTransport:
    """Transport double that records every target and never touches the network."""

    def __init__(self, status: int = 200, send_error: Exception | None = None, refuse: bool = False):
        self.status = status
        self.send_error = send_error
        self.refuse = refuse
        self.opened: list[str] = []
        self.tunnels: list = []
        self.sent: list[str] = []
        self.connections: list[FakeConnection] = []

    @property
    def call_count(self) -> int:
        return len(self.opened)

    def open_connection(self, target, tunnel_config):
        self.opened.append(target)
        self.tunnels.append(tunnel_config)
        if self.refuse:
            return None
        connection = FakeConnection(target, status=self.status)
        self.connections.append(connection)
        return connection

    def send_request(self, connection):
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(connection.target)


def make_plan(name: str, state: TopologyState | None) -> PhysicalPlan:
    return PhysicalPlan(topology=TopologySnapshot(name=name, id=f"{name}-id", state=state))


@pytest.fixture
def root_dir(tmp_path):
    """
    Returns a temporary directory to act as the project root for tests.
    """
    return tmp_path


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def store():
    """A store with one running topology whose master is at 10.0.0.5:8080."""
    return InMemoryStateStore(
        locations={
            "wordcount": MasterLocation(host="10.0.0.5", controller_port=8080, topology_id="wordcount-1"),
        },
        plans={
            "wordcount": make_plan("wordcount", TopologyState.RUNNING),
        },
    )
