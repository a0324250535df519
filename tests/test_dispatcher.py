import http.client

import pytest

from conftest import RecordingTransport
from topoctl.control.dispatcher import CommandDispatcher, DispatchLifecycleEvent
from topoctl.control.transport import TransportError
from topoctl.core.commands import Command
from topoctl.core.models import MasterLocation, TunnelConfig
from topoctl.statemgr.store import InMemoryStateStore
from topoctl.utils.diagnostics import DispatchError, MalformedTargetError, ResolutionError


def test_dispatch_sends_built_target(store, transport):
    dispatcher = CommandDispatcher(store, transport=transport)

    dispatcher.dispatch("wordcount", Command.ACTIVATE)

    assert transport.sent == ["http://10.0.0.5:8080/activate?topologyid=wordcount-1"]


def test_dispatch_passes_tunnel_config_through(store, transport):
    tunnel = TunnelConfig(is_tunnel_needed=True, tunnel_host="proxy.local", tunnel_port=8888)
    dispatcher = CommandDispatcher(store, transport=transport)

    dispatcher.dispatch("wordcount", Command.DEACTIVATE, tunnel_config=tunnel)

    assert transport.tunnels == [tunnel]


def test_dispatch_resolves_location_on_every_call(store, transport):
    dispatcher = CommandDispatcher(store, transport=transport)
    dispatcher.dispatch("wordcount", Command.ACTIVATE)

    store.locations["wordcount"] = MasterLocation(host="10.0.0.9", controller_port=9090, topology_id="wordcount-1")
    dispatcher.dispatch("wordcount", Command.ACTIVATE)

    assert transport.sent == [
        "http://10.0.0.5:8080/activate?topologyid=wordcount-1",
        "http://10.0.0.9:9090/activate?topologyid=wordcount-1",
    ]


def test_missing_location_raises_before_transport(transport):
    dispatcher = CommandDispatcher(InMemoryStateStore(), transport=transport)

    with pytest.raises(ResolutionError) as exc_info:
        dispatcher.dispatch("ghost-job", Command.ACTIVATE)

    assert isinstance(exc_info.value, DispatchError)
    assert exc_info.value.job_id == "ghost-job"
    assert exc_info.value.command == "ACTIVATE"
    assert transport.call_count == 0


def test_malformed_target_raises_before_transport(transport):
    store = InMemoryStateStore(
        locations={"bad": MasterLocation(host="", controller_port=8080, topology_id="bad-1")}
    )
    dispatcher = CommandDispatcher(store, transport=transport)

    with pytest.raises(MalformedTargetError) as exc_info:
        dispatcher.dispatch("bad", Command.ACTIVATE)

    assert exc_info.value.job_id == "bad"
    assert "`ACTIVATE`" in str(exc_info.value)
    assert transport.call_count == 0


@pytest.mark.parametrize("status", [201, 202, 204, 301, 400, 404, 500, 503])
def test_non_ok_status_is_dispatch_error(store, status):
    transport = RecordingTransport(status=status)
    dispatcher = CommandDispatcher(store, transport=transport)

    with pytest.raises(DispatchError) as exc_info:
        dispatcher.dispatch("wordcount", Command.DEACTIVATE)

    assert f"Non OK HTTP response {status}" in str(exc_info.value)
    assert "DEACTIVATE" in str(exc_info.value)
    assert transport.connections[0].close_calls == 1


@pytest.mark.parametrize(
    "error",
    [
        TransportError("connection refused"),
        ConnectionRefusedError("refused"),
        TimeoutError("timed out"),
        http.client.RemoteDisconnected("gone"),
    ],
)
def test_transport_failure_is_wrapped_and_connection_closed(store, error):
    transport = RecordingTransport(send_error=error)
    dispatcher = CommandDispatcher(store, transport=transport)

    with pytest.raises(DispatchError) as exc_info:
        dispatcher.dispatch("wordcount", Command.ACTIVATE)

    assert "ACTIVATE" in str(exc_info.value)
    assert exc_info.value.__cause__ is error
    assert transport.connections[0].close_calls == 1


def test_status_read_failure_is_wrapped_and_connection_closed(store):
    transport = RecordingTransport()
    dispatcher = CommandDispatcher(store, transport=transport)

    def open_failing(target, tunnel_config):
        connection = RecordingTransport.open_connection(transport, target, tunnel_config)
        connection.status_error = OSError("reset by peer")
        return connection

    transport.open_connection = open_failing

    with pytest.raises(DispatchError):
        dispatcher.dispatch("wordcount", Command.ACTIVATE)

    assert transport.connections[0].close_calls == 1


def test_connection_closed_exactly_once_on_success(store, transport):
    dispatcher = CommandDispatcher(store, transport=transport)

    dispatcher.dispatch("wordcount", Command.ACTIVATE)

    assert [c.close_calls for c in transport.connections] == [1]


def test_unavailable_connection_is_dispatch_error(store):
    transport = RecordingTransport(refuse=True)
    dispatcher = CommandDispatcher(store, transport=transport)

    with pytest.raises(DispatchError) as exc_info:
        dispatcher.dispatch("wordcount", Command.ACTIVATE)

    assert "Failed to get a HTTP connection" in str(exc_info.value)
    assert transport.sent == []


def test_events_are_reported_in_order(store, transport):
    events: list[DispatchLifecycleEvent] = []
    dispatcher = CommandDispatcher(store, transport=transport, on_event=events.append)

    dispatcher.dispatch("wordcount", Command.ACTIVATE)

    messages = [event.message for event in events]
    assert messages[0] == "Fetching master location for topology: wordcount"
    assert any(m.startswith("HTTP URL for master: http://10.0.0.5:8080/activate") for m in messages)
    assert messages[-1] == "Successfully got a HTTP response from master using command: ACTIVATE"
    assert all(event.severity == "debug" for event in events)
