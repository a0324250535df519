"""Topology master command client: location lookup, state checks and dispatch."""

from topoctl.control.controller import CommandResult, CommandStatus, TopologyController
from topoctl.control.dispatcher import CommandDispatcher, DispatchLifecycleEvent
from topoctl.control.guard import Decision, StateGuard
from topoctl.control.request import build_request_target, validate_request_target
from topoctl.control.resolver import resolve_master_location
from topoctl.control.runtime_config import encode_runtime_config
from topoctl.control.transport import HttpMasterConnection, HttpTransport, TransportError

__all__ = [
    "CommandDispatcher",
    "CommandResult",
    "CommandStatus",
    "Decision",
    "DispatchLifecycleEvent",
    "HttpMasterConnection",
    "HttpTransport",
    "StateGuard",
    "TopologyController",
    "TransportError",
    "build_request_target",
    "encode_runtime_config",
    "resolve_master_location",
    "validate_request_target",
]
