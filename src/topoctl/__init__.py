from __future__ import annotations

from topoctl.control import (
    CommandDispatcher,
    CommandResult,
    CommandStatus,
    Decision,
    DispatchLifecycleEvent,
    HttpTransport,
    StateGuard,
    TopologyController,
    build_request_target,
    encode_runtime_config,
    resolve_master_location,
)
from topoctl.core.commands import COMMAND_SPECS, Command
from topoctl.core.models import MasterLocation, PhysicalPlan, TopologyState, TunnelConfig
from topoctl.statemgr import FileStateStore, InMemoryStateStore
from topoctl.utils.diagnostics import (
    CoordinationStoreError,
    DispatchError,
    InvalidStateError,
    MalformedTargetError,
    ResolutionError,
    TopologyControlError,
    UninitializedError,
)

__all__ = [
    "COMMAND_SPECS",
    "Command",
    "CommandDispatcher",
    "CommandResult",
    "CommandStatus",
    "CoordinationStoreError",
    "Decision",
    "DispatchError",
    "DispatchLifecycleEvent",
    "FileStateStore",
    "HttpTransport",
    "InMemoryStateStore",
    "InvalidStateError",
    "MalformedTargetError",
    "MasterLocation",
    "PhysicalPlan",
    "ResolutionError",
    "StateGuard",
    "TopologyControlError",
    "TopologyController",
    "TopologyState",
    "TunnelConfig",
    "UninitializedError",
    "build_request_target",
    "encode_runtime_config",
    "resolve_master_location",
]
