from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from topoctl.core.models import TopologyState


class Command(str, Enum):
    """Commands understood by a topology master."""

    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"
    RUNTIME_CONFIG_UPDATE = "runtime_config_update"


@dataclass(frozen=True)
class CommandSpec:
    """Wire path and state precondition for one command."""

    path: str
    requires_state_check: bool
    start_state: Optional[TopologyState] = None
    expected_state: Optional[TopologyState] = None


RUNTIME_CONFIG_KEY = "runtime-config"

COMMAND_SPECS: Dict[Command, CommandSpec] = {
    Command.ACTIVATE: CommandSpec(
        path="activate",
        requires_state_check=True,
        start_state=TopologyState.PAUSED,
        expected_state=TopologyState.RUNNING,
    ),
    Command.DEACTIVATE: CommandSpec(
        path="deactivate",
        requires_state_check=True,
        start_state=TopologyState.RUNNING,
        expected_state=TopologyState.PAUSED,
    ),
    # Served under its own endpoint, not the lowercased command name.
    Command.RUNTIME_CONFIG_UPDATE: CommandSpec(
        path="runtime_config/update",
        requires_state_check=False,
    ),
}


def command_path(command: Command) -> str:
    return COMMAND_SPECS[command].path
