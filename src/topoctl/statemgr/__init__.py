"""Coordination store access for master locations and physical plans."""

from topoctl.statemgr.store import (
    CoordinationStore,
    FileStateStore,
    InMemoryStateStore,
    clear_topology,
    master_location_path,
    physical_plan_path,
    write_master_location,
    write_physical_plan,
)

__all__ = [
    "CoordinationStore",
    "FileStateStore",
    "InMemoryStateStore",
    "clear_topology",
    "master_location_path",
    "physical_plan_path",
    "write_master_location",
    "write_physical_plan",
]
