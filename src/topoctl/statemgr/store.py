from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional, Protocol, Type, TypeVar

from pydantic import BaseModel, ValidationError

from topoctl.core.models import MasterLocation, PhysicalPlan
from topoctl.utils.diagnostics import CoordinationStoreError

RecordT = TypeVar("RecordT", bound=BaseModel)


class CoordinationStore(Protocol):
    """Read-only view of the externally managed coordination store."""

    def get_master_location(self, job_id: str) -> Optional[MasterLocation]:
        ...

    def get_physical_plan(self, job_id: str) -> Optional[PhysicalPlan]:
        ...


def master_location_path(root_dir: Path, job_id: str) -> Path:
    """Return the master location record path for a topology."""
    return root_dir / "tmasters" / f"{job_id}.json"


def physical_plan_path(root_dir: Path, job_id: str) -> Path:
    """Return the physical plan record path for a topology."""
    return root_dir / "pplans" / f"{job_id}.json"


def _read_record(record_file: Path, model: Type[RecordT]) -> Optional[RecordT]:
    if not record_file.exists():
        return None

    try:
        payload = json.loads(record_file.read_text(encoding="utf-8"))
        return model.model_validate(payload)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        raise CoordinationStoreError(f"Invalid record at {record_file}: {exc}") from exc


def _write_record(record_file: Path, record: BaseModel) -> Path:
    record_file.parent.mkdir(parents=True, exist_ok=True)
    record_file.write_text(record.model_dump_json(indent=2), encoding="utf-8")
    return record_file


def write_master_location(root_dir: Path, job_id: str, location: MasterLocation) -> Path:
    """Persist a master location record for a topology."""
    return _write_record(master_location_path(root_dir, job_id), location)


def write_physical_plan(root_dir: Path, job_id: str, plan: PhysicalPlan) -> Path:
    """Persist a physical plan record for a topology."""
    return _write_record(physical_plan_path(root_dir, job_id), plan)


def clear_topology(root_dir: Path, job_id: str) -> bool:
    """Remove all records of a topology and return whether anything was removed."""
    removed = False
    for record_file in (master_location_path(root_dir, job_id), physical_plan_path(root_dir, job_id)):
        if record_file.exists():
            record_file.unlink()
            removed = True
    return removed


class FileStateStore:
    """
    Coordination store backed by JSON records under a root directory:
    <root>/tmasters/<job>.json and <root>/pplans/<job>.json.

    Every lookup reads the file again so a master failover is seen on the next call.
    """

    def __init__(self, root_dir: Path) -> None:
        self.root_dir = root_dir

    def get_master_location(self, job_id: str) -> Optional[MasterLocation]:
        return _read_record(master_location_path(self.root_dir, job_id), MasterLocation)

    def get_physical_plan(self, job_id: str) -> Optional[PhysicalPlan]:
        return _read_record(physical_plan_path(self.root_dir, job_id), PhysicalPlan)


class InMemoryStateStore:
    """Dict-backed coordination store for embedding hosts and tests."""

    def __init__(
        self,
        locations: Optional[Dict[str, MasterLocation]] = None,
        plans: Optional[Dict[str, PhysicalPlan]] = None,
    ) -> None:
        self.locations: Dict[str, MasterLocation] = dict(locations or {})
        self.plans: Dict[str, PhysicalPlan] = dict(plans or {})

    def get_master_location(self, job_id: str) -> Optional[MasterLocation]:
        return self.locations.get(job_id)

    def get_physical_plan(self, job_id: str) -> Optional[PhysicalPlan]:
        return self.plans.get(job_id)
