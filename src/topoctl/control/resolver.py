from __future__ import annotations

from typing import Optional

from topoctl.core.models import MasterLocation
from topoctl.statemgr.store import CoordinationStore
from topoctl.utils.diagnostics import CoordinationStoreError, ResolutionError, using_command


def resolve_master_location(
    store: CoordinationStore,
    job_id: str,
    command: Optional[str] = None,
) -> MasterLocation:
    """Look up where the master of job_id currently runs. Never cached."""
    try:
        location = store.get_master_location(job_id)
    except CoordinationStoreError as exc:
        raise ResolutionError(
            f"Failed to read master location for topology '{job_id}'{using_command(command)}: {exc.message}",
            job_id=job_id,
            command=command,
        ) from exc

    if location is None:
        raise ResolutionError(
            f"Failed to fetch master location for topology '{job_id}'{using_command(command)}",
            job_id=job_id,
            command=command,
        )

    return location
