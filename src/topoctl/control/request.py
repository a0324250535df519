from __future__ import annotations

from typing import Optional, Sequence, Union
from urllib.parse import urlsplit

from topoctl.core.commands import Command, command_path
from topoctl.core.models import MasterLocation
from topoctl.utils.diagnostics import MalformedTargetError, using_command


def build_request_target(
    location: MasterLocation,
    command: Union[Command, str],
    arguments: Sequence[str] = (),
    scheme: str = "http",
    job_id: Optional[str] = None,
) -> str:
    """
    Compose the GET target for a master command.

    ``command`` is either a Command, mapped to its wire path, or a raw endpoint path.
    Arguments are appended verbatim as '&<arg>' segments in the given order;
    duplicates and malformed entries are passed through untouched.
    ``job_id`` is the caller's topology name, reported on errors.
    """
    if isinstance(command, Command):
        path, command_name = command_path(command), command.name
    else:
        path, command_name = command, command

    target = (
        f"{scheme}://{location.host}:{location.controller_port}/{path}"
        f"?topologyid={location.topology_id}"
    )
    for argument in arguments:
        target += f"&{argument}"

    validate_request_target(target, job_id=job_id, command=command_name)
    return target


def validate_request_target(
    target: str,
    job_id: Optional[str] = None,
    command: Optional[str] = None,
) -> None:
    """Raise MalformedTargetError unless target parses with a scheme, host and port."""
    topology = f" of topology '{job_id}'" if job_id else ""
    message = f"Invalid URL for master endpoint{topology}{using_command(command)}: {target}"
    try:
        parts = urlsplit(target)
        port = parts.port
    except ValueError as exc:
        raise MalformedTargetError(message, job_id=job_id, command=command) from exc

    if parts.scheme not in ("http", "https") or not parts.hostname or port is None:
        raise MalformedTargetError(message, job_id=job_id, command=command)

    if any(ch.isspace() for ch in parts.netloc):
        raise MalformedTargetError(message, job_id=job_id, command=command)
