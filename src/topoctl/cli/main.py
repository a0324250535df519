import typer
from pathlib import Path
from typing import List, Optional
from pydantic import ValidationError

from topoctl.cli.formatter import OutputFormatter
from topoctl.config.loader import find_config_file, load_config
from topoctl.control.controller import CommandResult, CommandStatus, TopologyController
from topoctl.core.commands import Command
from topoctl.core.context import TopoctlContext
from topoctl.core.models import MasterLocation, TopologyState
from topoctl.utils.diagnostics import TopologyControlError

app = typer.Typer(name="topoctl", help="Topology control-plane CLI", rich_markup_mode=None)

ROOT_OPTION = typer.Option(Path("."), "--root", "-r", help="Directory holding topoctl.yaml.")


def _load_context(root_dir: Path) -> TopoctlContext:
    # Level is per invocation; drop whatever a previous run in this process set.
    OutputFormatter.set_level("info")
    config_path = find_config_file(root_dir)
    try:
        context = TopoctlContext(config_dict=load_config(config_path))
    except ValidationError as exc:
        OutputFormatter.log(f"Invalid configuration in {config_path}: {exc}", severity="error")
        raise typer.Exit(code=1)

    OutputFormatter.set_level(context.settings.log_level)
    return context


def _build_controller(root_dir: Path) -> TopologyController:
    context = _load_context(root_dir)
    return TopologyController.from_context(
        context,
        base_dir=root_dir.expanduser().resolve(),
        on_event=OutputFormatter.log_event,
    )


def _run_command(root_dir: Path, job_id: str, command: Command, configs: Optional[List[str]] = None) -> None:
    controller = _build_controller(root_dir)
    try:
        if command == Command.RUNTIME_CONFIG_UPDATE:
            result: CommandResult = controller.push_runtime_config(job_id, configs or [])
        else:
            result = controller.transition_state(job_id, command)
    except TopologyControlError as exc:
        OutputFormatter.log(f"Failed to {command.value.replace('_', ' ')} topology '{job_id}': {exc}", severity="error")
        raise typer.Exit(code=1)

    if result.status == CommandStatus.ALREADY_SATISFIED:
        OutputFormatter.log(f"Nothing to do for topology '{job_id}'.", severity="info")


@app.command()
def activate(
    job_id: str = typer.Argument(..., help="Topology name."),
    root: Path = ROOT_OPTION,
):
    """
    Activate a paused topology.
    """
    _run_command(root, job_id, Command.ACTIVATE)


@app.command()
def deactivate(
    job_id: str = typer.Argument(..., help="Topology name."),
    root: Path = ROOT_OPTION,
):
    """
    Deactivate a running topology.
    """
    _run_command(root, job_id, Command.DEACTIVATE)


@app.command()
def update(
    job_id: str = typer.Argument(..., help="Topology name."),
    runtime_config: Optional[List[str]] = typer.Option(
        None,
        "--runtime-config",
        "-c",
        help="Runtime config entry as key=value; repeatable.",
    ),
    root: Path = ROOT_OPTION,
):
    """
    Push runtime configuration to a topology.
    """
    if not runtime_config:
        OutputFormatter.log("At least one --runtime-config entry is required.", severity="error")
        raise typer.Exit(code=2)

    _run_command(root, job_id, Command.RUNTIME_CONFIG_UPDATE, configs=list(runtime_config))


@app.command()
def status(
    job_id: str = typer.Argument(..., help="Topology name."),
    root: Path = ROOT_OPTION,
):
    """
    Show master location and lifecycle state of a topology.
    """
    controller = _build_controller(root)
    location: Optional[MasterLocation] = None
    state: Optional[TopologyState] = None

    try:
        location = controller.store.get_master_location(job_id)
        plan = controller.store.get_physical_plan(job_id)
    except TopologyControlError as exc:
        OutputFormatter.log(f"Failed to read topology '{job_id}': {exc}", severity="error")
        raise typer.Exit(code=1)

    if plan is not None:
        state = plan.topology.state

    if location is None and plan is None:
        OutputFormatter.log(f"Topology '{job_id}' not found.", severity="error")
        raise typer.Exit(code=1)

    OutputFormatter.print_status(job_id, location, state)


if __name__ == "__main__":
    app()
