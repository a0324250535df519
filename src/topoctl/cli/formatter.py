from typing import Optional
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from topoctl.control.dispatcher import DispatchLifecycleEvent
from topoctl.core.models import MasterLocation, TopologyState

# Create a stderr console for logging
error_console = Console(stderr=True)

SEVERITY_RANKS = {
    "debug": 10,
    "info": 20,
    "success": 20,
    "warning": 30,
    "error": 40,
    "critical": 50,
}


class OutputFormatter:
    """
    Handles output formatting for the CLI.
    System logs go to stderr; status data goes to stdout.
    """

    level: str = "info"

    @classmethod
    def set_level(cls, level: str) -> None:
        normalized = level.strip().lower()
        cls.level = normalized if normalized in SEVERITY_RANKS else "info"

    @classmethod
    def log(cls, message: str, severity: str = "info") -> None:
        """
        Print system messages to stderr with color coding.
        """
        if SEVERITY_RANKS.get(severity, 20) < SEVERITY_RANKS[cls.level]:
            return

        style = "white"
        prefix = "[SYSTEM]"

        if severity == "debug":
            style = "dim"
        elif severity == "warning":
            style = "yellow"
        elif severity == "error":
            style = "red"
        elif severity == "critical":
            style = "bold red"
        elif severity == "success":
            style = "green"

        error_console.print(f"[{style}]{prefix} {escape(message)}[/{style}]", highlight=False, soft_wrap=True)

    @classmethod
    def log_event(cls, event: DispatchLifecycleEvent) -> None:
        cls.log(event.message, severity=event.severity)

    @staticmethod
    def print_status(
        job_id: str,
        location: Optional[MasterLocation],
        state: Optional[TopologyState],
    ) -> None:
        """
        Print master location and lifecycle state for one topology.
        """
        console = Console()
        table = Table(title=f"Topology {job_id}", header_style="bold")
        table.add_column("Field", style="bold")
        table.add_column("Value")

        if location is not None:
            table.add_row("Master", f"{location.host}:{location.controller_port}")
            table.add_row("Topology ID", location.topology_id)
        else:
            table.add_row("Master", "[yellow]unknown[/yellow]")

        table.add_row("State", state.value if state is not None else "[yellow]unknown[/yellow]")
        console.print(table)
