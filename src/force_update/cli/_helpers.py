"""Output helpers for the command-line interface."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import ForceUpdateConfig
from ..version_gate import DecisionKind, GateDecision

console = Console()

_DECISION_STYLES = {
    DecisionKind.UPDATE_REQUIRED: "red",
    DecisionKind.NO_UPDATE_NEEDED: "green",
    DecisionKind.NOT_APPLICABLE: "dim",
    DecisionKind.INDETERMINATE: "yellow",
}


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗ Error:[/red] {escape(message)}")


def decision_table(decision: GateDecision) -> Table:
    """Render a gate decision as a table."""
    style = _DECISION_STYLES[decision.kind]
    table = Table(title="Gate Decision", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Decision", f"[{style}]{decision.kind.value}[/{style}]")
    if decision.reason:
        table.add_row("Reason", escape(decision.reason))
    if decision.current is not None:
        table.add_row("Current", str(decision.current))
    if decision.required is not None:
        table.add_row("Required", str(decision.required))
    return table


def config_table(config: ForceUpdateConfig) -> Table:
    """Render the configuration as a table."""
    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for name, value in config.model_dump(mode="json").items():
        shown = "[dim]unset[/dim]" if value is None else escape(str(value))
        table.add_row(name, shown)
    return table
