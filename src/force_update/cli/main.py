"""Command-line interface for force_update."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler
from rich.table import Table

from ..config import load_config
from ..exceptions import ConfigError
from ..platform import PlatformKind, current_platform
from ..version_gate import evaluate, store_url
from ._helpers import (
    config_table,
    console,
    decision_table,
    print_error,
    print_success,
)

app = typer.Typer(help="Forced update checks for mobile app builds")

PlatformOption = Annotated[
    PlatformKind | None,
    typer.Option(
        ...,
        "--platform",
        "-p",
        help="Platform to evaluate for (default: detected)",
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        ...,
        "--config",
        "-c",
        help="Path to config file (pyproject.toml or force-update.toml)",
    ),
]


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option(..., "--verbose", "-V", help="Enable debug logging")
    ] = False,
) -> None:
    """Inspect forced update decisions."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
            force=True,
        )


@app.command()
def check(
    required: Annotated[
        str, typer.Option(..., "--required", "-r", help="Required minimum version")
    ],
    current: Annotated[
        str, typer.Option(..., "--current", help="Installed build version")
    ],
    platform: PlatformOption = None,
) -> None:
    """Evaluate whether a build must be updated.

    Exits with 1 if an update is required, 0 otherwise.
    """
    decision = evaluate(required, current, platform or current_platform())
    console.print(decision_table(decision))

    if decision.update_required:
        console.print("[red]✗[/red] Update required")
        raise typer.Exit(1)
    print_success("No update required")


@app.command("store-url")
def store_url_command(
    platform: PlatformOption = None,
    app_store_id: Annotated[
        str | None,
        typer.Option(..., "--app-store-id", help="App Store identifier (iOS)"),
    ] = None,
    package: Annotated[
        str | None,
        typer.Option(..., "--package", help="Play Store package name (Android)"),
    ] = None,
    config: ConfigOption = None,
) -> None:
    """Print the store listing URL for a platform."""
    try:
        cfg = load_config(config)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    target = platform or cfg.platform or current_platform()
    package_name = package or cfg.android_package_name
    if target is PlatformKind.ANDROID and not package_name:
        print_error("No Android package name configured")
        raise typer.Exit(1)

    url = store_url(
        target,
        app_store_id if app_store_id is not None else cfg.ios_app_store_id,
        package_name or "",
    )
    if url is None:
        print_error(f"No store listing for platform: {target.value}")
        raise typer.Exit(1)

    typer.echo(url)


@app.command()
def platforms() -> None:
    """List platforms and whether forced updates apply to them."""
    detected = current_platform()

    table = Table(title="Platforms")
    table.add_column("Platform", style="cyan")
    table.add_column("Gated")
    table.add_column("Detected")
    for kind in PlatformKind:
        table.add_row(
            kind.value,
            "[green]yes[/green]" if kind.is_gated else "[dim]no[/dim]",
            "✓" if kind is detected else "",
        )
    console.print(table)


@app.command("config")
def show_config(config: ConfigOption = None) -> None:
    """Show the loaded configuration."""
    try:
        cfg = load_config(config)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    console.print(config_table(cfg))


if __name__ == "__main__":
    app()
