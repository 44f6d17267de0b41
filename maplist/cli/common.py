"""Shared CLI utilities for maplist commands."""

from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from maplist.config import MaplistConfig, find_config
from maplist.constants import CONFIG_FILENAME
from maplist.core.launcher import LaunchOutcome
from maplist.core.resource import CatalogEntry
from maplist.exceptions import ConfigNotFoundError, ConfigParseError, ConfigValidationError

console = Console()
err_console = Console(stderr=True)


@dataclass
class CliState:
    """Options shared by every command, set by the app callback."""

    config_path: Path | None = None
    verbose: bool = False


def fail(message: str) -> NoReturn:
    """Print an error to stderr and exit with status 1."""
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(1)


def load_config(config_path: Path | None) -> MaplistConfig:
    """Load the config given on the command line or found from the cwd.

    Without any maplist.toml the built-in defaults are used, rooted at the
    current directory.
    """
    path = config_path or find_config()
    if path is None:
        return MaplistConfig(path=Path.cwd() / CONFIG_FILENAME)

    try:
        return MaplistConfig.load(path)
    except ConfigNotFoundError:
        fail(f"{CONFIG_FILENAME} not found at {path}")
    except (ConfigParseError, ConfigValidationError) as e:
        fail(f"Invalid {CONFIG_FILENAME}: {e}")


def print_entry(entry: CatalogEntry) -> None:
    """Print one catalog entry, dimming entries that cannot be opened."""
    name = escape(entry.display_name)
    logical_id = escape(entry.id)
    if entry.is_launchable:
        console.print(f"  [green]✓[/green] {name} [dim]{logical_id}[/dim]")
        console.print(f"      [dim]{escape(str(entry.resolved_path))}[/dim]")
    else:
        kind = entry.error.kind if entry.error else "unresolvable"
        reason = escape(str(entry.error)) if entry.error else ""
        console.print(f"  [yellow]✗[/yellow] [dim]{name} {logical_id}[/dim]")
        console.print(f"      [yellow]not launchable ({kind})[/yellow] [dim]{reason}[/dim]")


def print_outcome_error(outcome: LaunchOutcome) -> None:
    """Print a failed launch outcome to stderr."""
    err_console.print(
        f"[red]Error ({outcome.status.value}):[/red] {escape(outcome.message)}"
    )
