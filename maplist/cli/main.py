"""CLI entry point for maplist."""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.markup import escape

from maplist import __version__
from maplist.cli.common import (
    CliState,
    console,
    fail,
    load_config,
    print_entry,
    print_outcome_error,
)
from maplist.config import MaplistConfig
from maplist.constants import CONFIG_FILENAME, DEFAULT_CONTENT_DIR, DEFAULT_NAMESPACE_ROOT
from maplist.exceptions import MalformedIdError, MaplistError, ResourceNotFoundError
from maplist.handle import parse_prefix
from maplist.log import setup_logging
from maplist.session import Session

app = typer.Typer(
    name="maplist",
    help="List project maps and open them in the editor.",
    no_args_is_help=True,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"maplist {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Optional[Path],
        typer.Option(
            "--config", "-c",
            help=f"Path to {CONFIG_FILENAME} (default: search from the current directory).",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """Catalog and launch project maps."""
    setup_logging(verbose)
    ctx.obj = CliState(config_path=config, verbose=verbose)


TypeOption = Annotated[
    Optional[str],
    typer.Option("--type", "-t", help="Resource type (default from config, 'World')."),
]
PrefixOption = Annotated[
    Optional[str],
    typer.Option("--prefix", "-p", help="Logical path prefix (default from config, '/Game')."),
]


@app.command("list")
def list_resources(
    ctx: typer.Context,
    resource_type: TypeOption = None,
    prefix: PrefixOption = None,
    sort: Annotated[
        bool,
        typer.Option("--sort", "-s", help="Sort by name instead of registry order."),
    ] = False,
) -> None:
    """List resources of a type below a logical prefix.

    Examples:
      maplist list
      maplist list --prefix /Game/Maps --sort
    """
    state: CliState = ctx.obj
    config = load_config(state.config_path)
    resource_type = resource_type or config.default_type
    prefix = prefix or config.default_prefix

    session = Session.from_config(config)
    try:
        entries = session.refresh(resource_type, prefix)
    except MaplistError as e:
        fail(str(e))

    if not entries:
        console.print(
            f"[yellow]No {escape(resource_type)} resources found under {escape(prefix)}[/yellow]"
        )
        return

    if sort:
        entries = sorted(entries, key=lambda e: e.display_name.casefold())

    console.print(
        f"[bold cyan]{escape(resource_type)} resources in project ({escape(prefix)}):[/bold cyan]"
    )
    for entry in entries:
        print_entry(entry)

    launchable = sum(1 for e in entries if e.is_launchable)
    console.print(f"\n[dim]Total: {len(entries)} ({launchable} launchable)[/dim]")


@app.command("open")
def open_resource(
    ctx: typer.Context,
    logical_id: Annotated[
        str,
        typer.Option("--id", help="Logical id to open (e.g., /Game/Maps/Arena)."),
    ],
    resource_type: TypeOption = None,
    prefix: PrefixOption = None,
) -> None:
    """Open a resource by its logical id.

    Exits with status 1 and prints the failure kind when the resource
    cannot be opened.

    Examples:
      maplist open --id /Game/Maps/Arena
    """
    state: CliState = ctx.obj
    config = load_config(state.config_path)
    resource_type = resource_type or config.default_type
    prefix = prefix or config.default_prefix

    session = Session.from_config(config)
    try:
        session.refresh(resource_type, prefix)
        outcome = session.open(logical_id)
    except ResourceNotFoundError as e:
        fail(f"(not-in-catalog) {e}")
    except MaplistError as e:
        fail(str(e))

    if not outcome.ok:
        print_outcome_error(outcome)
        raise typer.Exit(1)

    console.print(f"[green]Opened {outcome.entry.display_name}[/green]")
    console.print(f"[dim]{outcome.entry.resolved_path}[/dim]")


@app.command("types")
def list_types(ctx: typer.Context) -> None:
    """List registered resource types."""
    state: CliState = ctx.obj
    config = load_config(state.config_path)
    registry = config.build_type_registry()

    for spec in registry.all():
        details = spec.extension
        if spec.parent:
            details += f", derives from {spec.parent}"
        if spec.class_path:
            details += f", {spec.class_path}"
        console.print(f"  {spec.name} [dim]({details})[/dim]")


@app.command("init")
def init(
    content: Annotated[
        str,
        typer.Option("--content", help="Directory mounted at the namespace root."),
    ] = DEFAULT_CONTENT_DIR,
    root: Annotated[
        str,
        typer.Option("--root", help="Logical namespace root."),
    ] = DEFAULT_NAMESPACE_ROOT,
    editor: Annotated[
        Optional[list[str]],
        typer.Option(
            "--editor",
            help="Editor command part; repeat for arguments. Use {path} for the map file.",
        ),
    ] = None,
) -> None:
    """Create a starter maplist.toml in the current directory.

    Examples:
      maplist init
      maplist init --content Content --editor UnrealEditor --editor {project} --editor {path}
    """
    path = Path.cwd() / CONFIG_FILENAME
    if path.exists():
        console.print(f"[yellow]{CONFIG_FILENAME} already exists[/yellow]")
        return

    try:
        root = parse_prefix(root).to_id()
    except MalformedIdError as e:
        fail(f"Invalid --root: {e}")

    config = MaplistConfig(path=path, default_prefix=root, mounts={root: content})
    if editor:
        config.editor_command = list(editor)
    config.save()
    console.print(f"[green]Created {CONFIG_FILENAME}[/green]")


if __name__ == "__main__":
    app()
