"""Command-line interface for the Blink launcher."""

import sys
import logging
import platform
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn

from blink_launcher import __version__
from blink_launcher.config import save_example_config
from blink_launcher.context import LauncherContext
from blink_launcher.engine import DEFAULT_LIMIT
from blink_launcher.models import MatchResult
from blink_launcher.output.render import render_human, render_json, render_launch

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Keyboard-driven application launcher: search, rank and open macOS apps.",
)

stderr_console = Console(stderr=True)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        print(f"blink version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=stderr_console, show_path=False)],
        force=True,
    )


def _build_context(config_file: Optional[Path], registry_file: Optional[Path] = None) -> LauncherContext:
    return LauncherContext.from_defaults(config_path=config_file, registry_path=registry_file)


def _load_context(config_file: Optional[Path], registry_file: Optional[Path] = None) -> LauncherContext:
    """Build a context and its catalog, exiting with status 2 on config errors."""
    context = _build_context(config_file, registry_file)
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]Discovering applications..."),
            console=stderr_console,
            transient=True
        ) as progress:
            progress.add_task("refresh", total=None)
            context.refresh()
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        sys.exit(2)
    return context


def _print_result(result: MatchResult, json: bool) -> None:
    try:
        output = render_json(result) if json else render_human(result, color=sys.stdout.isatty())
    except Exception as e:
        print(f"Rendering failed: {e}", file=sys.stderr)
        sys.exit(3)
    print(output)


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    )
) -> None:
    """Keyboard-driven application launcher."""


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to match against application names and aliases"),
    limit: int = typer.Option(DEFAULT_LIMIT, "--limit", "-n", min=0, help="Maximum number of results"),
    json: bool = typer.Option(False, "--json", help="Output results in JSON format"),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Path to configuration file (default: ~/.config/blink/config.yaml)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging on stderr"),
) -> None:
    """
    Rank installed applications for a query.

    Examples:
        blink search saf                   # Safari first
        blink search vsc                   # Alias lookup, e.g. Code
        blink search term --json -n 5      # Top five as JSON
    """
    _configure_logging(verbose)
    context = _load_context(config_file)
    _print_result(context.search(query, limit=limit), json)


@app.command("list")
def list_apps(
    limit: int = typer.Option(DEFAULT_LIMIT, "--limit", "-n", min=0, help="Maximum number of entries"),
    json: bool = typer.Option(False, "--json", help="Output results in JSON format"),
    config_file: Optional[Path] = typer.Option(None, "--config", help="Path to configuration file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging on stderr"),
) -> None:
    """List the catalog in its base (path) order."""
    _configure_logging(verbose)
    context = _load_context(config_file)
    _print_result(context.search("", limit=limit), json)


@app.command()
def launch(
    query: str = typer.Argument(..., help="Query whose top-ranked application is opened"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be opened without opening it"),
    config_file: Optional[Path] = typer.Option(None, "--config", help="Path to configuration file"),
    registry_file: Optional[Path] = typer.Option(
        None,
        "--registry",
        help="Path to single-instance registry (default: ~/.config/blink/single-instance-apps)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging on stderr"),
) -> None:
    """
    Open the best match for a query.

    Single-instance apps reuse their running window; everything else opens
    a new instance. Launch failures are silent.
    """
    _configure_logging(verbose)

    if not dry_run and platform.system() != "Darwin":
        print("Error: launching applications only works on macOS", file=sys.stderr)
        sys.exit(2)

    context = _load_context(config_file, registry_file)
    application = context.search(query, limit=1).first()
    if application is None:
        print(f"No applications match '{query}'", file=sys.stderr)
        sys.exit(1)

    mode = context.decide(application) if dry_run else context.launch(application)
    print(render_launch(application, mode, dry_run=dry_run))


@app.command("mark-single-instance")
def mark_single_instance(
    query: str = typer.Argument(..., help="Query whose top-ranked application is marked"),
    config_file: Optional[Path] = typer.Option(None, "--config", help="Path to configuration file"),
    registry_file: Optional[Path] = typer.Option(None, "--registry", help="Path to single-instance registry"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging on stderr"),
) -> None:
    """Make the best match for a query reuse its window instead of opening new ones."""
    _configure_logging(verbose)
    context = _load_context(config_file, registry_file)
    application = context.search(query, limit=1).first()
    if application is None:
        print(f"No applications match '{query}'", file=sys.stderr)
        sys.exit(1)

    try:
        added = context.mark_single_instance(application)
    except OSError as e:
        print(f"Error updating registry: {e}", file=sys.stderr)
        sys.exit(3)

    if added:
        print(f"✓ {application.display_name} marked as single-instance", file=sys.stderr)
    else:
        print(f"ℹ️  {application.display_name} is already single-instance", file=sys.stderr)


@app.command("generate-config")
def generate_config(
    output: Path = typer.Argument(..., help="Where to write the example configuration"),
) -> None:
    """Write a documented example configuration file."""
    try:
        save_example_config(output)
    except OSError as e:
        print(f"Error generating config: {e}", file=sys.stderr)
        sys.exit(2)
    print(f"✓ Example configuration saved to {output}", file=sys.stderr)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
