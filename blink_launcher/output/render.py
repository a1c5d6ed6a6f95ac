"""Output rendering for search results."""

import json
from io import StringIO

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich import box

from blink_launcher.models import ApplicationRecord, InstanceMode, MatchResult


def render_human(result: MatchResult, color: bool = True) -> str:
    """
    Render search results as a table.

    Scores are used for ordering only and are not shown.

    Args:
        result: MatchResult to render
        color: Emit ANSI styling (disable for plain-text output)

    Returns:
        Formatted string suitable for terminal display
    """
    output_buffer = StringIO()
    console = Console(file=output_buffer, width=120, force_terminal=color, no_color=not color)

    if not result.matches:
        empty_text = Text()
        if result.query:
            empty_text.append(f"No applications match '{result.query}'", style="bold yellow")
        else:
            empty_text.append("The catalog is empty", style="bold yellow")
        console.print(Panel(empty_text, border_style="yellow", box=box.ROUNDED))
        return output_buffer.getvalue()

    title = f"Results for '{result.query}'" if result.query else "Applications"
    table = Table(title=title, box=box.SIMPLE_HEAVY, show_lines=False)
    table.add_column("#", style="dim", justify="right", width=3)
    table.add_column("Name", style="bold cyan")
    table.add_column("Type", justify="center", width=4)
    table.add_column("Path", style="dim", overflow="fold")

    for idx, app in enumerate(result.applications(), 1):
        table.add_row(str(idx), app.display_name, "CLI" if app.is_cli else "App", app.path)

    console.print(table)
    return output_buffer.getvalue()


def render_json(result: MatchResult) -> str:
    """
    Render search results as a JSON list of application records.

    Returns:
        JSON string with sorted keys and indentation
    """
    records = [app.model_dump() for app in result.applications()]
    return json.dumps(records, sort_keys=True, indent=2)


def render_launch(application: ApplicationRecord, mode: InstanceMode, dry_run: bool = False) -> str:
    """One-line summary of a launch decision."""
    verb = "Would open" if dry_run else "Opening"
    how = "in a new instance" if mode == InstanceMode.NEW_INSTANCE else "reusing the running instance"
    return f"{verb} {application.display_name} {how}"
