"""Status command implementation."""

from typing import Any

import click
from rich.console import Console
from rich.table import Table

from svk_registry.context import RegistryContext
from svk_registry.output import emit_json, user_output
from svk_registry.queries import StatusQuery, dispatch


def _status_cell(status: str) -> str:
    if status == "complete":
        return "[green]complete[/green]"
    if status == "in_progress":
        return "[yellow]in_progress[/yellow]"
    return f"[dim]{status}[/dim]"


def _progress_cell(progress: Any) -> str:
    if isinstance(progress, dict):
        return ", ".join(f"{key} {value}" for key, value in progress.items())
    return str(progress) if progress else "-"


def render_summary(result: dict[str, Any]) -> None:
    """Render the per-producer summary as a table on stderr."""
    skills = result["skills"]
    if not skills:
        user_output(result["summary"])
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("skill", style="cyan", no_wrap=True)
    table.add_column("phase", no_wrap=True)
    table.add_column("status", no_wrap=True)
    table.add_column("progress")
    table.add_column("updated", no_wrap=True)
    table.add_column("next")

    for info in skills:
        table.add_row(
            info["skill"],
            info["phase"],
            _status_cell(info["status"]),
            _progress_cell(info.get("progress")),
            info["updated"],
            info.get("next") or "[dim]-[/dim]",
        )

    # Output table to stderr (consistent with user_output convention)
    console = Console(stderr=True, width=200)
    console.print(table)
    if result["history_count"] > 0:
        console.print(f"History: {result['history_count']} archived audit(s)")


@click.command("status")
@click.option("--summary", is_flag=True, help="Render a human-readable summary instead of JSON")
@click.pass_obj
def status_cmd(ctx: RegistryContext, summary: bool) -> None:
    """Show discovered producer state and archived audit count."""
    result = dispatch(ctx, StatusQuery())
    if summary and "skills" in result:
        render_summary(result)
        return
    emit_json(result)
