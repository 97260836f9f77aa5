"""Reusable TUI widgets for ghdep."""

from datetime import datetime, timezone

from rich.markup import escape
from textual.widgets import Static

from ghdep_core.units import ReviewUnit


def format_age(updated_at: datetime, now: datetime | None = None) -> str:
    """Short relative age: '3d ago', '5h ago', '12m ago', 'just now'."""
    now = now or datetime.now(timezone.utc)
    seconds = int((now - updated_at).total_seconds())
    if seconds >= 86400:
        return f"{seconds // 86400}d ago"
    if seconds >= 3600:
        return f"{seconds // 3600}h ago"
    if seconds >= 60:
        return f"{seconds // 60}m ago"
    return "just now"


def unit_prompt(unit: ReviewUnit, pending: bool = False, now: datetime | None = None) -> str:
    """Two-line list entry: title, then repo#number and age."""
    marker = " [yellow](working)[/yellow]" if pending else ""
    return (
        f"[bold]{escape(unit.title)}[/bold]{marker}\n"
        f"[dim]{escape(unit.repository)}#{unit.number}  ·  "
        f"{format_age(unit.updated_at, now)}[/dim]"
    )


class StatusBar(Static):
    """Top bar showing the search scope and how many PRs are listed."""

    def update_status(self, filter_text: str, pr_count: int, busy: bool = False) -> None:
        busy_display = "    [yellow]working...[/yellow]" if busy else ""
        self.update(
            f" Pull Requests | [cyan]{escape(filter_text)}[/cyan]"
            f"    [bold]{pr_count}[/bold] PRs{busy_display}"
        )


class LogLine(Static):
    """Single-line status message below the list."""
    pass
