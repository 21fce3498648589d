"""
Rich-formatted output for the window-arranger CLI.
"""

import json
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table

from .engine import MonitorLayout, RuleStatus, RunReport
from .errors import summarize_errors
from .models import LayoutConfig, WindowHandle


def monitors_to_dict(layout: MonitorLayout) -> List[Dict[str, Any]]:
    return [
        {"screen": custom_index, **monitor.model_dump()}
        for custom_index, monitor in enumerate(layout.monitors)
    ]


def display_monitors(layout: MonitorLayout, console: Optional[Console] = None) -> None:
    """
    Display monitors in normalized (reading) order.

    Args:
        layout: Normalized monitor layout
        console: Rich console (optional, creates new if not provided)
    """
    if console is None:
        console = Console()

    if not len(layout):
        console.print("[yellow]No active monitors reported[/yellow]")
        return

    table = Table(title="Monitors (layout 'screen' index)")
    table.add_column("Screen", justify="right", style="bold cyan")
    table.add_column("Raw", justify="right", style="dim")
    table.add_column("Name")
    table.add_column("Position", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Valid")

    for custom_index, monitor in enumerate(layout.monitors):
        valid = "[green]Yes[/green]" if monitor.has_valid_bounds() else "[red]No[/red]"
        table.add_row(
            str(custom_index),
            str(layout.raw_index(custom_index)),
            monitor.name,
            f"{monitor.x},{monitor.y}",
            f"{monitor.width}x{monitor.height}",
            valid,
        )

    console.print(table)


def windows_to_dict(windows: List[WindowHandle]) -> List[Dict[str, Any]]:
    return [
        {**window.model_dump(), "resolved_class": window.resolved_class}
        for window in windows
    ]


def display_windows(windows: List[WindowHandle], console: Optional[Console] = None) -> None:
    """Display open windows with the class a layout rule would match."""
    if console is None:
        console = Console()

    table = Table(title=f"Open windows ({len(windows)})")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Class (matched)", style="bold cyan")
    table.add_column("Instance")
    table.add_column("WM Class")
    table.add_column("Title", overflow="fold")

    for window in windows:
        table.add_row(
            str(window.id),
            window.resolved_class or "[red](none)[/red]",
            window.wm_class_instance or "",
            window.wm_class or "",
            window.title or "(no title)",
        )

    console.print(table)


def config_to_dict(config: LayoutConfig) -> Dict[str, Any]:
    return {
        "valid": config.valid,
        "settings": config.settings.model_dump(),
        "rules": [rule.model_dump(mode="json") for rule in config.rules],
        "rejected": [record.model_dump() for record in config.rejected],
    }


def display_validation(config: LayoutConfig, source: str, console: Optional[Console] = None) -> None:
    """Display loaded rules and rejected records of a layout file."""
    if console is None:
        console = Console()

    console.print(f"\n[bold]Layout:[/bold] {source}\n")

    table = Table(title=f"Rules ({len(config.rules)})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Window", style="bold cyan")
    table.add_column("Screen", justify="right")
    table.add_column("Workspace", justify="right")
    table.add_column("Actions")

    for position, rule in enumerate(config.rules):
        table.add_row(
            str(position),
            rule.window,
            str(rule.screen),
            str(rule.workspace),
            ", ".join(action.value for action in rule.actions) or "-",
        )
    console.print(table)

    if config.rejected:
        console.print(f"\n[red]Rejected {len(config.rejected)} records:[/red]")
        for record in config.rejected:
            console.print(f"  [red]✗[/red] {record.message}")
    else:
        console.print("\n[green]✓ All records valid[/green]")


def report_to_dict(report: RunReport) -> Dict[str, Any]:
    return {
        "applied": report.applied,
        "failed": report.failed,
        "rules": [
            {
                "window": outcome.rule.window,
                "status": outcome.status.value,
                "windows_matched": outcome.windows_matched,
                "windows_moved": outcome.windows_moved,
                "actions_applied": outcome.actions_applied,
                "errors": summarize_errors(outcome.errors),
            }
            for outcome in report.outcomes
        ],
    }


def display_report(report: RunReport, console: Optional[Console] = None) -> None:
    """Display the outcome of a run."""
    if console is None:
        console = Console()

    status_styles = {
        RuleStatus.APPLIED: "[green]applied[/green]",
        RuleStatus.NO_WINDOWS: "[yellow]no windows[/yellow]",
        RuleStatus.FAILED: "[red]failed[/red]",
    }

    table = Table(title="Run summary")
    table.add_column("Window", style="bold cyan")
    table.add_column("Status")
    table.add_column("Matched", justify="right")
    table.add_column("Moved", justify="right")
    table.add_column("Actions")
    table.add_column("Errors", overflow="fold")

    for outcome in report.outcomes:
        actions = ", ".join(f"{name}×{count}" for name, count in outcome.actions_applied.items())
        table.add_row(
            outcome.rule.window,
            status_styles[outcome.status],
            str(outcome.windows_matched),
            str(outcome.windows_moved),
            actions or "-",
            "; ".join(error.message for error in outcome.errors),
        )

    console.print(table)


def format_json(data: Any) -> str:
    return json.dumps(data, indent=2, default=str)
