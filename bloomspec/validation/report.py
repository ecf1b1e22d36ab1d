"""
Validation report rendering.

Renders a BatchValidationResult as a human-readable report with rich:
a status panel, per-item errors grouped by problem and batch-level
errors with their numeric details.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from bloomspec.validation.models import BatchValidationResult

REPORT_WIDTH = 120


def _status_panel(result: BatchValidationResult) -> Panel:
    status = "VALID" if result.valid else "INVALID"
    style = "bold green" if result.valid else "bold red"

    body = Text()
    body.append(f"Status: {status}\n", style=style)
    body.append(f"Problems: {result.valid_problems}/{result.total_problems} valid")
    if result.invalid_problems:
        body.append(f"\n{result.invalid_problems} problem(s) failed field validation; batch checks skipped")
    return Panel(body, title="PROBLEM VALIDATION REPORT", box=box.ROUNDED)


def _item_table(result: BatchValidationResult) -> Table:
    table = Table(title="PROBLEM-LEVEL ERRORS", box=box.SIMPLE, title_justify="left")
    table.add_column("Problem", no_wrap=True)
    table.add_column("Field", no_wrap=True)
    table.add_column("Kind", no_wrap=True, min_width=24)
    table.add_column("Message", overflow="fold")
    table.add_column("Constraint", overflow="fold")

    for error in result.item_errors:
        table.add_row(
            Text(f"{error.problem_id} (#{error.problem_index})"),
            Text(error.field),
            Text(error.kind.value),
            Text(error.message),
            Text(error.constraint),
        )
    return table


def _batch_table(result: BatchValidationResult) -> Table:
    table = Table(title="BATCH-LEVEL ERRORS", box=box.SIMPLE, title_justify="left")
    table.add_column("Kind", no_wrap=True, min_width=24)
    table.add_column("Message", overflow="fold")
    table.add_column("Details", overflow="fold")

    for error in result.batch_errors:
        details = ", ".join(f"{key}={value}" for key, value in error.details.items())
        table.add_row(Text(error.kind.value), Text(error.message), Text(details))
    return table


def _statistics_table(result: BatchValidationResult) -> Optional[Table]:
    stats = result.statistics
    if stats is None:
        return None

    table = Table(title="STATISTICS", box=box.SIMPLE, show_header=False, title_justify="left")
    table.add_column("Metric")
    table.add_column("Value")
    table.add_row("Total time", f"{stats.total_time} min")
    table.add_row("Average complexity", f"{stats.average_complexity:.2f}")
    table.add_row("Average time per problem", f"{stats.average_time_per_problem:.1f} min")
    for level, share in stats.cognitive_distribution.items():
        table.add_row(level.value, f"{share * 100:.1f}%")
    return table


def _renderables(result: BatchValidationResult) -> Group:
    parts = [_status_panel(result)]
    if result.item_errors:
        parts.append(_item_table(result))
    if result.batch_errors:
        parts.append(_batch_table(result))
    stats_table = _statistics_table(result)
    if stats_table is not None:
        parts.append(stats_table)
    return Group(*parts)


def format_validation_report(result: BatchValidationResult) -> str:
    """Render the report to plain text (no color codes)."""
    buffer = StringIO()
    console = Console(
        file=buffer,
        width=REPORT_WIDTH,
        color_system=None,
        force_terminal=False,
        highlight=False,
    )
    console.print(_renderables(result))
    return buffer.getvalue()


def print_validation_report(result: BatchValidationResult, console: Console | None = None) -> None:
    """Print the report to a rich console (stdout by default)."""
    console = console or Console()
    console.print(_renderables(result))
