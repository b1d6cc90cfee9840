"""Rich terminal reporter — one row per repository plus a totals footer."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table

from vulntally.config.schema import SEVERITY_TIERS
from vulntally.findings.models import AggregationResult

_SEVERITY_STYLE = {
    "critical": "bold red",
    "high": "dark_orange",
    "medium": "yellow",
    "low": "bright_cyan",
}


def build_table(result: AggregationResult, tag: str) -> Table:
    """Build the summary table; rows are in ascending repository order."""
    totals = result.totals
    title = f"Inspector findings for tag {tag}"
    if result.partial:
        title += " (partial)"

    table = Table(title=title, title_style="bold", border_style="dim", show_footer=True)
    table.add_column("Repository", style="cyan", footer="Total")
    table.add_column("Tag", style="magenta", footer="")
    for tier in SEVERITY_TIERS:
        table.add_column(
            tier.capitalize(),
            justify="right",
            style=_SEVERITY_STYLE[tier],
            footer=str(getattr(totals, tier)),
        )
    table.add_column("Total", justify="right", style="bold", footer=str(result.attributed_total))

    for name, counts in result.rows():
        table.add_row(
            name,
            tag,
            str(counts.critical),
            str(counts.high),
            str(counts.medium),
            str(counts.low),
            str(counts.total),
        )
    return table


def render(
    result: AggregationResult,
    tag: str,
    *,
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print the table to stdout and, optionally, a summary to stderr."""
    out = console or Console()
    out.print(build_table(result, tag))

    if show_summary:
        _print_summary(Console(stderr=True), result)


def _print_summary(console: Console, result: AggregationResult) -> None:
    console.print()
    console.print(f"[dim]Findings fetched:[/dim]      {result.findings_seen}")
    console.print(f"[dim]Repositories:[/dim]          {len(result.repositories)}")
    console.print(f"[dim]Unattributed:[/dim]          {result.unattributed}")
    console.print(f"[dim]Unrecognized severity:[/dim] {result.unrecognized}")
    if result.partial:
        console.print("[bold yellow]⚠️  Results are partial — a page request failed.[/bold yellow]")
