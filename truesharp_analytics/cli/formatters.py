"""Rich table formatters for analytics summaries.

Rates are stored as fractions and shown as percentages here.
"""

from typing import Optional

from rich.table import Table

from truesharp_analytics.analytics.models import PerformanceBreakdown, ProAnalyticsSummary


def format_percentage(value: Optional[float], signed: bool = False) -> str:
    """Format a fraction as a percentage string.

    Args:
        value: Fraction (0.052 = 5.2%), or None
        signed: Prefix positive values with "+"

    Returns:
        e.g. "5.2%", "+5.2%", or "-" for None
    """
    if value is None:
        return "-"
    text = f"{value * 100:.1f}%"
    if signed and value > 0:
        text = "+" + text
    return text


def format_currency(amount: Optional[float]) -> str:
    """Format a dollar amount with an explicit sign, e.g. "$+12.50"."""
    if amount is None or amount != amount:  # NaN
        return "$0.00"
    return f"${'+' if amount >= 0 else ''}{amount:.2f}"


def _profit_style(value: float) -> str:
    if value > 0:
        return "green"
    if value < 0:
        return "red"
    return "white"


def format_summary_table(
    summary: ProAnalyticsSummary, active_filters: Optional[str] = None
) -> Table:
    """Format a Pro summary as a two-column Rich table.

    Args:
        summary: Summary to display
        active_filters: Filter description for the caption

    Returns:
        Rich Table
    """
    table = Table(
        title="Pro Analytics Summary",
        caption=f"Filters: {active_filters}" if active_filters else None,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    low, high = summary.confidence_interval

    table.add_row("Settled Bets", str(summary.total_bets))
    table.add_row("Win Rate", format_percentage(summary.win_rate))
    table.add_row(
        "ROI",
        f"[{_profit_style(summary.roi)}]{format_percentage(summary.roi, signed=True)}[/]",
    )
    table.add_row(
        "Net Profit",
        f"[{_profit_style(summary.net_profit)}]{format_currency(summary.net_profit)}[/]",
    )
    table.add_row("Average Stake", f"${summary.average_stake:.2f}")
    table.add_row("Stake Std Dev", f"{summary.standard_deviation:.2f}")
    table.add_row("ROI Interval", f"{format_percentage(low)} to {format_percentage(high)}")
    table.add_row("Average CLV", format_percentage(summary.average_clv, signed=True))

    return table


def format_breakdown_table(rows: list[PerformanceBreakdown], title: str) -> Table:
    """Format breakdown rows (one per group) as a Rich table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")

    table.add_column("Group", justify="left", style="white", no_wrap=True)
    table.add_column("Bets", justify="right")
    table.add_column("Win Rate", justify="right", style="cyan")
    table.add_column("Profit", justify="right")
    table.add_column("ROI", justify="right")
    table.add_column("Avg Odds", justify="right", style="magenta")

    if not rows:
        table.add_row("[dim]No bets match[/dim]", "", "", "", "", "")
        return table

    for row in rows:
        style = _profit_style(row.profit)
        table.add_row(
            row.label,
            str(row.bets),
            format_percentage(row.win_rate),
            f"[{style}]{format_currency(row.profit)}[/]",
            f"[{style}]{format_percentage(row.roi, signed=True)}[/]",
            f"{row.avg_odds:+.0f}",
        )

    return table
