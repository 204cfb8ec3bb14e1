"""Typer CLI entry point for bet performance analytics.

Reads a JSON export of bets and prints summaries:
- truesharp-analytics summary bets.json --sport basketball --min-stake 10
- truesharp-analytics breakdown bets.json --by league
- truesharp-analytics version
"""

import json
import os
import uuid
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Load .env file before anything else
load_dotenv()

import typer
from pydantic import TypeAdapter
from rich.console import Console
from rich.markup import escape

from truesharp_analytics import __version__
from truesharp_analytics.analytics.basic_tier import (
    calculate_breakdown,
    calculate_monthly_breakdown,
    calculate_odds_range_breakdown,
)
from truesharp_analytics.analytics.filters import (
    FILTER_PRESETS,
    AnalyticsFilters,
    BetFilter,
    apply_filters,
    filter_by_clv,
    filter_by_player,
    filter_by_result,
    filter_by_sport,
    filter_by_team,
    filters_from_criteria,
    preset_date_range,
)
from truesharp_analytics.analytics.models import Bet
from truesharp_analytics.analytics.pro_tier import calculate_pro_tier_analytics
from truesharp_analytics.cli.formatters import format_breakdown_table, format_summary_table
from truesharp_analytics.config import get_settings
from truesharp_analytics.monitoring import bind_correlation_id, configure_logging, get_logger

cli = typer.Typer(
    name="truesharp-analytics",
    help="""Bet performance analytics - win rate, ROI, CLV and breakdowns.

INPUT:
  A JSON file holding a list of bets (or {"bets": [...]}) as exported by
  the TrueSharp API. camelCase and snake_case keys are both accepted.

QUICK START:
  truesharp-analytics summary bets.json
  truesharp-analytics summary bets.json --league NBA --odds-min -150 --odds-max 150
  truesharp-analytics breakdown bets.json --by sport
""",
    add_completion=False,
)

console = Console(no_color=os.getenv("NO_COLOR") is not None)
log = get_logger(__name__)

BREAKDOWN_DIMENSIONS = ("sport", "league", "bet_type", "sportsbook", "month", "odds_range")
DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"]

_bets_adapter = TypeAdapter(list[Bet])


@cli.callback()
def _start_run():
    # One correlation id per invocation, shared by every event it logs
    bind_correlation_id(uuid.uuid4().hex[:12])


def load_bets(path: Path) -> list[Bet]:
    """Load and validate bets from a JSON file.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the JSON is malformed or a bet fails validation
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("bets", [])
    bets = _bets_adapter.validate_python(data)
    log.info("bets_loaded", path=str(path), count=len(bets))
    return bets


def build_filters(
    sport: Optional[str] = None,
    leagues: Optional[List[str]] = None,
    team: Optional[str] = None,
    player: Optional[str] = None,
    result: Optional[str] = None,
    min_stake: Optional[float] = None,
    odds_min: Optional[float] = None,
    odds_max: Optional[float] = None,
    min_clv: Optional[float] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    preset: Optional[str] = None,
) -> list[BetFilter]:
    """Build the filter list for the given CLI options (None = not set)."""
    filters: list[BetFilter] = []
    if sport is not None:
        filters.append(filter_by_sport(sport))
    if team is not None:
        filters.append(filter_by_team(team))
    if player is not None:
        filters.append(filter_by_player(player))
    if result is not None:
        filters.append(filter_by_result(result))
    if min_clv is not None:
        filters.append(filter_by_clv(min_clv))

    criteria = AnalyticsFilters(
        leagues=leagues or None,
        odds_min=odds_min,
        odds_max=odds_max,
        stake_min=min_stake,
        date_from=date_from,
        date_to=date_to,
    )
    filters.extend(filters_from_criteria(criteria))
    if preset is not None:
        filters.append(preset_date_range(preset))
    return filters


def _describe(filters: list[BetFilter]) -> str:
    return ", ".join(
        " ".join(f"{k}={v}" for k, v in f.to_dict().items()) for f in filters
    )


@cli.command()
def summary(
    bets_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file of bets"),
    sport: Optional[str] = typer.Option(None, "--sport", help="Exact sport match"),
    league: Optional[List[str]] = typer.Option(None, "--league", "-l", help="League (repeatable)"),
    team: Optional[str] = typer.Option(None, "--team", help="Exact team match"),
    player: Optional[str] = typer.Option(None, "--player", help="Exact player match"),
    result: Optional[str] = typer.Option(None, "--result", help="won, lost, void or pending"),
    min_stake: Optional[float] = typer.Option(None, "--min-stake", help="Minimum stake"),
    odds_min: Optional[float] = typer.Option(None, "--odds-min", help="Lowest American odds"),
    odds_max: Optional[float] = typer.Option(None, "--odds-max", help="Highest American odds"),
    min_clv: Optional[float] = typer.Option(None, "--min-clv", help="Minimum recorded CLV"),
    date_from: Optional[datetime] = typer.Option(None, "--date-from", formats=DATE_FORMATS),
    date_to: Optional[datetime] = typer.Option(None, "--date-to", formats=DATE_FORMATS),
    preset: Optional[str] = typer.Option(
        None, "--preset", help=f"Date preset: {', '.join(FILTER_PRESETS)}"
    ),
    confidence: Optional[float] = typer.Option(
        None, "--confidence", "-c", help="ROI interval confidence level (default 0.95)"
    ),
):
    """Print the Pro analytics summary for the (filtered) bets.

    \b
    EXAMPLES:
      truesharp-analytics summary bets.json
      truesharp-analytics summary bets.json --sport basketball -l NBA -l WNBA
      truesharp-analytics summary bets.json --date-from 2025-01-01 -c 0.9
      truesharp-analytics summary bets.json --preset last_30_days
    """
    try:
        bets = load_bets(bets_file)
        filters = build_filters(
            sport=sport,
            leagues=league,
            team=team,
            player=player,
            result=result,
            min_stake=min_stake,
            odds_min=odds_min,
            odds_max=odds_max,
            min_clv=min_clv,
            date_from=date_from,
            date_to=date_to,
            preset=preset,
        )
        filtered = apply_filters(bets, filters)
        result_summary = calculate_pro_tier_analytics(filtered, confidence_level=confidence)
    except (OSError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", style="red")
        raise typer.Exit(code=1)

    console.print(format_summary_table(result_summary, _describe(filters)))
    console.print(f"[dim]{len(filtered)} of {len(bets)} bets matched[/dim]")


@cli.command()
def breakdown(
    bets_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file of bets"),
    by: str = typer.Option("sport", "--by", "-b", help=f"One of: {', '.join(BREAKDOWN_DIMENSIONS)}"),
    months: Optional[int] = typer.Option(None, "--months", help="Months to show with --by month"),
):
    """Print performance grouped by sport, league, bet type, month or odds range."""
    if by not in BREAKDOWN_DIMENSIONS:
        console.print(
            f"[bold red]Error:[/bold red] unknown dimension {by!r}. "
            f"Choose from: {', '.join(BREAKDOWN_DIMENSIONS)}"
        )
        raise typer.Exit(code=1)

    try:
        bets = load_bets(bets_file)
    except (OSError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", style="red")
        raise typer.Exit(code=1)

    if by == "month":
        rows = calculate_monthly_breakdown(bets, max_months=months)
    elif by == "odds_range":
        rows = calculate_odds_range_breakdown(bets)
    else:
        rows = calculate_breakdown(bets, by)

    title = f"Performance by {by.replace('_', ' ').title()}"
    console.print(format_breakdown_table(rows, title))


@cli.command()
def version():
    """Show version and configuration info."""
    settings = get_settings()
    console.print(f"[bold cyan]TrueSharp Analytics[/bold cyan] v{__version__}")
    console.print()
    console.print("[bold]Configuration:[/bold]")
    console.print(f"  Confidence level: {settings.confidence_level:.0%}")
    console.print(f"  Kelly cap: {settings.kelly_cap:.0%} of bankroll")
    console.print(f"  Monthly window: {settings.max_months} months")
    console.print(f"  Log mode: {settings.log_mode}")


def main():
    """Entry point for CLI."""
    configure_logging(get_settings().log_mode)
    cli()


if __name__ == "__main__":
    main()
