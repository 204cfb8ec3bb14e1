"""Headline metrics and performance breakdowns for the analytics dashboard.

Provides:
- Overall metrics (win rate, ROI, streak, biggest win/loss, variance)
- Breakdowns by sport, bet type, any other categorical field, month and odds range
- Daily profit and bankroll growth series for charts
- Actual vs implied win rate per probability bin
- Kelly criterion stake sizing from American odds

Profit is always ``payout - stake`` and every rate is a fraction.
"""

from collections import defaultdict
from typing import Callable, Optional, Sequence

from truesharp_analytics.analytics.clv import american_to_probability, calculate_average_clv
from truesharp_analytics.analytics.filters import OddsRange
from truesharp_analytics.analytics.models import Bet, CalculatedMetrics, PerformanceBreakdown
from truesharp_analytics.config import get_settings

ODDS_BUCKETS: tuple[tuple[str, OddsRange], ...] = (
    ("Heavy Favorites (-200 to -151)", OddsRange(-200, -151)),
    ("Favorites (-150 to -126)", OddsRange(-150, -126)),
    ("Slight Favorites (-125 to -101)", OddsRange(-125, -101)),
    ("Slight Underdogs (+100 to +149)", OddsRange(100, 149)),
    ("Underdogs (+150 to +199)", OddsRange(150, 199)),
    ("Heavy Underdogs (+200+)", OddsRange(200, None)),
)


def _settled(bets: Sequence[Bet]) -> list[Bet]:
    return [bet for bet in bets if bet.is_settled]


def _rate(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def calculate_current_streak(bets: Sequence[Bet]) -> tuple[int, str]:
    """Length and type of the most recent run of identical results.

    Returns:
        (streak, streak_type) where streak_type is "win", "loss" or "none"
    """
    settled = sorted(_settled(bets), key=lambda bet: bet.date, reverse=True)
    if not settled:
        return 0, "none"

    latest = settled[0].result
    streak = 0
    for bet in settled:
        if bet.result != latest:
            break
        streak += 1

    return streak, "win" if latest == "won" else "loss"


def _summarize_group(label: str, group: Sequence[Bet], is_pro: bool) -> PerformanceBreakdown:
    won = sum(1 for bet in group if bet.result == "won")
    profit = sum(bet.profit for bet in group)
    staked = sum(bet.stake for bet in group)
    return PerformanceBreakdown(
        label=label,
        bets=len(group),
        win_rate=_rate(won, len(group)),
        profit=profit,
        roi=_rate(profit, staked),
        avg_odds=_rate(sum(bet.odds for bet in group), len(group)),
        total_staked=staked,
        clv=calculate_average_clv(group) if is_pro else None,
    )


def calculate_breakdown(
    bets: Sequence[Bet],
    key: str | Callable[[Bet], Optional[str]],
    is_pro: bool = False,
    sort_by: str = "profit",
) -> list[PerformanceBreakdown]:
    """Group settled bets and summarize each group.

    Args:
        bets: Bets to group; pending and void bets are skipped
        key: Bet attribute name (e.g. "sport", "league") or a function
            returning the group label. Bets with no label are grouped under
            "unknown".
        is_pro: Include average CLV per group
        sort_by: PerformanceBreakdown attribute to sort by, descending

    Returns:
        One PerformanceBreakdown per group
    """
    label_of = key if callable(key) else (lambda bet: getattr(bet, key))

    groups: dict[str, list[Bet]] = defaultdict(list)
    for bet in _settled(bets):
        label = label_of(bet)
        groups["unknown" if label is None else str(label)].append(bet)

    rows = [_summarize_group(label, group, is_pro) for label, group in groups.items()]
    return sorted(rows, key=lambda row: getattr(row, sort_by), reverse=True)


def calculate_sport_breakdown(
    bets: Sequence[Bet], is_pro: bool = False
) -> list[PerformanceBreakdown]:
    """Per-sport performance, most profitable first."""
    return calculate_breakdown(bets, "sport", is_pro=is_pro, sort_by="profit")


def calculate_bet_type_breakdown(bets: Sequence[Bet]) -> list[PerformanceBreakdown]:
    """Per-bet-type performance, best ROI first."""
    return calculate_breakdown(bets, "bet_type", sort_by="roi")


def calculate_monthly_breakdown(
    bets: Sequence[Bet], max_months: Optional[int] = None
) -> list[PerformanceBreakdown]:
    """Performance per calendar month ("YYYY-MM"), oldest first.

    Args:
        bets: Bets to bucket by placement month
        max_months: Keep only the most recent N months (default from settings)
    """
    if max_months is None:
        max_months = get_settings().max_months

    rows = calculate_breakdown(bets, lambda bet: bet.date.strftime("%Y-%m"))
    rows.sort(key=lambda row: row.label)
    return rows[-max_months:] if max_months > 0 else []


def calculate_odds_range_breakdown(bets: Sequence[Bet]) -> list[PerformanceBreakdown]:
    """Settled-bet performance per American odds bucket; empty buckets are dropped."""
    settled = _settled(bets)
    rows = []
    for label, odds_filter in ODDS_BUCKETS:
        bucket = [bet for bet in settled if odds_filter(bet)]
        if bucket:
            rows.append(_summarize_group(label, bucket, is_pro=False))
    return rows


def calculate_daily_profit(bets: Sequence[Bet]) -> list[dict]:
    """Daily and cumulative profit of settled bets, in date order.

    Returns:
        List of {"date": "YYYY-MM-DD", "profit", "cumulative_profit", "bets"}
    """
    settled = sorted(_settled(bets), key=lambda bet: bet.date)

    daily_profit: dict[str, float] = {}
    daily_count: dict[str, int] = defaultdict(int)
    for bet in settled:
        day = bet.date.date().isoformat()
        daily_profit[day] = daily_profit.get(day, 0.0) + bet.profit
        daily_count[day] += 1

    series = []
    cumulative = 0.0
    for day, profit in daily_profit.items():
        cumulative += profit
        series.append(
            {
                "date": day,
                "profit": profit,
                "cumulative_profit": cumulative,
                "bets": daily_count[day],
            }
        )
    return series


def calculate_bankroll_growth(bets: Sequence[Bet], initial_bankroll: float) -> list[dict]:
    """Bankroll after each settled bet, in placement order.

    Returns:
        List of {"date": "YYYY-MM-DD", "bankroll", "roi"} where roi is growth
        relative to the initial bankroll.

    Raises:
        ValueError: If initial_bankroll is not positive
    """
    if initial_bankroll <= 0:
        raise ValueError(f"Initial bankroll must be positive. Got {initial_bankroll}.")

    bankroll = initial_bankroll
    history = []
    for bet in sorted(_settled(bets), key=lambda bet: bet.date):
        bankroll += bet.profit
        history.append(
            {
                "date": bet.date.date().isoformat(),
                "bankroll": bankroll,
                "roi": (bankroll - initial_bankroll) / initial_bankroll,
            }
        )
    return history


def calculate_kelly_stake(
    win_probability: float,
    odds: float,
    bankroll: float,
    cap: Optional[float] = None,
) -> float:
    """Kelly criterion stake for a bet at American odds.

    Kelly = (b×p - q) / b where b = decimal odds - 1, p = win probability, q = 1 - p

    Args:
        win_probability: Estimated probability of winning (0.0 to 1.0)
        odds: American odds (e.g., +150, -110)
        bankroll: Current bankroll
        cap: Max fraction of bankroll to stake (default from settings, 0.25)

    Returns:
        Recommended stake, clamped to [0, cap × bankroll]. 0.0 for zero odds.
    """
    if cap is None:
        cap = get_settings().kelly_cap

    if odds == 0:
        return 0.0

    decimal_odds = odds / 100 + 1 if odds > 0 else 100 / abs(odds) + 1
    b = decimal_odds - 1
    p = win_probability
    q = 1 - p

    kelly_fraction = (b * p - q) / b
    return max(0.0, min(kelly_fraction * bankroll, bankroll * cap))


def calculate_metrics(bets: Sequence[Bet], is_pro: bool = False) -> CalculatedMetrics:
    """Headline metrics for the analytics overview.

    ``total_bets`` counts every bet, pending ones included; every other
    figure uses settled bets only.

    Args:
        bets: Bets to summarize
        is_pro: Include average CLV (None otherwise)

    Returns:
        CalculatedMetrics (all zeros for an empty list)
    """
    if not bets:
        return CalculatedMetrics()

    settled = _settled(bets)
    settled_count = len(settled)
    wins = sum(1 for bet in settled if bet.result == "won")

    total_staked = sum(bet.stake for bet in settled)
    profits = [bet.profit for bet in settled]
    total_profit = sum(profits)

    avg_profit = _rate(total_profit, settled_count)
    variance = _rate(sum((p - avg_profit) ** 2 for p in profits), settled_count)

    streak, streak_type = calculate_current_streak(settled)
    sports = calculate_sport_breakdown(settled)

    return CalculatedMetrics(
        total_bets=len(bets),
        win_rate=_rate(wins, settled_count),
        roi=_rate(total_profit, total_staked),
        total_profit=total_profit,
        total_staked=total_staked,
        avg_odds=_rate(sum(bet.odds for bet in settled), settled_count),
        avg_stake=_rate(total_staked, settled_count),
        biggest_win=max([*profits, 0.0]),
        biggest_loss=abs(min([*profits, 0.0])),
        current_streak=streak,
        streak_type=streak_type,
        avg_clv=calculate_average_clv(settled) if is_pro else None,
        profitable_sports=sum(1 for row in sports if row.profit > 0),
        variance=variance,
    )


def calculate_win_rate_vs_expected(
    bets: Sequence[Bet], bins: int = 10, min_bets: int = 5
) -> list[dict]:
    """Compare actual win rate with the win rate the odds implied.

    Settled bets are binned by the implied probability of their American
    odds over equal-width bins spanning [0, 1]. A well-calibrated bettor
    lands near the diagonal; consistently beating it means the bets were
    priced better than the market thought.

    Args:
        bets: Bets to bin; pending and void bets are skipped
        bins: Number of equal-width probability bins
        min_bets: Bins with fewer bets are dropped

    Returns:
        List of {"bin_start", "bin_end", "bets", "expected_win_rate",
        "actual_win_rate"} in ascending bin order

    Raises:
        ValueError: If bins is less than 1
    """
    if bins < 1:
        raise ValueError(f"Number of bins must be at least 1. Got {bins}.")

    grouped: dict[int, list[tuple[float, bool]]] = defaultdict(list)
    for bet in _settled(bets):
        probability = american_to_probability(bet.odds)
        index = min(int(probability * bins), bins - 1)
        grouped[index].append((probability, bet.result == "won"))

    rows = []
    for index in sorted(grouped):
        group = grouped[index]
        if len(group) < min_bets:
            continue
        rows.append(
            {
                "bin_start": index / bins,
                "bin_end": (index + 1) / bins,
                "bets": len(group),
                "expected_win_rate": sum(p for p, _ in group) / len(group),
                "actual_win_rate": sum(1 for _, won in group if won) / len(group),
            }
        )
    return rows
