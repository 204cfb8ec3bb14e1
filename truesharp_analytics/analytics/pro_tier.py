"""Pro-tier analytics aggregation.

Rolls a collection of bets into a ``ProAnalyticsSummary``. Only settled
(won/lost) bets count; pending and void bets are ignored everywhere.

Note the dispersion figures: ``standard_deviation`` measures bet sizing (the
stake series), and the ROI confidence interval is built from that same stake
deviation. Dashboards rely on these exact numbers.
"""

from typing import Optional, Sequence

from truesharp_analytics.analytics.clv import calculate_clv
from truesharp_analytics.analytics.models import Bet, ProAnalyticsSummary
from truesharp_analytics.analytics.statistics import (
    calculate_confidence_interval,
    calculate_standard_deviation,
)
from truesharp_analytics.monitoring import get_logger

log = get_logger(__name__)


def calculate_pro_tier_analytics(
    bets: Sequence[Bet],
    confidence_level: Optional[float] = None,
) -> ProAnalyticsSummary:
    """Calculate the Pro-tier performance summary.

    Args:
        bets: Bets to aggregate (any result; non-settled ones are skipped)
        confidence_level: Level for the ROI interval (default from settings)

    Returns:
        ProAnalyticsSummary. All zeros when there are no settled bets.
        ROI is 0.0 when every settled bet has zero stake.

    Example:
        >>> summary = calculate_pro_tier_analytics(bets)
        >>> f"{summary.roi:.1%}"
        '-5.0%'
    """
    completed = [bet for bet in bets if bet.is_settled]

    if not completed:
        log.debug("pro_tier_analytics_empty", input_bets=len(bets))
        return ProAnalyticsSummary.empty()

    total_bets = len(completed)
    wins = sum(1 for bet in completed if bet.result == "won")

    stakes = [bet.stake for bet in completed]
    total_stake = sum(stakes)
    total_payout = sum(bet.payout for bet in completed)

    net_profit = total_payout - total_stake
    roi = net_profit / total_stake if total_stake > 0 else 0.0

    standard_deviation = calculate_standard_deviation(stakes)
    confidence_interval = calculate_confidence_interval(
        roi, standard_deviation, total_bets, confidence_level
    )

    average_clv = sum(calculate_clv(bet) for bet in completed) / total_bets

    log.debug(
        "pro_tier_analytics_computed",
        input_bets=len(bets),
        settled_bets=total_bets,
        wins=wins,
    )

    return ProAnalyticsSummary(
        total_bets=total_bets,
        win_rate=wins / total_bets,
        roi=roi,
        average_stake=total_stake / total_bets,
        net_profit=net_profit,
        standard_deviation=standard_deviation,
        confidence_interval=confidence_interval,
        average_clv=average_clv,
    )
