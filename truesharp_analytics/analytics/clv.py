"""Closing Line Value (CLV) and line movement for individual bets.

CLV compares the price a bet was placed at with the price the market closed
at. Consistently beating the close is the strongest long-run signal of an
edge, even when individual bets lose.

Both metrics are computed on the raw numbers stored with the bet (American
odds, point lines); missing data yields 0 rather than an error.
"""

from typing import Literal, Optional, Sequence

from truesharp_analytics.analytics.models import Bet

LineMarket = Literal["spread", "total", "moneyline"]
LINE_MARKETS: tuple[str, ...] = ("spread", "total", "moneyline")


def clv_from_odds(bet_odds: Optional[float], closing_odds: Optional[float]) -> float:
    """Relative move from placement odds to closing odds.

    Formula: (closing_odds - bet_odds) / bet_odds

    Args:
        bet_odds: Odds at placement
        closing_odds: Odds at market close

    Returns:
        CLV as a fraction (0.10 = 10%). 0.0 when either value is missing or
        bet_odds is 0.

    Example:
        >>> clv_from_odds(100, 110)
        0.1
    """
    if bet_odds is None or closing_odds is None or bet_odds == 0:
        return 0.0
    return (closing_odds - bet_odds) / bet_odds


def calculate_clv(bet: Bet) -> float:
    """Calculate closing line value for a bet.

    The closing price is ``bet.closing_odds``, falling back to the closing
    moneyline when only line snapshots were recorded.
    """
    closing = bet.closing_odds
    if closing is None and bet.closing_lines is not None:
        closing = bet.closing_lines.moneyline
    return clv_from_odds(bet.odds, closing)


def calculate_line_movement(bet: Bet, market: LineMarket = "spread") -> float:
    """Closing line minus opening line for one market.

    Args:
        bet: Bet with opening/closing line snapshots
        market: "spread", "total" or "moneyline"

    Returns:
        Signed movement, or 0.0 if either snapshot lacks the market.

    Raises:
        ValueError: If market is not a known line market
    """
    if market not in LINE_MARKETS:
        raise ValueError(f"Unknown line market {market!r}. Expected one of {LINE_MARKETS}.")

    if bet.opening_lines is None or bet.closing_lines is None:
        return 0.0

    opening = getattr(bet.opening_lines, market)
    closing = getattr(bet.closing_lines, market)
    if opening is None or closing is None:
        return 0.0

    return closing - opening


def calculate_average_clv(bets: Sequence[Bet]) -> Optional[float]:
    """Mean of the precomputed ``clv`` over bets that carry one.

    Returns:
        Average CLV, or None if no bet has a recorded CLV.
    """
    clv_values = [bet.clv for bet in bets if bet.clv is not None]
    if not clv_values:
        return None
    return sum(clv_values) / len(clv_values)


def american_to_probability(odds: float) -> float:
    """Implied win probability of American odds (vig included).

    Example:
        >>> american_to_probability(-110)
        0.5238...
    """
    if not odds:
        return 0.0
    if odds > 0:
        return 100 / (odds + 100)
    return abs(odds) / (abs(odds) + 100)
