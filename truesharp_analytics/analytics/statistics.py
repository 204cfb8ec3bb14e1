"""Statistical primitives for bet performance analysis.

Provides:
- Pearson correlation
- Population standard deviation
- Normal-approximation confidence intervals
- Sharpe ratio of per-bet returns

Degenerate input (empty or mismatched series, zero variance) returns a
neutral value instead of raising, so summaries for new accounts stay
well-formed.
"""

import math
from statistics import NormalDist
from typing import Optional, Sequence

import numpy as np

from truesharp_analytics.analytics.models import Bet
from truesharp_analytics.config import get_settings


def calculate_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """Calculate the Pearson correlation coefficient of two series.

    Args:
        x: First series
        y: Second series, same length as x

    Returns:
        Correlation in [-1, 1]. Returns 0.0 if the lengths differ, either
        series is empty, or either series is constant.

    Example:
        >>> calculate_correlation([1, 2, 3], [2, 4, 6])
        1.0
    """
    if len(x) == 0 or len(x) != len(y):
        return 0.0

    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)

    dx = x_arr - x_arr.mean()
    dy = y_arr - y_arr.mean()

    # sqrt(sxx * syy) keeps r(x, x) at exactly 1.0
    denominator = math.sqrt(float(np.dot(dx, dx)) * float(np.dot(dy, dy)))
    if denominator == 0:
        return 0.0

    r = float(np.dot(dx, dy)) / denominator
    return max(-1.0, min(1.0, r))


def calculate_standard_deviation(values: Sequence[float]) -> float:
    """Population standard deviation (ddof=0) of a series.

    Settled bets are treated as the complete population, not a sample.
    Returns 0.0 for an empty series.
    """
    if len(values) == 0:
        return 0.0
    return float(np.std(np.asarray(values, dtype=float)))


def z_score_for(confidence_level: float) -> float:
    """Two-tailed standard normal critical value for a confidence level.

    Raises:
        ValueError: If confidence_level is not strictly between 0 and 1
    """
    if not 0.0 < confidence_level < 1.0:
        raise ValueError(
            f"Confidence level must be between 0 and 1 exclusive. Got {confidence_level}."
        )
    return NormalDist().inv_cdf(0.5 + confidence_level / 2.0)


def calculate_confidence_interval(
    mean: float,
    std_dev: float,
    n: int,
    confidence_level: Optional[float] = None,
) -> tuple[float, float]:
    """Normal-approximation confidence interval around a mean.

    Formula: mean ± z × (std_dev / √n)

    Args:
        mean: Center of the interval
        std_dev: Standard deviation of the underlying series
        n: Number of observations
        confidence_level: Two-tailed level; defaults to settings
            (ANALYTICS_CONFIDENCE_LEVEL, 0.95 → z ≈ 1.96)

    Returns:
        (low, high) tuple. Collapses to (mean, mean) when n <= 0.

    Raises:
        ValueError: If confidence_level is outside (0, 1)
    """
    if confidence_level is None:
        confidence_level = get_settings().confidence_level

    z = z_score_for(confidence_level)

    if n <= 0:
        return (mean, mean)

    margin = z * std_dev / math.sqrt(n)
    return (mean - margin, mean + margin)


def calculate_sharpe_ratio(bets: Sequence[Bet]) -> float:
    """Sharpe ratio of per-bet returns (profit / stake) over settled bets.

    Uses the sample standard deviation. Bets with zero stake carry no return
    and are skipped.

    Returns:
        Mean return / std-dev of returns, or 0.0 with fewer than two returns
        or zero dispersion.
    """
    returns = [bet.profit / bet.stake for bet in bets if bet.is_settled and bet.stake > 0]

    if len(returns) < 2:
        return 0.0

    returns_arr = np.asarray(returns, dtype=float)
    std = float(np.std(returns_arr, ddof=1))
    if std == 0:
        return 0.0

    return float(returns_arr.mean() / std)
