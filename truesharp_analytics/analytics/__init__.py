"""Bet performance statistics and filtering.

This package turns a list of bet records into dashboard numbers:
- Bet record model and summary types
- Composable bet filters and saved filter combinations
- Statistical primitives (correlation, std-dev, confidence intervals)
- Per-bet CLV and line movement
- Pro-tier summary and Basic-tier metrics/breakdowns
"""

from truesharp_analytics.analytics.basic_tier import (
    calculate_bankroll_growth,
    calculate_bet_type_breakdown,
    calculate_breakdown,
    calculate_current_streak,
    calculate_daily_profit,
    calculate_kelly_stake,
    calculate_metrics,
    calculate_monthly_breakdown,
    calculate_odds_range_breakdown,
    calculate_sport_breakdown,
    calculate_win_rate_vs_expected,
)
from truesharp_analytics.analytics.clv import (
    american_to_probability,
    calculate_average_clv,
    calculate_clv,
    calculate_line_movement,
)
from truesharp_analytics.analytics.filters import (
    FILTER_PRESETS,
    AnalyticsFilters,
    BetFilter,
    apply_filters,
    combine_filters,
    filter_by_bet_type,
    filter_by_clv,
    filter_by_date_range,
    filter_by_home_away,
    filter_by_league,
    filter_by_leagues,
    filter_by_max_stake,
    filter_by_min_stake,
    filter_by_odds_range,
    filter_by_opponent,
    filter_by_player,
    filter_by_prop_type,
    filter_by_result,
    filter_by_sport,
    filter_by_sportsbook,
    filter_by_team,
    filter_from_dict,
    filters_from_criteria,
    preset_date_range,
)
from truesharp_analytics.analytics.models import (
    Bet,
    CalculatedMetrics,
    LineSet,
    PerformanceBreakdown,
    ProAnalyticsSummary,
)
from truesharp_analytics.analytics.pro_tier import calculate_pro_tier_analytics
from truesharp_analytics.analytics.registry import (
    SavedFilter,
    SavedFilterRegistry,
    get_registry,
)
from truesharp_analytics.analytics.statistics import (
    calculate_confidence_interval,
    calculate_correlation,
    calculate_sharpe_ratio,
    calculate_standard_deviation,
)

__all__ = [
    # Models
    "Bet",
    "LineSet",
    "ProAnalyticsSummary",
    "CalculatedMetrics",
    "PerformanceBreakdown",
    # Filters
    "BetFilter",
    "AnalyticsFilters",
    "apply_filters",
    "combine_filters",
    "filter_from_dict",
    "filters_from_criteria",
    "filter_by_sport",
    "filter_by_league",
    "filter_by_leagues",
    "filter_by_team",
    "filter_by_player",
    "filter_by_opponent",
    "filter_by_home_away",
    "filter_by_result",
    "filter_by_bet_type",
    "filter_by_prop_type",
    "filter_by_sportsbook",
    "filter_by_min_stake",
    "filter_by_max_stake",
    "filter_by_odds_range",
    "filter_by_clv",
    "filter_by_date_range",
    "FILTER_PRESETS",
    "preset_date_range",
    # Saved filters
    "SavedFilter",
    "SavedFilterRegistry",
    "get_registry",
    # Statistics
    "calculate_correlation",
    "calculate_standard_deviation",
    "calculate_confidence_interval",
    "calculate_sharpe_ratio",
    # CLV
    "calculate_clv",
    "calculate_line_movement",
    "calculate_average_clv",
    "american_to_probability",
    # Aggregation
    "calculate_pro_tier_analytics",
    "calculate_metrics",
    "calculate_current_streak",
    "calculate_breakdown",
    "calculate_sport_breakdown",
    "calculate_bet_type_breakdown",
    "calculate_monthly_breakdown",
    "calculate_odds_range_breakdown",
    "calculate_daily_profit",
    "calculate_bankroll_growth",
    "calculate_kelly_stake",
    "calculate_win_rate_vs_expected",
]
