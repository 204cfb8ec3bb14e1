"""Tests for Pro-tier analytics aggregation.

Tests verify:
1. Only won/lost bets are aggregated
2. Degenerate input yields a well-formed all-zero summary
3. Dispersion and the ROI interval come from the stake series
4. Average CLV uses the closing odds of each settled bet
"""

import math

import pytest

from truesharp_analytics.analytics.models import ProAnalyticsSummary
from truesharp_analytics.analytics.pro_tier import calculate_pro_tier_analytics


class TestEmptyInput:
    """Tests for degenerate collections."""

    def test_no_bets(self):
        """Empty input returns the all-zero summary."""
        summary = calculate_pro_tier_analytics([])

        assert summary == ProAnalyticsSummary.empty()
        assert summary.to_dict() == {
            "totalBets": 0,
            "winRate": 0.0,
            "roi": 0.0,
            "averageStake": 0.0,
            "netProfit": 0.0,
            "standardDeviation": 0.0,
            "confidenceInterval": [0.0, 0.0],
            "averageCLV": 0.0,
        }

    def test_only_pending_and_void(self, make_bet):
        """Unsettled bets alone aggregate to zeros."""
        bets = [make_bet(result="pending"), make_bet(result="void", payout=100)]
        assert calculate_pro_tier_analytics(bets) == ProAnalyticsSummary.empty()

    def test_zero_stake_roi_is_zero(self, make_bet):
        """All-zero stakes clamp ROI to 0 instead of NaN."""
        bets = [make_bet(stake=0, payout=0, result="lost")]
        summary = calculate_pro_tier_analytics(bets)

        assert summary.total_bets == 1
        assert summary.roi == 0.0
        assert not math.isnan(summary.confidence_interval[0])


class TestScenario:
    """Tests with hand-computed expectations."""

    def test_one_win_one_loss(self, make_bet):
        """100 staked twice, one win paying 190: -10 net, -5% ROI."""
        bets = [
            make_bet(stake=100, payout=190, result="won"),
            make_bet(stake=100, payout=0, result="lost"),
        ]
        summary = calculate_pro_tier_analytics(bets)

        assert summary.total_bets == 2
        assert summary.win_rate == pytest.approx(0.5)
        assert summary.net_profit == pytest.approx(-10)
        assert summary.roi == pytest.approx(-0.05)
        assert summary.average_stake == pytest.approx(100)
        # Equal stakes: no dispersion, so the interval collapses onto ROI
        assert summary.standard_deviation == 0.0
        assert summary.confidence_interval == pytest.approx((-0.05, -0.05))

    def test_pending_and_void_excluded(self, make_bet):
        bets = [
            make_bet(stake=100, payout=190, result="won"),
            make_bet(stake=100, payout=0, result="lost"),
            make_bet(stake=500, payout=0, result="pending"),
            make_bet(stake=500, payout=500, result="void"),
        ]
        summary = calculate_pro_tier_analytics(bets)

        assert summary.total_bets == 2
        assert summary.average_stake == pytest.approx(100)
        assert summary.roi == pytest.approx(-0.05)

    def test_stake_dispersion_drives_interval(self, make_bet):
        """std-dev is over stakes and widens the ROI interval."""
        bets = [
            make_bet(stake=50, payout=100, result="won"),
            make_bet(stake=150, payout=0, result="lost"),
        ]
        summary = calculate_pro_tier_analytics(bets)

        # stakes 50/150 -> population std 50
        assert summary.standard_deviation == pytest.approx(50.0)
        roi = (100 - 200) / 200
        margin = 1.959964 * 50.0 / math.sqrt(2)
        low, high = summary.confidence_interval
        assert summary.roi == pytest.approx(roi)
        assert low == pytest.approx(roi - margin, rel=1e-5)
        assert high == pytest.approx(roi + margin, rel=1e-5)

    def test_custom_confidence_level(self, make_bet):
        bets = [
            make_bet(stake=50, payout=100, result="won"),
            make_bet(stake=150, payout=0, result="lost"),
        ]
        wide = calculate_pro_tier_analytics(bets, confidence_level=0.99)
        narrow = calculate_pro_tier_analytics(bets, confidence_level=0.80)

        assert wide.confidence_interval[1] > narrow.confidence_interval[1]
        assert wide.roi == narrow.roi

    def test_average_clv(self, make_bet):
        """CLV averages over all settled bets; bets without closing odds count as 0."""
        bets = [
            make_bet(odds=100, closing_odds=110, result="won"),
            make_bet(odds=200, closing_odds=150, result="lost", payout=0),
            make_bet(odds=-110, result="won"),
            make_bet(odds=100, closing_odds=300, result="pending"),
        ]
        summary = calculate_pro_tier_analytics(bets)

        assert summary.average_clv == pytest.approx((0.10 - 0.25 + 0.0) / 3)

    def test_sample_history(self, sample_bets):
        summary = calculate_pro_tier_analytics(sample_bets)

        assert summary.total_bets == 7
        assert summary.win_rate == pytest.approx(4 / 7)
        total_stake = 110 + 50 + 105 + 25 + 120 + 200 + 40
        total_payout = 210 + 205 + 220 + 112
        assert summary.net_profit == pytest.approx(total_payout - total_stake)
        assert summary.roi == pytest.approx((total_payout - total_stake) / total_stake)
        assert summary.average_stake == pytest.approx(total_stake / 7)
