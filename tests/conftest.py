"""Shared pytest fixtures for bet analytics tests."""

from datetime import datetime, timezone

import freezegun
import pytest

from truesharp_analytics.analytics.models import Bet
from truesharp_analytics.config import get_settings
from truesharp_analytics.monitoring import configure_logging

# Keep freezegun from swapping typer's module-level datetime, which breaks
# typer's `annotation == datetime` check for datetime options.
freezegun.configure(extend_ignore_list=["typer"])


@pytest.fixture(autouse=True)
def setup_test_logging():
    """Configure structlog for test output."""
    configure_logging("development")


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read settings for every test so monkeypatched env vars apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_bet():
    """Factory for Bet records with sensible defaults.

    Any field can be overridden by keyword, e.g. ``make_bet(result="lost")``.
    """

    def _make_bet(**overrides) -> Bet:
        data = {
            "date": datetime(2025, 1, 15, 19, 30, tzinfo=timezone.utc),
            "sport": "basketball",
            "league": "NBA",
            "team": "Boston Celtics",
            "opponent": "Los Angeles Lakers",
            "home_away": "home",
            "bet_type": "moneyline",
            "sportsbook": "draftkings",
            "odds": -110,
            "result": "won",
            "stake": 100.0,
            "payout": 190.91,
        }
        data.update(overrides)
        return Bet(**data)

    return _make_bet


@pytest.fixture
def sample_bets(make_bet):
    """Mixed-sport bet history with every result type.

    Settled: 4 won / 3 lost. Also 1 pending and 1 void.
    """
    return [
        make_bet(id="b1", date="2025-01-03", odds=-110, result="won", stake=110, payout=210, clv=0.02),
        make_bet(id="b2", date="2025-01-05", odds=150, result="lost", stake=50, payout=0, clv=-0.01),
        make_bet(
            id="b3",
            date="2025-01-20",
            sport="football",
            league="NFL",
            team="Kansas City Chiefs",
            opponent="Buffalo Bills",
            home_away="away",
            bet_type="spread",
            odds=-105,
            result="won",
            stake=105,
            payout=205,
        ),
        make_bet(
            id="b4",
            date="2025-02-02",
            player="Jayson Tatum",
            prop_type="points",
            bet_type="player_prop",
            odds=120,
            result="lost",
            stake=25,
            payout=0,
            clv=0.05,
        ),
        make_bet(
            id="b5",
            date="2025-02-10",
            sport="football",
            league="NFL",
            team="Kansas City Chiefs",
            bet_type="spread",
            odds=-120,
            result="won",
            stake=120,
            payout=220,
        ),
        make_bet(id="b6", date="2025-02-14", odds=-200, result="lost", stake=200, payout=0),
        make_bet(id="b7", date="2025-03-01", odds=180, result="won", stake=40, payout=112),
        make_bet(id="b8", date="2025-03-02", odds=-110, result="pending", stake=100, payout=0),
        make_bet(id="b9", date="2025-03-03", odds=-110, result="void", stake=100, payout=100),
    ]
