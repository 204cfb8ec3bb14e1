"""Pydantic models for bet records and analytics summaries.

Bets arrive from the database/API layer as camelCase JSON (``homeAway``,
``closingLines``); snake_case keys are accepted as well. Odds are American
(e.g. -110, +150) and are never converted by the core.
"""

from dataclasses import asdict, dataclass
from datetime import date, datetime, time, timezone
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

BetResult = Literal["won", "lost", "void", "pending"]
HomeAway = Literal["home", "away"]

SETTLED_RESULTS: frozenset[str] = frozenset({"won", "lost"})

_datetime_adapter = TypeAdapter(datetime)


def to_utc_datetime(value: Any) -> datetime:
    """Coerce a datetime, date or ISO string to an aware UTC datetime.

    Plain dates become midnight. Naive values are taken to be UTC.

    Raises:
        ValidationError: If the value cannot be read as a datetime
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if not isinstance(value, datetime):
        value = _datetime_adapter.validate_python(value)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class LineSet(BaseModel):
    """Spread/total/moneyline snapshot taken at open or close.

    Attributes:
        spread: Point spread (e.g., -3.5)
        total: Over/under total (e.g., 221.5)
        moneyline: American moneyline price (e.g., -140)
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    spread: float | None = None
    total: float | None = None
    moneyline: float | None = None


class Bet(BaseModel):
    """Single settled or pending wager.

    Attributes:
        id: Database identifier, if the caller has one
        date: When the bet was placed (accepts ``placedAt``/``placed_at`` too)
        sport: Sport name (e.g., "basketball")
        league: League code (e.g., "NBA")
        team: Team the bet is on
        player: Player name for props
        opponent: Opposing team
        home_away: Side of the team bet on
        prop_type: Prop market (e.g., "points")
        bet_type: Bet type (e.g., "spread", "moneyline", "player_prop")
        sportsbook: Book the bet was placed at
        is_parlay: Whether the bet is a parlay
        odds: American odds at placement
        closing_odds: American odds at market close
        result: won, lost, void or pending
        stake: Amount risked (>= 0)
        payout: Amount returned (0 on a loss, stake + winnings on a win)
        clv: Precomputed closing line value
        opening_lines: Lines when the market opened
        closing_lines: Lines when the market closed
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str | None = None
    date: datetime = Field(validation_alias=AliasChoices("date", "placedAt", "placed_at"))
    sport: str
    league: str
    team: str
    player: str | None = None
    opponent: str | None = None
    home_away: HomeAway | None = None
    prop_type: str | None = None
    bet_type: str | None = None
    sportsbook: str | None = None
    is_parlay: bool = False
    odds: float
    closing_odds: float | None = None
    result: BetResult
    stake: float = Field(ge=0.0)
    payout: float = 0.0
    clv: float | None = None
    opening_lines: LineSet | None = None
    closing_lines: LineSet | None = None

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v: Any) -> datetime:
        """Store placement time as an aware UTC datetime."""
        return to_utc_datetime(v)

    @property
    def is_settled(self) -> bool:
        """True for won/lost bets, the only ones counted in profit and ROI."""
        return self.result in SETTLED_RESULTS

    @property
    def profit(self) -> float:
        """Signed profit (payout - stake)."""
        return self.payout - self.stake


@dataclass
class ProAnalyticsSummary:
    """Pro-tier performance summary for a collection of bets.

    Attributes:
        total_bets: Number of settled (won/lost) bets
        win_rate: Wins / total_bets, as a fraction
        roi: Net profit / total stake, as a fraction
        average_stake: Mean stake across settled bets
        net_profit: Total payout - total stake
        standard_deviation: Population std-dev of the stake series
        confidence_interval: (low, high) interval around roi
        average_clv: Mean CLV across settled bets
    """

    total_bets: int = 0
    win_rate: float = 0.0
    roi: float = 0.0
    average_stake: float = 0.0
    net_profit: float = 0.0
    standard_deviation: float = 0.0
    confidence_interval: tuple[float, float] = (0.0, 0.0)
    average_clv: float = 0.0

    @classmethod
    def empty(cls) -> "ProAnalyticsSummary":
        """All-zero summary returned when there is nothing to aggregate."""
        return cls()

    def to_dict(self) -> dict:
        """Export as camelCase JSON-ready dict for API responses."""
        return {
            "totalBets": self.total_bets,
            "winRate": self.win_rate,
            "roi": self.roi,
            "averageStake": self.average_stake,
            "netProfit": self.net_profit,
            "standardDeviation": self.standard_deviation,
            "confidenceInterval": list(self.confidence_interval),
            "averageCLV": self.average_clv,
        }


@dataclass
class CalculatedMetrics:
    """Basic-tier headline metrics (see ``basic_tier.calculate_metrics``)."""

    total_bets: int = 0
    win_rate: float = 0.0
    roi: float = 0.0
    total_profit: float = 0.0
    total_staked: float = 0.0
    avg_odds: float = 0.0
    avg_stake: float = 0.0
    biggest_win: float = 0.0
    biggest_loss: float = 0.0
    current_streak: int = 0
    streak_type: Literal["win", "loss", "none"] = "none"
    avg_clv: float | None = None
    profitable_sports: int = 0
    variance: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class PerformanceBreakdown:
    """Performance of one group of bets (a sport, bet type, month, odds bucket)."""

    label: str
    bets: int
    win_rate: float
    profit: float
    roi: float
    avg_odds: float = 0.0
    total_staked: float = 0.0
    clv: float | None = None

    def to_dict(self) -> dict:
        return asdict(self)
