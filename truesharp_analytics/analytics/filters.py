"""Composable bet filters.

Each filter is a small frozen dataclass carrying its parameters, so filters
compare by value, print readably in logs and round-trip through ``to_dict``
for saved-filter storage. Calling a filter (or its ``test`` method) with a
``Bet`` returns whether the bet passes.

Matching is exact: no case folding, no trimming. Filters never raise on odd
data; a bet that cannot satisfy the criterion simply fails it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from datetime import datetime, timedelta, timezone
from typing import Any, ClassVar, Iterable, Optional, Sequence

from pydantic import BaseModel

from truesharp_analytics.analytics.models import Bet, HomeAway, BetResult, to_utc_datetime

MATCHABLE_FIELDS: frozenset[str] = frozenset(
    {
        "sport",
        "league",
        "team",
        "player",
        "opponent",
        "home_away",
        "result",
        "bet_type",
        "prop_type",
        "sportsbook",
        "is_parlay",
    }
)


class BetFilter(ABC):
    """Predicate over a single bet."""

    kind: ClassVar[str]

    @abstractmethod
    def test(self, bet: Bet) -> bool:
        """Return True if the bet satisfies this filter."""

    def __call__(self, bet: Bet) -> bool:
        return self.test(bet)

    def to_dict(self) -> dict[str, Any]:
        """Serialize as ``{"kind": ..., <params>}``."""
        data: dict[str, Any] = {"kind": self.kind}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            elif isinstance(value, tuple):
                value = list(value)
            data[f.name] = value
        return data


def _check_field(name: str) -> str:
    if name not in MATCHABLE_FIELDS:
        raise ValueError(
            f"Cannot match on field {name!r}. Expected one of {sorted(MATCHABLE_FIELDS)}."
        )
    return name


@dataclass(frozen=True)
class FieldEquals(BetFilter):
    """Strict equality against one categorical bet field."""

    kind: ClassVar[str] = "field_equals"

    field: str
    value: Any

    def __post_init__(self) -> None:
        _check_field(self.field)

    def test(self, bet: Bet) -> bool:
        return getattr(bet, self.field) == self.value


@dataclass(frozen=True)
class FieldIn(BetFilter):
    """Field value is one of a fixed set of values."""

    kind: ClassVar[str] = "field_in"

    field: str
    values: tuple

    def __post_init__(self) -> None:
        _check_field(self.field)
        object.__setattr__(self, "values", tuple(self.values))

    def test(self, bet: Bet) -> bool:
        return getattr(bet, self.field) in self.values


@dataclass(frozen=True)
class MinStake(BetFilter):
    kind: ClassVar[str] = "min_stake"

    min_stake: float

    def test(self, bet: Bet) -> bool:
        return bet.stake >= self.min_stake


@dataclass(frozen=True)
class MaxStake(BetFilter):
    kind: ClassVar[str] = "max_stake"

    max_stake: float

    def test(self, bet: Bet) -> bool:
        return bet.stake <= self.max_stake


@dataclass(frozen=True)
class OddsRange(BetFilter):
    """Inclusive odds window; None leaves that side open.

    Bounds are not reordered: min > max matches nothing.
    """

    kind: ClassVar[str] = "odds_range"

    min_odds: Optional[float] = None
    max_odds: Optional[float] = None

    def test(self, bet: Bet) -> bool:
        if self.min_odds is not None and bet.odds < self.min_odds:
            return False
        if self.max_odds is not None and bet.odds > self.max_odds:
            return False
        return True


@dataclass(frozen=True)
class MinCLV(BetFilter):
    """Precomputed CLV at or above a threshold; a missing CLV counts as 0."""

    kind: ClassVar[str] = "min_clv"

    min_clv: float

    def test(self, bet: Bet) -> bool:
        clv = bet.clv if bet.clv is not None else 0.0
        return clv >= self.min_clv


@dataclass(frozen=True)
class DateRange(BetFilter):
    """Inclusive placement-date window; None leaves that side open.

    Bounds may be datetimes, dates or ISO strings.
    """

    kind: ClassVar[str] = "date_range"

    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.start is not None:
            object.__setattr__(self, "start", to_utc_datetime(self.start))
        if self.end is not None:
            object.__setattr__(self, "end", to_utc_datetime(self.end))

    def test(self, bet: Bet) -> bool:
        if self.start is not None and bet.date < self.start:
            return False
        if self.end is not None and bet.date > self.end:
            return False
        return True


@dataclass(frozen=True)
class AllOf(BetFilter):
    """Logical AND of child filters. Empty matches every bet."""

    kind: ClassVar[str] = "all_of"

    filters: tuple[BetFilter, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "filters", tuple(self.filters))

    def test(self, bet: Bet) -> bool:
        return all(f.test(bet) for f in self.filters)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "filters": [f.to_dict() for f in self.filters]}


FILTER_KINDS: dict[str, type[BetFilter]] = {
    cls.kind: cls
    for cls in (FieldEquals, FieldIn, MinStake, MaxStake, OddsRange, MinCLV, DateRange, AllOf)
}


def filter_from_dict(data: dict[str, Any]) -> BetFilter:
    """Rebuild a filter from its ``to_dict`` form.

    Raises:
        ValueError: If ``kind`` is missing or unknown
    """
    params = dict(data)
    kind = params.pop("kind", None)
    cls = FILTER_KINDS.get(kind)
    if cls is None:
        raise ValueError(f"Unknown filter kind: {kind!r}")
    if cls is AllOf:
        return AllOf(tuple(filter_from_dict(child) for child in params.get("filters", [])))
    return cls(**params)


# Factories, one per supported criterion


def filter_by_sport(sport: str) -> BetFilter:
    return FieldEquals("sport", sport)


def filter_by_league(league: str) -> BetFilter:
    return FieldEquals("league", league)


def filter_by_team(team: str) -> BetFilter:
    return FieldEquals("team", team)


def filter_by_player(player: str) -> BetFilter:
    return FieldEquals("player", player)


def filter_by_opponent(opponent: str) -> BetFilter:
    return FieldEquals("opponent", opponent)


def filter_by_home_away(side: HomeAway) -> BetFilter:
    return FieldEquals("home_away", side)


def filter_by_result(result: BetResult) -> BetFilter:
    return FieldEquals("result", result)


def filter_by_bet_type(bet_type: str) -> BetFilter:
    return FieldEquals("bet_type", bet_type)


def filter_by_prop_type(prop_type: str) -> BetFilter:
    return FieldEquals("prop_type", prop_type)


def filter_by_sportsbook(sportsbook: str) -> BetFilter:
    return FieldEquals("sportsbook", sportsbook)


def filter_by_leagues(leagues: Iterable[str]) -> BetFilter:
    return FieldIn("league", tuple(leagues))


def filter_by_min_stake(min_stake: float) -> BetFilter:
    return MinStake(min_stake)


def filter_by_max_stake(max_stake: float) -> BetFilter:
    return MaxStake(max_stake)


def filter_by_odds_range(min_odds: Optional[float], max_odds: Optional[float]) -> BetFilter:
    return OddsRange(min_odds, max_odds)


def filter_by_clv(min_clv: float) -> BetFilter:
    return MinCLV(min_clv)


def filter_by_date_range(
    start: Optional[datetime | str], end: Optional[datetime | str]
) -> BetFilter:
    return DateRange(start, end)


FILTER_PRESETS: tuple[str, ...] = (
    "last_7_days",
    "last_30_days",
    "last_90_days",
    "this_month",
    "year_to_date",
)
_TRAILING_DAYS = {"last_7_days": 7, "last_30_days": 30, "last_90_days": 90}


def preset_date_range(name: str, now: Optional[datetime] = None) -> DateRange:
    """Date window for a named dashboard preset, ending at ``now``.

    Args:
        name: One of FILTER_PRESETS
        now: End of the window (default: current UTC time)

    Raises:
        ValueError: If name is not a known preset
    """
    end = datetime.now(timezone.utc) if now is None else to_utc_datetime(now)
    midnight = end.replace(hour=0, minute=0, second=0, microsecond=0)

    if name in _TRAILING_DAYS:
        start = end - timedelta(days=_TRAILING_DAYS[name])
    elif name == "this_month":
        start = midnight.replace(day=1)
    elif name == "year_to_date":
        start = midnight.replace(month=1, day=1)
    else:
        raise ValueError(f"Unknown date preset {name!r}. Expected one of {FILTER_PRESETS}.")

    return DateRange(start, end)


def apply_filters(bets: Sequence[Bet], filters: Sequence[BetFilter]) -> list[Bet]:
    """Keep the bets that pass every filter.

    Evaluation stops at the first failing filter for each bet. Input order is
    preserved; nothing is deduplicated or sorted.

    Args:
        bets: Bets to filter
        filters: Filters combined with AND logic (empty = keep all)

    Returns:
        New list with the matching bets
    """
    if not filters:
        return list(bets)
    return [bet for bet in bets if all(f.test(bet) for f in filters)]


def combine_filters(filters: Iterable[BetFilter]) -> AllOf:
    """Collapse several filters into one AND filter."""
    return AllOf(tuple(filters))


class AnalyticsFilters(BaseModel):
    """Dashboard filter criteria as sent by the analytics page.

    Every field is optional; unset fields add no filter.
    """

    leagues: Optional[list[str]] = None
    bet_types: Optional[list[str]] = None
    sportsbooks: Optional[list[str]] = None
    player_names: Optional[list[str]] = None
    odds_min: Optional[float] = None
    odds_max: Optional[float] = None
    stake_min: Optional[float] = None
    stake_max: Optional[float] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    is_parlay: Optional[bool] = None
    prop_type: Optional[str] = None
    side: Optional[HomeAway] = None


def filters_from_criteria(criteria: AnalyticsFilters) -> list[BetFilter]:
    """Translate dashboard criteria into a filter list for ``apply_filters``.

    A one-sided odds or date window keeps the missing bound as None (open).
    """
    result: list[BetFilter] = []

    if criteria.leagues:
        result.append(FieldIn("league", tuple(criteria.leagues)))
    if criteria.bet_types:
        result.append(FieldIn("bet_type", tuple(criteria.bet_types)))
    if criteria.sportsbooks:
        result.append(FieldIn("sportsbook", tuple(criteria.sportsbooks)))
    if criteria.player_names:
        result.append(FieldIn("player", tuple(criteria.player_names)))

    if criteria.odds_min is not None or criteria.odds_max is not None:
        result.append(OddsRange(criteria.odds_min, criteria.odds_max))

    if criteria.stake_min is not None:
        result.append(MinStake(criteria.stake_min))
    if criteria.stake_max is not None:
        result.append(MaxStake(criteria.stake_max))

    if criteria.date_from is not None or criteria.date_to is not None:
        result.append(DateRange(criteria.date_from, criteria.date_to))

    if criteria.is_parlay is not None:
        result.append(FieldEquals("is_parlay", criteria.is_parlay))
    if criteria.prop_type:
        result.append(FieldEquals("prop_type", criteria.prop_type))
    if criteria.side:
        result.append(FieldEquals("home_away", criteria.side))

    return result
