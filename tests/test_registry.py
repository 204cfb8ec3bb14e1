"""Tests for the saved filter registry."""

import json
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest
from freezegun import freeze_time

from truesharp_analytics.analytics.filters import (
    AnalyticsFilters,
    filter_by_league,
    filter_by_min_stake,
    filter_by_result,
    filters_from_criteria,
)
from truesharp_analytics.analytics.registry import (
    SavedFilter,
    SavedFilterRegistry,
    get_registry,
)


@pytest.fixture
def registry():
    """Fresh registry per test."""
    return SavedFilterRegistry()


class TestSaveLoad:
    """Tests for save_filter / load_filter."""

    def test_save_then_load(self, registry):
        """Loaded entry carries the saved filters in order."""
        filters = [filter_by_league("NBA"), filter_by_min_stake(50)]
        registry.save_filter("nba-big", "NBA big stakes", filters, description="Stakes over 50")

        entry = registry.load_filter("nba-big")

        assert isinstance(entry, SavedFilter)
        assert entry.id == "nba-big"
        assert entry.name == "NBA big stakes"
        assert entry.description == "Stakes over 50"
        assert list(entry.filters) == filters

    def test_load_unknown(self, registry):
        assert registry.load_filter("missing") is None

    def test_empty_id_rejected(self, registry):
        with pytest.raises(ValueError, match="non-empty"):
            registry.save_filter("", "No id", [])

    def test_timestamps_on_create(self, registry):
        with freeze_time("2025-03-01 12:00:00"):
            entry = registry.save_filter("f1", "First", [])

        expected = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
        assert entry.created_at == expected
        assert entry.updated_at == expected

    def test_overwrite_keeps_created_at(self, registry):
        """Re-saving replaces the entry but keeps the original creation time."""
        with freeze_time("2025-03-01 12:00:00"):
            registry.save_filter("f1", "First", [filter_by_league("NBA")])
        with freeze_time("2025-03-05 08:30:00"):
            entry = registry.save_filter("f1", "Renamed", [filter_by_result("won")])

        assert entry.created_at == datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
        assert entry.updated_at == datetime(2025, 3, 5, 8, 30, tzinfo=timezone.utc)
        assert entry.name == "Renamed"
        assert entry.description is None
        assert entry.filters == (filter_by_result("won"),)
        assert len(registry) == 1

    def test_entries_are_immutable(self, registry):
        entry = registry.save_filter("f1", "First", [filter_by_league("NBA")])
        with pytest.raises(AttributeError):
            entry.name = "Changed"

    def test_caller_list_mutation_does_not_leak(self, registry):
        filters = [filter_by_league("NBA")]
        registry.save_filter("f1", "First", filters)
        filters.append(filter_by_result("won"))

        assert len(registry.load_filter("f1").filters) == 1

    def test_filters_stored_as_tuple(self, registry):
        """Stored filters keep order and compare element by element with the input list."""
        filters = [filter_by_league("NBA"), filter_by_min_stake(50)]
        entry = registry.save_filter("f1", "First", filters)

        assert isinstance(entry.filters, tuple)
        assert list(entry.filters) == filters
        assert entry.filters == tuple(filters)


class TestDeleteList:
    """Tests for delete_filter / list_saved_filters."""

    def test_delete_existing(self, registry):
        registry.save_filter("f1", "First", [])

        assert registry.delete_filter("f1") is True
        assert registry.load_filter("f1") is None

    def test_delete_missing(self, registry):
        assert registry.delete_filter("nope") is False

    def test_list(self, registry):
        registry.save_filter("a", "A", [])
        registry.save_filter("b", "B", [])

        assert {entry.id for entry in registry.list_saved_filters()} == {"a", "b"}

    def test_list_empty(self, registry):
        assert registry.list_saved_filters() == []


class TestApplyAndExport:
    """Tests for applying and exporting saved filters."""

    def test_apply_saved_filter(self, registry, sample_bets):
        registry.save_filter("nfl-wins", "NFL wins", [filter_by_league("NFL"), filter_by_result("won")])

        result = registry.apply_saved_filter("nfl-wins", sample_bets)

        assert [b.id for b in result] == ["b3", "b5"]

    def test_apply_unknown(self, registry, sample_bets):
        with pytest.raises(KeyError, match="No saved filter"):
            registry.apply_saved_filter("ghost", sample_bets)

    def test_export_import_round_trip(self, registry):
        with freeze_time("2025-03-01 12:00:00"):
            registry.save_filter("f1", "First", [filter_by_league("NBA"), filter_by_min_stake(25)], "desc")

        exported = registry.export()
        restored = SavedFilterRegistry()
        count = restored.import_entries(exported)

        assert count == 1
        assert restored.load_filter("f1") == registry.load_filter("f1")
        assert exported[0]["createdAt"] == "2025-03-01T12:00:00+00:00"
        assert exported[0]["filters"][0] == {"kind": "field_equals", "field": "league", "value": "NBA"}

    def test_export_is_strict_json_for_one_sided_criteria(self, registry, make_bet):
        """Open odds/date bounds survive a json.dumps/json.loads round trip."""
        criteria = AnalyticsFilters(odds_min=-150, date_from="2025-01-01")
        registry.save_filter("open", "Open ended", filters_from_criteria(criteria))

        payload = json.dumps(registry.export(), allow_nan=False)
        restored = SavedFilterRegistry()
        restored.import_entries(json.loads(payload))

        assert restored.load_filter("open") == registry.load_filter("open")
        bets = [make_bet(odds=900, date="2030-01-01"), make_bet(odds=-200)]
        assert restored.apply_saved_filter("open", bets) == bets[:1]


class TestConcurrency:
    """Tests for thread safety."""

    def test_concurrent_saves_are_not_lost(self, registry):
        def save(i):
            registry.save_filter(f"f{i}", f"Filter {i}", [filter_by_min_stake(i)])

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(save, range(200)))

        assert len(registry) == 200

    def test_concurrent_save_and_delete(self, registry):
        for i in range(100):
            registry.save_filter(f"f{i}", "x", [])

        with ThreadPoolExecutor(max_workers=8) as pool:
            deleted = list(pool.map(registry.delete_filter, [f"f{i}" for i in range(100)]))

        assert all(deleted)
        assert len(registry) == 0


def test_get_registry_is_singleton():
    """The process-wide registry is created once."""
    assert get_registry() is get_registry()
