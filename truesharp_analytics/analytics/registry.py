"""Thread-safe in-memory registry of named filter combinations.

Entries live for the lifetime of the process. Callers that want them to
survive a restart can ``export()`` and later ``import_entries()`` them.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from threading import Lock
from typing import Any, Iterable, Optional, Sequence

from truesharp_analytics.analytics.filters import BetFilter, apply_filters, filter_from_dict
from truesharp_analytics.analytics.models import Bet, to_utc_datetime
from truesharp_analytics.monitoring import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class SavedFilter:
    """Named, reusable filter combination.

    Attributes:
        id: Unique key in the registry
        name: Display name
        description: Optional longer description
        created_at: When the id was first saved (UTC)
        updated_at: When the entry was last saved (UTC)
        filters: Filters combined with AND logic, in saved order
    """

    id: str
    name: str
    created_at: datetime
    updated_at: datetime
    filters: tuple[BetFilter, ...] = ()
    description: Optional[str] = None

    def apply(self, bets: Sequence[Bet]) -> list[Bet]:
        return apply_filters(bets, self.filters)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
            "filters": [f.to_dict() for f in self.filters],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SavedFilter":
        """Rebuild an entry from ``to_dict`` output.

        Raises:
            KeyError: If a required key is missing
            ValueError: If a filter kind is unknown
        """
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description"),
            created_at=to_utc_datetime(data["createdAt"]),
            updated_at=to_utc_datetime(data["updatedAt"]),
            filters=tuple(filter_from_dict(f) for f in data.get("filters", [])),
        )


class SavedFilterRegistry:
    """Owns all saved filters; one lock guards every read and write.

    Entries are immutable, so references handed out by ``load_filter`` can
    never change the registry's state.
    """

    def __init__(self) -> None:
        self._entries: dict[str, SavedFilter] = {}
        self._lock = Lock()

    def save_filter(
        self,
        filter_id: str,
        name: str,
        filters: Iterable[BetFilter],
        description: Optional[str] = None,
    ) -> SavedFilter:
        """Insert or fully replace the entry for ``filter_id``.

        ``updated_at`` is stamped on every save; ``created_at`` is kept from
        the first save of this id.

        ``filters`` is copied into a tuple, so the stored entry compares
        element by element with the caller's list: use
        ``list(entry.filters) == filters``, not ``entry.filters == filters``.

        Raises:
            ValueError: If filter_id is empty
        """
        if not filter_id:
            raise ValueError("Saved filter id must be a non-empty string.")

        now = datetime.now(timezone.utc)
        filters = tuple(filters)

        with self._lock:
            existing = self._entries.get(filter_id)
            entry = SavedFilter(
                id=filter_id,
                name=name,
                description=description,
                created_at=existing.created_at if existing else now,
                updated_at=now,
                filters=filters,
            )
            self._entries[filter_id] = entry

        log.info(
            "saved_filter_stored",
            filter_id=filter_id,
            filter_count=len(filters),
            overwritten=existing is not None,
        )
        return entry

    def load_filter(self, filter_id: str) -> Optional[SavedFilter]:
        """Return the entry, or None if the id is unknown."""
        with self._lock:
            return self._entries.get(filter_id)

    def delete_filter(self, filter_id: str) -> bool:
        """Remove the entry. Returns whether it existed."""
        with self._lock:
            existed = self._entries.pop(filter_id, None) is not None

        if existed:
            log.info("saved_filter_deleted", filter_id=filter_id)
        return existed

    def list_saved_filters(self) -> list[SavedFilter]:
        """All entries. Order is not guaranteed."""
        with self._lock:
            return list(self._entries.values())

    def apply_saved_filter(self, filter_id: str, bets: Sequence[Bet]) -> list[Bet]:
        """Apply a saved filter combination to bets.

        Raises:
            KeyError: If no filter is saved under filter_id
        """
        entry = self.load_filter(filter_id)
        if entry is None:
            raise KeyError(f"No saved filter with id={filter_id!r}")
        return entry.apply(bets)

    def export(self) -> list[dict[str, Any]]:
        """Snapshot all entries as dicts that ``json.dumps`` writes as strict JSON."""
        return [entry.to_dict() for entry in self.list_saved_filters()]

    def import_entries(self, entries: Iterable[dict[str, Any]]) -> int:
        """Load previously exported entries, keeping their timestamps.

        Existing entries with the same id are replaced.

        Returns:
            Number of entries imported
        """
        loaded = [SavedFilter.from_dict(data) for data in entries]
        with self._lock:
            for entry in loaded:
                self._entries[entry.id] = entry
        log.info("saved_filters_imported", count=len(loaded))
        return len(loaded)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


@lru_cache
def get_registry() -> SavedFilterRegistry:
    """Process-wide registry instance (singleton)."""
    return SavedFilterRegistry()
