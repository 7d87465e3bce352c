import threading
from abc import ABC, abstractmethod

from screening.citations.models import Jurisdiction
from screening.statutes.models import StatuteRecord


class BaseStatuteCache(ABC):
    """Narrow get/set/delete contract keyed by ``(jurisdiction, normalized_key)``.

    Implementations store whatever they are given; validation and expiry are
    the resolver's job.
    """

    @abstractmethod
    def get(self, jurisdiction: Jurisdiction, normalized_key: str) -> StatuteRecord | None:
        """Return the stored record or None.

        Raises:
            StatuteCacheError: if the backend is unavailable.
        """

    @abstractmethod
    def set(self, record: StatuteRecord) -> None:
        """Insert or replace the record for its key."""

    @abstractmethod
    def delete(self, jurisdiction: Jurisdiction, normalized_key: str) -> None:
        """Remove the record for a key; missing keys are ignored."""


class InMemoryStatuteCache(BaseStatuteCache):
    """Process-local cache for tests and database-less runs."""

    def __init__(self) -> None:
        self._records: dict[tuple[str, str], StatuteRecord] = {}
        self._lock = threading.Lock()

    def get(self, jurisdiction: Jurisdiction, normalized_key: str) -> StatuteRecord | None:
        with self._lock:
            return self._records.get((jurisdiction.value, normalized_key))

    def set(self, record: StatuteRecord) -> None:
        with self._lock:
            self._records[record.cache_key] = record

    def delete(self, jurisdiction: Jurisdiction, normalized_key: str) -> None:
        with self._lock:
            self._records.pop((jurisdiction.value, normalized_key), None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
