"""Cache-first statute resolution with fail-closed validation."""

import threading
from collections.abc import Callable, Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

from screening.citations.models import Citation, Jurisdiction
from screening.logging.logger import Log
from screening.statutes.cache import BaseStatuteCache
from screening.statutes.exceptions import StatuteCacheError
from screening.statutes.models import (
    FailureReason,
    StatuteFailure,
    StatuteRecord,
    StatuteResult,
)
from screening.statutes.sources import StatuteSourceStrategy
from screening.statutes.validator import ContentValidator

# Only a parse failure lets the next source try; the site's own answers
# (404, 429, transport errors) end the chain.
RETRYABLE_REASONS = frozenset({FailureReason.PARSE_ERROR})


class StatuteResolver:
    """Resolves citations to validated statute text.

    Order: cache (re-validated, invalid entries deleted) -> each configured
    source in turn. Text is validated before it is cached, when it is read
    back from the cache and right before it is returned; anything that fails
    becomes a ``parse_error`` failure. Lookups of one key are serialized so
    concurrent callers share one live fetch.
    """

    def __init__(
        self,
        *,
        cache: BaseStatuteCache,
        validator: ContentValidator,
        sources: Mapping[Jurisdiction, Sequence[StatuteSourceStrategy]],
        ttl: timedelta = timedelta(hours=48),
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
        on_close: Callable[[], None] | None = None,
    ) -> None:
        self._cache = cache
        self._validator = validator
        self._sources = {j: tuple(s) for j, s in sources.items()}
        self._ttl = ttl
        self._clock = clock
        self._on_close = on_close
        self._key_locks: dict[tuple[str, str], threading.Lock] = {}
        self._key_locks_guard = threading.Lock()

    def resolve(self, citation: Citation) -> StatuteResult:
        with self._lock_for(citation.cache_key):
            cached = self._read_cache(citation)
            if cached is not None:
                Log.info(f"Statute {citation.normalized_key} served from cache")
                return self._checked(cached)
            result = self._fetch_live(citation)
            if isinstance(result, StatuteRecord):
                self._write_cache(result)
            return self._checked(result)

    def resolve_all(
        self, citations: Iterable[Citation], max_workers: int = 4
    ) -> dict[tuple[str, str], StatuteResult]:
        """Resolve many citations concurrently, keyed by ``(jurisdiction, key)``."""
        unique = {c.cache_key: c for c in citations}
        if not unique:
            return {}
        with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
            results = pool.map(self.resolve, unique.values())
            return dict(zip(unique.keys(), results))

    def close(self) -> None:
        if self._on_close is not None:
            self._on_close()

    def _lock_for(self, key: tuple[str, str]) -> threading.Lock:
        with self._key_locks_guard:
            return self._key_locks.setdefault(key, threading.Lock())

    def _read_cache(self, citation: Citation) -> StatuteRecord | None:
        try:
            record = self._cache.get(citation.jurisdiction, citation.normalized_key)
        except StatuteCacheError as exc:
            Log.warning(f"Statute cache read failed, fetching live: {exc}")
            return None
        if record is None:
            return None
        if record.fetched_at < self._clock() - self._ttl:
            Log.debug(f"Cached statute {citation.normalized_key} expired")
            return None

        verdict = self._validator.validate(record.jurisdiction, record.text)
        if verdict.valid:
            return record
        Log.warning(
            "Cached statute failed validation, deleting",
            key=record.normalized_key,
            url=record.url,
            reason=verdict.reason,
        )
        try:
            self._cache.delete(record.jurisdiction, record.normalized_key)
        except StatuteCacheError as exc:
            Log.error(f"Failed to delete invalid cache entry {record.normalized_key}: {exc}")
        return None

    def _fetch_live(self, citation: Citation) -> StatuteResult:
        last: StatuteResult = StatuteFailure(
            jurisdiction=citation.jurisdiction,
            normalized_key=citation.normalized_key,
            reason=FailureReason.UNSUPPORTED,
            details=f"No statute source for {citation.jurisdiction.value}.",
        )
        for strategy in self._sources.get(citation.jurisdiction, ()):
            result = self._checked(strategy.fetch(citation.normalized_key))
            if isinstance(result, StatuteRecord):
                Log.info(
                    f"Statute {citation.normalized_key} resolved via {strategy.name}",
                    chars=len(result.text),
                )
                return result
            Log.warning(
                f"Statute source {strategy.name} failed for {citation.normalized_key}",
                reason=result.reason.value,
                details=result.details,
            )
            last = result
            if result.reason not in RETRYABLE_REASONS:
                break
        return last

    def _write_cache(self, record: StatuteRecord) -> None:
        verdict = self._validator.validate(record.jurisdiction, record.text)
        if not verdict.valid:
            Log.error(
                "Refusing to cache invalid statute content",
                key=record.normalized_key,
                reason=verdict.reason,
            )
            return
        try:
            self._cache.set(record)
        except StatuteCacheError as exc:
            Log.error(f"Failed to cache statute {record.normalized_key}: {exc}")

    def _checked(self, result: StatuteResult) -> StatuteResult:
        if isinstance(result, StatuteFailure):
            return result
        verdict = self._validator.validate(result.jurisdiction, result.text)
        if verdict.valid:
            return result
        return StatuteFailure(
            jurisdiction=result.jurisdiction,
            normalized_key=result.normalized_key,
            reason=FailureReason.PARSE_ERROR,
            details=f"Content failed validation: {verdict.reason}",
            url_tried=result.url,
        )
