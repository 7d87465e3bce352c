from datetime import timedelta

from screening.citations.models import Jurisdiction
from screening.config.settings import Settings
from screening.database.repositories.statute_cache_repository import StatuteCacheRepository
from screening.statutes.browser import BrowserPool
from screening.statutes.cache import BaseStatuteCache, InMemoryStatuteCache
from screening.statutes.debug_dump import StatuteDebugDump
from screening.statutes.http_client import StatuteHttpClient
from screening.statutes.resolver import StatuteResolver
from screening.statutes.sources import (
    StatuteSourceStrategy,
    UtahBrowserSource,
    UtahVersionedPageSource,
    WestValleyCitySource,
)
from screening.statutes.validator import ContentValidator


class StatuteResolverFactory:
    """Wires the cache, validator and source chains from settings."""

    @classmethod
    def create(
        cls,
        settings: Settings,
        cache: BaseStatuteCache | None = None,
    ) -> StatuteResolver:
        http = StatuteHttpClient(timeout_seconds=settings.statute_http_timeout_seconds)
        debug_dump = StatuteDebugDump(
            settings.statute_debug_dir, enabled=settings.debug_statute_extraction
        )

        utah_sources: list[StatuteSourceStrategy] = [
            UtahVersionedPageSource(http, debug_dump=debug_dump)
        ]
        browser: BrowserPool | None = None
        if settings.use_playwright_fallback:
            browser = BrowserPool(
                idle_timeout_seconds=settings.browser_idle_timeout_seconds,
                idle_check_seconds=settings.browser_idle_check_seconds,
                page_timeout_seconds=settings.browser_page_timeout_seconds,
            )
            utah_sources.append(UtahBrowserSource(browser, debug_dump=debug_dump))

        def close() -> None:
            if browser is not None:
                browser.close()
            http.close()

        return StatuteResolver(
            cache=cache if cache is not None else cls._create_cache(settings),
            validator=ContentValidator(),
            sources={
                Jurisdiction.UTAH: utah_sources,
                Jurisdiction.WEST_VALLEY_CITY: [WestValleyCitySource(http)],
            },
            ttl=timedelta(hours=settings.statute_cache_ttl_hours),
            on_close=close,
        )

    @staticmethod
    def _create_cache(settings: Settings) -> BaseStatuteCache:
        backend = settings.statute_cache_backend.lower()
        if backend == "memory":
            return InMemoryStatuteCache()
        if backend == "postgres":
            return StatuteCacheRepository()
        raise ValueError(
            f"Unknown statute cache backend '{backend}'. Choose from: ['memory', 'postgres']"
        )
