from unittest.mock import patch

import pytest

from screening.config.settings import Settings
from screening.statutes.cache import InMemoryStatuteCache
from screening.statutes.factory import StatuteResolverFactory
from screening.statutes.resolver import StatuteResolver


class TestStatuteResolverFactory:
    def test_creates_resolver_with_memory_cache(self) -> None:
        settings = Settings(statute_cache_backend="memory", use_playwright_fallback=False)
        resolver = StatuteResolverFactory.create(settings)
        try:
            assert isinstance(resolver, StatuteResolver)
        finally:
            resolver.close()

    def test_uses_given_cache(self) -> None:
        settings = Settings(statute_cache_backend="unknown", use_playwright_fallback=False)
        resolver = StatuteResolverFactory.create(settings, cache=InMemoryStatuteCache())
        resolver.close()

    def test_postgres_backend_uses_repository(self) -> None:
        settings = Settings(statute_cache_backend="postgres", use_playwright_fallback=False)
        with patch("screening.statutes.factory.StatuteCacheRepository") as mock_repo:
            resolver = StatuteResolverFactory.create(settings)
        resolver.close()
        mock_repo.assert_called_once_with()

    def test_close_stops_browser(self) -> None:
        settings = Settings(statute_cache_backend="memory", use_playwright_fallback=True)
        with patch("screening.statutes.factory.BrowserPool") as mock_pool:
            resolver = StatuteResolverFactory.create(settings)
        resolver.close()
        mock_pool.return_value.close.assert_called_once_with()

    def test_raises_for_unknown_backend(self) -> None:
        settings = Settings(statute_cache_backend="redis", use_playwright_fallback=False)
        with pytest.raises(ValueError, match="Unknown statute cache backend"):
            StatuteResolverFactory.create(settings)
