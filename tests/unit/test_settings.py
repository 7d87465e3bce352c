from pathlib import Path

import pytest
from pydantic import ValidationError

from screening.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_db_port(self) -> None:
        s = Settings()
        assert s.db_port == 5432

    def test_default_max_job_attempts(self) -> None:
        s = Settings()
        assert s.max_job_attempts == 3

    def test_default_job_poll_interval(self) -> None:
        s = Settings()
        assert s.job_poll_interval_seconds == 5

    def test_default_pdf_engine(self) -> None:
        s = Settings()
        assert s.pdf_engine == "pdfplumber"

    def test_default_statute_cache_ttl(self) -> None:
        s = Settings()
        assert s.statute_cache_ttl_hours == 48

    def test_default_element_evaluator(self) -> None:
        s = Settings()
        assert s.element_evaluator == "keyword"

    def test_default_case_summarizer(self) -> None:
        s = Settings()
        assert s.case_summarizer == "extractive"

    def test_default_browser_fallback_enabled(self) -> None:
        s = Settings()
        assert s.use_playwright_fallback is True


class TestSettingsFromEnv:
    def test_loads_app_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        s = Settings()
        assert s.app_env == "production"

    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_db_host(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_HOST", "db.example.com")
        s = Settings()
        assert s.db_host == "db.example.com"

    def test_loads_ocr_credentials(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GOOGLE_VISION_API_KEY", "vision-key")
        monkeypatch.setenv("AI_INTEGRATIONS_GEMINI_API_KEY", "gemini-key")
        s = Settings()
        assert s.google_vision_api_key == "vision-key"
        assert s.ai_integrations_gemini_api_key == "gemini-key"

    def test_loads_browser_toggle(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("USE_PLAYWRIGHT_FALLBACK", "false")
        s = Settings()
        assert s.use_playwright_fallback is False

    def test_loads_layout_path(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EXTRACTION_LAYOUT_PATH", "/etc/screening/layout.json")
        s = Settings()
        assert s.extraction_layout_path == Path("/etc/screening/layout.json")


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_cache_ttl_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STATUTE_CACHE_TTL_HOURS", "two days")
        with pytest.raises(ValidationError):
            Settings()
