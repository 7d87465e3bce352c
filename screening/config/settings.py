from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "screening"
    db_username: str = "screening"
    db_password: str = "secret"

    max_job_attempts: int = 3
    job_poll_interval_seconds: int = 5
    files_root: Path = Path("/app/files")

    pdf_engine: str = "pdfplumber"

    # OCR credentials; their presence decides the provider for the run.
    ocr_provider: str = ""
    document_ai_project_id: str = ""
    document_ai_location: str = ""
    document_ai_processor_id: str = ""
    document_ai_service_account_json: str = ""
    document_ai_max_pages_per_request: int = 30
    ai_integrations_gemini_api_key: str = ""
    ai_integrations_gemini_base_url: str = ""
    gemini_ocr_model: str = "gemini-2.5-flash"
    gemini_ocr_max_bytes: int = 7 * 1024 * 1024
    google_vision_api_key: str = ""
    google_vision_timeout_seconds: int = 60

    statute_cache_backend: str = "postgres"
    statute_cache_ttl_hours: int = 48
    statute_http_timeout_seconds: int = 20
    statute_resolve_workers: int = 4
    use_playwright_fallback: bool = True
    browser_idle_timeout_seconds: int = 60
    browser_idle_check_seconds: int = 10
    browser_page_timeout_seconds: int = 15
    debug_statute_extraction: bool = False
    statute_debug_dir: Path = Path("tmp/statute_debug")

    element_evaluator: str = "keyword"
    element_evaluator_api_key: str = ""
    element_evaluator_model_name: str = ""
    element_evaluator_base_url: str = ""
    element_evaluator_timeout_seconds: int = 30

    case_summarizer: str = "extractive"

    extraction_layout_path: Path | None = None
