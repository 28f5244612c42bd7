import logging
from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Blog Article Generator API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: list[str] = ["*"]

    # Provider selection: "gemini" | "openrouter"
    llm_provider: str = "gemini"
    llm_timeout_seconds: float | None = None

    # Google Gemini configuration
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com"
    gemini_model: str = "gemini-2.5-flash"

    # OpenRouter configuration
    openrouter_api_key: str = ""
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openrouter_app_name: str = "Blog Article Generator"
    openrouter_model: str = "google/gemini-2.5-flash"

    # Provider pacing — one call per second by default
    generation_rate_per_second: float = 1.0
    generation_burst: int = 1

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_http: str = "WARNING"          # httpx / httpcore — outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_generation: str = "INFO"       # ArticleGeneration pipeline
    log_level_llm: str = "INFO"              # Gemini / OpenRouter clients

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def model_post_init(self, __context: object) -> None:
        """Warn early when the selected provider has no credential."""
        provider = self.llm_provider.lower().strip()
        if provider == "gemini" and not self.gemini_api_key.strip():
            _config_logger.warning("GEMINI_API_KEY is not configured; generation will fail.")
        elif provider == "openrouter" and not self.openrouter_api_key.strip():
            _config_logger.warning("OPENROUTER_API_KEY is not configured; generation will fail.")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
