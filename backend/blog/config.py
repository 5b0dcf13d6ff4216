from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)

# Values shipped in example .env files; treated the same as "unset".
_PLACEHOLDER_URLS = frozenset({
    "",
    "https://placeholder.supabase.co",
    "your_supabase_project_url_here",
})
_PLACEHOLDER_KEYS = frozenset({
    "",
    "placeholder-key",
    "your_anon_key_here",
    "your_service_role_key_here",
})

SETUP_INSTRUCTIONS = (
    "Supabase is not properly configured. Set SUPABASE_URL and SUPABASE_ANON_KEY "
    "in the environment or backend/.env from your Supabase project settings."
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Blog API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Supabase project
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    site_url: str = "http://localhost:5173"
    backend_timeout: float = 30.0

    # Storage buckets & upload limits
    avatars_bucket: str = "avatars"
    thumbnails_bucket: str = "thumbnails"
    max_upload_size_mb: int = 5

    # Seconds between like-counter reconciliation passes (0 disables)
    like_reconcile_interval: int = 900

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_http: str = "WARNING"          # httpx / httpcore — outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_supabase: str = "INFO"         # Supabase adapters

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    @property
    def supabase_configured(self) -> bool:
        """True when both the project URL and the anon key look real."""
        return (
            self.supabase_url.strip() not in _PLACEHOLDER_URLS
            and self.supabase_anon_key.strip() not in _PLACEHOLDER_KEYS
        )

    @property
    def service_role_configured(self) -> bool:
        return self.supabase_configured and self.supabase_service_role_key.strip() not in _PLACEHOLDER_KEYS

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
