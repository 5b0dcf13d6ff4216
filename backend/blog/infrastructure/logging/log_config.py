"""Centralized logging configuration.

Root level plus per-category levels from Settings, so outbound HTTP chatter
(httpx/httpcore) and the Supabase adapters can be tuned independently.

Usage:
    from blog.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan
"""

import logging
import sys

from blog.config import Settings, get_settings

# Settings field → logger names it controls.
_CATEGORY_MAP: dict[str, tuple[str, ...]] = {
    "log_level_http": ("httpx", "httpcore"),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    "log_level_supabase": ("blog.infrastructure.supabase", "blog.infrastructure.fallback"),
}

_DEV_FORMAT = "%(levelname)-8s %(name)s — %(message)s"
_PROD_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply log levels from settings; returns the level set per logger name."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))

    # uvicorn installs its own handlers; tests and scripts may have none.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        fmt = _DEV_FORMAT if settings.app_env == "development" else _PROD_FORMAT
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)

    applied: dict[str, int] = {}
    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, settings_field, "INFO"))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
            applied[name] = level

    logging.getLogger(__name__).debug(
        "Logging configured — root=%s, http=%s, uvicorn=%s, supabase=%s",
        settings.log_level,
        settings.log_level_http,
        settings.log_level_uvicorn,
        settings.log_level_supabase,
    )
    return applied


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
