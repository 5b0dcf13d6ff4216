"""Unit tests for the logging configuration."""

import logging

from blog.config import Settings
from blog.infrastructure.logging.log_config import setup_logging


def test_category_levels_are_applied():
    settings = Settings(
        _env_file=None,
        log_level="WARNING",
        log_level_http="ERROR",
        log_level_uvicorn="DEBUG",
        log_level_supabase="DEBUG",
    )

    applied = setup_logging(settings)

    assert logging.getLogger().level == logging.WARNING
    assert applied["httpx"] == logging.ERROR
    assert logging.getLogger("httpcore").level == logging.ERROR
    assert logging.getLogger("uvicorn.access").level == logging.DEBUG
    assert logging.getLogger("blog.infrastructure.supabase").level == logging.DEBUG
    assert logging.getLogger("blog.infrastructure.fallback").level == logging.DEBUG


def test_unknown_level_defaults_to_info():
    applied = setup_logging(Settings(_env_file=None, log_level_http="chatty"))
    assert applied["httpx"] == logging.INFO
