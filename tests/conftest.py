"""Shared fixtures."""

import pytest
from loguru import logger

ENV_KEYS = ("IRCFORMAT_SPAN_FORMAT", "IRCFORMAT_LINK_DETECTION", "IRCFORMAT_BALANCED_MARKUP", "LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without overrides; values set during it (e.g. from .env) are undone."""
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def library_logging_disabled():
    """setup_logging() enables the package logger; put back the import-time default."""
    yield
    logger.disable("ircformat")
