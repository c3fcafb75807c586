"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest
from aiolimiter import AsyncLimiter

from transtats.clients.http import RequestContext
from transtats.settings import Settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def request_context() -> RequestContext:
    return RequestContext(limiter=AsyncLimiter(100, 1))


@pytest.fixture
def fast_settings() -> Settings:
    """Settings without inter-request delays."""
    return Settings(api_page_delay=0.0, translation_delay=0.0)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def translation_page_html() -> str:
    return (FIXTURES_DIR / "translation_page.html").read_text()
