"""Tests for settings module."""

import pytest
from pydantic import ValidationError

from transtats.settings import DEFAULT_TRANSLATE_URL_TEMPLATE, Settings


def test_default_settings() -> None:
    s = Settings()
    assert s.author == "automattic"
    assert s.language == "es"
    assert s.per_page == 250
    assert s.request_timeout == 30.0
    assert s.api_page_delay == 0.2
    assert s.translation_delay == 0.3
    assert s.translation_concurrency == 1
    assert s.translate_url_template == DEFAULT_TRANSLATE_URL_TEMPLATE
    assert s.log_level == "INFO"


def test_settings_override() -> None:
    s = Settings(author="developer", language="fr", translation_concurrency=4)
    assert s.author == "developer"
    assert s.language == "fr"
    assert s.translation_concurrency == 4


def test_settings_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("TRANSTATS_AUTHOR", "wordpressdotorg")
    monkeypatch.setenv("TRANSTATS_LANGUAGE", "de")
    s = Settings()
    assert s.author == "wordpressdotorg"
    assert s.language == "de"


def test_settings_per_page_bounds() -> None:
    with pytest.raises(ValidationError):
        Settings(per_page=0)
    with pytest.raises(ValidationError):
        Settings(per_page=500)
