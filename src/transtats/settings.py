"""Runtime settings."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TRANSLATE_URL_TEMPLATE = "https://translate.wordpress.org/locale/{locale}/default/wp-plugins/{slug}/"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="TRANSTATS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    author: str = "automattic"
    language: str = "es"
    per_page: int = Field(default=250, ge=1, le=250)

    request_timeout: float = Field(default=30.0, ge=1, le=120)
    rate_limit_per_second: float = Field(default=5.0, gt=0)
    api_page_delay: float = Field(default=0.2, ge=0.0, le=60.0)
    translation_delay: float = Field(default=0.3, ge=0.0, le=60.0)
    translation_concurrency: int = Field(default=1, ge=1, le=20)

    translate_url_template: str = DEFAULT_TRANSLATE_URL_TEMPLATE

    log_level: str = "INFO"
