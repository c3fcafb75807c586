"""Core data models for plugins and their translation statistics."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

PLUGIN_URL_TEMPLATE = "https://wordpress.org/plugins/{slug}/"


class SubProject(Enum):
    """One of the four translation targets listed on a plugin's translation page.

    Each member carries the caption of its table row and, for the two code
    targets, the text whose presence disqualifies a row. The code captions are
    substrings of rows that also mention the readme targets, so a caption match
    alone is not enough to tell them apart.
    """

    STABLE = ("Stable (latest release)", "Stable Readme")
    STABLE_README = ("Stable Readme (latest release)", None)
    DEVELOPMENT = ("Development (trunk)", "Development Readme")
    DEVELOPMENT_README = ("Development Readme (trunk)", None)

    def __init__(self, caption: str, excluded: str | None) -> None:
        self.caption = caption
        self.excluded = excluded


@dataclass(frozen=True)
class RowCounters:
    """Raw counters read from one sub-project row.

    ``None`` means the cell, its link or a numeric value was not found.
    """

    fuzzy: int | None = None
    untranslated: int | None = None
    waiting: int | None = None
    changes_requested: int | None = None

    def resolved(self) -> tuple[int, int, int, int]:
        return (
            self.fuzzy or 0,
            self.untranslated or 0,
            self.waiting or 0,
            self.changes_requested or 0,
        )


class TranslationStats(BaseModel):
    """Untranslated-string counters summed across all sub-project rows."""

    model_config = ConfigDict(frozen=True)

    fuzzy: int = Field(default=0, ge=0)
    untranslated: int = Field(default=0, ge=0)
    waiting: int = Field(default=0, ge=0)
    changes_requested: int = Field(default=0, ge=0)
    translation_url: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_not_translated(self) -> int:
        return self.fuzzy + self.untranslated + self.waiting + self.changes_requested

    def to_output_dict(self) -> dict[str, Any]:
        return {
            "fuzzy": self.fuzzy,
            "untranslated": self.untranslated,
            "waiting": self.waiting,
            "changes_requested": self.changes_requested,
            "total_not_translated": self.total_not_translated,
            "translation_url": self.translation_url,
        }


class PluginRecord(BaseModel):
    """One plugin from the author's catalogue."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str
    slug: str
    active_installs: int = Field(default=0, ge=0)
    last_updated: str = "N/A"
    translations: TranslationStats | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def url(self) -> str:
        return PLUGIN_URL_TEMPLATE.format(slug=self.slug)

    def with_translations(self, stats: TranslationStats | None) -> PluginRecord:
        """Return a copy of this record carrying *stats*."""
        return self.model_copy(update={"translations": stats})

    def to_output_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "last_updated": self.last_updated,
            "url": self.url,
            "slug": self.slug,
            "active_installs": self.active_installs,
        }
        if self.translations is not None:
            data["translations"] = self.translations.to_output_dict()
        return data
