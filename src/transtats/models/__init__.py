"""Pydantic models."""

from .plugin import PluginRecord, RowCounters, SubProject, TranslationStats

__all__ = [
    "PluginRecord",
    "RowCounters",
    "SubProject",
    "TranslationStats",
]
