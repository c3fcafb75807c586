"""Shared test factory helpers for creating model instances."""

from __future__ import annotations

from transtats.models.plugin import PluginRecord, TranslationStats


def make_stats(**overrides) -> TranslationStats:
    """Create TranslationStats with sensible defaults. Override any field via kwargs."""
    defaults = {
        "fuzzy": 2,
        "untranslated": 170,
        "waiting": 5,
        "changes_requested": 0,
        "translation_url": "https://translate.wordpress.org/locale/es/default/wp-plugins/test-plugin/",
    }
    defaults.update(overrides)
    return TranslationStats(**defaults)


def make_plugin(slug: str = "test-plugin", **overrides) -> PluginRecord:
    """Create a PluginRecord with sensible defaults. Override any field via kwargs."""
    defaults = {
        "name": "Test Plugin",
        "slug": slug,
        "active_installs": 1000,
        "last_updated": "3 weeks ago",
    }
    defaults.update(overrides)
    return PluginRecord(**defaults)


def make_stats_row(caption: str, fuzzy: str = "0", untranslated: str = "0", waiting: str = "0", changes: str = "0") -> str:
    """Render one translate.wordpress.org sub-project row."""
    return f"""
    <tr>
        <td class="set-name"><strong><a href="#">{caption}</a></strong></td>
        <td class="stats translated"><a href="#">100</a></td>
        <td class="stats fuzzy"><a href="#">{fuzzy}</a></td>
        <td class="stats untranslated"><a href="#">{untranslated}</a></td>
        <td class="stats waiting"><a href="#">{waiting}</a></td>
        <td class="stats changesrequested"><a href="#">{changes}</a></td>
    </tr>"""


def make_translation_page(*rows: str) -> str:
    body = "".join(rows)
    return f"<html><body><table class=\"table\"><tbody>{body}</tbody></table></body></html>"
