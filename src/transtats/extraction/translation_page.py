"""Translation statistics for individual plugin translation pages."""

from __future__ import annotations

import asyncio
from functools import reduce
from typing import TYPE_CHECKING

import httpx
from loguru import logger

from transtats.clients.http import RequestContext, RetryableStatusError, fetch_text
from transtats.extraction.html_parser import extract_row_counters, load_document, locate_row
from transtats.models.plugin import PluginRecord, RowCounters, SubProject, TranslationStats

if TYPE_CHECKING:
    from collections.abc import Iterable

    from lxml import html

    from transtats.settings import Settings

_ZERO = RowCounters(fuzzy=0, untranslated=0, waiting=0, changes_requested=0)


def build_translation_url(template: str, locale: str, slug: str) -> str:
    return template.format(locale=locale, slug=slug)


def collect_sub_project_counters(tree: html.HtmlElement) -> dict[SubProject, RowCounters | None]:
    """Read each sub-project row in order; None marks a row the page does not have."""

    rows: dict[SubProject, RowCounters | None] = {}
    for sub_project in SubProject:
        row = locate_row(tree, sub_project)
        rows[sub_project] = extract_row_counters(row) if row is not None else None
        logger.trace("Sub-project {}: {}", sub_project.name, rows[sub_project])
    return rows


def _fold(total: RowCounters, row: RowCounters | None) -> RowCounters:
    if row is None:
        return total
    fuzzy, untranslated, waiting, changes_requested = row.resolved()
    return RowCounters(
        fuzzy=(total.fuzzy or 0) + fuzzy,
        untranslated=(total.untranslated or 0) + untranslated,
        waiting=(total.waiting or 0) + waiting,
        changes_requested=(total.changes_requested or 0) + changes_requested,
    )


def aggregate_counters(rows: Iterable[RowCounters | None]) -> RowCounters:
    """Sum per-row counters; absent rows and missing values count as zero."""
    return reduce(_fold, rows, _ZERO)


def summarize_counters(rows: Iterable[RowCounters | None], translation_url: str) -> TranslationStats:
    fuzzy, untranslated, waiting, changes_requested = aggregate_counters(rows).resolved()
    return TranslationStats(
        fuzzy=fuzzy,
        untranslated=untranslated,
        waiting=waiting,
        changes_requested=changes_requested,
        translation_url=translation_url,
    )


def parse_translation_page(tree: html.HtmlElement, translation_url: str) -> TranslationStats:
    """Summarize the four sub-project rows of a parsed translation page."""
    return summarize_counters(collect_sub_project_counters(tree).values(), translation_url)


def parse_translation_html(page_html: str | bytes | None, translation_url: str) -> TranslationStats:
    """Parse raw page HTML into translation statistics. Never raises."""
    return parse_translation_page(load_document(page_html), translation_url)


async def fetch_translation_stats(
    client: httpx.AsyncClient,
    ctx: RequestContext,
    plugin: PluginRecord,
    settings: Settings,
) -> TranslationStats | None:
    """Fetch and parse the translation page of *plugin*; None when unreachable."""

    url = build_translation_url(settings.translate_url_template, settings.language, plugin.slug)
    try:
        page_html = await fetch_text(client, ctx, url)
    except RetryableStatusError as exc:
        logger.warning("Retries exhausted for {}: HTTP {}", url, exc.status_code)
        return None
    except httpx.HTTPError as exc:
        logger.warning("Translation page for {} failed: {}", plugin.slug, exc)
        return None
    return parse_translation_html(page_html, url)


async def add_translation_stats(
    client: httpx.AsyncClient,
    ctx: RequestContext,
    plugins: list[PluginRecord],
    settings: Settings,
) -> list[PluginRecord]:
    """Attach translation statistics to every plugin, preserving order."""

    total = len(plugins)
    sem = asyncio.Semaphore(settings.translation_concurrency)

    async def _augment_one(index: int, plugin: PluginRecord) -> PluginRecord:
        async with sem:
            logger.info("Fetching translations for plugin {}/{}: {}", index, total, plugin.name)
            stats = await fetch_translation_stats(client, ctx, plugin, settings)
            if settings.translation_delay > 0:
                await asyncio.sleep(settings.translation_delay)
        return plugin.with_translations(stats)

    tasks: list[asyncio.Task[PluginRecord]] = []
    async with asyncio.TaskGroup() as tg:
        for index, plugin in enumerate(plugins, start=1):
            tasks.append(tg.create_task(_augment_one(index, plugin)))

    return [task.result() for task in tasks]
