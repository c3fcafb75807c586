"""Plugin catalogue discovery through the WordPress.org plugins API."""

from __future__ import annotations

import asyncio
import html
import math
from typing import TYPE_CHECKING, Any

import httpx
from loguru import logger

from transtats.clients.http import RequestContext, RetryableStatusError, fetch_json
from transtats.models.plugin import PluginRecord
from transtats.utils.parsing import format_relative_date

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from transtats.settings import Settings

API_URL = "https://api.wordpress.org/plugins/info/1.2/"


class CatalogueFetchError(RuntimeError):
    """Raised when a page of the plugin catalogue cannot be retrieved."""


def build_query_url(author: str, page: int, per_page: int) -> str:
    """Build the query_plugins URL for one catalogue page."""
    params = {
        "action": "query_plugins",
        "request[author]": author,
        "request[per_page]": per_page,
        "request[page]": page,
    }
    return str(httpx.URL(API_URL, params=params))


def _non_negative_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        number = int(value)
    except (TypeError, ValueError):
        return 0
    return max(number, 0)


def parse_plugin_entry(raw: dict[str, Any], *, now: datetime | None = None) -> PluginRecord | None:
    """Turn one API plugin object into a record; None when it has no slug."""
    slug = str(raw.get("slug") or "").strip()
    if not slug:
        return None
    return PluginRecord(
        name=html.unescape(str(raw.get("name") or "")),
        slug=slug,
        active_installs=_non_negative_int(raw.get("active_installs")),
        last_updated=format_relative_date(str(raw.get("last_updated") or ""), now=now),
    )


def _total_pages(payload: dict[str, Any], per_page: int) -> int:
    info = payload.get("info")
    results = info.get("results", 0) if isinstance(info, dict) else 0
    return math.ceil(_non_negative_int(results) / per_page)


async def _fetch_page(client: httpx.AsyncClient, ctx: RequestContext, url: str) -> dict[str, Any]:
    try:
        return await fetch_json(client, ctx, url)
    except RetryableStatusError as exc:
        raise CatalogueFetchError(f"Failed to fetch plugins from WordPress.org API (HTTP {exc.status_code}).") from exc
    except (httpx.HTTPError, ValueError, TypeError) as exc:
        raise CatalogueFetchError(f"Failed to fetch plugins from WordPress.org API: {exc}") from exc


async def fetch_author_plugins(
    client: httpx.AsyncClient,
    ctx: RequestContext,
    settings: Settings,
) -> list[PluginRecord]:
    """Fetch every catalogue page for ``settings.author``."""

    plugins: list[PluginRecord] = []
    page = 1
    total_pages = 1

    while page <= total_pages:
        url = build_query_url(settings.author, page, settings.per_page)
        payload = await _fetch_page(client, ctx, url)

        raw_items = payload.get("plugins")
        if not isinstance(raw_items, list):
            logger.warning("Catalogue page {} for '{}' has no plugin list", page, settings.author)
            break

        for raw in raw_items:
            if not isinstance(raw, dict):
                continue
            record = parse_plugin_entry(raw)
            if record is not None:
                plugins.append(record)

        total_pages = _total_pages(payload, settings.per_page)
        logger.debug("Catalogue page {}/{}: {} plugins", page, total_pages, len(raw_items))
        page += 1

        if page <= total_pages and settings.api_page_delay > 0:
            await asyncio.sleep(settings.api_page_delay)

    logger.info("Catalogue for '{}': {} plugins", settings.author, len(plugins))
    return plugins


def sort_and_limit(plugins: Iterable[PluginRecord], limit: int | None = None) -> list[PluginRecord]:
    """Sort by active installs, most installed first, then apply *limit*."""
    ordered = sorted(plugins, key=lambda plugin: plugin.active_installs, reverse=True)
    if limit is not None and limit > 0:
        return ordered[:limit]
    return ordered
