"""Top-level scrape pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger
from prefect import flow

from transtats.clients.http import build_request_context, create_http_client
from transtats.discovery.plugins_api import fetch_author_plugins, sort_and_limit
from transtats.extraction.translation_page import add_translation_stats

if TYPE_CHECKING:
    import httpx

    from transtats.clients.http import RequestContext
    from transtats.models.plugin import PluginRecord
    from transtats.settings import Settings


@flow(name="transtats-scrape")
async def scrape_flow(
    settings: Settings,
    client: httpx.AsyncClient,
    ctx: RequestContext,
    *,
    include_translations: bool = True,
    limit: int | None = None,
) -> list[PluginRecord]:
    """Fetch the author's catalogue and optionally attach translation statistics."""

    plugins = await fetch_author_plugins(client, ctx, settings)
    plugins = sort_and_limit(plugins, limit)
    if limit:
        logger.info("Limited to the first {} plugins by active installs", len(plugins))

    if include_translations:
        plugins = await add_translation_stats(client, ctx, plugins, settings)

    return plugins


async def run_scrape(
    settings: Settings,
    *,
    include_translations: bool = True,
    limit: int | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[PluginRecord]:
    """Open a client and run the scrape flow body outside a Prefect run context."""

    ctx = build_request_context(settings)
    async with await create_http_client(settings, transport=transport) as client:
        return await scrape_flow.fn(
            settings,
            client,
            ctx,
            include_translations=include_translations,
            limit=limit,
        )
