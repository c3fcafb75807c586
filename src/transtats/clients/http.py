"""Shared HTTP client for the WordPress.org catalogue and translate pages.

Every request goes through one rate limiter and is retried with exponential
backoff on transport failures and retryable statuses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx
from aiolimiter import AsyncLimiter  # noqa: TC002
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from transtats import __version__

if TYPE_CHECKING:
    from transtats.settings import Settings

RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})


class RetryableStatusError(Exception):
    """WordPress.org answered with a transient status (throttling or a 5xx)."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Retryable HTTP {status_code}")


@dataclass(frozen=True)
class RequestContext:
    """Rate limiter shared by the catalogue and translation requests of one run."""

    limiter: AsyncLimiter


def build_request_context(settings: Settings) -> RequestContext:
    return RequestContext(limiter=AsyncLimiter(settings.rate_limit_per_second, 1))


def _log_retry(retry_state: RetryCallState) -> None:
    if retry_state.next_action is None:
        return
    url = retry_state.args[2] if len(retry_state.args) > 2 else "?"
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Request to {} failed ({}), attempt {}; retrying in {:.1f}s",
        url,
        error,
        retry_state.attempt_number,
        retry_state.next_action.sleep,
    )


async def create_http_client(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    """Create the client used for both the plugins API and translate.wordpress.org."""

    return httpx.AsyncClient(
        transport=transport,
        http2=True,
        timeout=httpx.Timeout(
            connect=5.0,
            read=settings.request_timeout,
            write=10.0,
            pool=10.0,
        ),
        limits=httpx.Limits(
            max_connections=max(10, settings.translation_concurrency),
            max_keepalive_connections=5,
            keepalive_expiry=30.0,
        ),
        headers={
            "User-Agent": f"transtats/{__version__} (compatible; PluginsTranslationScraper)",
            "Accept": "application/json,text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
        },
        follow_redirects=True,
    )


@retry(
    retry=retry_if_exception_type((httpx.TransportError, httpx.TimeoutException, RetryableStatusError)),
    wait=wait_exponential(multiplier=1, min=1, max=30) + wait_random(0, 2),
    stop=stop_after_attempt(5),
    before_sleep=_log_retry,
    reraise=True,
)
async def fetch_with_retry(client: httpx.AsyncClient, ctx: RequestContext, url: str) -> httpx.Response:
    """GET *url* under the rate limiter.

    Raises RetryableStatusError once the last attempt still gets a transient
    status; other non-2xx responses are returned as is.
    """

    async with ctx.limiter:
        response = await client.get(url)
    if response.status_code in RETRYABLE_STATUS_CODES:
        await response.aclose()
        raise RetryableStatusError(response.status_code)
    return response


async def fetch_json(client: httpx.AsyncClient, ctx: RequestContext, url: str) -> dict[str, Any]:
    """Fetch a JSON object; non-2xx raises httpx.HTTPStatusError."""

    response = await fetch_with_retry(client, ctx, url)
    response.raise_for_status()
    payload = response.json()
    if not isinstance(payload, dict):
        raise TypeError(f"Expected object JSON payload from {url}")
    return payload


async def fetch_text(client: httpx.AsyncClient, ctx: RequestContext, url: str) -> str:
    """Fetch a page body; non-2xx raises httpx.HTTPStatusError."""

    response = await fetch_with_retry(client, ctx, url)
    response.raise_for_status()
    return response.text
