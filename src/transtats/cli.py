"""Transtats CLI."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import httpx
import typer
from loguru import logger
from rich.console import Console

from transtats.clients.http import RetryableStatusError, build_request_context, create_http_client, fetch_text
from transtats.discovery.plugins_api import CatalogueFetchError
from transtats.extraction.html_parser import load_document
from transtats.extraction.translation_page import (
    build_translation_url,
    collect_sub_project_counters,
    summarize_counters,
)
from transtats.output import build_breakdown_table, build_console_table, render_csv, render_json
from transtats.pipeline.orchestrator import run_scrape
from transtats.settings import Settings

app = typer.Typer(help="Transtats: WordPress.org plugin translation statistics")
console = Console()
err_console = Console(stderr=True)

OUTPUT_FORMATS = ("console", "json", "csv")


def configure_logging(level: str) -> None:
    """Route loguru records to stderr so stdout stays clean for JSON/CSV."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def _settings_from_args(
    author: str | None = None,
    language: str | None = None,
    verbose: bool = False,
) -> Settings:
    settings = Settings()
    if author is not None:
        settings.author = author
    if language is not None:
        settings.language = language
    if verbose:
        settings.log_level = "DEBUG"
    return settings


@app.command("scrape")
def scrape(
    author: str | None = typer.Option(None, "--author", help="Developer/author slug (default: automattic)"),
    lang: str | None = typer.Option(None, "--lang", help="Locale slug for translations (default: es)"),
    output_format: str = typer.Option("console", "--format", help="Output format: console, json, csv"),
    output: Path | None = typer.Option(None, "--output", help="Save output to file (json/csv formats)"),
    limit: int | None = typer.Option(
        None, "--limit", min=0, help="Process only the first N plugins by active installs (0 = all)"
    ),
    no_translations: bool = typer.Option(False, "--no-translations", help="Skip translation stats (faster)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Also log per-page debug detail to stderr"),
) -> None:
    """Scrape an author's plugins and their translation statistics."""

    selected = output_format.strip().lower()
    if selected not in OUTPUT_FORMATS:
        raise typer.BadParameter(f"format must be one of: {', '.join(OUTPUT_FORMATS)}")

    settings = _settings_from_args(author=author, language=lang, verbose=verbose)
    configure_logging(settings.log_level)
    include_translations = not no_translations
    limit = limit or None

    err_console.print(f"Scraping plugins for author: {settings.author}...")
    err_console.print(f"Language: {settings.language}")
    if limit is not None:
        err_console.print(f"Limiting to first {limit} plugins...")
    if include_translations:
        err_console.print("Including translation stats (this may take a while)...")

    try:
        plugins = asyncio.run(run_scrape(settings, include_translations=include_translations, limit=limit))
    except CatalogueFetchError as exc:
        err_console.print(f"Error: {exc}")
        raise typer.Exit(code=1) from exc

    if selected == "console":
        console.print(build_console_table(plugins))
        console.print(f"Total plugins: {len(plugins)}")
        return

    result = render_json(plugins) if selected == "json" else render_csv(plugins)
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result, encoding="utf-8")
        err_console.print(f"Output saved to: {output}")
    else:
        typer.echo(result, nl=selected == "json")


async def _fetch_translation_page(settings: Settings, url: str) -> str:
    ctx = build_request_context(settings)
    async with await create_http_client(settings) as client:
        return await fetch_text(client, ctx, url)


@app.command("inspect")
def inspect(
    slug: str = typer.Argument(..., help="Plugin slug"),
    lang: str | None = typer.Option(None, "--lang", help="Locale slug for translations (default: es)"),
    file: Path | None = typer.Option(
        None, "--file", exists=True, dir_okay=False, help="Parse a saved translation page instead of fetching it"
    ),
) -> None:
    """Show per-sub-project translation counters for one plugin."""

    settings = _settings_from_args(language=lang)
    configure_logging(settings.log_level)
    url = build_translation_url(settings.translate_url_template, settings.language, slug)

    if file is not None:
        page_html: str | bytes = file.read_bytes()
    else:
        try:
            page_html = asyncio.run(_fetch_translation_page(settings, url))
        except (httpx.HTTPError, RetryableStatusError) as exc:
            err_console.print(f"Error: could not fetch {url}: {exc}")
            raise typer.Exit(code=1) from exc

    rows = collect_sub_project_counters(load_document(page_html))
    stats = summarize_counters(rows.values(), url)
    console.print(build_breakdown_table(rows, url))
    console.print(f"total_not_translated={stats.total_not_translated}")


if __name__ == "__main__":
    app()
