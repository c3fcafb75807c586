"""Rendering of plugin records as console tables, JSON and CSV."""

from __future__ import annotations

import csv
import io
import json
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from transtats.models.plugin import PluginRecord, RowCounters, SubProject

NAME_WIDTH = 45
NOT_AVAILABLE = "N/A"

CSV_HEADER = [
    "Plugin Name",
    "Last Updated",
    "Plugin URL",
    "Slug",
    "Active Installs",
    "Fuzzy",
    "Untranslated",
    "Waiting",
    "Changes Requested",
    "Total Not Translated",
    "Translation URL",
]


def format_installs(installs: int) -> str:
    """Format an install count compactly (e.g. 1.5M, 300K)."""

    if installs >= 1_000_000:
        value = (Decimal(installs) / 1_000_000).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        return f"{value:,}M"
    if installs >= 1_000:
        value = (Decimal(installs) / 1_000).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return f"{value:,}K"
    return str(installs)


def truncate_name(name: str, max_length: int = NAME_WIDTH) -> str:
    if len(name) <= max_length:
        return name
    return name[: max_length - 3] + "..."


def render_json(plugins: Sequence[PluginRecord]) -> str:
    return json.dumps([plugin.to_output_dict() for plugin in plugins], indent=4, ensure_ascii=False)


def render_csv(plugins: Sequence[PluginRecord]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for plugin in plugins:
        row: list[object] = [
            plugin.name,
            plugin.last_updated,
            plugin.url,
            plugin.slug,
            plugin.active_installs,
        ]
        stats = plugin.translations
        if stats is not None:
            row.extend(
                [
                    stats.fuzzy,
                    stats.untranslated,
                    stats.waiting,
                    stats.changes_requested,
                    stats.total_not_translated,
                    stats.translation_url,
                ]
            )
        else:
            row.extend([""] * 6)
        writer.writerow(row)
    return buffer.getvalue()


def build_console_table(plugins: Sequence[PluginRecord]) -> Table:
    """Build the console table with a TOTAL row for installs and translation stats."""

    table = Table()
    table.add_column("Plugin Name", max_width=NAME_WIDTH + 3, no_wrap=True)
    table.add_column("Last Updated")
    table.add_column("Installs", justify="right")
    table.add_column("Fuzzy", justify="right")
    table.add_column("Untrans", justify="right")
    table.add_column("Wait", justify="right")
    table.add_column("ChgReq", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Translation URL", no_wrap=True)

    total_installs = 0
    totals = [0, 0, 0, 0, 0]
    for plugin in plugins:
        total_installs += plugin.active_installs
        stats = plugin.translations
        if stats is not None:
            values = [
                stats.fuzzy,
                stats.untranslated,
                stats.waiting,
                stats.changes_requested,
                stats.total_not_translated,
            ]
            totals = [acc + value for acc, value in zip(totals, values, strict=True)]
            stat_cells = [str(value) for value in values] + [stats.translation_url]
        else:
            stat_cells = [NOT_AVAILABLE] * 6
        table.add_row(
            truncate_name(plugin.name),
            plugin.last_updated,
            format_installs(plugin.active_installs),
            *stat_cells,
        )

    table.add_section()
    table.add_row("TOTAL", "", format_installs(total_installs), *(str(value) for value in totals), "")
    return table


def build_breakdown_table(rows: Mapping[SubProject, RowCounters | None], translation_url: str) -> Table:
    """Per-sub-project counters for a single translation page."""

    table = Table(title=translation_url)
    table.add_column("Sub-project")
    table.add_column("Fuzzy", justify="right")
    table.add_column("Untrans", justify="right")
    table.add_column("Wait", justify="right")
    table.add_column("ChgReq", justify="right")
    for sub_project, counters in rows.items():
        if counters is None:
            table.add_row(sub_project.caption, "not found", "", "", "")
            continue
        table.add_row(
            sub_project.caption,
            *(NOT_AVAILABLE if value is None else str(value) for value in _counter_values(counters)),
        )
    return table


def _counter_values(counters: RowCounters) -> tuple[int | None, ...]:
    return (counters.fuzzy, counters.untranslated, counters.waiting, counters.changes_requested)
