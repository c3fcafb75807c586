"""Tests for table, JSON and CSV rendering."""

from __future__ import annotations

import csv
import io
import json

import pytest
from rich.console import Console

from tests.factories import make_plugin, make_stats
from transtats.models.plugin import RowCounters, SubProject
from transtats.output import (
    CSV_HEADER,
    build_breakdown_table,
    build_console_table,
    format_installs,
    render_csv,
    render_json,
    truncate_name,
)


def _render(table) -> str:
    console = Console(width=250, record=True, color_system=None)
    console.print(table)
    return console.export_text()


@pytest.mark.parametrize(
    ("installs", "expected"),
    [
        (0, "0"),
        (999, "999"),
        (1_000, "1K"),
        (300_000, "300K"),
        (999_400, "999K"),
        (1_500_000, "1.5M"),
        (5_000_000, "5.0M"),
        (12_345_678, "12.3M"),
    ],
)
def test_format_installs(installs: int, expected: str) -> None:
    assert format_installs(installs) == expected


def test_truncate_name() -> None:
    assert truncate_name("Short") == "Short"
    long_name = "A" * 60
    truncated = truncate_name(long_name)
    assert len(truncated) == 45
    assert truncated.endswith("...")


def test_render_json() -> None:
    plugins = [make_plugin("jetpack", name="Jetpack – Seguridad", translations=make_stats()), make_plugin("bare")]
    payload = json.loads(render_json(plugins))
    assert list(payload[0]) == ["name", "last_updated", "url", "slug", "active_installs", "translations"]
    assert payload[0]["name"] == "Jetpack – Seguridad"
    assert payload[0]["translations"]["total_not_translated"] == 177
    assert "translations" not in payload[1]
    assert "Seguridad" in render_json(plugins)
    assert render_json([]) == "[]"


def test_render_csv() -> None:
    plugins = [make_plugin("jetpack", name="Jetpack, Security", translations=make_stats()), make_plugin("bare")]
    rows = list(csv.reader(io.StringIO(render_csv(plugins))))
    assert rows[0] == CSV_HEADER
    assert rows[1][0] == "Jetpack, Security"
    assert rows[1][5:] == [
        "2",
        "170",
        "5",
        "0",
        "177",
        "https://translate.wordpress.org/locale/es/default/wp-plugins/test-plugin/",
    ]
    assert rows[2][5:] == [""] * 6
    assert len(rows) == 3


def test_console_table_totals() -> None:
    plugins = [
        make_plugin("one", name="One", active_installs=1_000_000, translations=make_stats()),
        make_plugin("two", name="Two", active_installs=500_000, translations=make_stats(fuzzy=3, untranslated=0)),
        make_plugin("three", name="Three", active_installs=20),
    ]
    text = _render(build_console_table(plugins))
    total_line = next(line for line in text.splitlines() if "TOTAL" in line)
    assert "1.5M" in total_line
    for value in ("5", "170", "10", "185"):
        assert value in total_line.split()
    three_line = next(line for line in text.splitlines() if "Three" in line)
    assert three_line.count("N/A") == 6


def test_breakdown_table() -> None:
    rows = {
        SubProject.STABLE: RowCounters(fuzzy=2, untranslated=170, waiting=5, changes_requested=0),
        SubProject.STABLE_README: RowCounters(fuzzy=None, untranslated=1, waiting=0, changes_requested=0),
        SubProject.DEVELOPMENT: None,
        SubProject.DEVELOPMENT_README: None,
    }
    text = _render(build_breakdown_table(rows, "https://translate.example/jetpack/"))
    assert "https://translate.example/jetpack/" in text
    assert text.count("not found") == 2
    readme_line = next(line for line in text.splitlines() if "Stable Readme" in line)
    assert "N/A" in readme_line
