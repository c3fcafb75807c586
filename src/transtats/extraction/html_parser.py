"""HTML parsing helpers for translation status pages."""

from __future__ import annotations

from loguru import logger
from lxml import etree, html

from transtats.models.plugin import RowCounters, SubProject
from transtats.utils.parsing import parse_leading_int

MIN_STATS_CELLS = 4

# Counter field name -> class marker of the cell holding it.
COUNTER_CELL_CLASSES = {
    "fuzzy": "fuzzy",
    "untranslated": "untranslated",
    "waiting": "waiting",
    "changes_requested": "changesrequested",
}

_ROW_XPATH = "//tr[contains(., $caption)]"
_ROW_EXCLUDING_XPATH = "//tr[contains(., $caption) and not(contains(., $excluded))]"
_STATS_CELLS_XPATH = ".//td[contains(@class, 'stats')]"
_COUNTER_CELL_XPATH = ".//td[contains(@class, $marker)]"


def _empty_document() -> html.HtmlElement:
    return html.document_fromstring("<html><body></body></html>")


def load_document(page_html: str | bytes | None) -> html.HtmlElement:
    """Parse *page_html* into a queryable tree, falling back to an empty document.

    Malformed markup is repaired by the recovering parser. Input that cannot be
    parsed at all yields an empty tree so that every later query finds nothing.
    """

    if not page_html or not page_html.strip():
        return _empty_document()
    try:
        if isinstance(page_html, str):
            parser = html.HTMLParser(encoding="utf-8", recover=True)
            data = page_html.encode("utf-8", errors="replace")
        else:
            parser = html.HTMLParser(recover=True)
            data = page_html
        return html.document_fromstring(data, parser=parser)
    except (etree.LxmlError, ValueError) as exc:
        logger.debug("Discarding unparseable translation page: {}", exc)
        return _empty_document()


def find_candidate_rows(tree: html.HtmlElement, sub_project: SubProject) -> list[html.HtmlElement]:
    """Return table rows whose text mentions the sub-project caption."""
    if sub_project.excluded is None:
        return tree.xpath(_ROW_XPATH, caption=sub_project.caption)
    return tree.xpath(_ROW_EXCLUDING_XPATH, caption=sub_project.caption, excluded=sub_project.excluded)


def locate_row(tree: html.HtmlElement, sub_project: SubProject) -> html.HtmlElement | None:
    """Find the statistics row for *sub_project*, or None when the page has none.

    Headers and captions can mention the same text, so only rows carrying a
    full set of stats cells qualify.
    """
    for row in find_candidate_rows(tree, sub_project):
        if len(row.xpath(_STATS_CELLS_XPATH)) >= MIN_STATS_CELLS:
            return row
    return None


def read_counter(row: html.HtmlElement, marker: str) -> int | None:
    """Read the linked number inside the first cell classed with *marker*."""
    cells = row.xpath(_COUNTER_CELL_XPATH, marker=marker)
    if not cells:
        return None
    links = cells[0].xpath(".//a")
    if not links:
        return None
    return parse_leading_int(links[0].text_content())


def extract_row_counters(row: html.HtmlElement) -> RowCounters:
    """Extract the four counters of a located row."""
    values = {field: read_counter(row, marker) for field, marker in COUNTER_CELL_CLASSES.items()}
    return RowCounters(**values)
