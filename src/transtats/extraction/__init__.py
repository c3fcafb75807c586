"""Translation page extraction."""

from .html_parser import extract_row_counters, load_document, locate_row
from .translation_page import parse_translation_html, parse_translation_page

__all__ = [
    "extract_row_counters",
    "load_document",
    "locate_row",
    "parse_translation_html",
    "parse_translation_page",
]
