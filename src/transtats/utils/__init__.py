"""Utility helpers."""

from .parsing import format_relative_date, parse_api_date, parse_leading_int

__all__ = ["format_relative_date", "parse_api_date", "parse_leading_int"]
