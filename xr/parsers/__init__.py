"""Parsers for catalog duration strings and extra titles."""

from xr.parsers.duration import parse_duration, try_parse_duration
from xr.parsers.sanitize import (
    clean_extra_title,
    format_title_for_search,
    sanitize_filename,
)

__all__ = [
    "clean_extra_title",
    "format_title_for_search",
    "parse_duration",
    "sanitize_filename",
    "try_parse_duration",
]
