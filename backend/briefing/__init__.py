"""
Weather briefing utilities.

This package provides the TAF extraction and active-period logic shared by
the Textual UI and the headless calculator output.
"""

from .taf_parsing import (
    TafEntry,
    TafEntryKind,
    parse_taf,
    resolve_taf_time,
    find_active_entry,
    format_taf_local_time,
    format_zulu_time,
)

# Re-export extract_gust from weather_parsing for convenience
from backend.data.weather_parsing import extract_gust

__all__ = [
    "TafEntry",
    "TafEntryKind",
    "parse_taf",
    "resolve_taf_time",
    "find_active_entry",
    "format_taf_local_time",
    "format_zulu_time",
    "extract_gust",
]
