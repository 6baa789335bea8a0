"""
UI Utility Functions
Contains helpers for formatting weather text and parsing table input
"""

import re
from datetime import datetime
from typing import List, Optional, Tuple

from rich.markup import escape

from backend.briefing.taf_parsing import TafEntry, TafEntryKind, format_taf_local_time
from backend.data.weather_parsing import is_wind_group
from common import logger as debug_logger


def debug_log(message: str):
    """Write a debug message to the log file."""
    debug_logger.debug(message)


def format_metar_markup(metar: str, icao: str) -> str:
    """Highlight wind groups and the station code in a METAR."""
    parts = []
    for part in metar.split(" "):
        if is_wind_group(part):
            parts.append(f"[bold yellow]{escape(part)}[/bold yellow]")
        elif part == icao.upper():
            parts.append(f"[bold]{escape(part)}[/bold]")
        else:
            parts.append(escape(part))
    return " ".join(parts)


def format_taf_entry(entry: TafEntry, is_active: bool, now: Optional[datetime] = None) -> str:
    """
    Format one TAF entry as a single line of rich markup.

    Format: KIND  LOCAL TIME  [Active]  raw text  [Gust N]
    """
    badge_color = "grey50" if entry.kind == TafEntryKind.HEADER else "medium_purple"
    pieces = [f"[{badge_color}]{entry.kind.value:<6}[/{badge_color}]"]

    local_time = format_taf_local_time(entry.day, entry.hour, now)
    if local_time:
        pieces.append(f"[bold]{local_time}[/bold]")

    if is_active and entry.kind != TafEntryKind.HEADER:
        pieces.append("[bold blue]● Active[/bold blue]")

    pieces.append(escape(entry.raw))

    if entry.gust is not None:
        pieces.append(f"[bold yellow]G{entry.gust}[/bold yellow]")

    return "  ".join(pieces)


def parse_weights(text: str) -> List[str]:
    """Split '2200, 2400 2600' into ['2200', '2400', '2600']."""
    return [w for w in re.split(r"[,\s]+", text.strip()) if w]


def parse_columns(text: str) -> List[Tuple[str, str]]:
    """
    Parse configuration columns entered as 'Label|Sub label; Label|Sub label'.

    A column without '|' gets the sub label 'Gear Down'.
    """
    columns = []
    for chunk in text.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        if "|" in chunk:
            label, sub_label = chunk.split("|", 1)
        else:
            label, sub_label = chunk, "Gear Down"
        columns.append((label.strip(), sub_label.strip()))
    return columns


def parse_speed_rows(text: str) -> List[List[str]]:
    """Parse speeds entered as '56, 53; 59, 55' (rows by ';', values by ',')."""
    rows = []
    for chunk in text.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        rows.append([v.strip() for v in chunk.split(",") if v.strip()])
    return rows
