"""
TAF parsing utilities for the weather panel.

This module locates a TAF inside a scraped weather page, splits it into
change groups and works out which group is in effect right now. Parsing is
best-effort: unexpected page shapes give partial or empty results, never
exceptions.
"""

import calendar
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from backend.config.constants import TAF_ROLLOVER_DAYS
from backend.data.weather_parsing import extract_gust, strip_markup
from common import logger as debug_logger


class TafEntryKind(str, Enum):
    HEADER = "HEADER"
    BASE = "BASE"
    FM = "FM"
    TEMPO = "TEMPO"
    BECMG = "BECMG"


@dataclass(frozen=True)
class TafEntry:
    """One forecast line: the header/base period or a change group."""
    raw: str
    kind: TafEntryKind
    day: Optional[int] = None
    hour: Optional[int] = None
    gust: Optional[int] = None


# First change group, used when the page has no "TAF <ICAO>" marker
_FIRST_GROUP_PATTERN = re.compile(r"(FM[0-9]{6}|BECMG [0-9]{4}/[0-9]{4})")

# Change groups that start a new forecast line
_GROUP_PATTERNS = (
    re.compile(r"(FM[0-9]{6})"),
    re.compile(r"(BECMG [0-9]{4}/[0-9]{4})"),
    re.compile(r"(TEMPO [0-9]{4}/[0-9]{4})"),
    re.compile(r"(PROB[0-9]{2} [0-9]{4}/[0-9]{4})"),
)

# Page text that follows the TAF
STOP_MARKERS = ("METAR", "OBSERVATION", "Copyright", "Key to Decoding")

# Skip the start marker itself when looking for a stop marker
_STOP_SEARCH_OFFSET = 10

# Lines this short are page noise
_MIN_LINE_LENGTH = 5

# Position of the DDHH time code after each group prefix
_TIME_OFFSETS = (
    ("FM", TafEntryKind.FM, 2),
    ("TEMPO", TafEntryKind.TEMPO, 6),
    ("BECMG", TafEntryKind.BECMG, 6),
)


def _parse_two_digits(text: str) -> Optional[int]:
    """Parse a fixed-width two character field, None if it isn't a number."""
    if len(text) != 2 or not text.isdigit():
        return None
    return int(text)


def _find_taf_start(clean_text: str, code: str) -> int:
    start = clean_text.find(f"TAF: {code}")
    if start == -1:
        start = clean_text.find(f"TAF {code}")

    if start == -1:
        first_group = _FIRST_GROUP_PATTERN.search(clean_text)
        if first_group:
            start = first_group.start()

    return start


def _truncate_block(taf_block: str) -> str:
    end_index = len(taf_block)
    for marker in STOP_MARKERS:
        idx = taf_block.find(marker, _STOP_SEARCH_OFFSET)
        if -1 < idx < end_index:
            end_index = idx
    return taf_block[:end_index]


def _classify_line(line: str, index: int) -> TafEntry:
    kind = TafEntryKind.BASE
    day = None
    hour = None

    for prefix, group_kind, offset in _TIME_OFFSETS:
        if line.startswith(prefix):
            kind = group_kind
            day = _parse_two_digits(line[offset:offset + 2])
            hour = _parse_two_digits(line[offset + 2:offset + 4])
            break
    else:
        if line.startswith("TAF") or index == 0:
            kind = TafEntryKind.HEADER

    return TafEntry(raw=line, kind=kind, day=day, hour=hour, gust=extract_gust(line))


def parse_taf(raw_html: str, code: str) -> List[TafEntry]:
    """
    Split the TAF on a scraped weather page into typed forecast entries.

    Args:
        raw_html: Page HTML (or plain text)
        code: Station ICAO code

    Returns:
        Entries in order of appearance, empty if the page has no TAF
    """
    clean_text = strip_markup(raw_html)

    taf_start = _find_taf_start(clean_text, code)
    if taf_start == -1:
        debug_logger.debug(f"No TAF found for {code}")
        return []

    taf_block = _truncate_block(clean_text[taf_start:])

    for pattern in _GROUP_PATTERNS:
        taf_block = pattern.sub(r"\n\1", taf_block)

    lines = [line.strip() for line in taf_block.split("\n")]
    lines = [line for line in lines if len(line) > _MIN_LINE_LENGTH]

    return [_classify_line(line, index) for index, line in enumerate(lines)]


def _shift_month(year: int, month: int, delta: int) -> tuple:
    month += delta
    if month > 12:
        return year + 1, 1
    if month < 1:
        return year - 1, 12
    return year, month


def resolve_taf_time(day: Optional[int], hour: Optional[int], now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Turn a TAF day-of-month/hour into a UTC datetime.

    The year and month are taken from ``now``. This is a heuristic for
    forecasts that straddle a month boundary: a day more than 15 days before
    today is assumed to be next month, more than 15 days after today is
    assumed to be last month. Days past the end of the chosen month overflow
    into the following month, and hour 24 is midnight of the next day.

    Args:
        day: Day of month from the TAF
        hour: Hour (UTC) from the TAF
        now: Reference time (defaults to the current UTC time)

    Returns:
        Aware UTC datetime, or None when day/hour is missing or invalid
    """
    if day is None or hour is None:
        return None
    if now is None:
        now = datetime.now(timezone.utc)
    if day < 1 or hour < 0 or hour > 24:
        return None

    year, month = now.year, now.month
    if day < now.day and (now.day - day) > TAF_ROLLOVER_DAYS:
        year, month = _shift_month(year, month, 1)
    elif day > now.day and (day - now.day) > TAF_ROLLOVER_DAYS:
        year, month = _shift_month(year, month, -1)

    if hour == 24:
        day += 1
        hour = 0

    _, days_in_month = calendar.monthrange(year, month)
    while day > days_in_month:
        day -= days_in_month
        year, month = _shift_month(year, month, 1)
        _, days_in_month = calendar.monthrange(year, month)

    return datetime(year, month, day, hour, tzinfo=timezone.utc)


_FAR_PAST = datetime(1970, 1, 1, tzinfo=timezone.utc)

_ACTIVE_CANDIDATES = (TafEntryKind.FM, TafEntryKind.BASE, TafEntryKind.HEADER)


def find_active_entry(entries: List[TafEntry], now: Optional[datetime] = None) -> Optional[int]:
    """
    Find the forecast entry in effect at ``now``.

    Only FM, BASE and the leading HEADER are candidates; TEMPO/BECMG groups
    are ranges and are never marked active. Entries without a time count as
    having started in the far past; entries with an impossible time are
    skipped.

    Args:
        entries: Parsed TAF entries
        now: Reference time (defaults to the current UTC time)

    Returns:
        Index of the latest-starting entry that has begun, or None
    """
    if now is None:
        now = datetime.now(timezone.utc)

    active_index = None
    for idx, entry in enumerate(entries):
        if entry.kind == TafEntryKind.HEADER and idx != 0:
            continue
        if entry.kind not in _ACTIVE_CANDIDATES:
            continue

        if entry.day is None or entry.hour is None:
            entry_time = _FAR_PAST
        else:
            # Out of range times (e.g. FM129900) never become active
            entry_time = resolve_taf_time(entry.day, entry.hour, now)
            if entry_time is None:
                continue

        if entry_time <= now:
            active_index = idx

    return active_index


def format_taf_local_time(day: Optional[int], hour: Optional[int], now: Optional[datetime] = None) -> Optional[str]:
    """
    Format a TAF day/hour as a short local-time label, e.g. "Tue 1:00 PM".

    Returns:
        Label string, or None when the entry has no time
    """
    taf_time = resolve_taf_time(day, hour, now)
    if taf_time is None:
        return None

    local_time = taf_time.astimezone()
    hour_12 = local_time.hour % 12 or 12
    am_pm = "AM" if local_time.hour < 12 else "PM"
    return f"{local_time.strftime('%a')} {hour_12}:{local_time.minute:02d} {am_pm}"


def format_zulu_time(now: Optional[datetime] = None) -> str:
    """Current time as 'HHMMZ (Day D)'."""
    if now is None:
        now = datetime.now(timezone.utc)
    return f"{now.hour:02d}{now.minute:02d}Z (Day {now.day})"
