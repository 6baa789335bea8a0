"""
Shared weather text parsing constants and utilities.

Used by the TAF extractor, the station weather client and the UI.
"""

import re
from typing import Optional

# Wind group with gust: dddffGggKT or VRBffGggKT
GUST_PATTERN = re.compile(r"([0-9]{3}|VRB)([0-9]{2,3})G([0-9]{2,3})KT")

# Any wind group, gust optional
WIND_GROUP_PATTERN = re.compile(r"([0-9]{3}|VRB)([0-9]{2,3})(G[0-9]{2,3})?KT")

_TAG_PATTERN = re.compile(r"<[^>]*>")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def extract_gust(text: str) -> Optional[int]:
    """
    Extract the gust value from a METAR/TAF wind group.

    Args:
        text: Text containing a wind group such as "18015G25KT"

    Returns:
        Gust in knots, or None when no gust is reported (never 0 for "no gust")
    """
    if not text:
        return None

    match = GUST_PATTERN.search(text)
    if match and match.group(3):
        return int(match.group(3), 10)
    return None


def is_wind_group(token: str) -> bool:
    """Check whether a METAR token contains a wind group (used for highlighting)."""
    return bool(WIND_GROUP_PATTERN.search(token or ""))


def strip_markup(html: str) -> str:
    """
    Replace every tag with a space and collapse whitespace runs.

    HTML entities are left as-is.
    """
    text = _TAG_PATTERN.sub(" ", html or "")
    return _WHITESPACE_PATTERN.sub(" ", text)


def extract_metar(html: str, icao: str) -> Optional[str]:
    """
    Find the raw METAR for a station in a scraped weather page.

    The METAR is taken as the station code followed by a DDHHMMZ time and
    everything up to the next tag.

    Args:
        html: Raw page HTML
        icao: Station identifier

    Returns:
        METAR text, or None if the page has none for this station
    """
    if not html or not icao:
        return None

    pattern = re.compile(rf"({re.escape(icao)}\s+\d{{6}}Z\s+[^<]+)", re.IGNORECASE)
    match = pattern.search(html)
    if not match:
        return None
    return match.group(1).strip()
