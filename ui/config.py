"""
UI Configuration and Constants
Contains column definitions and display colors
"""

from dataclasses import dataclass
from typing import Literal, Optional

# Status colors for weather lookup results
STATUS_COLORS = {
    "success": "green",
    "warning": "yellow",
    "error": "red",
}

# Clock refresh interval for the Zulu time display (seconds)
CLOCK_INTERVAL = 60

@dataclass
class ColumnConfig:
    """Configuration for a single table column"""
    name: str
    content_align: Literal["left", "center", "right"] = "left"
    width: Optional[int] = None


SPEED_COLUMNS = [
    ColumnConfig("CONFIG"),
    ColumnConfig("", width=22),
    ColumnConfig("STALL", content_align="right"),
    ColumnConfig("APPROACH", content_align="right"),
    ColumnConfig("ADDS", content_align="right"),
]
