"""Where the Approach Speed Calculator keeps its writable files.

Profiles and logs live in a per-user data directory, never next to the code:

On Windows: %LOCALAPPDATA%/ApproachSpeedCalc/
On macOS:   ~/Library/Application Support/ApproachSpeedCalc/
On Linux:   $XDG_DATA_HOME/ApproachSpeedCalc/ (default ~/.local/share)
"""

import os
import sys
from pathlib import Path

APP_NAME = "ApproachSpeedCalc"

STORE_FILENAME = "storage.json"


def get_user_data_dir() -> Path:
    """Per-user directory for the profile store and logs."""
    if sys.platform == "win32":
        base = os.environ.get("LOCALAPPDATA") or os.path.expanduser("~\\AppData\\Local")
        return Path(base) / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME

    xdg_data = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg_data) if xdg_data else Path.home() / ".local" / "share"
    return base / APP_NAME


def get_user_logs_dir() -> Path:
    return get_user_data_dir() / "logs"


def get_store_file() -> Path:
    """Default location of the key-value store holding saved profiles."""
    return get_user_data_dir() / STORE_FILENAME


def ensure_user_directories() -> None:
    """Create the data and logs directories. Call once at startup."""
    for directory in (get_user_data_dir(), get_user_logs_dir()):
        directory.mkdir(parents=True, exist_ok=True)
