"""
Centralized logging module for the Approach Speed Calculator.

Writes one debug log per day to the user logs directory. Safe to import from
both backend and ui modules; it only depends on common.paths.
"""

import logging
from datetime import datetime, timedelta
from pathlib import Path

from common.paths import get_user_logs_dir

LOGS_DIR: Path = get_user_logs_dir()
LOGS_DIR.mkdir(parents=True, exist_ok=True)

# Logs older than this are removed at startup
LOG_RETENTION_DAYS = 10


def cleanup_old_logs(days_to_keep: int = LOG_RETENTION_DAYS) -> int:
    """Delete daily logs last modified more than ``days_to_keep`` days ago.

    Returns:
        Number of files removed
    """
    cutoff = (datetime.now() - timedelta(days=days_to_keep)).timestamp()
    removed = 0
    for log_file in LOGS_DIR.glob('debug_*.log'):
        try:
            if log_file.stat().st_mtime < cutoff:
                log_file.unlink()
                removed += 1
        except OSError:
            continue  # in use or already gone
    return removed


cleanup_old_logs()

LOG_FILE: Path = LOGS_DIR / f'debug_{datetime.now():%Y%m%d}.log'

_logger = logging.getLogger('approach_debug')
_logger.setLevel(logging.DEBUG)
_logger.propagate = False

if not _logger.handlers:
    _handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
    _handler.setFormatter(logging.Formatter(
        '%(asctime)s.%(msecs)03d | %(levelname)-8s | %(message)s',
        datefmt='%H:%M:%S'
    ))
    _logger.addHandler(_handler)


def debug(message: str) -> None:
    _logger.debug(message)


def info(message: str) -> None:
    _logger.info(message)


def warning(message: str) -> None:
    _logger.warning(message)


def error(message: str) -> None:
    _logger.error(message)


def get_log_file_path() -> str:
    """Path of today's log file."""
    return str(LOG_FILE)
