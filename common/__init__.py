"""
Common utilities shared across backend and UI modules.

This package contains utilities that need to be imported by both
backend and ui modules without causing circular imports.
"""

from common.logger import debug, info, warning, error, get_log_file_path

__all__ = ["debug", "info", "warning", "error", "get_log_file_path"]
