"""
Data access layer: weather page fetching, text parsing and the profile store.
"""

from .weather_parsing import extract_gust, extract_metar

__all__ = ['extract_gust', 'extract_metar']
