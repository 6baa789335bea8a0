"""
Weather data fetching for the approach speed calculator (METAR, TAF and gusts).

Station pages are fetched through a public CORS proxy that wraps the page
HTML in a JSON envelope. There is one request per lookup: no retries and no
caching, a newer lookup simply replaces the previous result.
"""

import json
from dataclasses import dataclass, field
from typing import List, Optional

import requests

from backend.briefing.taf_parsing import TafEntry, parse_taf
from backend.config.constants import PROXY_TIMEOUT, WEATHER_PAGE_URL, WEATHER_PROXY_URL
from backend.data.weather_parsing import extract_gust, extract_metar
from common import logger as debug_logger


class WeatherFetchError(Exception):
    """Raised when the proxy is unreachable or returns an unusable response."""


@dataclass
class WeatherResult:
    """Status line for a weather lookup."""
    source: str
    status: str  # 'success' | 'warning' | 'error'
    msg: str


@dataclass
class StationWeather:
    """Everything a weather lookup found for one station."""
    icao: str
    result: WeatherResult
    metar: Optional[str] = None
    metar_gust: Optional[int] = None
    taf: List[TafEntry] = field(default_factory=list)

    @property
    def gust_factor(self) -> int:
        """Gust to feed the calculator: the METAR gust, or 0 when none is reported."""
        return self.metar_gust if self.metar_gust is not None else 0


def build_station_url(icao: str) -> str:
    """Weather page URL for a station."""
    return WEATHER_PAGE_URL.format(icao=icao)


def fetch_proxy_weather(url: str, timeout: int = PROXY_TIMEOUT) -> str:
    """
    Fetch a page through the CORS proxy.

    Args:
        url: Page URL to fetch
        timeout: Request timeout in seconds

    Returns:
        Raw page HTML from the proxy's 'contents' field ('' if empty)

    Raises:
        WeatherFetchError: on network errors, non-2xx responses or a bad envelope
    """
    try:
        response = requests.get(WEATHER_PROXY_URL, params={"url": url}, timeout=timeout)
        response.raise_for_status()
    except requests.Timeout as e:
        raise WeatherFetchError("Proxy request timed out") from e
    except requests.RequestException as e:
        raise WeatherFetchError("Proxy network response was not ok") from e

    try:
        data = response.json()
    except (json.JSONDecodeError, ValueError) as e:
        raise WeatherFetchError("Proxy returned an invalid response") from e

    if not isinstance(data, dict):
        raise WeatherFetchError("Proxy returned an invalid response")

    return data.get("contents") or ""


def parse_station_page(content: str, icao: str) -> StationWeather:
    """
    Extract METAR, gust and TAF for a station from its page HTML.

    Args:
        content: Page HTML
        icao: Station identifier (upper case)

    Returns:
        StationWeather with a status describing what was found
    """
    if not content or icao not in content:
        return StationWeather(icao, WeatherResult("Network", "error", "Station data not found"))

    metar = extract_metar(content, icao)
    metar_gust = None

    if metar:
        metar_gust = extract_gust(metar)
        if metar_gust is not None:
            result = WeatherResult("METAR", "success", f"Peak Gust: {metar_gust} kts")
        else:
            result = WeatherResult("METAR", "success", "METAR active (No Gusts)")
    else:
        result = WeatherResult("System", "warning", "No recent METAR found")

    return StationWeather(
        icao=icao,
        result=result,
        metar=metar,
        metar_gust=metar_gust,
        taf=parse_taf(content, icao),
    )


def get_station_weather(icao: str) -> StationWeather:
    """
    Look up METAR and TAF for a station.

    Network failures are reported through the result status rather than
    raised, so the UI can show them as a single message.

    Args:
        icao: Station identifier

    Returns:
        StationWeather (result.status is 'error' when nothing could be fetched)
    """
    code = (icao or "").strip().upper()
    url = build_station_url(code)

    debug_logger.info(f"Fetching weather for {code}")
    try:
        content = fetch_proxy_weather(url)
    except WeatherFetchError as e:
        debug_logger.warning(f"Weather fetch failed for {code}: {e}")
        return StationWeather(code, WeatherResult("Network", "error", str(e)))

    weather = parse_station_page(content, code)
    debug_logger.info(
        f"Weather for {code}: {weather.result.msg} ({len(weather.taf)} TAF entries)"
    )
    return weather
