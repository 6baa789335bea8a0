# tests/test_weather.py
from unittest import mock

import requests

from backend.config.constants import PROXY_TIMEOUT, WEATHER_PROXY_URL
from backend.data.weather import build_station_url, get_station_weather
from backend.data.weather_parsing import extract_gust, extract_metar, is_wind_group, strip_markup


STATION_PAGE = (
    "<html><body><h2>KMIE Weather</h2>"
    "<p>KMIE 121654Z 18015G25KT 10SM CLR 22/10 A3001</p>"
    "<p>TAF KMIE 121130Z 1212/1312 18012KT FM121800 20015G22KT</p>"
    "<p>Copyright allmetsat</p></body></html>"
)


def proxy_response(contents):
    response = mock.Mock()
    response.raise_for_status.return_value = None
    response.json.return_value = {"contents": contents}
    return response


def test_extract_gust():
    assert extract_gust("KMIE 121654Z 18015G25KT 10SM") == 25
    assert extract_gust("KMIE 121654Z 18015KT 10SM") is None
    assert extract_gust("VRB05G15KT") == 15
    assert extract_gust("27035G067KT") == 67
    assert extract_gust("") is None
    assert extract_gust(None) is None


def test_is_wind_group():
    assert is_wind_group("18015KT")
    assert is_wind_group("VRB03G12KT")
    assert not is_wind_group("10SM")


def test_strip_markup():
    assert strip_markup("<b>TAF</b>\n  KMIE") == " TAF KMIE"


def test_extract_metar():
    assert extract_metar(STATION_PAGE, "KMIE") == "KMIE 121654Z 18015G25KT 10SM CLR 22/10 A3001"
    assert extract_metar(STATION_PAGE, "kmie").startswith("KMIE 121654Z")
    assert extract_metar(STATION_PAGE, "KBNA") is None
    assert extract_metar("", "KMIE") is None


@mock.patch("backend.data.weather.requests.get")
def test_station_weather_success(mock_get):
    mock_get.return_value = proxy_response(STATION_PAGE)

    weather = get_station_weather("kmie")

    mock_get.assert_called_once_with(
        WEATHER_PROXY_URL, params={"url": build_station_url("KMIE")}, timeout=PROXY_TIMEOUT
    )
    assert weather.icao == "KMIE"
    assert weather.result.status == "success"
    assert weather.result.msg == "Peak Gust: 25 kts"
    assert weather.gust_factor == 25
    assert weather.metar.startswith("KMIE 121654Z")
    assert [e.gust for e in weather.taf] == [None, 22]


@mock.patch("backend.data.weather.requests.get")
def test_station_weather_without_gust(mock_get):
    mock_get.return_value = proxy_response(STATION_PAGE.replace("18015G25KT", "18015KT"))

    weather = get_station_weather("KMIE")

    assert weather.result.msg == "METAR active (No Gusts)"
    assert weather.metar_gust is None
    assert weather.gust_factor == 0


@mock.patch("backend.data.weather.requests.get")
def test_station_weather_without_metar(mock_get):
    mock_get.return_value = proxy_response("<p>KMIE</p><p>TAF KMIE 1212/1312 18012KT</p>")

    weather = get_station_weather("KMIE")

    assert weather.result.status == "warning"
    assert weather.result.msg == "No recent METAR found"
    assert weather.metar is None
    assert len(weather.taf) == 1


@mock.patch("backend.data.weather.requests.get")
def test_station_weather_missing_station(mock_get):
    mock_get.return_value = proxy_response("<html>Unknown station</html>")

    weather = get_station_weather("KMIE")

    assert weather.result.status == "error"
    assert weather.result.msg == "Station data not found"
    assert weather.taf == []


@mock.patch("backend.data.weather.requests.get")
def test_station_weather_empty_contents(mock_get):
    mock_get.return_value = proxy_response(None)

    weather = get_station_weather("KMIE")

    assert weather.result.msg == "Station data not found"


@mock.patch("backend.data.weather.requests.get")
def test_station_weather_network_error(mock_get):
    mock_get.side_effect = requests.ConnectionError("unreachable")

    weather = get_station_weather("KMIE")

    assert weather.result.status == "error"
    assert weather.result.msg == "Proxy network response was not ok"
    assert weather.metar is None


@mock.patch("backend.data.weather.requests.get")
def test_station_weather_http_error(mock_get):
    response = proxy_response(STATION_PAGE)
    response.raise_for_status.side_effect = requests.HTTPError("502 Bad Gateway")
    mock_get.return_value = response

    weather = get_station_weather("KMIE")

    assert weather.result.status == "error"
    assert weather.result.msg == "Proxy network response was not ok"


@mock.patch("backend.data.weather.requests.get")
def test_station_weather_timeout(mock_get):
    mock_get.side_effect = requests.Timeout()

    weather = get_station_weather("KMIE")

    assert weather.result.msg == "Proxy request timed out"


@mock.patch("backend.data.weather.requests.get")
def test_station_weather_invalid_envelope(mock_get):
    response = proxy_response(STATION_PAGE)
    response.json.side_effect = ValueError("not json")
    mock_get.return_value = response

    weather = get_station_weather("KMIE")

    assert weather.result.status == "error"
    assert weather.result.msg == "Proxy returned an invalid response"
