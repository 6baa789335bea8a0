# tests/test_weather_screen.py
import asyncio

from textual.widgets import ListItem, ListView

from backend.briefing.taf_parsing import parse_taf
from backend.core.profiles import ProfileState
from backend.data.weather import StationWeather, WeatherResult
from ui import ApproachSpeedApp, WeatherInfoScreen


TAF_PAGE = (
    "TAF KMIE 121130Z 1212/1312 18012KT FM121800 20015G22KT "
    "TEMPO 1220/1222 25020G30KT BECMG 1300/1302 22010KT"
)


def station_weather():
    return StationWeather(
        icao="KMIE",
        result=WeatherResult("METAR", "success", "Peak Gust: 25 kts"),
        metar="KMIE 121654Z 18015G25KT 10SM",
        metar_gust=25,
        taf=parse_taf(TAF_PAGE, "KMIE"),
    )


def test_clock_tick_keeps_highlighted_forecast_line():
    async def run():
        app = ApproachSpeedApp(ProfileState())
        async with app.run_test() as pilot:
            screen = WeatherInfoScreen()
            await app.push_screen(screen)
            await pilot.pause()

            screen.show_weather(station_weather())
            await pilot.pause()

            taf_list = screen.query_one("#taf-list", ListView)
            items = list(taf_list.query(ListItem))
            assert len(items) == 4

            taf_list.index = 2
            await pilot.pause()

            screen.update_clock()
            await pilot.pause()

            assert taf_list.index == 2
            assert list(taf_list.query(ListItem)) == items

    asyncio.run(run())


def test_weather_gust_reaches_calculator():
    async def run():
        app = ApproachSpeedApp(ProfileState())
        async with app.run_test() as pilot:
            screen = WeatherInfoScreen(on_gust_update=app.set_gust_factor)
            await app.push_screen(screen)
            await pilot.pause()

            screen.show_weather(station_weather())
            await pilot.pause()

            assert app.gust_factor == 25

    asyncio.run(run())
