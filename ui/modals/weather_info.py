"""METAR and TAF Lookup Modal Screen"""

import asyncio
from datetime import datetime, timezone
from typing import Callable, List, Optional

from textual.screen import ModalScreen
from textual.widgets import Static, Input, ListView, ListItem, Label
from textual.containers import Container
from textual.binding import Binding
from textual.app import ComposeResult

from backend.briefing.taf_parsing import TafEntry, find_active_entry, format_zulu_time
from backend.config.constants import DEFAULT_ICAO
from backend.data.weather import StationWeather, get_station_weather
from ui import config
from ui.utils import debug_log, format_metar_markup, format_taf_entry


class WeatherInfoScreen(ModalScreen):
    """Modal screen showing METAR and TAF for an airport, with click-to-apply gusts"""

    CSS = """
    WeatherInfoScreen {
        align: center middle;
    }

    #weather-container {
        width: 100;
        height: 85%;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }

    #weather-title {
        text-align: center;
        text-style: bold;
    }

    #weather-clock {
        text-align: center;
        color: $text-muted;
        margin-bottom: 1;
    }

    #weather-input-container {
        height: auto;
        margin-bottom: 1;
    }

    #weather-status {
        height: auto;
    }

    #weather-metar {
        height: auto;
        padding: 1;
        border: solid $primary-darken-2;
        margin-bottom: 1;
    }

    #taf-list {
        height: 1fr;
        border: solid $primary-darken-2;
    }

    #weather-hint {
        text-align: center;
        color: $text-muted;
        margin-top: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "close", "Close", priority=True),
    ]

    def __init__(self, on_gust_update: Optional[Callable[[int], None]] = None, icao: str = DEFAULT_ICAO):
        super().__init__()
        self.on_gust_update = on_gust_update
        self.initial_icao = icao
        self.taf_entries: List[TafEntry] = []
        self.loading = False

    def compose(self) -> ComposeResult:
        with Container(id="weather-container"):
            yield Static("Live Weather (AllMetSat)", id="weather-title")
            yield Static(format_zulu_time(), id="weather-clock")
            with Container(id="weather-input-container"):
                yield Input(value=self.initial_icao, placeholder="Enter airport ICAO code (e.g., KMIE)", id="weather-input")
            yield Static("", id="weather-status", markup=True)
            yield Static("", id="weather-metar", markup=True)
            yield ListView(id="taf-list")
            yield Static("Enter to fetch METAR & TAF, select a forecast line to apply its gust, Escape to close", id="weather-hint")

    def on_mount(self) -> None:
        """Focus the input and start the clock"""
        self.query_one("#weather-input", Input).focus()
        self.set_interval(config.CLOCK_INTERVAL, self.update_clock)

    def update_clock(self) -> None:
        self.query_one("#weather-clock", Static).update(format_zulu_time())
        if self.taf_entries:
            self.refresh_taf_labels()

    def refresh_taf_labels(self) -> None:
        """Re-render forecast lines in place so the highlighted row is kept"""
        now = datetime.now(timezone.utc)
        active_index = find_active_entry(self.taf_entries, now)
        for item in self.query_one("#taf-list", ListView).query(ListItem):
            if not item.name:
                continue
            idx = int(item.name)
            item.query_one(Label).update(format_taf_entry(self.taf_entries[idx], idx == active_index, now))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Fetch weather when Enter is pressed in the ICAO input"""
        if event.input.id == "weather-input":
            self.action_fetch_weather()

    def action_fetch_weather(self) -> None:
        """Fetch METAR and TAF for the entered airport"""
        icao = self.query_one("#weather-input", Input).value.strip().upper()
        if len(icao) < 3:
            self.query_one("#weather-status", Static).update("Please enter an airport ICAO code")
            return

        self.loading = True
        self.query_one("#weather-status", Static).update(f"Fetching {icao}...")
        self.query_one("#weather-metar", Static).update("")
        self.taf_entries = []
        self.query_one("#taf-list", ListView).clear()

        self.run_worker(self.fetch_weather_async(icao), exclusive=True)

    async def fetch_weather_async(self, icao: str) -> None:
        """Run the blocking lookup in a thread pool to avoid blocking the UI"""
        loop = asyncio.get_event_loop()
        weather = await loop.run_in_executor(None, get_station_weather, icao)
        self.loading = False
        self.show_weather(weather)

    def show_weather(self, weather: StationWeather) -> None:
        """Display a lookup result and push the METAR gust to the calculator"""
        color = config.STATUS_COLORS.get(weather.result.status, "white")
        self.query_one("#weather-status", Static).update(
            f"[{color}]{weather.result.source}: {weather.result.msg}[/{color}]"
        )

        metar_widget = self.query_one("#weather-metar", Static)
        if weather.metar:
            metar_widget.update(format_metar_markup(weather.metar, weather.icao))
        else:
            metar_widget.update("[dim]No METAR available[/dim]")

        self.taf_entries = list(weather.taf)
        self.populate_taf(self.taf_entries)

        if weather.result.status != "error" and self.on_gust_update:
            self.on_gust_update(weather.gust_factor)

    def populate_taf(self, entries: List[TafEntry]) -> None:
        """Fill the forecast list, marking the active period"""
        taf_list = self.query_one("#taf-list", ListView)
        taf_list.clear()

        if not entries:
            taf_list.append(ListItem(Label("[dim]No TAF available[/dim]")))
            return

        now = datetime.now(timezone.utc)
        active_index = find_active_entry(entries, now)
        for idx, entry in enumerate(entries):
            line = format_taf_entry(entry, idx == active_index, now)
            taf_list.append(ListItem(Label(line), name=str(idx)))

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Apply the gust of the selected forecast line"""
        if not event.item.name:
            return
        entry = self.taf_entries[int(event.item.name)]
        if entry.gust is None:
            return

        debug_log(f"Applying TAF gust {entry.gust} kts from '{entry.raw}'")
        if self.on_gust_update:
            self.on_gust_update(entry.gust)
        self.query_one("#weather-status", Static).update(
            f"[green]Applied forecast gust: {entry.gust} kts[/green]"
        )

    def action_close(self) -> None:
        """Close the modal"""
        self.dismiss()
