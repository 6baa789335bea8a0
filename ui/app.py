"""
Main Application Module
Contains the ApproachSpeedApp Textual application class
"""

from typing import Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.widgets import Button, DataTable, Footer, Input, Static
from textual.binding import Binding
from textual.containers import Container, Horizontal

from backend.briefing.taf_parsing import format_zulu_time
from backend.config.constants import DEFAULT_ICAO, MAX_GUST_FACTOR, WEIGHT_STEP
from backend.core.models import AircraftProfile
from backend.core.performance import clamp_weight, compute_performance, gust_additive_display, weight_bounds
from backend.core.profiles import ProfileState, active_profile, default_weight_for
from backend.data.store import KeyValueStore, save_profile_state

from . import config
from .modals import WeatherInfoScreen, ProfileManagerScreen, HelpScreen
from .utils import debug_log


def _format_weight(weight: float) -> str:
    return str(int(weight)) if float(weight).is_integer() else f"{weight:g}"


class ApproachSpeedApp(App):
    """Textual app for the Approach Speed Calculator"""

    CSS = """
    #header-bar {
        height: 1;
        background: $boost;
        color: $text;
        layout: horizontal;
    }

    .header-title {
        width: 1fr;
        content-align: center middle;
        text-align: center;
    }

    .header-clocks {
        width: auto;
        content-align: right middle;
        padding-right: 2;
    }

    #controls {
        height: auto;
        padding: 1 2 0 2;
    }

    .control-row {
        height: auto;
    }

    .control-label {
        width: 22;
        padding-top: 1;
    }

    .control-input {
        width: 16;
    }

    .control-note {
        width: 1fr;
        padding-top: 1;
        color: $text-muted;
    }

    .preset-button {
        margin-right: 1;
    }

    #speeds-table {
        height: auto;
        margin: 1 2;
    }

    #dmms-panel {
        height: auto;
        margin: 0 2;
        padding: 1 2;
        border: round $primary;
    }

    #status-bar {
        height: 1;
        background: $boost;
        color: $text-muted;
        padding-left: 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
        Binding("ctrl+e", "show_weather_lookup", "METAR/TAF", priority=True),
        Binding("ctrl+o", "show_profiles", "Profiles", priority=True),
        Binding("ctrl+up", "weight_up", "Weight +", show=False),
        Binding("ctrl+down", "weight_down", "Weight -", show=False),
        Binding("ctrl+right", "gust_up", "Gust +", show=False),
        Binding("ctrl+left", "gust_down", "Gust -", show=False),
        Binding("f1", "show_help", "Help"),
    ]

    def __init__(self, state: ProfileState, store: Optional[KeyValueStore] = None,
                 weight: Optional[float] = None, gust_factor: int = 0, icao: str = DEFAULT_ICAO):
        super().__init__()
        self.title = "Approach Speed Calc"
        self.state = state
        self.store = store
        self.icao = icao
        profile = active_profile(state)
        self.weight: float = weight if weight is not None else default_weight_for(profile)
        self.gust_factor: int = max(0, min(MAX_GUST_FACTOR, gust_factor))

    @property
    def profile(self) -> AircraftProfile:
        return active_profile(self.state)

    @property
    def calculator_screen(self):
        """The base screen, even while a modal is on top"""
        return self.screen_stack[0]

    def compose(self) -> ComposeResult:
        """Create child widgets for the app."""
        with Container(id="header-bar"):
            yield Static("Approach Speed Calc", classes="header-title")
            yield Static("", classes="header-clocks")

        with Container(id="controls"):
            with Horizontal(classes="control-row"):
                yield Static("Gross Weight (lbs)", classes="control-label")
                yield Input(value=_format_weight(self.weight), id="weight-input", classes="control-input")
                yield Static("", id="weight-range", classes="control-note")
            yield Horizontal(id="preset-row", classes="control-row")
            with Horizontal(classes="control-row"):
                yield Static("Gust Factor (Peak, kts)", classes="control-label")
                yield Input(value=str(self.gust_factor), id="gust-input", classes="control-input")
                yield Static("", id="gust-note", classes="control-note")

        speeds_table = DataTable(id="speeds-table")
        speeds_table.cursor_type = "row"
        yield speeds_table

        yield Static("", id="dmms-panel", markup=True)
        yield Static("", id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Set up the table and clock when the app starts."""
        speeds_table = self.calculator_screen.query_one("#speeds-table", DataTable)
        for column in config.SPEED_COLUMNS:
            speeds_table.add_column(column.name, width=column.width)

        self.populate_presets()
        self.update_results()
        self.update_clock()
        self.set_interval(config.CLOCK_INTERVAL, self.update_clock)

    def update_clock(self) -> None:
        self.calculator_screen.query_one(".header-clocks", Static).update(format_zulu_time())

    def populate_presets(self) -> None:
        """Rebuild the preset buttons for the active profile"""
        preset_row = self.calculator_screen.query_one("#preset-row", Horizontal)
        preset_row.remove_children()
        buttons = [
            Button(f"{preset.label} ({_format_weight(preset.value)})", name=str(idx), classes="preset-button")
            for idx, preset in enumerate(self.profile.presets)
        ]
        if buttons:
            preset_row.mount(*buttons)

        min_weight, max_weight = weight_bounds(self.profile)
        self.calculator_screen.query_one("#weight-range", Static).update(
            f"Table {_format_weight(min_weight)}-{_format_weight(max_weight)} lbs"
        )

    def update_results(self) -> None:
        """Recompute speeds and refresh the results table and DMMS panel"""
        profile = self.profile
        result = compute_performance(self.weight, self.gust_factor, profile)

        speeds_table = self.calculator_screen.query_one("#speeds-table", DataTable)
        speeds_table.clear()
        for cfg, row in zip(profile.configs, result.to_rows(profile.configs)):
            style = "bold blue" if cfg.highlighted else ""
            cells = [
                Text(cell, style=style, justify=column.content_align)
                for cell, column in zip(row, config.SPEED_COLUMNS)
            ]
            speeds_table.add_row(*cells, key=cfg.key)

        self.calculator_screen.query_one("#gust-note", Static).update(
            f"Adds {gust_additive_display(self.gust_factor)} kts to Vref"
        )
        self.calculator_screen.query_one("#dmms-panel", Static).update(
            f"[bold]DMMS[/bold] (Minimum Maneuvering Speed): [bold]{result.maneuvering_speed} KIAS[/bold]"
            f"    Buffer above clean stall: +{result.maneuvering_buffer} kts"
        )
        self.calculator_screen.query_one("#status-bar", Static).update(
            f"{profile.name} | {_format_weight(self.weight)} lbs | Gust {self.gust_factor} kts"
        )

    def set_weight(self, weight: float, sync_input: bool = True) -> None:
        self.weight = weight
        if sync_input:
            self.calculator_screen.query_one("#weight-input", Input).value = _format_weight(weight)
        self.update_results()

    def set_gust_factor(self, gust: int, sync_input: bool = True) -> None:
        """Set the gust factor (clamped to 0-30 kts)"""
        self.gust_factor = max(0, min(MAX_GUST_FACTOR, int(gust)))
        if sync_input or self.gust_factor != gust:
            self.calculator_screen.query_one("#gust-input", Input).value = str(self.gust_factor)
        self.update_results()

    def on_input_changed(self, event: Input.Changed) -> None:
        """Recompute as the user types; ignore text that isn't a number yet"""
        if event.input.id == "weight-input":
            try:
                weight = float(event.value)
            except ValueError:
                return
            if weight != self.weight:
                self.set_weight(weight, sync_input=False)
        elif event.input.id == "gust-input":
            try:
                gust = int(event.value)
            except ValueError:
                return
            if gust != self.gust_factor:
                self.set_gust_factor(gust, sync_input=False)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Apply a weight preset"""
        if event.button.has_class("preset-button") and event.button.name:
            preset = self.profile.presets[int(event.button.name)]
            self.set_weight(preset.value)

    def action_weight_up(self) -> None:
        self.set_weight(clamp_weight(self.weight + WEIGHT_STEP, self.profile))

    def action_weight_down(self) -> None:
        self.set_weight(clamp_weight(self.weight - WEIGHT_STEP, self.profile))

    def action_gust_up(self) -> None:
        self.set_gust_factor(self.gust_factor + 1)

    def action_gust_down(self) -> None:
        self.set_gust_factor(self.gust_factor - 1)

    def action_show_weather_lookup(self) -> None:
        """Show the METAR/TAF lookup modal"""
        self.push_screen(WeatherInfoScreen(on_gust_update=self.set_gust_factor, icao=self.icao))

    def action_show_profiles(self) -> None:
        """Show the profile manager modal"""
        self.push_screen(ProfileManagerScreen(self.state), callback=self.handle_profiles_result)

    def handle_profiles_result(self, state) -> None:
        """Apply and persist the profile list returned by the manager"""
        if state is None or state == self.state:
            return

        previous_id = self.profile.id
        self.state = state
        if self.store is not None and not save_profile_state(self.store, state):
            self.notify("Could not save profiles", severity="error")

        # Reset weight to max gross when the profile changes
        if self.profile.id != previous_id:
            debug_log(f"Active profile changed to {self.profile.id}")
            self.populate_presets()
            self.set_weight(default_weight_for(self.profile))
        else:
            self.update_results()

    def action_show_help(self) -> None:
        self.push_screen(HelpScreen())

    async def action_quit(self) -> None:
        """Quit the application."""
        self.exit()
