"""New Aircraft Profile Wizard Modal Screen"""

from textual.screen import ModalScreen
from textual.widgets import Static, Input
from textual.containers import Container
from textual.binding import Binding
from textual.app import ComposeResult

from backend.core.profiles import ProfileValidationError, build_profile_from_table
from ui.utils import parse_columns, parse_speed_rows, parse_weights


class ProfileWizardScreen(ModalScreen):
    """Modal screen for entering a POH stall speed table as a new profile"""

    CSS = """
    ProfileWizardScreen {
        align: center middle;
    }

    #wizard-container {
        width: 90;
        height: auto;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }

    #wizard-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    .wizard-label {
        color: $text-muted;
        margin-top: 1;
    }

    #wizard-result {
        text-align: center;
        height: auto;
        margin-top: 1;
        color: $error;
    }

    #wizard-hint {
        text-align: center;
        color: $text-muted;
        margin-top: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "close", "Close", priority=True),
        Binding("ctrl+s", "save_profile", "Save", priority=True),
    ]

    def compose(self) -> ComposeResult:
        with Container(id="wizard-container"):
            yield Static("New Aircraft Profile", id="wizard-title")
            yield Static("Aircraft name", classes="wizard-label")
            yield Input(placeholder="e.g., Cessna 172S", id="wizard-name")
            yield Static("Gross weights (lbs), comma separated", classes="wizard-label")
            yield Input(placeholder="2200, 2400, 2600, 2740", id="wizard-weights")
            yield Static("Configurations as Label|Sub label, separated by ';' (first is the clean reference)", classes="wizard-label")
            yield Input(placeholder="Flaps 0°|Gear Down; Flaps 15°|Takeoff; Flaps 33°|Full", id="wizard-columns")
            yield Static("Stall speeds (KIAS), one row per weight separated by ';', values by ','", classes="wizard-label")
            yield Input(placeholder="56, 53, 50; 59, 55, 52; 61.5, 56.5, 53.5; 63, 58, 56", id="wizard-speeds")
            yield Static("", id="wizard-result")
            yield Static("Press Ctrl+S to save, Escape to cancel", id="wizard-hint")

    def on_mount(self) -> None:
        """Focus the name input when mounted"""
        self.query_one("#wizard-name", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Enter on the last field saves"""
        if event.input.id == "wizard-speeds":
            self.action_save_profile()

    def action_save_profile(self) -> None:
        """Build the profile from the entered table"""
        name = self.query_one("#wizard-name", Input).value
        weights = parse_weights(self.query_one("#wizard-weights", Input).value)
        columns = parse_columns(self.query_one("#wizard-columns", Input).value)
        speed_rows = parse_speed_rows(self.query_one("#wizard-speeds", Input).value)

        try:
            profile = build_profile_from_table(name, weights, columns, speed_rows)
        except ProfileValidationError as e:
            self.query_one("#wizard-result", Static).update(str(e))
            return

        self.dismiss(profile)

    def action_close(self) -> None:
        """Close without saving"""
        self.dismiss(None)
