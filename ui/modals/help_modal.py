"""Keyboard shortcut reference"""

from textual.screen import ModalScreen
from textual.widgets import Static
from textual.containers import Container, Horizontal
from textual.binding import Binding
from textual.app import ComposeResult


# (section, [(keys, description)]) per column
SHORTCUTS = (
    (
        ("General", (("Ctrl+C", "Quit"), ("Escape", "Cancel/Close"), ("F1", "This help"))),
        ("Calculator", (
            ("Ctrl+Up", "Weight +10 lbs"),
            ("Ctrl+Down", "Weight -10 lbs"),
            ("Ctrl+Right", "Gust +1 kt"),
            ("Ctrl+Left", "Gust -1 kt"),
        )),
    ),
    (
        ("Weather", (("Ctrl+E", "METAR & TAF"), ("Enter", "Fetch / apply forecast gust"))),
        ("Profiles", (("Ctrl+O", "Manage profiles"), ("N", "New profile"), ("Del", "Delete profile"))),
    ),
)


def render_shortcuts(sections) -> str:
    blocks = []
    for title, keys in sections:
        lines = [f"[bold]{title}[/bold]"]
        lines.extend(f" {key:<11} {desc}" for key, desc in keys)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


class HelpScreen(ModalScreen):
    """Lists the app's keyboard shortcuts"""

    CSS = """
    HelpScreen {
        align: center middle;
    }

    #shortcuts-panel {
        width: 76;
        height: auto;
        max-height: 80%;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }

    #shortcuts-heading {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    #shortcuts-columns {
        height: auto;
    }

    .shortcuts-column {
        width: 1fr;
        height: auto;
    }
    """

    BINDINGS = [
        Binding("escape", "close", "Close", priority=True),
        Binding("f1", "close", "Close", show=False),
    ]

    def compose(self) -> ComposeResult:
        with Container(id="shortcuts-panel"):
            yield Static("Keyboard Shortcuts (Escape to close)", id="shortcuts-heading")
            with Horizontal(id="shortcuts-columns"):
                for column in SHORTCUTS:
                    yield Static(render_shortcuts(column), classes="shortcuts-column")

    def action_close(self) -> None:
        self.dismiss()
