"""Aircraft Profile Management Modal Screen"""

from textual.screen import ModalScreen
from textual.widgets import Static, ListView, ListItem, Label, Button
from textual.containers import Container, Horizontal
from textual.binding import Binding
from textual.app import ComposeResult

from backend.core.profiles import ProfileState, add_profile, delete_profile, select_profile
from .profile_wizard import ProfileWizardScreen


class ProfileManagerScreen(ModalScreen):
    """Modal screen for selecting, creating and deleting aircraft profiles"""

    CSS = """
    ProfileManagerScreen {
        align: center middle;
    }

    #profiles-container {
        width: 70;
        height: 70%;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }

    #profiles-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    #profiles-list {
        height: 1fr;
        border: solid $primary;
        margin-bottom: 1;
    }

    #profiles-buttons {
        height: auto;
        layout: horizontal;
        align: center middle;
    }

    .profiles-button {
        margin: 0 1;
    }

    #profiles-status {
        text-align: center;
        color: $text-muted;
        margin-top: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "close", "Close", priority=True),
        Binding("n", "new_profile", "New Profile", priority=True),
        Binding("delete", "delete_selected", "Delete", priority=True),
    ]

    def __init__(self, state: ProfileState):
        super().__init__()
        self.state = state

    def compose(self) -> ComposeResult:
        with Container(id="profiles-container"):
            yield Static("Aircraft Profiles", id="profiles-title")
            yield ListView(id="profiles-list")
            with Horizontal(id="profiles-buttons"):
                yield Button("New (N)", id="new-button", classes="profiles-button")
                yield Button("Delete (Del)", id="delete-button", classes="profiles-button")
                yield Button("Close (Esc)", id="close-button", classes="profiles-button")
            yield Static("Enter to select a profile", id="profiles-status")

    def on_mount(self) -> None:
        """Populate the list when mounted"""
        self.populate_list()
        self.query_one("#profiles-list", ListView).focus()

    def populate_list(self) -> None:
        """Populate the list with saved profiles"""
        list_view = self.query_one("#profiles-list", ListView)
        list_view.clear()

        for profile in self.state.profiles:
            marker = "●" if profile.id == self.state.active_id else " "
            display_text = f"{marker} {profile.short_name:<5} {profile.name}"
            list_view.append(ListItem(Label(display_text), name=profile.id))

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Select a profile and close"""
        if event.item.name:
            self.state = select_profile(self.state, event.item.name)
            self.dismiss(self.state)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses"""
        if event.button.id == "new-button":
            self.action_new_profile()
        elif event.button.id == "delete-button":
            self.action_delete_selected()
        elif event.button.id == "close-button":
            self.action_close()

    def action_new_profile(self) -> None:
        """Open the profile wizard as a sub-modal"""
        self.app.push_screen(ProfileWizardScreen(), callback=self.handle_wizard_result)

    def handle_wizard_result(self, profile) -> None:
        """Add the profile built by the wizard and make it active"""
        if profile is None:
            return
        self.state = add_profile(self.state, profile)
        self.dismiss(self.state)

    def action_delete_selected(self) -> None:
        """Delete the highlighted profile"""
        list_view = self.query_one("#profiles-list", ListView)
        item = list_view.highlighted_child
        if item is None or not item.name:
            return

        status = self.query_one("#profiles-status", Static)
        if len(self.state.profiles) <= 1:
            status.update("The last profile cannot be deleted")
            return

        self.state = delete_profile(self.state, item.name)
        status.update("Profile deleted")
        self.populate_list()

    def action_close(self) -> None:
        """Close and return the (possibly changed) profile state"""
        self.dismiss(self.state)
