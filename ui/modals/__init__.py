"""
Modal Screens Package
Contains all modal dialog screens (Weather, Profile Manager, Profile Wizard, Help)
"""

from .weather_info import WeatherInfoScreen
from .profile_wizard import ProfileWizardScreen
from .profile_manager import ProfileManagerScreen
from .help_modal import HelpScreen

__all__ = [
    'WeatherInfoScreen',
    'ProfileWizardScreen',
    'ProfileManagerScreen',
    'HelpScreen',
]
