"""
UI Module for the Approach Speed Calculator
Provides Textual-based user interface components
"""

from .app import ApproachSpeedApp
from .modals import WeatherInfoScreen, ProfileManagerScreen, ProfileWizardScreen, HelpScreen
from .config import ColumnConfig, SPEED_COLUMNS, STATUS_COLORS
from .utils import debug_log, format_metar_markup, format_taf_entry

__all__ = [
    # Main app
    'ApproachSpeedApp',

    # Modal screens
    'WeatherInfoScreen',
    'ProfileManagerScreen',
    'ProfileWizardScreen',
    'HelpScreen',

    # Configuration
    'ColumnConfig',
    'SPEED_COLUMNS',
    'STATUS_COLORS',

    # Utilities
    'debug_log',
    'format_metar_markup',
    'format_taf_entry',
]

__version__ = '1.0.5'
