"""
Approach Speed Calculator Backend
Performance interpolation, weather parsing and profile storage.
"""

# Import performance calculations
from backend.core.performance import (
    interpolate,
    compute_performance,
    gust_additive_display,
    weight_bounds,
    clamp_weight,
)

# Import profile management
from backend.core.profiles import (
    MOONEY_M20J,
    ProfileState,
    ProfileValidationError,
    build_profile_from_table,
    default_weight_for,
    active_profile,
    add_profile,
    delete_profile,
    select_profile,
)

# Import TAF parsing
from backend.briefing.taf_parsing import (
    TafEntry,
    TafEntryKind,
    parse_taf,
    find_active_entry,
)

# Import weather functions
from backend.data.weather_parsing import extract_gust
from backend.data.weather import (
    WeatherFetchError,
    StationWeather,
    get_station_weather,
)

# Import persistence
from backend.data.store import KeyValueStore, load_profile_state, save_profile_state

__version__ = "1.0.5"

# Export public API
__all__ = [
    'interpolate',
    'compute_performance',
    'gust_additive_display',
    'weight_bounds',
    'clamp_weight',
    'MOONEY_M20J',
    'ProfileState',
    'ProfileValidationError',
    'build_profile_from_table',
    'default_weight_for',
    'active_profile',
    'add_profile',
    'delete_profile',
    'select_profile',
    'TafEntry',
    'TafEntryKind',
    'parse_taf',
    'find_active_entry',
    'extract_gust',
    'WeatherFetchError',
    'StationWeather',
    'get_station_weather',
    'KeyValueStore',
    'load_profile_state',
    'save_profile_state',
]
