"""
Configuration constants and settings for the Approach Speed Calculator.
"""

# Defaults shown on first launch
DEFAULT_ICAO = "KMIE"
DEFAULT_WEIGHT = 2500
DEFAULT_DMMS_FACTOR = 1.404

# Vref = 1.3 Vso plus half the gust factor
STALL_TO_APPROACH_FACTOR = 1.3
GUST_ADDITIVE_FACTOR = 0.5

# Input ranges for the calculator controls
MAX_GUST_FACTOR = 30
WEIGHT_STEP = 10

# Weather page is fetched through a CORS proxy that wraps the HTML in a JSON envelope
WEATHER_PROXY_URL = "https://api.allorigins.win/get"
WEATHER_PAGE_URL = "https://en.allmetsat.com/metar-taf/tennessee-kentucky.php?icao={icao}"
PROXY_TIMEOUT = 15  # seconds

# Key-value store keys. Bump the suffix when the stored shape changes.
PROFILES_STORE_KEY = "aircraft_profiles_v3"
ACTIVE_PROFILE_STORE_KEY = "active_aircraft_id_v3"

# TAF day-of-month rollover threshold (days)
TAF_ROLLOVER_DAYS = 15
