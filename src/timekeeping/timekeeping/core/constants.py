"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Stored values that mean "no time recorded".
UNSET_TIME_VALUES = frozenset({"", "00:00:00", "null", "undefined", "--:--"})
CHECK_IN_PLACEHOLDER = "00:00:00"

DEFAULT_GRACE_MINUTES = 15
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_HTTP_TIMEOUT = 15.0
DEFAULT_GEOLOCATION_TIMEOUT = 8.0
DEFAULT_CLOCK_INTERVAL = 1.0

CACHE_KEY = "nexushr_offline_cache"
SESSION_KEY = "nexushr_active_session"
