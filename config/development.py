import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# HR API (users, attendance, leaves, holidays, config, rosters)
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5000/api")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "15"))

# Offline cache and persisted session live here
CACHE_DIR = os.getenv("CACHE_DIR", ".nexushr")

GEOLOCATION_TIMEOUT = float(os.getenv("GEOLOCATION_TIMEOUT", "8"))
CLOCK_INTERVAL = float(os.getenv("CLOCK_INTERVAL", "1"))

DEBUG = True

# Reload every collection when the app starts
SYNC_ON_STARTUP = bool(int(os.getenv("SYNC_ON_STARTUP", "1")))
START_CLOCK = bool(int(os.getenv("START_CLOCK", "1")))
