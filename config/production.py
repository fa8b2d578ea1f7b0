import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5000/api")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "15"))

CACHE_DIR = os.getenv("CACHE_DIR", "/var/lib/nexushr")

GEOLOCATION_TIMEOUT = float(os.getenv("GEOLOCATION_TIMEOUT", "8"))
CLOCK_INTERVAL = float(os.getenv("CLOCK_INTERVAL", "1"))

DEBUG = bool(int(os.getenv("DEBUG", "0")))

SYNC_ON_STARTUP = bool(int(os.getenv("SYNC_ON_STARTUP", "1")))
START_CLOCK = bool(int(os.getenv("START_CLOCK", "1")))
