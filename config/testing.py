import os

SECRET_KEY = "test-secret"

API_BASE_URL = os.getenv("API_BASE_URL", "http://hr.test/api")
HTTP_TIMEOUT = 1.0

# None means an in-memory store; nothing touches disk under test.
CACHE_DIR = None

GEOLOCATION_TIMEOUT = 1.0
CLOCK_INTERVAL = 1.0

DEBUG = False
TESTING = True

SYNC_ON_STARTUP = False
START_CLOCK = False
