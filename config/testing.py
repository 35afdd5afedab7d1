SECRET_KEY = "test-secret"

BACKEND_CONFIG = {
    "base_url": "http://backend.test",
    "timeout": None,
}

SESSION_DAYS = 1

SUCCESS_BANNER_SECONDS = 5

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
