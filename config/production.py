import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

BACKEND_CONFIG = {
    "base_url": os.getenv("BACKEND_URL", "http://localhost:3001"),
    "timeout": float(os.getenv("BACKEND_TIMEOUT")) if os.getenv("BACKEND_TIMEOUT") else None,
}

SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))

SUCCESS_BANNER_SECONDS = int(os.getenv("SUCCESS_BANNER_SECONDS", "5"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
