import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

BACKEND_CONFIG = {
    "base_url": os.getenv("BACKEND_URL", "http://localhost:3001"),
    # Unset: rely on the transport default
    "timeout": float(os.getenv("BACKEND_TIMEOUT")) if os.getenv("BACKEND_TIMEOUT") else None,
}

# Lifetime of a "remember me" session
SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))

SUCCESS_BANNER_SECONDS = int(os.getenv("SUCCESS_BANNER_SECONDS", "5"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
