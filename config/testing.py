import os

SECRET_KEY = "test-secret"

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://hms.test"),
    "token": os.getenv("API_TOKEN", "test-token"),
    "endpoint": "/api/shifts",
    "timeout": 5,
}

USER_ROLE = os.getenv("USER_ROLE", "admin")

DEBUG = False
TESTING = True
