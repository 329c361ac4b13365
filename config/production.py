import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "https://hms.example.org"),
    "token": os.getenv("API_TOKEN", ""),
    "endpoint": os.getenv("SHIFTS_ENDPOINT", "/api/shifts"),
    "timeout": float(os.getenv("REQUEST_TIMEOUT", "10")),
}

USER_ROLE = os.getenv("USER_ROLE", "patient")

DEBUG = False
