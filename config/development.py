import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://localhost:5000"),
    "token": os.getenv("API_TOKEN", ""),
    "endpoint": os.getenv("SHIFTS_ENDPOINT", "/api/shifts"),
    "timeout": float(os.getenv("REQUEST_TIMEOUT", "10")),
}

# Role of the person using this screen (admin, doctor, patient or 0/1/2)
USER_ROLE = os.getenv("USER_ROLE", "admin")

DEBUG = True
