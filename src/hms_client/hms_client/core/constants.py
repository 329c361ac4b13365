"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

INPUT_TIME_FORMAT = "%H:%M"
WIRE_TIME_FORMAT = "%H:%M:%S"
WIRE_DATE_FORMAT = "%Y-%m-%d"

DEFAULT_SHIFTS_ENDPOINT = "/api/shifts"
DEFAULT_REQUEST_TIMEOUT = 10

LOG_PREFIX = "[hms-client]"
