"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

PAYLOAD_TYPE = "attendance"
DEFAULT_SECURE_KEY = "TTPO_2024_ATTENDANCE"
DEFAULT_PAYLOAD_VERSION = "1.0"

OUTBOX_KEY = "attendance_records"
TOKEN_KEY = "token"

DEFAULT_PROBE_TIMEOUT = 3.0
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_SCAN_INTERVAL = 0.1
DEFAULT_REPORT_DAYS = 7

UNKNOWN_LABEL = "Unknown"
ENROLLMENT_MISSING_MESSAGE = "Student not found in this class"
