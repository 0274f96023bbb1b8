import os

from config import parse_urls

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Candidate servers, tried in order until one answers
API_URLS = parse_urls(
    os.getenv(
        "API_URLS",
        "http://localhost:5000/api,http://127.0.0.1:5000/api,https://localhost:5000/api",
    )
)
PROBE_PATH = os.getenv("PROBE_PATH", "test")
PROBE_TIMEOUT = float(os.getenv("PROBE_TIMEOUT", "3"))
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))

# Shared marker every attendance QR code must carry
QR_SECURE_KEY = os.getenv("QR_SECURE_KEY", "TTPO_2024_ATTENDANCE")

# Device key-value store (token + local attendance journal)
OUTBOX_PATH = os.getenv("OUTBOX_PATH", "instance/device_store.json")

SCAN_INTERVAL = float(os.getenv("SCAN_INTERVAL", "0.1"))
RECONCILE_WORKERS = int(os.getenv("RECONCILE_WORKERS", "1"))
REPORT_WINDOW_DAYS = int(os.getenv("REPORT_WINDOW_DAYS", "7"))

DEBUG = bool(int(os.getenv("DEBUG", "1")))
