SECRET_KEY = "test-secret"

API_URLS = ["http://primary.test/api", "http://lan.test/api", "http://127.0.0.1:5000/api"]
PROBE_PATH = "test"
PROBE_TIMEOUT = 0.5
REQUEST_TIMEOUT = 1.0

QR_SECURE_KEY = "TTPO_2024_ATTENDANCE"

# None keeps the device store in memory
OUTBOX_PATH = None

SCAN_INTERVAL = 0.01
RECONCILE_WORKERS = 1
REPORT_WINDOW_DAYS = 7

DEBUG = False
TESTING = True
