SECRET_KEY = "test-secret"

GEMINI_API_KEY = ""
GEMINI_MODEL = "gemini-2.5-flash"
GEMINI_TIMEOUT_SECONDS = 5.0

CURRENT_WORKER_ID = "w2"

DISPLAY_TIMEZONE = "UTC"
SCAN_RESET_DELAY_SECONDS = 2.0

QR_FALLBACK_TO_FIRST_SITE = False

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_LOAD_MONTH = False
