import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Generative AI (empty key -> offline narrative service)
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_TIMEOUT_SECONDS = float(os.getenv("GEMINI_TIMEOUT_SECONDS", "30"))

# Worker treated as the logged-in user of the scan screen
CURRENT_WORKER_ID = os.getenv("CURRENT_WORKER_ID", "w2")

DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "Asia/Tokyo")
SCAN_RESET_DELAY_SECONDS = float(os.getenv("SCAN_RESET_DELAY_SECONDS", "2"))

# Demo behaviour: an unknown QR payload resolves to the first site
QR_FALLBACK_TO_FIRST_SITE = bool(int(os.getenv("QR_FALLBACK_TO_FIRST_SITE", "1")))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, the current month is generated on startup
AUTO_LOAD_MONTH = bool(int(os.getenv("AUTO_LOAD_MONTH", "1")))
