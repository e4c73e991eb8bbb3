import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_TIMEOUT_SECONDS = float(os.getenv("GEMINI_TIMEOUT_SECONDS", "30"))

CURRENT_WORKER_ID = os.getenv("CURRENT_WORKER_ID", "w2")

DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "Asia/Tokyo")
SCAN_RESET_DELAY_SECONDS = float(os.getenv("SCAN_RESET_DELAY_SECONDS", "2"))

QR_FALLBACK_TO_FIRST_SITE = bool(int(os.getenv("QR_FALLBACK_TO_FIRST_SITE", "0")))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_LOAD_MONTH = bool(int(os.getenv("AUTO_LOAD_MONTH", "0")))
