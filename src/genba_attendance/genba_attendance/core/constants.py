"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SCAN_RESET_DELAY_SECONDS = 2.0
DEFAULT_ANALYSIS_SAMPLE_LIMIT = 50
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_GEMINI_TIMEOUT_SECONDS = 30
DEFAULT_DISPLAY_TIMEZONE = "Asia/Tokyo"
UNKNOWN_SITE_ID = "unknown"

# Day-view timeline window (hours)
TIMELINE_START_HOUR = 6
TIMELINE_END_HOUR = 20

ANALYSIS_FAILURE_MESSAGE = "エラーが発生しました。もう一度お試しください。"
ANALYSIS_EMPTY_MESSAGE = "分析データを生成できませんでした。"

CSV_HEADERS = ["日付", "現場名", "会社名", "作業員名", "職種", "入場時間", "退場時間", "状態"]
CSV_STATUS_WORKING = "作業中"
CSV_STATUS_LEFT = "退場済"
