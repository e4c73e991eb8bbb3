from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Trạng thái chấm công của một bản ghi (lưu trong bộ nhớ)."""

    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"
    ABSENT = "ABSENT"


class ViewMode(str, Enum):
    """Màn hình đang hiển thị ở lớp presentation."""

    SCAN = "SCAN"
    DASHBOARD = "DASHBOARD"
    ANALYSIS = "ANALYSIS"
    COMPANY_SUMMARY = "COMPANY_SUMMARY"
    SITE_SUMMARY = "SITE_SUMMARY"


class ScanState(str, Enum):
    """Explicit state of the QR check-in/out flow."""

    NO_SITE_SCANNED = "NO_SITE_SCANNED"
    SITE_SCANNED = "SITE_SCANNED"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"


class IgnoredReason(str, Enum):
    """Why a store transition was a no-op."""

    NO_SITE_SCANNED = "no_site_scanned"
    NO_CURRENT_USER = "no_current_user"
    NO_OPEN_RECORD = "no_open_record"
    NOT_FOUND = "not_found"
    INVALID_TIMES = "invalid_times"
    INVALID_STATUS = "invalid_status"


class SortKey(str, Enum):
    COMPANY = "company"
    NAME = "name"
    WORK_TIME = "workTime"
    DAYS_PRESENT = "daysPresent"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"
