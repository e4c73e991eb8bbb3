from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): Bản ghi chấm công.

    `date` is a plain YYYY-MM-DD string; timestamps are ISO-8601 strings.
    `check_in_time` may be "" for a manually drafted record.
    """

    id: str
    worker_id: str
    site_id: str
    date: str
    check_in_time: str
    status: AttendanceStatus
    check_out_time: Optional[str] = None

    @property
    def is_open(self) -> bool:
        """No check-out yet (a manual draft without check-in counts too)."""
        return not self.check_out_time

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "worker_id": self.worker_id,
            "site_id": self.site_id,
            "date": self.date,
            "check_in_time": self.check_in_time,
            "check_out_time": self.check_out_time,
            "status": self.status.value,
        }
