from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from ...attendance.model import AttendanceRecord


class DurationCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked hours)."""

    @abstractmethod
    def worked_hours(self, record: AttendanceRecord, *, now: Optional[datetime] = None) -> float:
        """Fractional hours. `now` stands in for a missing check-out when given."""

        raise NotImplementedError
