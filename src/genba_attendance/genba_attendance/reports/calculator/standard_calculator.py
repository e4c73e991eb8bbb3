from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ...attendance.model import AttendanceRecord
from ...common.datetime_utils import hours_between, parse_timestamp
from .base import DurationCalculator

logger = logging.getLogger(__name__)


class StandardDurationCalculator(DurationCalculator):
    """Standard rule: out - in, 0 when a timestamp is missing or the span is negative."""

    def worked_hours(self, record: AttendanceRecord, *, now: Optional[datetime] = None) -> float:
        start = parse_timestamp(record.check_in_time)
        if start is None:
            return 0.0

        end = parse_timestamp(record.check_out_time)
        if end is None:
            if now is None:
                return 0.0
            end = now

        hours = hours_between(start, end)
        if hours < 0:
            if record.check_out_time:
                logger.warning("Record %s has check-out before check-in, counted as 0h", record.id)
            return 0.0
        return hours
