from __future__ import annotations

import calendar
import random
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import to_iso
from ..core.enums import AttendanceStatus
from ..sites.model import Site
from ..workers.model import Worker

SATURDAY_SKIP_THRESHOLD = 0.5
ABSENCE_THRESHOLD = 0.2
CHECKIN_BASE_HOUR = 7
CHECKOUT_BASE_HOUR = 17


def static_record_id(work_date: str, worker_id: str) -> str:
    return f"static-{work_date}-{worker_id}"


def _at_fractional_hour(day: datetime, hour: float) -> datetime:
    # minute precision
    return (day + timedelta(seconds=round(hour * 3600))).replace(second=0)


def generate_static_month(
    workers: Sequence[Worker],
    site: Site,
    year: int,
    month: int,
    *,
    rng: Optional[random.Random] = None,
    tz: tzinfo = timezone.utc,
) -> list[AttendanceRecord]:
    """A month of synthetic history for `site`.

    Sundays are skipped, Saturdays are worked half the time, each worker shows
    up with 80% probability, in at 07:00-08:00 and out at 17:00-18:00 (`tz`
    wall clock). Ids are keyed by date and worker so regenerating collides.
    """
    rng = rng or random.Random()
    records: list[AttendanceRecord] = []
    days_in_month = calendar.monthrange(year, month)[1]

    for d in range(1, days_in_month + 1):
        day = datetime(year, month, d, tzinfo=tz)
        work_date = day.strftime("%Y-%m-%d")

        weekday = day.weekday()
        if weekday == calendar.SUNDAY:
            continue
        if weekday == calendar.SATURDAY and rng.random() > SATURDAY_SKIP_THRESHOLD:
            continue

        for w in workers:
            if rng.random() <= ABSENCE_THRESHOLD:
                continue

            check_in = _at_fractional_hour(day, CHECKIN_BASE_HOUR + rng.random())
            check_out = _at_fractional_hour(day, CHECKOUT_BASE_HOUR + rng.random())
            records.append(
                AttendanceRecord(
                    id=static_record_id(work_date, w.id),
                    worker_id=w.id,
                    site_id=site.id,
                    date=work_date,
                    check_in_time=to_iso(check_in),
                    check_out_time=to_iso(check_out),
                    status=AttendanceStatus.CHECKED_OUT,
                )
            )

    return records
