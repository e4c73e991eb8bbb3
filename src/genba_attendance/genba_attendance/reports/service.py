from __future__ import annotations

import calendar
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import month_prefix, parse_timestamp
from ..core.constants import TIMELINE_END_HOUR, TIMELINE_START_HOUR
from ..core.enums import SortDirection, SortKey
from ..sites.model import Site
from ..workers.model import Worker
from .calculator.base import DurationCalculator
from .calculator.standard_calculator import StandardDurationCalculator
from .model import CompanySummaryRow, DailySiteStats, SiteSummaryRow, TimelineBar, WorkerMetrics


def filter_workers(workers: Iterable[Worker], *, company: str = "", name: str = "") -> list[Worker]:
    """Exact company match, substring name match. Empty filter = no filter."""
    return [
        w
        for w in workers
        if (not company or w.company == company) and (not name or name in w.name)
    ]


def filter_records(records: Iterable[AttendanceRecord], *, site_id: str = "") -> list[AttendanceRecord]:
    return [r for r in records if not site_id or r.site_id == site_id]


def unique_companies(workers: Iterable[Worker]) -> list[str]:
    """Companies in first-seen order."""
    seen: dict[str, None] = {}
    for w in workers:
        seen.setdefault(w.company, None)
    return list(seen)


class SummaryReportService:
    """Derived views over the record collection.

    All monthly views match on the YYYY-MM prefix of `record.date` (string
    comparison, no calendar parsing). Group order ties keep input order.
    """

    def __init__(self, *, calculator: Optional[DurationCalculator] = None):
        self._calculator = calculator or StandardDurationCalculator()

    def total_hours(self, records: Iterable[AttendanceRecord]) -> float:
        return sum(self._calculator.worked_hours(r) for r in records)

    def company_summary(
        self,
        *,
        records: Sequence[AttendanceRecord],
        workers: Sequence[Worker],
        selected_date: str,
        site_id: str = "",
    ) -> list[CompanySummaryRow]:
        prefix = month_prefix(selected_date)
        rows: list[CompanySummaryRow] = []

        for company in unique_companies(workers):
            company_worker_ids = {w.id for w in workers if w.company == company}
            relevant = [
                r
                for r in records
                if r.worker_id in company_worker_ids
                and r.date.startswith(prefix)
                and (not site_id or r.site_id == site_id)
            ]
            rows.append(
                CompanySummaryRow(
                    company=company,
                    worker_count=len(company_worker_ids),
                    total_man_days=len(relevant),
                    total_hours=self.total_hours(relevant),
                )
            )

        rows.sort(key=lambda x: x.total_hours, reverse=True)
        return rows

    def site_summary(
        self,
        *,
        records: Sequence[AttendanceRecord],
        workers: Sequence[Worker],
        sites: Sequence[Site],
        selected_date: str,
        company: str = "",
    ) -> list[SiteSummaryRow]:
        prefix = month_prefix(selected_date)
        company_by_worker = {w.id: w.company for w in workers}
        rows: list[SiteSummaryRow] = []

        for site in sites:
            relevant = [r for r in records if r.site_id == site.id and r.date.startswith(prefix)]
            if company:
                relevant = [r for r in relevant if company_by_worker.get(r.worker_id) == company]

            rows.append(
                SiteSummaryRow(
                    site_id=site.id,
                    site_name=site.name,
                    address=site.address,
                    unique_worker_count=len({r.worker_id for r in relevant}),
                    total_man_days=len(relevant),
                    total_hours=self.total_hours(relevant),
                )
            )

        rows.sort(key=lambda x: x.total_hours, reverse=True)
        return rows

    def daily_site_stats(
        self,
        *,
        records: Sequence[AttendanceRecord],
        sites: Sequence[Site],
        selected_date: str,
        site_id: str = "",
    ) -> list[DailySiteStats]:
        stats = []
        for site in sites:
            if site_id and site.id != site_id:
                continue
            site_records = [r for r in records if r.site_id == site.id and r.date == selected_date]
            stats.append(
                DailySiteStats(site=site, attendees=len(site_records), total_hours=self.total_hours(site_records))
            )
        return stats

    def daily_count(self, *, records: Sequence[AttendanceRecord], selected_date: str, site_id: str = "") -> int:
        return sum(1 for r in filter_records(records, site_id=site_id) if r.date == selected_date)

    def worker_metrics(
        self,
        *,
        workers: Sequence[Worker],
        records: Sequence[AttendanceRecord],
        selected_date: str,
        now: datetime,
    ) -> dict[str, WorkerMetrics]:
        """Days present in the month, and today's worked hours (open record runs until `now`)."""
        prefix = month_prefix(selected_date)
        metrics: dict[str, WorkerMetrics] = {}

        for worker in workers:
            days_present = sum(1 for r in records if r.worker_id == worker.id and r.date.startswith(prefix))
            today = next((r for r in records if r.worker_id == worker.id and r.date == selected_date), None)
            work_time = self._calculator.worked_hours(today, now=now) if today else 0.0
            metrics[worker.id] = WorkerMetrics(days_present=days_present, work_time=work_time)

        return metrics

    @staticmethod
    def sort_workers(
        workers: Sequence[Worker],
        metrics: dict[str, WorkerMetrics],
        *,
        key: SortKey = SortKey.COMPANY,
        direction: SortDirection = SortDirection.ASC,
    ) -> list[Worker]:
        empty = WorkerMetrics(days_present=0, work_time=0.0)

        def sort_value(w: Worker):
            m = metrics.get(w.id, empty)
            if key == SortKey.COMPANY:
                return (w.company, w.name)
            if key == SortKey.NAME:
                return w.name
            if key == SortKey.WORK_TIME:
                return m.work_time
            return m.days_present

        return sorted(workers, key=sort_value, reverse=direction == SortDirection.DESC)

    def work_duration_label(self, record: Optional[AttendanceRecord]) -> str:
        if not record or not record.check_in_time or not record.check_out_time:
            return "-"
        return f"{self._calculator.worked_hours(record):.1f}h"

    @staticmethod
    def timeline_bar(
        record: AttendanceRecord,
        *,
        tz=None,
        start_hour: int = TIMELINE_START_HOUR,
        end_hour: int = TIMELINE_END_HOUR,
    ) -> Optional[TimelineBar]:
        """Bar geometry for the day view. Missing check-out draws a one-hour bar."""
        start = parse_timestamp(record.check_in_time)
        if start is None:
            return None
        if tz is not None:
            start = start.astimezone(tz)
        start_h = start.hour + start.minute / 60

        end_h = start_h + 1
        end = parse_timestamp(record.check_out_time)
        if end is not None:
            if tz is not None:
                end = end.astimezone(tz)
            end_h = end.hour + end.minute / 60

        window = end_hour - start_hour
        clamped_start = max(start_hour, start_h)
        clamped_end = min(end_hour, end_h)
        return TimelineBar(
            left=(clamped_start - start_hour) / window * 100,
            width=max(clamped_end - clamped_start, 0) / window * 100,
        )

    @staticmethod
    def monthly_calendar(
        *,
        workers: Sequence[Worker],
        records: Sequence[AttendanceRecord],
        selected_date: str,
    ) -> dict[str, list[bool]]:
        """Per worker, one flag per day of the selected month (True = has a record).

        Unparseable dates give an empty mapping.
        """
        prefix = month_prefix(selected_date)
        try:
            year, month = int(prefix[:4]), int(prefix[5:7])
            days = calendar.monthrange(year, month)[1]
        except ValueError:
            return {}

        grid = {w.id: [False] * days for w in workers}
        for r in records:
            if r.worker_id not in grid or not r.date.startswith(prefix):
                continue
            try:
                day = int(r.date[8:10])
            except ValueError:
                continue
            if 1 <= day <= days:
                grid[r.worker_id][day - 1] = True
        return grid
