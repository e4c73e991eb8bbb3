from __future__ import annotations

from datetime import datetime, timezone

import pytest

from genba_attendance.attendance.model import AttendanceRecord
from genba_attendance.core.enums import AttendanceStatus, SortDirection, SortKey
from genba_attendance.reports.service import SummaryReportService, filter_workers, unique_companies
from genba_attendance.sites.model import Site
from genba_attendance.workers.model import Worker

WORKERS = [
    Worker(id="w1", name="佐藤 健太", company="A", occupation="大工"),
    Worker(id="w2", name="鈴木 一郎", company="B", occupation="鳶"),
]
SITES = [
    Site(id="s1", name="現場1", address="東京都", qr_code_value="site-1"),
    Site(id="s2", name="現場2", address="東京都", qr_code_value="site-2"),
]


def rec(id, worker_id, date, check_in, check_out, site_id="s1"):
    return AttendanceRecord(
        id=id,
        worker_id=worker_id,
        site_id=site_id,
        date=date,
        check_in_time=check_in,
        check_out_time=check_out,
        status=AttendanceStatus.CHECKED_OUT if check_out else AttendanceStatus.CHECKED_IN,
    )


def test_company_summary_orders_by_hours():
    records = [rec("r1", "w1", "2024-05-01", "2024-05-01T08:00:00Z", "2024-05-01T17:00:00Z")]

    rows = SummaryReportService().company_summary(records=records, workers=WORKERS, selected_date="2024-05-10")

    assert [(r.company, r.worker_count, r.total_man_days, r.total_hours) for r in rows] == [
        ("A", 1, 1, 9.0),
        ("B", 1, 0, 0),
    ]


def test_company_summary_ignores_other_months_and_sites():
    records = [
        rec("r1", "w1", "2024-04-30", "2024-04-30T08:00:00Z", "2024-04-30T17:00:00Z"),
        rec("r2", "w1", "2024-05-02", "2024-05-02T08:00:00Z", "2024-05-02T12:00:00Z", site_id="s2"),
    ]

    rows = SummaryReportService().company_summary(
        records=records, workers=WORKERS, selected_date="2024-05-10", site_id="s1"
    )

    assert all(r.total_man_days == 0 for r in rows)


def test_open_record_counts_as_man_day_with_zero_hours():
    records = [rec("r1", "w2", "2024-05-01", "2024-05-01T08:00:00Z", None)]

    rows = SummaryReportService().company_summary(records=records, workers=WORKERS, selected_date="2024-05-01")

    b = next(r for r in rows if r.company == "B")
    assert b.total_man_days == 1
    assert b.total_hours == 0


def test_site_summary_counts_unique_workers_and_filters_company():
    records = [
        rec("r1", "w1", "2024-05-01", "2024-05-01T08:00:00Z", "2024-05-01T10:00:00Z"),
        rec("r2", "w1", "2024-05-02", "2024-05-02T08:00:00Z", "2024-05-02T10:00:00Z"),
        rec("r3", "w2", "2024-05-02", "2024-05-02T08:00:00Z", "2024-05-02T09:00:00Z", site_id="s2"),
    ]
    service = SummaryReportService()

    rows = service.site_summary(records=records, workers=WORKERS, sites=SITES, selected_date="2024-05-20")
    assert [(r.site_id, r.unique_worker_count, r.total_man_days, r.total_hours) for r in rows] == [
        ("s1", 1, 2, 4.0),
        ("s2", 1, 1, 1.0),
    ]

    only_b = service.site_summary(records=records, workers=WORKERS, sites=SITES, selected_date="2024-05-20", company="B")
    assert [(r.site_id, r.total_man_days) for r in only_b] == [("s2", 1), ("s1", 0)]


def test_daily_site_stats_and_count():
    records = [
        rec("r1", "w1", "2024-05-01", "2024-05-01T08:00:00Z", "2024-05-01T17:00:00Z"),
        rec("r2", "w2", "2024-05-01", "2024-05-01T08:00:00Z", None, site_id="s2"),
        rec("r3", "w2", "2024-05-02", "2024-05-02T08:00:00Z", None),
    ]
    service = SummaryReportService()

    stats = service.daily_site_stats(records=records, sites=SITES, selected_date="2024-05-01")

    assert [(s.site.id, s.attendees, s.total_hours) for s in stats] == [("s1", 1, 9.0), ("s2", 1, 0)]
    assert service.daily_count(records=records, selected_date="2024-05-01") == 2
    assert service.daily_count(records=records, selected_date="2024-05-01", site_id="s2") == 1


def test_worker_metrics_measures_open_record_until_now():
    records = [
        rec("r1", "w1", "2024-05-01", "2024-05-01T08:00:00Z", None),
        rec("r2", "w1", "2024-04-30", "2024-04-30T08:00:00Z", "2024-04-30T17:00:00Z"),
    ]
    now = datetime(2024, 5, 1, 11, 30, tzinfo=timezone.utc)

    metrics = SummaryReportService().worker_metrics(
        workers=WORKERS, records=records, selected_date="2024-05-01", now=now
    )

    assert metrics["w1"].days_present == 1
    assert metrics["w1"].work_time == pytest.approx(3.5)
    assert metrics["w2"].work_time == 0


def test_sort_workers_by_work_time_desc():
    service = SummaryReportService()
    metrics = service.worker_metrics(
        workers=WORKERS,
        records=[rec("r1", "w2", "2024-05-01", "2024-05-01T08:00:00Z", "2024-05-01T10:00:00Z")],
        selected_date="2024-05-01",
        now=datetime(2024, 5, 1, 12, tzinfo=timezone.utc),
    )

    ordered = service.sort_workers(WORKERS, metrics, key=SortKey.WORK_TIME, direction=SortDirection.DESC)

    assert [w.id for w in ordered] == ["w2", "w1"]
    assert [w.id for w in service.sort_workers(WORKERS, metrics)] == ["w1", "w2"]


def test_work_duration_label():
    service = SummaryReportService()

    assert service.work_duration_label(None) == "-"
    assert service.work_duration_label(rec("r", "w1", "2024-05-01", "2024-05-01T08:00:00Z", None)) == "-"
    assert service.work_duration_label(
        rec("r", "w1", "2024-05-01", "2024-05-01T08:00:00Z", "2024-05-01T16:30:00Z")
    ) == "8.5h"


def test_timeline_bar_positions_inside_window():
    bar = SummaryReportService.timeline_bar(
        rec("r", "w1", "2024-05-01", "2024-05-01T08:00:00Z", "2024-05-01T17:00:00Z")
    )

    assert bar.left == pytest.approx(200 / 14)
    assert bar.width == pytest.approx(900 / 14)


def test_timeline_bar_open_record_draws_one_hour_and_clamps():
    open_bar = SummaryReportService.timeline_bar(rec("r", "w1", "2024-05-01", "2024-05-01T10:00:00Z", None))
    assert open_bar.width == pytest.approx(100 / 14)

    late = SummaryReportService.timeline_bar(
        rec("r", "w1", "2024-05-01", "2024-05-01T05:00:00Z", "2024-05-01T21:00:00Z")
    )
    assert late.left == 0
    assert late.width == pytest.approx(100)

    assert SummaryReportService.timeline_bar(rec("r", "w1", "2024-05-01", "", None)) is None


def test_monthly_calendar_marks_days_with_records():
    records = [rec("r1", "w1", "2024-02-29", "2024-02-29T08:00:00Z", None)]

    grid = SummaryReportService.monthly_calendar(workers=WORKERS, records=records, selected_date="2024-02-10")

    assert len(grid["w1"]) == 29
    assert grid["w1"][28] is True
    assert sum(grid["w1"]) == 1
    assert not any(grid["w2"])
    assert SummaryReportService.monthly_calendar(workers=WORKERS, records=records, selected_date="bad") == {}


def test_filters_and_companies():
    assert [w.id for w in filter_workers(WORKERS, company="A")] == ["w1"]
    assert [w.id for w in filter_workers(WORKERS, name="鈴木")] == ["w2"]
    assert filter_workers(WORKERS, company="A", name="鈴木") == []
    assert unique_companies(WORKERS + WORKERS) == ["A", "B"]
