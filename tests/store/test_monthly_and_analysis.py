from __future__ import annotations

import random
from datetime import datetime, timezone

from genba_attendance.attendance.memory_repository import InMemoryAttendanceRepository
from genba_attendance.attendance.model import AttendanceRecord
from genba_attendance.core.constants import ANALYSIS_FAILURE_MESSAGE
from genba_attendance.core.enums import AttendanceStatus
from genba_attendance.seed.demo_data import DEMO_SITES, DEMO_WORKERS
from genba_attendance.store.service import AttendanceStore


class FakeNarrative:
    def __init__(self, *, daily=(), report="## レポート", fail=False):
        self.daily = list(daily)
        self.report = report
        self.fail = fail
        self.daily_calls = []
        self.report_calls = []
        self.analyzing_seen = None
        self.store = None

    def generate_daily_records(self, workers, site, date):
        self.daily_calls.append((site.id, date))
        return list(self.daily)

    def generate_productivity_report(self, records, workers):
        self.report_calls.append(list(records))
        if self.store is not None:
            self.analyzing_seen = self.store.ui.is_analyzing
        if self.fail:
            raise RuntimeError("boom")
        return self.report


def make_store(narrative, *, records=(), sites=DEMO_SITES, selected_date="2024-05-15"):
    return AttendanceStore(
        workers=DEMO_WORKERS,
        sites=sites,
        records=InMemoryAttendanceRepository(records),
        narrative=narrative,
        current_user_id="w2",
        selected_date=selected_date,
        clock=lambda: datetime(2024, 5, 15, 9, 0, tzinfo=timezone.utc),
        rng=random.Random(42),
    )


def record(id, date, worker_id="w1"):
    return AttendanceRecord(
        id=id,
        worker_id=worker_id,
        site_id="s1",
        date=date,
        check_in_time=f"{date}T08:00:00Z",
        check_out_time=f"{date}T17:00:00Z",
        status=AttendanceStatus.CHECKED_OUT,
    )


def test_load_monthly_data_fills_month_except_target_day():
    generated = record("gen-1-0", "2024-05-15", worker_id="w3")
    narrative = FakeNarrative(daily=[generated])
    store = make_store(narrative)

    added = store.load_monthly_data("2024-05-15")

    assert added == len(store.records)
    assert narrative.daily_calls == [("s1", "2024-05-15")]
    assert all(r.date.startswith("2024-05") for r in store.records)
    assert [r for r in store.records if r.date == "2024-05-15"] == [generated]
    assert any(r.id.startswith("static-") for r in store.records)


def test_load_monthly_data_runs_once_per_month():
    narrative = FakeNarrative()
    store = make_store(narrative)
    store.load_monthly_data("2024-05-15")
    count = len(store.records)

    again = store.load_monthly_data("2024-05-20")

    assert again == 0
    assert len(store.records) == count
    assert len(narrative.daily_calls) == 1


def test_load_monthly_data_skips_month_with_manual_record():
    narrative = FakeNarrative()
    store = make_store(narrative, records=[record("r1", "2024-05-03")])

    assert store.load_monthly_data("2024-05-15") == 0
    assert narrative.daily_calls == []


def test_load_monthly_data_without_sites_is_noop():
    narrative = FakeNarrative()
    store = make_store(narrative, sites=())

    assert store.load_monthly_data("2024-05-15") == 0
    assert store.records == ()


def test_load_monthly_data_bad_date_is_noop():
    narrative = FakeNarrative()
    store = make_store(narrative)

    assert store.load_monthly_data("not-a-date") == 0
    assert store.records == ()


def test_run_ai_analysis_uses_selected_month_only():
    narrative = FakeNarrative(report="## 今月の傾向")
    store = make_store(narrative, records=[record("a", "2024-05-02"), record("b", "2024-04-30")])
    narrative.store = store

    text = store.run_ai_analysis()

    assert text == "## 今月の傾向"
    assert store.ui.ai_analysis == "## 今月の傾向"
    assert [r.id for r in narrative.report_calls[0]] == ["a"]
    assert narrative.analyzing_seen is True
    assert store.ui.is_analyzing is False


def test_run_ai_analysis_failure_sets_fallback_message():
    narrative = FakeNarrative(fail=True)
    store = make_store(narrative)

    text = store.run_ai_analysis()

    assert text == ANALYSIS_FAILURE_MESSAGE
    assert store.ui.ai_analysis == ANALYSIS_FAILURE_MESSAGE
    assert store.ui.is_analyzing is False


def test_snapshot_lists_companies_in_first_seen_order():
    store = make_store(FakeNarrative())

    snap = store.snapshot().to_dict()

    assert snap["companies"][0] == DEMO_WORKERS[0].company
    assert len(snap["companies"]) == len({w.company for w in DEMO_WORKERS})
    assert snap["scan_state"] == "NO_SITE_SCANNED"
    assert snap["current_user"]["id"] == "w2"


def test_load_monthly_data_normalises_unpadded_date():
    narrative = FakeNarrative(daily=[record("gen-1-0", "2024-05-15", worker_id="w3")])
    store = make_store(narrative)

    store.load_monthly_data("2024-5-15")

    assert narrative.daily_calls == [("s1", "2024-05-15")]
    assert [r.id for r in store.records if r.date == "2024-05-15"] == ["gen-1-0"]
    assert all(r.date.startswith("2024-05-") for r in store.records)
