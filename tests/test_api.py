from __future__ import annotations

import io
from datetime import datetime, timezone

import pytest

from config import load_settings
from genba_attendance.container import build_container
from genba_attendance.main import create_app

NOW = datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)


class FakeNarrative:
    def generate_daily_records(self, workers, site, date):
        return []

    def generate_productivity_report(self, records, workers):
        return f"## {len(records)} 件"


class FakeTimer:
    created = []

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.cancelled = False
        FakeTimer.created.append(self)

    def start(self):
        pass

    def cancel(self):
        self.cancelled = True


@pytest.fixture()
def container():
    FakeTimer.created = []
    return build_container(
        settings=load_settings("testing"),
        narrative=FakeNarrative(),
        clock=lambda: NOW,
        timer_factory=FakeTimer,
    )


@pytest.fixture()
def client(container):
    app = create_app("testing", container=container)
    return app.test_client()


def test_state_defaults(client):
    body = client.get("/api/state").get_json()

    assert body["selected_date"] == "2024-05-01"
    assert body["view_mode"] == "DASHBOARD"
    assert body["current_user"]["id"] == "w2"
    assert body["records"] == []


def test_scan_known_and_unknown_code(client):
    ok = client.post("/api/scan", json={"code": "site-shibuya-a"})
    assert ok.status_code == 200
    assert ok.get_json()["site_id"] == "s1"

    unknown = client.post("/api/scan", json={"code": "nope"})
    assert unknown.status_code == 404
    assert unknown.get_json()["reason"] == "unrecognized_code"

    assert client.post("/api/scan", json={}).status_code == 400


def test_check_in_schedules_reset_and_view_change_cancels_it(client, container):
    client.post("/api/scan", json={"code": "site-shibuya-a"})

    body = client.post("/api/checkin").get_json()

    assert body["success"] is True
    assert body["record"]["worker_id"] == "w2"
    assert container.reset_scheduler.pending

    client.post("/api/view-mode", json={"mode": "analysis"})
    assert not container.reset_scheduler.pending
    assert FakeTimer.created[-1].cancelled


def test_scheduled_reset_returns_to_dashboard(client, container):
    client.post("/api/view-mode", json={"mode": "SCAN"})
    client.post("/api/scan", json={"code": "site-shibuya-a"})
    client.post("/api/checkin")

    FakeTimer.created[-1].function()

    state = client.get("/api/state").get_json()
    assert state["view_mode"] == "DASHBOARD"
    assert state["scanned_site"] is None


def test_check_out_without_open_record_is_ignored(client, container):
    client.post("/api/scan", json={"code": "site-shibuya-a"})

    body = client.post("/api/checkout").get_json()

    assert body["success"] is False
    assert body["reason"] == "no_open_record"
    assert not container.reset_scheduler.pending


def test_invalid_view_mode(client):
    res = client.post("/api/view-mode", json={"mode": "bogus"})

    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_upsert_record_accepts_hhmm(client):
    res = client.post(
        "/api/records",
        json={"worker_id": "w1", "date": "2024-05-01", "check_in_time": "08:00", "check_out_time": "17:30"},
    )

    record = res.get_json()["record"]
    assert record["check_in_time"].startswith("2024-05-01T08:00:00")
    assert record["check_out_time"].startswith("2024-05-01T17:30:00")
    assert record["site_id"] == "s1"


def test_upsert_record_validation(client):
    assert client.post("/api/records", json={"date": "2024-05-01"}).status_code == 400
    assert client.post("/api/records", json={"worker_id": "w1", "date": "2024-05-01", "status": "x"}).status_code == 400
    assert (
        client.post("/api/records", json={"worker_id": "w1", "date": "2024-05-01", "check_in_time": "25:99"}).status_code
        == 400
    )


def test_delete_missing_record(client):
    body = client.delete("/api/records/nonexistent").get_json()

    assert body["success"] is False
    assert body["reason"] == "not_found"


def test_export_csv(client):
    client.post(
        "/api/records",
        json={"worker_id": "w1", "date": "2024-05-01", "check_in_time": "08:00", "check_out_time": "17:00", "status": "CHECKED_OUT"},
    )

    res = client.get("/export.csv")

    assert res.status_code == 200
    assert res.mimetype == "text/csv"
    assert "genba_export_2024-05.csv" in res.headers["Content-Disposition"]
    text = res.data.decode("utf-8")
    assert text.startswith("\ufeff")
    assert text.endswith('"08:00","17:00","退場済"')


def test_summaries_and_worker_table(client):
    client.post(
        "/api/records",
        json={"worker_id": "w1", "date": "2024-05-01", "check_in_time": "08:00", "check_out_time": "17:00"},
    )

    companies = client.get("/api/summary/companies").get_json()["rows"]
    assert companies[0]["company"] == "山田建設"
    assert companies[0]["total_hours"] == 9.0

    sites = client.get("/api/summary/sites").get_json()["rows"]
    assert sites[0]["site_id"] == "s1"

    daily = client.get("/api/stats/daily").get_json()
    assert daily["daily_count"] == 1

    table = client.get("/api/workers/table?sort=workTime&direction=desc").get_json()["rows"]
    assert table[0]["worker_id"] == "w1"
    assert table[0]["duration_label"] == "9.0h"
    assert len(table[0]["month_days"]) == 31

    assert client.get("/api/workers/table?sort=bogus").status_code == 400


def test_filters_and_analysis(client):
    client.post("/api/filters", json={"company": "鈴木電設", "name": "次郎"})
    state = client.get("/api/state").get_json()
    assert state["filter_company"] == "鈴木電設"
    assert state["filter_name"] == "次郎"

    body = client.post("/api/analysis").get_json()
    assert body["ai_analysis"] == "## 0 件"

    assert client.delete("/api/analysis").get_json()["ai_analysis"] == ""


def test_selected_date_loads_month(client):
    body = client.post("/api/selected-date", json={"date": "2024-06-10"}).get_json()

    assert body["state"]["selected_date"] == "2024-06-10"
    assert body["added"] > 0
    assert all(r["date"].startswith("2024-06") for r in body["state"]["records"])


def test_site_qr_png(client):
    res = client.get("/api/sites/s1/qr.png")
    assert res.status_code == 200
    assert res.mimetype == "image/png"
    assert res.data.startswith(b"\x89PNG")

    assert client.get("/api/sites/nope/qr.png").status_code == 404


def test_scan_image_roundtrip(client):
    pytest.importorskip("pyzbar.pyzbar")
    png = client.get("/api/sites/s2/qr.png").data

    res = client.post(
        "/api/scan/image",
        data={"image": (io.BytesIO(png), "qr.png")},
        content_type="multipart/form-data",
    )

    assert res.status_code == 200
    assert res.get_json()["site_id"] == "s2"


def test_scan_image_requires_file(client):
    res = client.post("/api/scan/image", data={}, content_type="multipart/form-data")
    assert res.status_code == 400
