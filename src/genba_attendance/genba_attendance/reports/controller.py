from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_endpoint
from ..core.enums import SortDirection, SortKey
from ..core.exceptions import ValidationError
from ..container import Container
from .csv_export import build_csv_rows, export_filename, render_csv
from .service import filter_records, filter_workers


def register(app: Flask, container: Container) -> None:
    store = container.store
    reports = container.report_service

    @app.route("/api/summary/companies", methods=["GET"], endpoint="api_company_summary")
    @json_endpoint
    def api_company_summary():
        ui = store.ui
        rows = reports.company_summary(
            records=store.records,
            workers=store.workers,
            selected_date=ui.selected_date,
            site_id=ui.filter_site_id,
        )
        return jsonify({"month": ui.selected_date[:7], "rows": [r.to_dict() for r in rows]})

    @app.route("/api/summary/sites", methods=["GET"], endpoint="api_site_summary")
    @json_endpoint
    def api_site_summary():
        ui = store.ui
        rows = reports.site_summary(
            records=store.records,
            workers=store.workers,
            sites=store.sites,
            selected_date=ui.selected_date,
            company=ui.filter_company,
        )
        return jsonify({"month": ui.selected_date[:7], "rows": [r.to_dict() for r in rows]})

    @app.route("/api/stats/daily", methods=["GET"], endpoint="api_daily_stats")
    @json_endpoint
    def api_daily_stats():
        ui = store.ui
        records = store.records
        stats = reports.daily_site_stats(
            records=records,
            sites=store.sites,
            selected_date=ui.selected_date,
            site_id=ui.filter_site_id,
        )
        return jsonify(
            {
                "date": ui.selected_date,
                "daily_count": reports.daily_count(
                    records=records, selected_date=ui.selected_date, site_id=ui.filter_site_id
                ),
                "sites": [s.to_dict() for s in stats],
            }
        )

    @app.route("/api/workers/table", methods=["GET"], endpoint="api_worker_table")
    @json_endpoint
    def api_worker_table():
        """Rows for the attendance table: filtered workers, sorted, with day/month metrics."""
        try:
            key = SortKey(request.args.get("sort", SortKey.COMPANY.value))
            direction = SortDirection(request.args.get("direction", SortDirection.ASC.value))
        except ValueError:
            raise ValidationError("並び替え条件が不正です")

        ui = store.ui
        workers = filter_workers(store.workers, company=ui.filter_company, name=ui.filter_name)
        records = filter_records(store.records, site_id=ui.filter_site_id)
        metrics = reports.worker_metrics(workers=workers, records=records, selected_date=ui.selected_date, now=store.now())
        calendar_grid = reports.monthly_calendar(workers=workers, records=records, selected_date=ui.selected_date)
        todays = {}
        for r in records:
            if r.date == ui.selected_date:
                todays.setdefault(r.worker_id, r)

        rows = []
        for w in reports.sort_workers(workers, metrics, key=key, direction=direction):
            record = todays.get(w.id)
            bar = reports.timeline_bar(record, tz=store.tz) if record else None
            rows.append(
                {
                    "worker_id": w.id,
                    "name": w.name,
                    "company": w.company,
                    "occupation": w.occupation,
                    "avatar_url": w.avatar_url,
                    "days_present": metrics[w.id].days_present,
                    "work_time": metrics[w.id].work_time,
                    "duration_label": reports.work_duration_label(record),
                    "record": record.to_dict() if record else None,
                    "timeline": {"left": bar.left, "width": bar.width} if bar else None,
                    "month_days": calendar_grid.get(w.id, []),
                }
            )
        return jsonify({"date": ui.selected_date, "rows": rows})

    @app.route("/export.csv", methods=["GET"], endpoint="export_csv")
    @json_endpoint
    def export_csv():
        ui = store.ui
        rows = build_csv_rows(
            records=store.records,
            workers=store.workers,
            sites=store.sites,
            selected_date=ui.selected_date,
            site_id=ui.filter_site_id,
            company=ui.filter_company,
            name=ui.filter_name,
            tz=store.tz,
        )
        csv_bytes = render_csv(rows).encode("utf-8")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={export_filename(ui.selected_date)}"},
        )
