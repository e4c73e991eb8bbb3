from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body, json_endpoint
from ..core.enums import ViewMode
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    store = container.store
    scheduler = container.reset_scheduler

    def _state():
        return jsonify(store.snapshot().to_dict())

    @app.route("/api/state", methods=["GET"], endpoint="api_state")
    @json_endpoint
    def api_state():
        return _state()

    @app.route("/api/view-mode", methods=["POST"], endpoint="api_view_mode")
    @json_endpoint
    def api_view_mode():
        raw = str(json_body().get("mode", "")).strip().upper()
        try:
            mode = ViewMode(raw)
        except ValueError:
            raise ValidationError(f"表示モードが不正です: {raw!r}")

        scheduler.cancel()
        store.set_view_mode(mode)
        return _state()

    @app.route("/api/selected-date", methods=["POST"], endpoint="api_selected_date")
    @json_endpoint
    def api_selected_date():
        value = str(json_body().get("date", "")).strip()
        store.set_selected_date(value)
        # the dashboard loads the month whenever the date changes
        added = store.load_monthly_data(value)
        return jsonify({"success": True, "added": added, "state": store.snapshot().to_dict()})

    @app.route("/api/filters", methods=["POST"], endpoint="api_filters")
    @json_endpoint
    def api_filters():
        data = json_body()
        if "site_id" in data:
            store.set_filter_site_id(str(data["site_id"] or ""))
        if "company" in data:
            store.set_filter_company(str(data["company"] or ""))
        if "name" in data:
            store.set_filter_name(str(data["name"] or ""))
        return _state()

    @app.route("/api/monthly-data", methods=["POST"], endpoint="api_monthly_data")
    @json_endpoint
    def api_monthly_data():
        value = str(json_body().get("date") or store.ui.selected_date)
        parse_iso_date(value)
        added = store.load_monthly_data(value)
        return jsonify({"success": True, "added": added})

    @app.route("/api/analysis", methods=["POST"], endpoint="api_analysis_run")
    @json_endpoint
    def api_analysis_run():
        text = store.run_ai_analysis()
        return jsonify({"success": True, "ai_analysis": text})

    @app.route("/api/analysis", methods=["DELETE"], endpoint="api_analysis_clear")
    @json_endpoint
    def api_analysis_clear():
        store.set_ai_analysis("")
        return jsonify({"success": True, "ai_analysis": ""})
