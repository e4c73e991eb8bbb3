from __future__ import annotations

import re

from flask import Flask, jsonify, request

from ..common.datetime_utils import time_on_date
from ..common.http import json_body, json_endpoint
from ..common.validators import require_non_empty
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..container import Container
from ..sites.qr import decode_qr_image

HHMM = re.compile(r"\d{1,2}:\d{2}")


def register(app: Flask, container: Container) -> None:
    store = container.store
    scheduler = container.reset_scheduler
    resolver = container.site_resolver

    def _scan(code: str):
        if not code:
            return jsonify({"success": False, "message": "QRコードが空です"}), 400

        site = resolver.resolve(code, store.sites)
        if site is None:
            return jsonify({"success": False, "reason": "unrecognized_code", "message": "認識できないQRコードです"}), 404

        scheduler.cancel()
        store.set_scanned_site(site)
        return jsonify({"success": True, "site_id": site.id, "site_name": site.name}), 200

    def _timestamp_field(work_date: str, value):
        # edit form sends HH:MM, other clients send full ISO timestamps
        if isinstance(value, str) and HHMM.fullmatch(value.strip()):
            return time_on_date(work_date, value, store.tz)
        return value or None

    def _transition_response(result):
        if result.reset_requested:
            scheduler.schedule()
        return jsonify(result.to_dict()), 200

    @app.route("/api/scan", methods=["POST"], endpoint="api_scan")
    @json_endpoint
    def api_scan():
        """Resolve a scanned QR payload to a site and open the check-in/out modal."""
        return _scan(str(json_body().get("code", "")).strip())

    @app.route("/api/scan/image", methods=["POST"], endpoint="api_scan_image")
    @json_endpoint
    def api_scan_image():
        """Accept an uploaded photo, decode the QR code, then resolve it like /api/scan."""
        if "image" not in request.files:
            return jsonify({"success": False, "message": "画像ファイルがありません"}), 400

        code = decode_qr_image(request.files["image"].stream)
        if not code:
            return jsonify({"success": False, "message": "画像からQRコードを検出できませんでした"}), 400
        return _scan(code)

    @app.route("/api/scan", methods=["DELETE"], endpoint="api_scan_clear")
    @json_endpoint
    def api_scan_clear():
        scheduler.cancel()
        store.set_scanned_site(None)
        return jsonify({"success": True})

    @app.route("/api/checkin", methods=["POST"], endpoint="api_checkin")
    @json_endpoint
    def api_checkin():
        scheduler.cancel()
        return _transition_response(store.check_in())

    @app.route("/api/checkout", methods=["POST"], endpoint="api_checkout")
    @json_endpoint
    def api_checkout():
        scheduler.cancel()
        return _transition_response(store.check_out())

    @app.route("/api/records", methods=["POST"], endpoint="api_records_upsert")
    @json_endpoint
    def api_records_upsert():
        data = json_body()
        worker_id = require_non_empty(str(data.get("worker_id") or ""), "worker_id")
        date = require_non_empty(str(data.get("date") or ""), "date")

        fields = {}
        if "site_id" in data:
            fields["site_id"] = data["site_id"]
        for key in ("check_in_time", "check_out_time"):
            if key in data:
                fields[key] = _timestamp_field(date, data[key])
        if "status" in data:
            try:
                fields["status"] = AttendanceStatus(str(data["status"]))
            except ValueError:
                raise ValidationError(f"状態が不正です: {data['status']!r}")

        result = store.upsert_record(
            worker_id=worker_id,
            date=date,
            record_id=data.get("id") or None,
            **fields,
        )
        return jsonify(result.to_dict()), 200

    @app.route("/api/records/<record_id>", methods=["DELETE"], endpoint="api_records_delete")
    @json_endpoint
    def api_records_delete(record_id: str):
        return jsonify(store.delete_record(record_id).to_dict()), 200
