from __future__ import annotations

from flask import Flask, jsonify, send_file

from ..common.http import json_endpoint
from ..container import Container
from .qr import render_site_qr_png


def register(app: Flask, container: Container) -> None:
    store = container.store

    @app.route("/api/sites/<site_id>/qr.png", methods=["GET"], endpoint="site_qr_image")
    @json_endpoint
    def site_qr_image(site_id: str):
        """Printable QR code for a site's check-in token."""
        site = store.get_site(site_id)
        if site is None:
            return jsonify({"success": False, "message": "現場が見つかりません"}), 404
        return send_file(render_site_qr_png(site), mimetype="image/png")
