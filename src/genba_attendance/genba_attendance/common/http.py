from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request

from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def json_endpoint(view):
    """ValidationError -> 400 JSON, anything unexpected -> 500 JSON."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return jsonify({"success": False, "message": "システムエラーが発生しました"}), 500

    return wrapper
