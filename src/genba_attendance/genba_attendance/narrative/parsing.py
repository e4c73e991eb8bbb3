from __future__ import annotations

import json
import logging
from typing import Iterable, Optional

from ..attendance.model import AttendanceRecord
from ..core.enums import AttendanceStatus
from ..sites.model import Site

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("workerId", "checkInTime", "checkOutTime")


def parse_daily_records(
    text: Optional[str],
    *,
    site: Site,
    date: str,
    id_prefix: str,
    known_worker_ids: Optional[Iterable[str]] = None,
) -> list[AttendanceRecord]:
    """Turn the model's JSON array into records.

    Non-JSON or non-array payloads give []; items that are not objects, miss a
    required string field, or name an unknown worker are dropped.
    """
    try:
        raw = json.loads(text or "[]")
    except (TypeError, ValueError):
        logger.warning("Generated daily records are not valid JSON, ignored")
        return []

    if not isinstance(raw, list):
        logger.warning("Generated daily records are not a JSON array, ignored")
        return []

    known = set(known_worker_ids) if known_worker_ids is not None else None
    records = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict) or not all(isinstance(item.get(k), str) and item.get(k) for k in REQUIRED_KEYS):
            logger.warning("Dropping malformed generated record at index %d", index)
            continue
        if known is not None and item["workerId"] not in known:
            logger.warning("Dropping generated record for unknown worker %r", item["workerId"])
            continue

        records.append(
            AttendanceRecord(
                id=f"{id_prefix}-{index}",
                worker_id=item["workerId"],
                site_id=site.id,
                date=date,
                check_in_time=item["checkInTime"],
                check_out_time=item["checkOutTime"],
                status=AttendanceStatus.CHECKED_OUT,
            )
        )
    return records
