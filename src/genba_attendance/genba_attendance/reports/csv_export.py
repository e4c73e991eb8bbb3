from __future__ import annotations

import csv
import io
from datetime import timezone, tzinfo
from typing import Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import format_hhmm, month_prefix
from ..core.constants import CSV_HEADERS, CSV_STATUS_LEFT, CSV_STATUS_WORKING
from ..core.enums import AttendanceStatus
from ..sites.model import Site
from ..workers.model import Worker
from .service import filter_records, filter_workers


def status_label(status: AttendanceStatus) -> str:
    return CSV_STATUS_WORKING if status == AttendanceStatus.CHECKED_IN else CSV_STATUS_LEFT


def export_filename(selected_date: str) -> str:
    return f"genba_export_{month_prefix(selected_date)}.csv"


def build_csv_rows(
    *,
    records: Sequence[AttendanceRecord],
    workers: Sequence[Worker],
    sites: Sequence[Site],
    selected_date: str,
    site_id: str = "",
    company: str = "",
    name: str = "",
    tz: tzinfo = timezone.utc,
) -> list[list[str]]:
    """Project the selected month's records (current filters applied) to CSV rows, date ascending."""
    prefix = month_prefix(selected_date)
    worker_ids = {w.id for w in filter_workers(workers, company=company, name=name)}
    workers_by_id = {w.id: w for w in workers}
    sites_by_id = {s.id: s for s in sites}

    export = [
        r for r in filter_records(records, site_id=site_id) if r.date.startswith(prefix) and r.worker_id in worker_ids
    ]
    export.sort(key=lambda r: r.date)

    rows = []
    for r in export:
        worker = workers_by_id.get(r.worker_id)
        site = sites_by_id.get(r.site_id)
        rows.append(
            [
                r.date,
                site.name if site else "",
                worker.company if worker else "",
                worker.name if worker else "",
                worker.occupation if worker else "",
                format_hhmm(r.check_in_time, tz),
                format_hhmm(r.check_out_time, tz),
                status_label(r.status),
            ]
        )
    return rows


def render_csv(rows: Sequence[Sequence[str]]) -> str:
    """UTF-8 text with BOM, every field double-quoted."""
    out = io.StringIO()
    # header stays unquoted
    out.write(",".join(CSV_HEADERS) + "\n")
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(rows)
    return "\ufeff" + out.getvalue().rstrip("\n")
