from __future__ import annotations

import json
from typing import Sequence

from ..attendance.model import AttendanceRecord
from ..core.constants import DEFAULT_ANALYSIS_SAMPLE_LIMIT
from ..sites.model import Site
from ..workers.model import Worker

DAILY_RECORDS_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "workerId": {"type": "STRING"},
            "checkInTime": {"type": "STRING"},
            "checkOutTime": {"type": "STRING"},
        },
        "required": ["workerId", "checkInTime", "checkOutTime"],
    },
}


def daily_records_prompt(workers: Sequence[Worker], site: Site, date: str) -> str:
    roster = json.dumps([{"id": w.id, "role": w.occupation} for w in workers], ensure_ascii=False)
    return f"""
Generate realistic construction site attendance records for the date {date}.
Site: {site.name}.
Workers available: {roster}.

Rules:
- Randomly select about 80% of workers to be present.
- Start times should be around 07:30 to 08:30.
- End times should be around 17:00 to 18:00.
- Create a JSON array of records.
- Format dates as ISO strings.
"""


def enrich_records(records: Sequence[AttendanceRecord], workers: Sequence[Worker]) -> list[dict]:
    occupation_by_worker = {w.id: w.occupation for w in workers}
    return [
        {
            "date": r.date,
            "role": occupation_by_worker.get(r.worker_id),
            "start": r.check_in_time,
            "end": r.check_out_time,
        }
        for r in records
    ]


def productivity_report_prompt(
    records: Sequence[AttendanceRecord],
    workers: Sequence[Worker],
    *,
    sample_limit: int = DEFAULT_ANALYSIS_SAMPLE_LIMIT,
) -> str:
    sample = enrich_records(records, workers)[:sample_limit]
    return f"""
You are a veteran construction site manager. Analyze the following attendance data.
Data: {json.dumps(sample, ensure_ascii=False)} (truncated for brevity)

Please provide a concise summary in Japanese (Markdown format) covering:
1. Overall attendance trends.
2. Observations on work hours.
3. Resource distribution by role.
4. A safety or efficiency tip based on the data.

Keep the tone professional but encouraging.
"""
