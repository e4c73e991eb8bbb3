from __future__ import annotations

from collections import Counter
from typing import Protocol, Sequence

from ..attendance.model import AttendanceRecord
from ..core.constants import ANALYSIS_EMPTY_MESSAGE
from ..reports.calculator.standard_calculator import StandardDurationCalculator
from ..sites.model import Site
from ..workers.model import Worker


class NarrativeService(Protocol):
    """Generative collaborator. Implementations never raise to the caller."""

    def generate_daily_records(self, workers: Sequence[Worker], site: Site, date: str) -> list[AttendanceRecord]:
        """One day of plausible check-in/out pairs; [] on any failure."""

        raise NotImplementedError

    def generate_productivity_report(self, records: Sequence[AttendanceRecord], workers: Sequence[Worker]) -> str:
        """Markdown report in Japanese; a fixed fallback string on failure."""

        raise NotImplementedError


class OfflineNarrativeService:
    """Used when no API key is configured: no generated days, a locally computed report."""

    def __init__(self):
        self._calculator = StandardDurationCalculator()

    def generate_daily_records(self, workers: Sequence[Worker], site: Site, date: str) -> list[AttendanceRecord]:
        return []

    def generate_productivity_report(self, records: Sequence[AttendanceRecord], workers: Sequence[Worker]) -> str:
        if not records:
            return ANALYSIS_EMPTY_MESSAGE

        occupation_by_worker = {w.id: w.occupation for w in workers}
        total_hours = sum(self._calculator.worked_hours(r) for r in records)
        days = {r.date for r in records}
        roles = Counter(occupation_by_worker.get(r.worker_id, "不明") for r in records)

        lines = [
            "## 勤怠サマリー",
            "",
            f"- 延べ人工: {len(records)} 人日 ({len(days)} 日間)",
            f"- 合計作業時間: {total_hours:.1f} 時間",
            f"- 1人日あたり平均: {total_hours / len(records):.1f} 時間",
            "",
            "### 職種別人工",
        ]
        lines.extend(f"- {role}: {count} 人日" for role, count in roles.most_common())
        return "\n".join(lines)
