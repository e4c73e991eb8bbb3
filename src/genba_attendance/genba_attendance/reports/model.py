from __future__ import annotations

from dataclasses import asdict, dataclass

from ..sites.model import Site


@dataclass(frozen=True)
class CompanySummaryRow:
    """Read-model: monthly totals for one company."""

    company: str
    worker_count: int
    total_man_days: int
    total_hours: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SiteSummaryRow:
    """Read-model: monthly totals for one site."""

    site_id: str
    site_name: str
    address: str
    unique_worker_count: int
    total_man_days: int
    total_hours: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DailySiteStats:
    site: Site
    attendees: int
    total_hours: float

    def to_dict(self) -> dict:
        return {
            "site_id": self.site.id,
            "site_name": self.site.name,
            "attendees": self.attendees,
            "total_hours": self.total_hours,
        }


@dataclass(frozen=True)
class WorkerMetrics:
    days_present: int
    work_time: float


@dataclass(frozen=True)
class TimelineBar:
    """Position of a record on the day-view timeline, in percent of the window."""

    left: float
    width: float
