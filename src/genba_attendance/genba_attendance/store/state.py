from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..core.enums import IgnoredReason, ScanState, ViewMode
from ..sites.model import Site
from ..workers.model import Worker


@dataclass
class UiState:
    """Mutable UI/filter selections held by the store."""

    selected_date: str
    view_mode: ViewMode = ViewMode.DASHBOARD
    scanned_site: Optional[Site] = None
    last_action_message: Optional[str] = None
    filter_site_id: str = ""
    filter_company: str = ""
    filter_name: str = ""
    ai_analysis: str = ""
    is_analyzing: bool = False


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a store mutation: `ok`, or ignored with a reason.

    `reset_requested` tells the presentation layer to schedule the post-scan
    reset (view back to DASHBOARD, scanned site cleared).
    """

    ok: bool
    reason: Optional[IgnoredReason] = None
    record: Optional[AttendanceRecord] = None
    reset_requested: bool = False
    message: Optional[str] = None

    @classmethod
    def done(cls, record: Optional[AttendanceRecord] = None, *, reset_requested: bool = False, message: Optional[str] = None):
        return cls(ok=True, record=record, reset_requested=reset_requested, message=message)

    @classmethod
    def ignored(cls, reason: IgnoredReason):
        return cls(ok=False, reason=reason)

    def to_dict(self) -> dict:
        return {
            "success": self.ok,
            "reason": self.reason.value if self.reason else None,
            "record": self.record.to_dict() if self.record else None,
            "message": self.message,
        }


@dataclass(frozen=True)
class StoreSnapshot:
    """Read-only view of every store field for the presentation layer."""

    workers: tuple[Worker, ...]
    sites: tuple[Site, ...]
    records: tuple[AttendanceRecord, ...]
    current_user: Optional[Worker]
    view_mode: ViewMode
    scanned_site: Optional[Site]
    scan_state: ScanState
    selected_date: str
    last_action_message: Optional[str]
    filter_site_id: str
    filter_company: str
    filter_name: str
    ai_analysis: str
    is_analyzing: bool
    companies: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        def site_dict(s: Optional[Site]):
            if s is None:
                return None
            return {"id": s.id, "name": s.name, "address": s.address, "qr_code_value": s.qr_code_value}

        def worker_dict(w: Optional[Worker]):
            if w is None:
                return None
            return {
                "id": w.id,
                "name": w.name,
                "company": w.company,
                "occupation": w.occupation,
                "avatar_url": w.avatar_url,
            }

        return {
            "workers": [worker_dict(w) for w in self.workers],
            "sites": [site_dict(s) for s in self.sites],
            "records": [r.to_dict() for r in self.records],
            "current_user": worker_dict(self.current_user),
            "view_mode": self.view_mode.value,
            "scanned_site": site_dict(self.scanned_site),
            "scan_state": self.scan_state.value,
            "selected_date": self.selected_date,
            "last_action_message": self.last_action_message,
            "filter_site_id": self.filter_site_id,
            "filter_company": self.filter_company,
            "filter_name": self.filter_name,
            "ai_analysis": self.ai_analysis,
            "is_analyzing": self.is_analyzing,
            "companies": list(self.companies),
        }
