from __future__ import annotations

import dataclasses
import logging
import random
from datetime import datetime, timezone, tzinfo
from typing import Callable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_prefix, now_utc, parse_iso_date, to_iso
from ..common.validators import require_chronological
from ..core.constants import ANALYSIS_FAILURE_MESSAGE, UNKNOWN_SITE_ID
from ..core.enums import AttendanceStatus, IgnoredReason, ScanState, ViewMode
from ..core.exceptions import ValidationError
from ..narrative.service import NarrativeService
from ..reports.service import unique_companies
from ..seed.generator import generate_static_month
from ..sites.model import Site
from ..workers.model import Worker
from .state import StoreSnapshot, TransitionResult, UiState

logger = logging.getLogger(__name__)

_UNSET = object()


class AttendanceStore:
    """Single source of truth for the dashboard.

    Holds the worker/site roster, the record collection and the UI/filter
    selections. Every mutation goes through a method here; none of them
    raise. Guards that are not met turn the call into a no-op reported via
    `TransitionResult`.
    """

    def __init__(
        self,
        *,
        workers: Sequence[Worker],
        sites: Sequence[Site],
        records: AttendanceRepository,
        narrative: NarrativeService,
        current_user_id: Optional[str] = None,
        selected_date: Optional[str] = None,
        clock: Callable[[], datetime] = now_utc,
        rng: Optional[random.Random] = None,
        tz: tzinfo = timezone.utc,
    ):
        self._workers = tuple(workers)
        self._sites = tuple(sites)
        self._records = records
        self._narrative = narrative
        self._clock = clock
        self._rng = rng or random.Random()
        self._tz = tz
        self._current_user = next((w for w in self._workers if w.id == current_user_id), None)
        self._ui = UiState(selected_date=selected_date or clock().astimezone(tz).strftime("%Y-%m-%d"))
        self._last_transition: Optional[ScanState] = None

    # ----- reads -----

    @property
    def workers(self) -> tuple[Worker, ...]:
        return self._workers

    @property
    def sites(self) -> tuple[Site, ...]:
        return self._sites

    @property
    def records(self) -> Sequence[AttendanceRecord]:
        return self._records.list_all()

    @property
    def current_user(self) -> Optional[Worker]:
        return self._current_user

    @property
    def ui(self) -> UiState:
        return self._ui

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def now(self) -> datetime:
        return self._clock()

    def get_site(self, site_id: str) -> Optional[Site]:
        return next((s for s in self._sites if s.id == site_id), None)

    def find_open_record(self, worker_id: str, date: str) -> Optional[AttendanceRecord]:
        return self._records.find_first(lambda r: r.worker_id == worker_id and r.date == date and r.is_open)

    def records_for_month(self, prefix: str) -> list[AttendanceRecord]:
        return [r for r in self._records.list_all() if r.date.startswith(prefix)]

    def scan_state(self) -> ScanState:
        if self._ui.scanned_site is None:
            return ScanState.NO_SITE_SCANNED
        return self._last_transition or ScanState.SITE_SCANNED

    def snapshot(self) -> StoreSnapshot:
        ui = self._ui
        return StoreSnapshot(
            workers=self._workers,
            sites=self._sites,
            records=tuple(self._records.list_all()),
            current_user=self._current_user,
            view_mode=ui.view_mode,
            scanned_site=ui.scanned_site,
            scan_state=self.scan_state(),
            selected_date=ui.selected_date,
            last_action_message=ui.last_action_message,
            filter_site_id=ui.filter_site_id,
            filter_company=ui.filter_company,
            filter_name=ui.filter_name,
            ai_analysis=ui.ai_analysis,
            is_analyzing=ui.is_analyzing,
            companies=tuple(unique_companies(self._workers)),
        )

    # ----- setters -----

    def set_view_mode(self, mode: ViewMode) -> None:
        self._ui.view_mode = mode

    def set_scanned_site(self, site: Optional[Site]) -> None:
        self._ui.scanned_site = site
        self._ui.last_action_message = None
        self._last_transition = None

    def set_selected_date(self, date: str) -> None:
        self._ui.selected_date = date

    def set_filter_site_id(self, site_id: str) -> None:
        self._ui.filter_site_id = site_id

    def set_filter_company(self, company: str) -> None:
        self._ui.filter_company = company

    def set_filter_name(self, name: str) -> None:
        self._ui.filter_name = name

    def set_ai_analysis(self, text: str) -> None:
        self._ui.ai_analysis = text

    def reset_after_scan(self) -> None:
        """Post check-in/out reset, fired by the presentation layer's timer."""
        self._ui.view_mode = ViewMode.DASHBOARD
        self._ui.scanned_site = None
        self._last_transition = None

    # ----- check-in / check-out -----

    def _scan_guard(self, site: Optional[Site]) -> Optional[TransitionResult]:
        if site is None:
            return TransitionResult.ignored(IgnoredReason.NO_SITE_SCANNED)
        if self._current_user is None:
            return TransitionResult.ignored(IgnoredReason.NO_CURRENT_USER)
        return None

    def check_in(self, *, now: Optional[datetime] = None) -> TransitionResult:
        # read once: the reset timer may clear it from another thread
        site = self._ui.scanned_site
        ignored = self._scan_guard(site)
        if ignored:
            logger.warning("check-in ignored: %s", ignored.reason.value)
            return ignored

        user = self._current_user
        date = self._ui.selected_date
        now = now or self._clock()

        record = AttendanceRecord(
            id=str(int(now.timestamp() * 1000)),
            worker_id=user.id,
            site_id=site.id,
            date=date,
            check_in_time=to_iso(now),
            status=AttendanceStatus.CHECKED_IN,
        )

        # one record per worker and date
        self._records.remove_where(lambda r: r.worker_id == user.id and r.date == date)
        self._records.add(record)

        message = f"「{site.name}」に入場しました。"
        self._ui.last_action_message = message
        self._last_transition = ScanState.CHECKED_IN
        logger.info("Worker %s checked in at %s on %s", user.id, site.id, date)
        return TransitionResult.done(record, reset_requested=True, message=message)

    def check_out(self, *, now: Optional[datetime] = None) -> TransitionResult:
        site = self._ui.scanned_site
        ignored = self._scan_guard(site)
        if ignored:
            logger.warning("check-out ignored: %s", ignored.reason.value)
            return ignored

        user = self._current_user
        date = self._ui.selected_date

        record = self.find_open_record(user.id, date)
        if record is None:
            logger.warning("check-out ignored: worker %s has no open record on %s", user.id, date)
            return TransitionResult.ignored(IgnoredReason.NO_OPEN_RECORD)

        now = now or self._clock()
        closed = dataclasses.replace(record, check_out_time=to_iso(now), status=AttendanceStatus.CHECKED_OUT)
        self._records.replace(record.id, closed)

        message = f"「{site.name}」から退場しました。"
        self._ui.last_action_message = message
        self._last_transition = ScanState.CHECKED_OUT
        logger.info("Worker %s checked out of %s on %s", user.id, site.id, date)
        return TransitionResult.done(closed, reset_requested=True, message=message)

    # ----- seed + AI -----

    def load_monthly_data(self, target_date: str) -> int:
        """Populate `target_date`'s month once. Returns the number of records added."""
        if not self._sites:
            return 0

        try:
            target = parse_iso_date(target_date)
        except ValidationError:
            logger.warning("load_monthly_data skipped, bad date %r", target_date)
            return 0

        day_key = target.isoformat()
        month_key = day_key[:7]
        if self._records.find_first(lambda r: r.date.startswith(month_key)):
            return 0

        site = self._sites[0]
        static = generate_static_month(self._workers, site, target.year, target.month, rng=self._rng, tz=self._tz)
        static = [r for r in static if r.date != day_key]

        # blocking call; other store operations may interleave meanwhile
        generated = self._narrative.generate_daily_records(self._workers, site, day_key)

        added = self._records.add_many([*static, *generated])
        logger.info("Loaded %d records for %s (%d generated for %s)", added, month_key, len(generated), day_key)
        return added

    def run_ai_analysis(self) -> str:
        self._ui.is_analyzing = True
        try:
            relevant = self.records_for_month(month_prefix(self._ui.selected_date))
            logger.info("Running productivity analysis over %d records", len(relevant))
            try:
                result = self._narrative.generate_productivity_report(relevant, self._workers)
            except Exception:
                logger.exception("Narrative service failed during analysis")
                result = ANALYSIS_FAILURE_MESSAGE
            self._ui.ai_analysis = result
            return result
        finally:
            self._ui.is_analyzing = False

    # ----- manual editing -----

    def upsert_record(
        self,
        *,
        worker_id: str,
        date: str,
        record_id: Optional[str] = None,
        site_id=_UNSET,
        check_in_time=_UNSET,
        check_out_time=_UNSET,
        status=_UNSET,
    ) -> TransitionResult:
        """Create or shallow-merge a record.

        Matches by `record_id` when given, else by (worker_id, date). Only the
        supplied fields are merged; `check_out_time=None` clears the check-out.
        """
        changes: dict = {"worker_id": worker_id, "date": date}
        if record_id:
            changes["id"] = record_id
        if site_id is not _UNSET:
            changes["site_id"] = site_id
        if check_in_time is not _UNSET:
            changes["check_in_time"] = check_in_time or ""
        if check_out_time is not _UNSET:
            changes["check_out_time"] = check_out_time or None
        if status is not _UNSET:
            try:
                changes["status"] = AttendanceStatus(status)
            except ValueError:
                logger.warning("upsert rejected for %s on %s: unknown status %r", worker_id, date, status)
                return TransitionResult.ignored(IgnoredReason.INVALID_STATUS)

        existing = self._records.find_first(
            lambda r: bool(record_id and r.id == record_id) or (r.worker_id == worker_id and r.date == date)
        )

        if existing is not None:
            candidate = dataclasses.replace(existing, **changes)
        else:
            default_site = self._sites[0].id if self._sites else UNKNOWN_SITE_ID
            candidate = AttendanceRecord(
                id=record_id or f"manual-{int(self._clock().timestamp() * 1000)}",
                worker_id=worker_id,
                site_id=changes.get("site_id") or default_site,
                date=date,
                check_in_time=changes.get("check_in_time", ""),
                check_out_time=changes.get("check_out_time"),
                status=changes.get("status", AttendanceStatus.CHECKED_IN),
            )

        try:
            require_chronological(candidate.check_in_time, candidate.check_out_time)
        except ValidationError as e:
            logger.warning("upsert rejected for %s on %s: %s", worker_id, date, e)
            return TransitionResult.ignored(IgnoredReason.INVALID_TIMES)

        if existing is not None:
            self._records.replace(existing.id, candidate)
        else:
            self._records.add(candidate)
        return TransitionResult.done(candidate)

    def delete_record(self, record_id: str) -> TransitionResult:
        if not self._records.remove_where(lambda r: r.id == record_id):
            return TransitionResult.ignored(IgnoredReason.NOT_FOUND)
        return TransitionResult.done()
