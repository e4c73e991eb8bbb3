from __future__ import annotations

import random
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .attendance.memory_repository import InMemoryAttendanceRepository
from .common.datetime_utils import now_utc, resolve_timezone
from .core.constants import (
    DEFAULT_DISPLAY_TIMEZONE,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_GEMINI_TIMEOUT_SECONDS,
    DEFAULT_SCAN_RESET_DELAY_SECONDS,
)
from .narrative.gemini_client import GeminiNarrativeService
from .narrative.service import NarrativeService, OfflineNarrativeService
from .reports.service import SummaryReportService
from .seed.demo_data import DEFAULT_CURRENT_WORKER_ID, DEMO_SITES, DEMO_WORKERS
from .sites.factory import SiteResolverFactory
from .sites.strategies.base import SiteResolver
from .store.reset_scheduler import ScanResetScheduler
from .store.service import AttendanceStore


@dataclass(frozen=True)
class Container:
    attendance_repo: InMemoryAttendanceRepository
    narrative_service: NarrativeService
    store: AttendanceStore
    report_service: SummaryReportService
    site_resolver: SiteResolver
    reset_scheduler: ScanResetScheduler


def build_narrative_service(settings) -> NarrativeService:
    api_key = getattr(settings, "GEMINI_API_KEY", "")
    if not api_key:
        return OfflineNarrativeService()
    return GeminiNarrativeService(
        api_key,
        model=getattr(settings, "GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
        timeout=float(getattr(settings, "GEMINI_TIMEOUT_SECONDS", DEFAULT_GEMINI_TIMEOUT_SECONDS)),
    )


def build_container(
    *,
    settings,
    narrative: Optional[NarrativeService] = None,
    clock: Callable[[], datetime] = now_utc,
    rng: Optional[random.Random] = None,
    timer_factory=threading.Timer,
) -> Container:
    tz = resolve_timezone(getattr(settings, "DISPLAY_TIMEZONE", DEFAULT_DISPLAY_TIMEZONE))

    attendance_repo = InMemoryAttendanceRepository()
    narrative_service = narrative or build_narrative_service(settings)

    store = AttendanceStore(
        workers=DEMO_WORKERS,
        sites=DEMO_SITES,
        records=attendance_repo,
        narrative=narrative_service,
        current_user_id=getattr(settings, "CURRENT_WORKER_ID", DEFAULT_CURRENT_WORKER_ID),
        clock=clock,
        rng=rng,
        tz=tz,
    )
    report_service = SummaryReportService()
    site_resolver = SiteResolverFactory(
        fallback_to_first_site=bool(getattr(settings, "QR_FALLBACK_TO_FIRST_SITE", False)),
    ).create()
    reset_scheduler = ScanResetScheduler(
        store.reset_after_scan,
        delay_seconds=float(getattr(settings, "SCAN_RESET_DELAY_SECONDS", DEFAULT_SCAN_RESET_DELAY_SECONDS)),
        timer_factory=timer_factory,
    )

    return Container(
        attendance_repo=attendance_repo,
        narrative_service=narrative_service,
        store=store,
        report_service=report_service,
        site_resolver=site_resolver,
        reset_scheduler=reset_scheduler,
    )
