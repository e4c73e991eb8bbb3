from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"日付が不正です: {value!r}")


def month_prefix(value: str) -> str:
    """YYYY-MM part of a YYYY-MM-DD string.

    Pure string slicing: malformed input yields a prefix nothing matches.
    """
    return (value or "")[:7]


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp (accepts trailing 'Z'). Empty/invalid -> None."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat(timespec="milliseconds")


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600


def format_hhmm(value: Optional[str], tz: tzinfo = timezone.utc) -> str:
    ts = parse_timestamp(value)
    if ts is None:
        return ""
    return ts.astimezone(tz).strftime("%H:%M")


def resolve_timezone(name: Optional[str]) -> tzinfo:
    if not name or name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def now_utc() -> datetime:
    """Current time (aware, UTC).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def time_on_date(work_date: str, hhmm: str, tz: tzinfo = timezone.utc) -> str:
    """Combine YYYY-MM-DD and HH:MM (wall clock in `tz`) into an ISO timestamp."""
    day = parse_iso_date(work_date)
    try:
        t = datetime.strptime(hhmm.strip(), "%H:%M").time()
    except ValueError:
        raise ValidationError(f"時刻が不正です (HH:MM): {hhmm!r}")
    return to_iso(datetime.combine(day, t, tzinfo=tz))
