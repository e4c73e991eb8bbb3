from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_timestamp


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name}が入力されていません")
    return value.strip()


def require_chronological(check_in_time: Optional[str], check_out_time: Optional[str]) -> None:
    """Check-out must not be earlier than check-in when both are known."""
    start = parse_timestamp(check_in_time)
    end = parse_timestamp(check_out_time)
    if start and end and end < start:
        raise ValidationError("退場時間は入場時間より後にしてください")
