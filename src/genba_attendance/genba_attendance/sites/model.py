from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Site:
    """Thực thể miền (domain): Site (công trường)."""

    id: str
    name: str
    address: str
    qr_code_value: str
