from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Worker:
    """Thực thể miền (domain): Worker.

    `company` is a free-text grouping key, not a foreign key.
    """

    id: str
    name: str
    company: str
    occupation: str
    avatar_url: str = ""
