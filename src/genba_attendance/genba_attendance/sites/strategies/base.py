from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..model import Site


class SiteResolver(ABC):
    """Strategy Pattern: map a scanned QR payload to a configured site."""

    @abstractmethod
    def resolve(self, payload: str, sites: Sequence[Site]) -> Optional[Site]:
        raise NotImplementedError

    @staticmethod
    def _match(payload: str, sites: Sequence[Site]) -> Optional[Site]:
        code = (payload or "").strip()
        for site in sites:
            if site.qr_code_value == code:
                return site
        return None
