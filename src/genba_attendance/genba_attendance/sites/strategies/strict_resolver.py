from __future__ import annotations

from typing import Optional, Sequence

from ..model import Site
from .base import SiteResolver


class StrictSiteResolver(SiteResolver):
    """Unknown payload -> None (caller reports an unrecognized code)."""

    def resolve(self, payload: str, sites: Sequence[Site]) -> Optional[Site]:
        return self._match(payload, sites)
