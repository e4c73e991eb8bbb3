from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..model import Site
from .base import SiteResolver

logger = logging.getLogger(__name__)


class FirstSiteFallbackResolver(SiteResolver):
    """Demo behaviour: an unknown payload resolves to the first site."""

    def resolve(self, payload: str, sites: Sequence[Site]) -> Optional[Site]:
        site = self._match(payload, sites)
        if site is None and sites:
            logger.warning("Unrecognized QR payload %r, falling back to site %s", payload, sites[0].id)
            return sites[0]
        return site
