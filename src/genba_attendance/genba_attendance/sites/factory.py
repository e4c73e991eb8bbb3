from __future__ import annotations

from dataclasses import dataclass

from .strategies.base import SiteResolver
from .strategies.fallback_resolver import FirstSiteFallbackResolver
from .strategies.strict_resolver import StrictSiteResolver


@dataclass
class SiteResolverFactory:
    """Factory Pattern: choose how unrecognized QR payloads are handled."""

    fallback_to_first_site: bool = False

    def create(self) -> SiteResolver:
        if self.fallback_to_first_site:
            return FirstSiteFallbackResolver()
        return StrictSiteResolver()
