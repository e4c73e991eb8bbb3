from genba_attendance.sites.factory import SiteResolverFactory
from genba_attendance.sites.model import Site
from genba_attendance.sites.strategies.fallback_resolver import FirstSiteFallbackResolver
from genba_attendance.sites.strategies.strict_resolver import StrictSiteResolver

SITES = [
    Site(id="s1", name="現場1", address="東京都", qr_code_value="site-1"),
    Site(id="s2", name="現場2", address="東京都", qr_code_value="site-2"),
]


def test_factory_selects_strict_resolver_by_default():
    resolver = SiteResolverFactory().create()
    assert isinstance(resolver, StrictSiteResolver)


def test_factory_selects_fallback_resolver():
    resolver = SiteResolverFactory(fallback_to_first_site=True).create()
    assert isinstance(resolver, FirstSiteFallbackResolver)


def test_exact_match_wins_for_both_strategies():
    for resolver in (StrictSiteResolver(), FirstSiteFallbackResolver()):
        assert resolver.resolve(" site-2 ", SITES).id == "s2"


def test_unknown_payload():
    assert StrictSiteResolver().resolve("nope", SITES) is None
    assert FirstSiteFallbackResolver().resolve("nope", SITES).id == "s1"
    assert FirstSiteFallbackResolver().resolve("nope", []) is None
