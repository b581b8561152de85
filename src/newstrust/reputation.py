"""
Static domain reputation for news sources.

Reputation is a pure function of the URL: the hostname (scheme and a leading
``www.`` removed) is substring-matched against fixed tier lists, so any
subdomain of a listed outlet inherits its tier.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from urllib.parse import urlparse

import tldextract

from .models import DomainReputation, ReputationTier

logger = logging.getLogger(__name__)

TRUSTED_SOURCES: tuple[str, ...] = (
    "reuters.com",
    "apnews.com",
    "bbc.com",
    "bbc.co.uk",
    "npr.org",
    "theguardian.com",
    "nytimes.com",
    "washingtonpost.com",
    "wsj.com",
    "bloomberg.com",
    "ft.com",
    "economist.com",
    "nature.com",
    "sciencemag.org",
    "who.int",
    "cdc.gov",
    "gov.uk",
    "europa.eu",
)

TIER1_SOURCES: frozenset[str] = frozenset(
    {"reuters.com", "apnews.com", "bbc.com", "who.int", "cdc.gov", "nature.com"}
)
TIER2_SOURCES: frozenset[str] = frozenset(
    {"nytimes.com", "washingtonpost.com", "theguardian.com", "wsj.com", "bloomberg.com"}
)
TIER3_SOURCES: tuple[str, ...] = tuple(
    domain for domain in TRUSTED_SOURCES if domain not in TIER1_SOURCES | TIER2_SOURCES
)

_TIER_PROFILES = MappingProxyType(
    {
        "tier1": DomainReputation(
            score=95,
            tier=ReputationTier.HIGHLY_TRUSTED,
            notes="Major news agency or authoritative source",
        ),
        "tier2": DomainReputation(
            score=85,
            tier=ReputationTier.TRUSTED,
            notes="Established mainstream media outlet",
        ),
        "tier3": DomainReputation(
            score=75,
            tier=ReputationTier.TRUSTED,
            notes="Recognized news source",
        ),
        "unknown": DomainReputation(
            score=50,
            tier=ReputationTier.UNKNOWN,
            notes="Unknown or unverified source - verify independently",
        ),
        "invalid": DomainReputation(
            score=30,
            tier=ReputationTier.QUESTIONABLE,
            notes="Invalid URL or problematic domain",
        ),
    }
)

# Bundled public suffix snapshot only; never fetched over the network.
_EXTRACTOR = tldextract.TLDExtract(suffix_list_urls=())
_HOST_REQUIRED_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})


def _hostname(url: str) -> str:
    if not isinstance(url, str):
        raise ValueError(f"URL must be a string, got {type(url).__name__}")
    parsed = urlparse(url.strip())
    host = parsed.hostname or ""
    if not parsed.scheme:
        raise ValueError(f"not an absolute URL: {url!r}")
    if not host and parsed.scheme.lower() in _HOST_REQUIRED_SCHEMES:
        raise ValueError(f"missing host: {url!r}")
    # mailto:, data: and similar URLs carry no host and match no tier
    return host.lower().removeprefix("www.")


def _matches_any(host: str, domains) -> bool:
    return any(domain in host for domain in domains)


def get_domain_reputation(url: str) -> DomainReputation:
    try:
        host = _hostname(url)
    except ValueError:
        logger.debug("Unparseable source URL %r", url)
        return _TIER_PROFILES["invalid"]
    if _matches_any(host, TIER1_SOURCES):
        return _TIER_PROFILES["tier1"]
    if _matches_any(host, TIER2_SOURCES):
        return _TIER_PROFILES["tier2"]
    if _matches_any(host, TIER3_SOURCES):
        return _TIER_PROFILES["tier3"]
    return _TIER_PROFILES["unknown"]


def is_trusted_source(url: str) -> bool:
    try:
        host = _hostname(url)
    except ValueError:
        return False
    return _matches_any(host, TRUSTED_SOURCES)


def normalize_domain(source: str) -> str:
    """Registrable domain for display and de-duplication (``news.bbc.co.uk`` -> ``bbc.co.uk``)."""
    extracted = _EXTRACTOR(source)
    if extracted.domain and extracted.suffix:
        return f"{extracted.domain}.{extracted.suffix}".lower()
    return source.lower()
