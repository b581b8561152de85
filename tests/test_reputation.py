import pytest

from newstrust.models import ReputationTier
from newstrust.reputation import (
    TIER3_SOURCES,
    TRUSTED_SOURCES,
    get_domain_reputation,
    is_trusted_source,
    normalize_domain,
)


@pytest.mark.parametrize(
    "url, score, tier",
    [
        ("https://www.reuters.com/world/story", 95, ReputationTier.HIGHLY_TRUSTED),
        ("https://edition.bbc.com/news", 95, ReputationTier.HIGHLY_TRUSTED),
        ("http://www.cdc.gov/flu", 95, ReputationTier.HIGHLY_TRUSTED),
        ("https://www.nytimes.com/2024/01/01/a.html", 85, ReputationTier.TRUSTED),
        ("https://www.theguardian.com/uk", 85, ReputationTier.TRUSTED),
        ("https://bbc.co.uk/news", 75, ReputationTier.TRUSTED),
        ("https://www.gov.uk/guidance", 75, ReputationTier.TRUSTED),
        ("https://example.com/post", 50, ReputationTier.UNKNOWN),
        ("https://WWW.EXAMPLE.ORG", 50, ReputationTier.UNKNOWN),
    ],
)
def test_domain_reputation_tiers(url, score, tier):
    reputation = get_domain_reputation(url)
    assert reputation.score == score
    assert reputation.tier is tier
    assert reputation.notes


@pytest.mark.parametrize("url", ["", "not a url", "reuters.com/no-scheme", "http://", "http://[bad"])
def test_unparseable_url_is_questionable(url):
    reputation = get_domain_reputation(url)
    assert reputation.score == 30
    assert reputation.tier is ReputationTier.QUESTIONABLE


@pytest.mark.parametrize("url", ["mailto:desk@reuters.com", "data:text/plain,hello"])
def test_hostless_url_is_unknown(url):
    reputation = get_domain_reputation(url)
    assert reputation.score == 50
    assert reputation.tier is ReputationTier.UNKNOWN
    assert not is_trusted_source(url)


def test_trust_list_shape():
    assert len(TRUSTED_SOURCES) == 18
    assert len(TIER3_SOURCES) == 7
    assert "reuters.com" not in TIER3_SOURCES


def test_is_trusted_source():
    assert is_trusted_source("https://www.who.int/news")
    assert is_trusted_source("https://news.europa.eu/item")
    assert not is_trusted_source("https://example.org/a")
    assert not is_trusted_source("garbage")


def test_normalize_domain():
    assert normalize_domain("https://news.bbc.co.uk/a") == "bbc.co.uk"
    assert normalize_domain("https://www.Reuters.com/x") == "reuters.com"
    assert normalize_domain("localhost") == "localhost"
