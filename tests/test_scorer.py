import pytest

from newstrust.models import AIAssessment, AnalysisVerdict, SourceRecord
from newstrust.scorer import (
    analyze_content_quality,
    analyze_corroboration,
    calculate_confidence_level,
    calculate_credibility_score,
    calculate_red_flag_penalty,
    calculate_supporting_bonus,
    determine_verdict,
    interpret_score,
    score_breakdown,
)

UNKNOWN_URL = "https://example.com/story"


def _source(url: str, name: str = "Outlet") -> SourceRecord:
    return SourceRecord(name=name, url=url)


def _well_formed_article() -> str:
    paragraph = " ".join(["word"] * 80)
    return (
        f"{paragraph}\n\n{paragraph}\n\n{paragraph}\n\n"
        'The minister said "the figures are final" according to https://reuters.com/report'
    )


def test_neutral_inputs_produce_expected_score():
    # 28 (confidence 70) + 12.5 (unknown domain) + 8 (short text) + 4.5 (no sources)
    score = calculate_credibility_score(AIAssessment(), [], "", UNKNOWN_URL)
    assert score == 53


def test_zero_sources_contribute_corroboration_floor():
    breakdown = score_breakdown(AIAssessment(confidence=50), [], "text", UNKNOWN_URL)
    assert breakdown["corroboration"] == pytest.approx(4.5)
    assert breakdown["ai_confidence"] == pytest.approx(20.0)
    assert breakdown["reputation"] == pytest.approx(12.5)


def test_missing_or_zero_confidence_defaults_to_seventy():
    missing = score_breakdown(AIAssessment(), [], "", UNKNOWN_URL)
    zero = score_breakdown(AIAssessment(confidence=0), [], "", UNKNOWN_URL)
    assert missing["ai_confidence"] == pytest.approx(28.0)
    assert zero["ai_confidence"] == pytest.approx(28.0)
    assert calculate_credibility_score(AIAssessment(confidence=0), [], "", UNKNOWN_URL) == 53


def test_penalty_floors_before_bonus_is_added():
    # Base 20.4 (0.4 + 7.5 + 8 + 4.5) - 30 floors at 0, then +15 bonus
    assessment = AIAssessment(
        confidence=1,
        red_flags=["contradicts known facts", "conspiracy theory"],
        supporting_factors=["verified data", "fact check available", "multiple sources cited"],
    )
    assert calculate_credibility_score(assessment, [], "", "not a url") == 15


def test_bonus_cannot_exceed_ceiling():
    sources = [_source(f"https://www.reuters.com/{i}") for i in range(5)]
    assessment = AIAssessment(
        confidence=100,
        supporting_factors=["verified data", "expert quotes", "primary sources", "context provided"],
    )
    score = calculate_credibility_score(
        assessment, sources, _well_formed_article(), "https://apnews.com/article/1"
    )
    assert score == 100


def test_score_bounded_for_adversarial_inputs():
    assessment = AIAssessment(
        confidence=-40,
        red_flags=["sensationalism"] * 500,
        supporting_factors=[],
    )
    content = "FAKE NEWS ALERT!!! SHARE NOW!!! WAKE UP PEOPLE??? " * 20
    score = calculate_credibility_score(assessment, [], content, "::::")
    assert 0 <= score <= 100


def test_score_is_deterministic():
    assessment = AIAssessment(confidence=64, red_flags=["extreme bias"], supporting_factors=["expert quotes"])
    sources = [_source("https://www.bbc.com/news/1"), _source("https://blog.example.net/2")]
    results = {
        calculate_credibility_score(assessment, sources, _well_formed_article(), UNKNOWN_URL)
        for _ in range(5)
    }
    assert len(results) == 1


def test_content_quality_rewards_structure_links_and_quotes():
    assert analyze_content_quality(_well_formed_article()) == pytest.approx(0.95)


def test_content_quality_penalizes_shouting():
    text = "THE FED WILL RAISE ALL TAX NOW"
    assert analyze_content_quality(text) == pytest.approx(0.25)


def test_content_quality_penalizes_repeated_punctuation():
    text = "Wow!! Really?? No!! Yes?!"
    assert analyze_content_quality(text) == pytest.approx(0.3)


def test_content_quality_ignores_excessive_links():
    links = " ".join(f"https://example.com/{i}" for i in range(11))
    assert analyze_content_quality(links) == pytest.approx(0.4)


def test_content_quality_counts_quotes():
    assert analyze_content_quality('She said "hello"') == pytest.approx(0.5)


@pytest.mark.parametrize(
    "urls, expected",
    [
        (["https://example.org/a"], 0.3),
        (["https://www.reuters.com/a"], 0.8),
        (["https://www.reuters.com/a", "https://example.org/b", "https://example.net/c"], 0.4 + 0.5 / 3),
        ([f"https://www.who.int/{i}" for i in range(6)], 1.0),
        ([f"https://example.org/{i}" for i in range(5)], 0.5),
    ],
)
def test_corroboration(urls, expected):
    assert analyze_corroboration([_source(url) for url in urls]) == pytest.approx(expected)


def test_red_flag_penalty_lookup_and_normalization():
    assert calculate_red_flag_penalty([]) == 0
    assert calculate_red_flag_penalty(["Contradicts Known Facts"]) == 20
    assert calculate_red_flag_penalty(["sensationalism", "clickbait  headline"]) == 18
    assert calculate_red_flag_penalty(["something odd"]) == 5


def test_red_flag_penalty_caps_at_thirty():
    assert calculate_red_flag_penalty([f"unknown flag {i}" for i in range(10)]) == 30


def test_supporting_bonus_lookup_and_cap():
    assert calculate_supporting_bonus([]) == 0
    assert calculate_supporting_bonus(["Multiple Sources Cited", "expert quotes"]) == 9
    assert calculate_supporting_bonus(["novel factor"]) == 2
    assert calculate_supporting_bonus([f"factor {i}" for i in range(10)]) == 15


@pytest.mark.parametrize(
    "score, verdict",
    [
        (100, AnalysisVerdict.LIKELY_REAL),
        (70, AnalysisVerdict.LIKELY_REAL),
        (69, AnalysisVerdict.UNCERTAIN),
        (41, AnalysisVerdict.UNCERTAIN),
        (40, AnalysisVerdict.LIKELY_FAKE),
        (0, AnalysisVerdict.LIKELY_FAKE),
    ],
)
def test_determine_verdict_thresholds(score, verdict):
    assert determine_verdict(score) is verdict


@pytest.mark.parametrize(
    "score, label",
    [
        (90, "Highly Credible"),
        (70, "Likely Credible"),
        (55, "Uncertain"),
        (40, "Questionable"),
        (39, "Not Credible"),
    ],
)
def test_interpret_score(score, label):
    assert interpret_score(score).label == label


def test_confidence_level():
    assert calculate_confidence_level(80, 5, True) == 100
    assert calculate_confidence_level(60, 3, False) == 55
    assert calculate_confidence_level(None, 1, True) == 65
    assert calculate_confidence_level(10, 0, False) == 0
