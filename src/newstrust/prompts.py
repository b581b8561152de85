from __future__ import annotations

from collections.abc import Sequence

from .models import SourceRecord

SYSTEM_PROMPT = """You are an expert fact-checker and news analyst. Your job is to analyze news content for credibility, identify misinformation patterns, and provide evidence-based assessments. Be thorough, objective, and cite specific concerns.

You must respond with ONLY valid JSON in this exact format:
{
  "explanation": "A clear, 2-3 sentence summary of your overall assessment",
  "reasoning": [
    "Key point 1 supporting your assessment",
    "Key point 2 supporting your assessment",
    "Key point 3 supporting your assessment"
  ],
  "red_flags": [
    "Any concerning elements (sensationalism, lack of sources, biased language, etc.)"
  ],
  "confidence": 75,
  "supporting_factors": [
    "What makes this more credible"
  ],
  "concerning_factors": [
    "What raises doubts about credibility"
  ],
  "source_reliability": "Assessment of the source domain/publication",
  "fact_check_notes": "Notes about verifiable facts or claims"
}"""

ANALYSIS_CHECKLIST = """Consider the following in your analysis:
1. **Source credibility**: Is the source known and reputable?
2. **Evidence**: Are claims supported by evidence or sources?
3. **Language**: Is the language sensational, emotional, or clickbait-y?
4. **Verifiability**: Can the main claims be verified?
5. **Context**: Does the article provide proper context?
6. **Bias**: Is there obvious political or ideological bias?
7. **Corroboration**: Do other reputable sources report similar information?
8. **Author**: Is there author attribution and credentials?

Be objective and evidence-based in your assessment."""


def build_fact_check_prompt(
    content: str,
    source_url: str,
    title: str | None = None,
    related_sources: Sequence[SourceRecord] = (),
) -> str:
    sources_context = ""
    if related_sources:
        lines = [
            f"{index}. {source.name}: {source.snippet or 'No snippet available'} ({source.url})"
            for index, source in enumerate(related_sources, start=1)
        ]
        sources_context = "\n\nRelated news from trusted sources:\n" + "\n".join(lines)

    return (
        f"{SYSTEM_PROMPT}\n\n"
        "Analyze the following news article for credibility and potential misinformation:\n\n"
        f"TITLE: {title or 'No title provided'}\n"
        f"SOURCE: {source_url}\n\n"
        f"CONTENT:\n{content}{sources_context}\n\n"
        f"{ANALYSIS_CHECKLIST}"
    )


def build_quick_check_prompt(content: str) -> str:
    return (
        "You are a fact-checker. Rate the credibility of the given news content from 0-100. "
        f"Respond with just the number. Rate the credibility (0-100): {content[:500]}"
    )


def build_claim_extraction_prompt(content: str) -> str:
    return (
        "Analyze the following news content and extract specific factual claims:\n\n"
        f"{content}\n\n"
        'Respond with JSON: {"claims": [{"claim": "...", "verdict": "true|false|unverifiable", '
        '"explanation": "...", "importance": "high|medium|low"}]}'
    )


def build_pattern_detection_prompt(content: str) -> str:
    return (
        "Analyze the text for common misinformation patterns. Return only valid JSON with "
        f"boolean values. Detect patterns in: {content[:1000]}\n\n"
        'Respond with JSON: {"sensationalism": bool, "emotionalLanguage": bool, '
        '"lackOfSources": bool, "clickbait": bool, "biasedLanguage": bool}'
    )
