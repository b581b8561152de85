"""
Gemini-backed assessment provider with strict fallback.

Any problem reaching the model or reading its answer raises
``LLMFallbackError`` so the caller can substitute the neutral analysis result.
"""

from __future__ import annotations

import hashlib
import json
import logging
import re
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

import httpx
from pydantic import ValidationError

from .config import get_settings
from .models import AIAssessment, SourceRecord
from .prompts import build_fact_check_prompt

logger = logging.getLogger(__name__)

_JSON_BLOCK = re.compile(r"\{[\s\S]*\}")


class LLMFallbackError(RuntimeError):
    """Raised when the language model result cannot be used."""


@runtime_checkable
class AssessmentProvider(Protocol):
    async def assess(
        self,
        content: str,
        source_url: str,
        title: str | None = None,
        related_sources: Sequence[SourceRecord] = (),
    ) -> AIAssessment: ...


def extract_json(text: str) -> Any:
    """Parse the outermost JSON object in a reply that may be wrapped in markdown."""
    match = _JSON_BLOCK.search(text)
    payload = match.group(0) if match else text
    try:
        return json.loads(payload)
    except json.JSONDecodeError as exc:
        raise LLMFallbackError(f"LLM reply is not valid JSON: {exc}") from exc


class GeminiAssessmentProvider:
    """
    Calls the Gemini ``generateContent`` REST endpoint.
    - generate: raw text completion for a prompt
    - assess: fact-check prompt -> validated AIAssessment
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key if api_key is not None else settings.gemini_api_key
        self._model = model or settings.gemini_model
        self._base_url = settings.gemini_api_url.rstrip("/")
        self._temperature = settings.llm_temperature
        self._timeout = timeout if timeout is not None else settings.llm_timeout
        self._transport = transport
        self._cache: dict[str, str] = {}

    # Public API -----------------------------------------------------
    async def assess(
        self,
        content: str,
        source_url: str,
        title: str | None = None,
        related_sources: Sequence[SourceRecord] = (),
    ) -> AIAssessment:
        prompt = build_fact_check_prompt(content, source_url, title, related_sources)
        payload = extract_json(await self.generate(prompt))
        if not isinstance(payload, dict):
            raise LLMFallbackError("LLM reply is not a JSON object")
        try:
            return AIAssessment.model_validate(payload)
        except ValidationError as exc:
            raise LLMFallbackError(f"LLM reply failed validation: {exc}") from exc

    async def generate(self, prompt: str) -> str:
        cache_key = self._cache_key(prompt)
        cached = self._cache.get(cache_key)
        if cached:
            return cached
        if not self._api_key:
            raise LLMFallbackError("GEMINI_API_KEY not configured")

        endpoint = f"{self._base_url}/models/{self._model}:generateContent"
        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": self._temperature},
        }
        headers = {"x-goog-api-key": self._api_key}
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.post(endpoint, json=body, headers=headers)
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPError as exc:
                self._log_fallback("http-error", prompt, str(exc))
                raise LLMFallbackError(f"LLM request failed: {exc}") from exc
            except ValueError as exc:
                self._log_fallback("decode-error", prompt, str(exc))
                raise LLMFallbackError("LLM response body is not JSON") from exc

        try:
            text = self._response_text(data)
        except Exception as exc:
            self._log_fallback("malformed-response", prompt, str(exc))
            raise LLMFallbackError(f"LLM response has unexpected shape: {exc}") from exc
        if not text:
            self._log_fallback("empty-response", prompt, "no candidate text")
            raise LLMFallbackError("Empty response from LLM")
        self._cache[cache_key] = text
        return text

    # Internal helpers ----------------------------------------------
    @staticmethod
    def _response_text(data: Any) -> str:
        # {"candidates": [{"content": {"parts": [{"text": "..."}]}}]}
        if not isinstance(data, dict):
            return ""
        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            return ""
        content = candidates[0].get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            return ""
        texts = [part.get("text") for part in parts if isinstance(part, dict)]
        return "".join(text for text in texts if isinstance(text, str)).strip()

    def _cache_key(self, prompt: str) -> str:
        digest = hashlib.sha256(f"{self._model}\n{prompt}".encode("utf-8")).hexdigest()
        return f"gen:{digest}"

    def _log_fallback(self, reason: str, prompt: str, error: str) -> None:
        logger.warning(
            "LLM fallback (%s): %s | prompt=%s",
            reason,
            error[:200],
            prompt[:200],
        )
