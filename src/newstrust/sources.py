from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

import httpx

from .config import get_settings
from .models import SourceRecord
from .reputation import TRUSTED_SOURCES, is_trusted_source, normalize_domain

logger = logging.getLogger(__name__)

MAX_QUERY_LENGTH = 100
MAX_RESULTS = 5

SAMPLE_SOURCES: tuple[SourceRecord, ...] = (
    SourceRecord(
        name="Reuters",
        url="https://reuters.com/article/example",
        snippet="Related coverage from Reuters news agency.",
    ),
    SourceRecord(
        name="BBC News",
        url="https://bbc.com/news/example",
        snippet="BBC coverage of similar topic.",
    ),
    SourceRecord(
        name="Associated Press",
        url="https://apnews.com/article/example",
        snippet="AP wire service reporting on related events.",
    ),
)


@runtime_checkable
class RelatedSourcesProvider(Protocol):
    async def fetch(self, query: str) -> list[SourceRecord]: ...


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _article_record(article: Any) -> SourceRecord | None:
    # NewsAPI article; entries without a usable link are dropped
    if not isinstance(article, dict):
        return None
    link = _text(article.get("url"))
    if link is None:
        return None
    source = article.get("source")
    name = _text(source.get("name")) if isinstance(source, dict) else _text(source)
    return SourceRecord(
        name=name or normalize_domain(link),
        url=link,
        snippet=_text(article.get("description")) or _text(article.get("title")),
        published_at=_text(article.get("publishedAt")),
    )


def _search_record(item: Any) -> SourceRecord | None:
    if not isinstance(item, dict):
        return None
    link = _text(item.get("link"))
    if link is None:
        return None
    return SourceRecord(
        name=_text(item.get("displayLink")) or normalize_domain(link),
        url=link,
        snippet=_text(item.get("snippet")),
    )


class NewsApiSourceProvider:
    """Related coverage from NewsAPI, restricted to trusted outlets."""

    endpoint = "https://newsapi.org/v2/everything"

    def __init__(
        self,
        *,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key if api_key is not None else settings.news_api_key
        self._timeout = timeout if timeout is not None else settings.news_timeout
        self._transport = transport

    async def fetch(self, query: str) -> list[SourceRecord]:
        if not self._api_key:
            logger.warning("NEWS_API_KEY not set, skipping external news fetch")
            return []
        params = {
            "q": query[:MAX_QUERY_LENGTH],
            "apiKey": self._api_key,
            "language": "en",
            "sortBy": "relevancy",
            "pageSize": MAX_RESULTS,
            "domains": ",".join(TRUSTED_SOURCES[:10]),
        }
        logger.info("Fetching related news for query %r", query[:MAX_QUERY_LENGTH])
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.get(self.endpoint, params=params)
                response.raise_for_status()
                payload = response.json()
            except (httpx.HTTPError, ValueError) as exc:
                logger.error("Error fetching news sources: %s", exc)
                return []
        if not isinstance(payload, dict) or payload.get("status") != "ok":
            logger.warning("NewsAPI returned non-OK status")
            return []

        articles = payload.get("articles")
        if not isinstance(articles, list):
            articles = []
        output = [record for record in map(_article_record, articles) if record is not None]
        logger.info("Found %d related articles from trusted sources", len(output))
        return output


class GoogleSearchSourceProvider:
    """Google Custom Search results, keeping only trusted domains."""

    endpoint = "https://www.googleapis.com/customsearch/v1"

    def __init__(
        self,
        *,
        api_key: str | None = None,
        engine_id: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key if api_key is not None else settings.search_api_key
        self._engine_id = engine_id if engine_id is not None else settings.search_engine_id
        self._timeout = timeout if timeout is not None else settings.news_timeout
        self._transport = transport

    async def fetch(self, query: str) -> list[SourceRecord]:
        if not self._api_key or not self._engine_id:
            logger.warning("Google Search API not configured")
            return []
        params: dict[str, Any] = {
            "key": self._api_key,
            "cx": self._engine_id,
            "q": query,
            "num": MAX_RESULTS,
        }
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.get(self.endpoint, params=params)
                response.raise_for_status()
                payload = response.json()
            except (httpx.HTTPError, ValueError) as exc:
                logger.error("Error searching Google News: %s", exc)
                return []
        items = payload.get("items") if isinstance(payload, dict) else None
        if not isinstance(items, list):
            return []
        output = [record for record in map(_search_record, items) if record is not None]
        return [record for record in output if is_trusted_source(record.url)]


class StaticSourceProvider:
    """Fixed related sources for offline runs."""

    def __init__(self, sources: Sequence[SourceRecord] = SAMPLE_SOURCES) -> None:
        self._sources = list(sources)

    async def fetch(self, query: str) -> list[SourceRecord]:
        return list(self._sources)


async def verify_url_accessible(
    url: str,
    *,
    timeout: float = 5.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:
    async with httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        max_redirects=5,
        transport=transport,
    ) as client:
        try:
            response = await client.head(url)
        except (httpx.HTTPError, httpx.InvalidURL):
            return False
    return 200 <= response.status_code < 400
