from typing import Dict, List, Optional, Sequence

import requests

from sportsnews import config
from sportsnews.models import Article
from sportsnews.utils.tz_utils import parse_iso, to_local_str
from .base import BaseFeed
from .http import SESSION


class NewsApiError(ValueError):
    """NewsAPI respondeu {"status": "error", ...}."""


def _or_terms(terms: Sequence[str]) -> str:
    quoted = [f'"{t}"' if " " in t else t for t in terms]
    return "(" + " OR ".join(quoted) + ")"


def build_query(sport_terms: Sequence[str], region_terms: Sequence[str]) -> str:
    """Ex.: (football OR rugby) AND (UK OR England)"""
    if not region_terms:
        return _or_terms(sport_terms)
    return f"{_or_terms(sport_terms)} AND {_or_terms(region_terms)}"


def map_article(raw: Dict) -> Article:
    published_ts = parse_iso(raw.get("publishedAt"))
    source = raw.get("source") or {}
    return Article(
        title=raw.get("title"),
        description=raw.get("description"),
        url=raw.get("url"),
        image=raw.get("urlToImage") or config.PLACEHOLDER_IMAGE,
        source=source.get("name"),
        published_at=to_local_str(published_ts),
        published_ts=published_ts,
    )


class NewsApiFeed(BaseFeed):
    """Base das estratégias do provedor principal (newsapi.org)."""

    name = "newsapi"
    ENDPOINT = "everything"

    def __init__(
        self,
        api_key: Optional[str] = None,
        page_size: int = config.PAGE_SIZE,
        base_url: str = config.NEWS_API_BASE_URL,
        session: requests.Session = SESSION,
    ):
        self.api_key = api_key if api_key is not None else config.NEWS_API_KEY
        self.page_size = page_size
        self.base_url = base_url.rstrip("/")
        self.session = session

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def params(self) -> Dict[str, str]:
        raise NotImplementedError

    def _fetch(self) -> List[Article]:
        params = dict(self.params())
        params["pageSize"] = str(self.page_size)
        response = self.session.get(
            f"{self.base_url}/{self.ENDPOINT}",
            params=params,
            headers={"X-Api-Key": self.api_key},
            timeout=self.TIMEOUT,
        )
        response.raise_for_status()
        payload = response.json()
        if payload.get("status") == "error":
            raise NewsApiError(payload.get("message") or payload.get("code") or "unknown NewsAPI error")
        return [map_article(raw) for raw in payload.get("articles") or []]


class KeywordFeed(NewsApiFeed):
    """/everything com query booleana esporte x região, mais recentes primeiro."""

    name = "newsapi-keywords"

    def __init__(self, sport_terms=None, region_terms=None, language="en", **kwargs):
        super().__init__(**kwargs)
        self.query = build_query(sport_terms or config.SPORT_TERMS, region_terms or config.REGION_TERMS)
        self.language = language

    def params(self) -> Dict[str, str]:
        return {"q": self.query, "language": self.language, "sortBy": "publishedAt"}


class DomainFeed(NewsApiFeed):
    """/everything restrito a domínios confiáveis."""

    name = "newsapi-domains"

    def __init__(self, domains=None, query: Optional[str] = "sport", language="en", **kwargs):
        super().__init__(**kwargs)
        self.domains = list(domains or config.TRUSTED_DOMAINS)
        self.query = query
        self.language = language

    def params(self) -> Dict[str, str]:
        params = {"domains": ",".join(self.domains), "language": self.language, "sortBy": "publishedAt"}
        if self.query:
            params["q"] = self.query
        return params


class SourcesFeed(NewsApiFeed):
    """/top-headlines das fontes esportivas (bbc-sport, espn, ...)."""

    name = "newsapi-sources"
    ENDPOINT = "top-headlines"

    def __init__(self, sources=None, **kwargs):
        super().__init__(**kwargs)
        self.sources = list(sources or config.TRUSTED_SOURCES)

    def params(self) -> Dict[str, str]:
        return {"sources": ",".join(self.sources)}


class CategoryFeed(NewsApiFeed):
    """/top-headlines filtrado por categoria + país."""

    name = "newsapi-category"
    ENDPOINT = "top-headlines"

    def __init__(self, category: str = config.HEADLINES_CATEGORY, country: str = config.HEADLINES_COUNTRY, **kwargs):
        super().__init__(**kwargs)
        self.category = category
        self.country = country

    def params(self) -> Dict[str, str]:
        return {"category": self.category, "country": self.country}


class TopicFeed(NewsApiFeed):
    """/everything com a query de um tópico (football, rugby, ...)."""

    def __init__(self, topic: str, query: Optional[str] = None, language="en", **kwargs):
        super().__init__(**kwargs)
        self.topic = topic
        self.query = query or config.TOPIC_QUERIES[topic]
        self.language = language
        self.name = f"newsapi-topic-{topic}"

    def params(self) -> Dict[str, str]:
        return {"q": self.query, "language": self.language, "sortBy": "publishedAt"}
