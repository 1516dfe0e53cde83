from typing import Dict, List

import requests

from sportsnews import config
from sportsnews.models import Article
from sportsnews.utils.tz_utils import parse_iso, to_local_str
from .base import BaseFeed
from .http import SESSION


def map_espn_article(raw: Dict) -> Article:
    # ESPN: headline / links.web.href / images[0].url / published
    links = raw.get("links") or {}
    web = links.get("web") or {}
    images = raw.get("images") or []
    image = images[0].get("url") if images else None
    published_ts = parse_iso(raw.get("published"))
    return Article(
        title=raw.get("headline"),
        description=raw.get("description"),
        url=web.get("href"),
        image=image or config.PLACEHOLDER_IMAGE,
        source="ESPN",
        published_at=to_local_str(published_ts),
        published_ts=published_ts,
    )


class EspnFeed(BaseFeed):
    """Provedor secundário: API pública de notícias da ESPN (não exige chave)."""

    name = "espn"

    def __init__(self, url: str = config.ESPN_NEWS_URL, limit: int = config.PAGE_SIZE,
                 session: requests.Session = SESSION):
        self.url = url
        self.limit = limit
        self.session = session

    def _fetch(self) -> List[Article]:
        response = self.session.get(self.url, params={"limit": str(self.limit)}, timeout=self.TIMEOUT)
        response.raise_for_status()
        payload = response.json()
        return [map_espn_article(raw) for raw in (payload.get("articles") or [])[: self.limit]]
