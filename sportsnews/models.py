from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from sportsnews.config import PLACEHOLDER_IMAGE, SERVICE_NAME
from sportsnews.utils.tz_utils import to_local_str


class Article(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None  # chave de dedupe
    description: Optional[str] = None
    url: Optional[str] = None
    image: str = PLACEHOLDER_IMAGE
    source: Optional[str] = None
    published_at: str = Field(default="", alias="publishedAt")
    # instante de publicação (UTC), usado só para ordenação; não sai no JSON
    published_ts: Optional[datetime] = Field(default=None, exclude=True)

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)


@dataclass(frozen=True)
class CacheState:
    """Snapshot imutável do cache; substituído inteiro a cada refresh."""
    articles: Tuple[Article, ...] = ()
    last_refresh: Optional[float] = None  # epoch seconds
    generation: int = 0
    sources: Dict[str, str] = field(default_factory=dict)

    @property
    def empty(self) -> bool:
        return self.last_refresh is None

    def age_seconds(self, now: float) -> Optional[float]:
        if self.last_refresh is None:
            return None
        return now - self.last_refresh


def placeholder_article(reason: str = "No sports articles could be fetched from any source.") -> Article:
    now = datetime.now(timezone.utc)
    return Article(
        title="Sports news is temporarily unavailable",
        description=f"{reason} Check that NEWS_API_KEY is configured and the upstream APIs are reachable.",
        url="https://newsapi.org/",
        image=PLACEHOLDER_IMAGE,
        source=SERVICE_NAME,
        published_at=to_local_str(now),
        published_ts=now,
    )
