import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import requests

from sportsnews.config import HTTP_TIMEOUT_SECONDS
from sportsnews.models import Article

logger = logging.getLogger(__name__)


class FeedStatus(str, Enum):
    ok = "ok"
    empty = "empty"
    not_configured = "not_configured"
    failed = "failed"


@dataclass
class FeedResult:
    status: FeedStatus
    articles: List[Article] = field(default_factory=list)
    error: Optional[str] = None


class BaseFeed(ABC):
    """
    Uma estratégia de busca: consulta um upstream e devolve Articles normalizados.

    `fetch_result()` nunca levanta exceção: falta de credencial vira
    `not_configured`, erro de rede/HTTP/corpo malformado vira `failed`.
    """

    name = "base"
    TIMEOUT = HTTP_TIMEOUT_SECONDS

    def is_configured(self) -> bool:
        return True

    @abstractmethod
    def _fetch(self) -> List[Article]:
        pass

    def fetch_result(self) -> FeedResult:
        if not self.is_configured():
            logger.warning("[%s] skipped: credentials not configured", self.name)
            return FeedResult(FeedStatus.not_configured, error="credentials not configured")

        try:
            articles = self._fetch()
        except requests.RequestException as e:
            logger.error("[%s] fetch failed: %s", self.name, e)
            return FeedResult(FeedStatus.failed, error=str(e))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            # JSON inválido ou formato inesperado
            logger.error("[%s] malformed response: %s", self.name, e)
            return FeedResult(FeedStatus.failed, error=f"malformed response: {e}")

        if not articles:
            return FeedResult(FeedStatus.empty)
        logger.info("[%s] fetched %d articles", self.name, len(articles))
        return FeedResult(FeedStatus.ok, articles)

    def fetch(self) -> List[Article]:
        return self.fetch_result().articles
