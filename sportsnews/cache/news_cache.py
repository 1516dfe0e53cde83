import logging
import time
from threading import Lock
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from sportsnews.feeds.base import BaseFeed, FeedStatus
from sportsnews.filters.content_filter import dedupe_by_title, filter_articles, sort_newest_first
from sportsnews.models import Article, CacheState, placeholder_article

logger = logging.getLogger(__name__)


class CacheRefreshError(RuntimeError):
    """Refresh falhou e não há nada em cache para servir."""


class UpstreamUnavailable(RuntimeError):
    """Todas as estratégias falharam (usado em modo estrito, sem placeholder)."""


class NewsCache:
    """
    Cache em memória com TTL sobre uma cadeia de estratégias.

    - get_articles(): devolve o cache se fresco; senão roda refresh() síncrono.
    - refresh(): percorre as estratégias em ordem até atingir `threshold`,
      deduplica por título, cai no fallback e por fim no placeholder.
    - No máximo um refresh por vez. Chamadas com wait=True esperam o refresh
      em andamento e reaproveitam o resultado; wait=False (timer) vira no-op.
    """

    def __init__(
        self,
        feeds: Sequence[BaseFeed],
        fallback: Optional[BaseFeed] = None,
        ttl_seconds: float = 3600,
        threshold: int = 20,
        excluded_words: Iterable[str] = (),
        use_placeholder: bool = True,
        name: str = "news",
        clock: Callable[[], float] = time.time,
    ):
        self.feeds: List[BaseFeed] = list(feeds)
        self.fallback = fallback
        self.ttl_seconds = ttl_seconds
        self.threshold = threshold
        self.excluded_words = list(excluded_words)
        self.use_placeholder = use_placeholder
        self.name = name
        self._clock = clock
        self._state = CacheState()
        self._refresh_lock = Lock()
        self.last_error: Optional[str] = None

    @property
    def state(self) -> CacheState:
        return self._state

    def age_seconds(self) -> Optional[float]:
        return self._state.age_seconds(self._clock())

    def is_fresh(self, state: Optional[CacheState] = None) -> bool:
        state = state or self._state
        if state.empty:
            return False
        return self._clock() - state.last_refresh < self.ttl_seconds

    def get_articles(self) -> List[Article]:
        state = self._state
        if self.is_fresh(state):
            age = state.age_seconds(self._clock())
            logger.info("[%s] cache hit (age: %d minutes)", self.name, int(age // 60))
            return list(state.articles)

        logger.info("[%s] cache stale or empty, refreshing", self.name)
        articles, error = self._refresh(wait=True, seen_generation=state.generation)
        if error is not None and self._state.empty:
            raise CacheRefreshError(error)
        return articles

    def refresh(self, wait: bool = True) -> List[Article]:
        """Nunca levanta exceção: em erro inesperado devolve o cache anterior."""
        articles, _ = self._refresh(wait=wait, seen_generation=None)
        return articles

    def _refresh(self, wait: bool, seen_generation: Optional[int]) -> Tuple[List[Article], Optional[str]]:
        if not self._refresh_lock.acquire(blocking=wait):
            logger.info("[%s] refresh already in flight, skipping", self.name)
            return list(self._state.articles), None
        try:
            current = self._state
            # outro refresh terminou enquanto esperávamos o lock
            if seen_generation is not None and current.generation != seen_generation:
                return list(current.articles), None

            try:
                articles, outcomes = self._collect()
            except Exception as e:
                self.last_error = str(e)
                logger.exception("[%s] refresh failed, keeping previous %d articles",
                                 self.name, len(current.articles))
                return list(current.articles), str(e)

            self._state = CacheState(
                articles=tuple(articles),
                last_refresh=self._clock(),
                generation=current.generation + 1,
                sources=outcomes,
            )
            self.last_error = None
            logger.info("[%s] cached %d articles (%s)", self.name, len(articles),
                        ", ".join(f"{k}={v}" for k, v in outcomes.items()))
            return list(articles), None
        finally:
            self._refresh_lock.release()

    def _collect(self) -> Tuple[List[Article], Dict[str, str]]:
        outcomes: Dict[str, str] = {}
        collected: List[Article] = []
        unique: List[Article] = []

        for feed in self.feeds:
            result = feed.fetch_result()
            outcomes[feed.name] = result.status.value
            if not result.articles:
                continue
            collected.extend(filter_articles(result.articles, self.excluded_words))
            unique = dedupe_by_title(collected)
            if len(unique) >= self.threshold:
                break

        if not unique and self.fallback is not None:
            result = self.fallback.fetch_result()
            outcomes[self.fallback.name] = result.status.value
            unique = dedupe_by_title(filter_articles(result.articles, self.excluded_words))

        if not unique:
            statuses = set(outcomes.values())
            if not self.use_placeholder:
                if statuses and statuses <= {FeedStatus.failed.value}:
                    raise UpstreamUnavailable(f"all sources failed for '{self.name}'")
                return [], outcomes
            logger.warning("[%s] all sources exhausted, serving placeholder", self.name)
            unique = [placeholder_article()]

        return sort_newest_first(unique), outcomes
