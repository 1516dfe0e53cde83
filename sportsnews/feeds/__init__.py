from .base import BaseFeed, FeedResult, FeedStatus
from .newsapi import (
    NewsApiFeed,
    NewsApiError,
    KeywordFeed,
    DomainFeed,
    SourcesFeed,
    CategoryFeed,
    TopicFeed,
)
from .espn import EspnFeed

__all__ = [
    "BaseFeed",
    "FeedResult",
    "FeedStatus",
    "NewsApiFeed",
    "NewsApiError",
    "KeywordFeed",
    "DomainFeed",
    "SourcesFeed",
    "CategoryFeed",
    "TopicFeed",
    "EspnFeed",
]


def primary_feeds(api_key=None):
    """Cadeia padrão do provedor principal, em ordem de prioridade."""
    return [
        KeywordFeed(api_key=api_key),
        DomainFeed(api_key=api_key),
        SourcesFeed(api_key=api_key),
        CategoryFeed(api_key=api_key),
    ]
