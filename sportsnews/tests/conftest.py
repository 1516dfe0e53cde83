# sportsnews/tests/conftest.py
import pytest

from sportsnews.tests.fakes import FakeClock, StaticFeed, make_article


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def app(monkeypatch):
    # Patches para impedir network/scheduler no startup
    from sportsnews.api import main as api_main
    from sportsnews.cache.news_cache import NewsCache

    class DummyScheduler:
        def add_job(self, *a, **k): pass
        def start(self): pass
        def shutdown(self, wait=False): pass
    monkeypatch.setattr(api_main, "scheduler", DummyScheduler(), raising=True)

    feed = StaticFeed("primary", [
        make_article("Arsenal win derby", minutes_ago=30),
        make_article("England name Ashes squad", minutes_ago=5),
    ])
    cache = NewsCache(feeds=[feed], excluded_words=["film"], name="test")
    monkeypatch.setattr(api_main, "news_cache", cache, raising=True)
    monkeypatch.setattr(api_main, "topic_caches", {}, raising=True)
    monkeypatch.setattr(api_main.config, "NEWS_API_KEY", "test-key", raising=True)
    return api_main.app


@pytest.fixture()
def client(app):
    from fastapi.testclient import TestClient
    # Usa contexto para garantir lifespan mas com patches aplicados
    with TestClient(app) as c:
        yield c
