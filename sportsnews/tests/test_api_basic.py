# sportsnews/tests/test_api_basic.py
from sportsnews import config


def test_root(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.text == config.WELCOME_TEXT


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    j = r.json()
    assert j["status"] == "OK"
    assert j["service"] == config.SERVICE_NAME
    # lifespan faz o refresh inicial com o feed fake
    assert j["cached_articles"] == 2
    assert j["last_fetch"] is not None
    assert j["cache_fresh"] is True
    assert j["api_key_configured"] is True
    assert j["sources"] == {"primary": "ok"}


def test_health_reports_missing_key(client, monkeypatch):
    monkeypatch.setattr(config, "NEWS_API_KEY", None)
    assert client.get("/health").json()["api_key_configured"] is False


def test_topics(client):
    r = client.get("/topics")
    assert r.status_code == 200
    assert {"football", "rugby", "cricket"} <= set(r.json()["data"])


def test_force_refresh(client):
    from sportsnews.api import main as api_main

    before = api_main.news_cache.state.generation
    r = client.post("/refresh")
    assert r.status_code == 200
    assert r.json() == {"status": "success", "count": 2}
    assert api_main.news_cache.state.generation == before + 1


def test_refresh_job_uses_shared_cache(client):
    from sportsnews.api import main as api_main

    before = api_main.news_cache.state.generation
    api_main.refresh_news_job()
    assert api_main.news_cache.state.generation == before + 1


def test_default_news_cache_chain():
    from sportsnews.api import main as api_main
    from sportsnews.feeds import CategoryFeed, DomainFeed, EspnFeed, KeywordFeed, SourcesFeed

    cache = api_main.build_news_cache()

    assert [type(f) for f in cache.feeds] == [KeywordFeed, DomainFeed, SourcesFeed, CategoryFeed]
    assert isinstance(cache.fallback, EspnFeed)
    assert cache.use_placeholder is True
    assert cache.excluded_words == config.NEWS_EXCLUDED_WORDS
    assert cache.ttl_seconds == config.CACHE_TTL_MINUTES * 60


def test_topic_cache_is_strict():
    from sportsnews.api import main as api_main
    from sportsnews.feeds import TopicFeed

    cache = api_main.build_topic_cache("rugby")

    assert [type(f) for f in cache.feeds] == [TopicFeed]
    assert cache.feeds[0].query == config.TOPIC_QUERIES["rugby"]
    assert cache.fallback is None
    assert cache.use_placeholder is False
