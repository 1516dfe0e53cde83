# sportsnews/tests/test_news_endpoints.py
from sportsnews.cache.news_cache import NewsCache
from sportsnews.tests.fakes import ExplodingFeed, FailingFeed, StaticFeed, make_article


def test_news_returns_cached_articles_newest_first(client):
    from sportsnews.api import main as api_main

    r = client.get("/news")
    assert r.status_code == 200
    data = r.json()
    assert [d["title"] for d in data] == ["England name Ashes squad", "Arsenal win derby"]
    assert set(data[0]) == {"title", "description", "url", "image", "source", "publishedAt"}
    # cache fresco: nenhum fetch extra além do refresh do startup
    assert api_main.news_cache.feeds[0].calls == 1


def test_news_without_key_falls_back_to_placeholder(client, monkeypatch):
    from sportsnews.api import main as api_main

    cache = NewsCache(
        feeds=[StaticFeed("newsapi", [make_article("hidden")], configured=False)],
        fallback=StaticFeed("espn", []),
    )
    monkeypatch.setattr(api_main, "news_cache", cache)

    r = client.get("/news")
    assert r.status_code == 200
    data = r.json()
    assert len(data) == 1
    assert data[0]["title"] == "Sports news is temporarily unavailable"


def test_news_unexpected_error_returns_500(client, monkeypatch):
    from sportsnews.api import main as api_main

    monkeypatch.setattr(api_main, "news_cache", NewsCache(feeds=[ExplodingFeed("bad")]))

    r = client.get("/news")
    assert r.status_code == 500
    j = r.json()
    assert j["error"] == "Failed to fetch sports news"
    assert j["message"] == "boom"
    assert j["articles"] == []


def test_topic_without_key_returns_503(client, monkeypatch):
    from sportsnews.api import main as api_main

    monkeypatch.setattr(api_main.config, "NEWS_API_KEY", None)
    r = client.get("/news/football")
    assert r.status_code == 503
    assert "NEWS_API_KEY" in r.json()["message"]

    # /news continua servindo normalmente
    assert client.get("/news").status_code == 200


def test_unknown_topic_returns_404(client):
    r = client.get("/news/curling")
    assert r.status_code == 404


def test_topic_returns_articles(client, monkeypatch):
    from sportsnews.api import main as api_main

    feed = StaticFeed("topic", [make_article("Rugby: Wales squad named", minutes_ago=3)])
    monkeypatch.setattr(api_main, "build_topic_cache", lambda topic: NewsCache([feed], use_placeholder=False))

    r = client.get("/news/Rugby")
    assert r.status_code == 200
    assert [d["title"] for d in r.json()] == ["Rugby: Wales squad named"]
    client.get("/news/rugby")
    assert feed.calls == 1
    assert set(api_main.topic_caches) == {"rugby"}


def test_topic_upstream_failure_returns_500(client, monkeypatch):
    from sportsnews.api import main as api_main

    monkeypatch.setattr(
        api_main, "build_topic_cache",
        lambda topic: NewsCache([FailingFeed("topic")], use_placeholder=False, name=f"topic:{topic}"),
    )

    r = client.get("/news/cricket")
    assert r.status_code == 500
    j = r.json()
    assert j["error"] == "Failed to fetch cricket news"
    assert "all sources failed" in j["message"]
