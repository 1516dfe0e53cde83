import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Dict

from apscheduler.schedulers.background import BackgroundScheduler
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from sportsnews import config
from sportsnews.cache.news_cache import NewsCache, CacheRefreshError
from sportsnews.feeds import EspnFeed, TopicFeed, primary_feeds

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def build_news_cache() -> NewsCache:
    return NewsCache(
        feeds=primary_feeds(),
        fallback=EspnFeed(),
        ttl_seconds=config.CACHE_TTL_MINUTES * 60,
        threshold=config.ARTICLE_THRESHOLD,
        excluded_words=config.NEWS_EXCLUDED_WORDS,
        name="news",
    )


def build_topic_cache(topic: str) -> NewsCache:
    return NewsCache(
        feeds=[TopicFeed(topic)],
        ttl_seconds=config.CACHE_TTL_MINUTES * 60,
        threshold=config.ARTICLE_THRESHOLD,
        excluded_words=config.TOPIC_EXCLUDED_WORDS,
        use_placeholder=False,
        name=f"topic:{topic}",
    )


news_cache = build_news_cache()
topic_caches: Dict[str, NewsCache] = {}

# Scheduler com configurações para evitar empilhamento de jobs
scheduler = BackgroundScheduler(
    job_defaults={
        "coalesce": True,         # junta execuções atrasadas
        "max_instances": 1,       # não roda dois iguais ao mesmo tempo
        "misfire_grace_time": 30, # 30s de tolerância
    }
)


def refresh_news_job():
    # timer: se já houver refresh em andamento, não espera
    articles = news_cache.refresh(wait=False)
    logger.info("Scheduled refresh done (%d articles)", len(articles))


@asynccontextmanager
async def lifespan(app: FastAPI):
    scheduler.add_job(refresh_news_job, "interval", minutes=config.REFRESH_INTERVAL_MINUTES, id="refresh_news")
    scheduler.start()

    # Primeira execução imediata para aquecer o cache
    try:
        news_cache.refresh()
    except Exception as e:
        logger.warning("first refresh failed: %s", e)

    logger.info("%s listening on port %s", config.SERVICE_NAME, config.PORT)
    yield
    scheduler.shutdown(wait=False)


def get_topic_cache(topic: str) -> NewsCache:
    cache = topic_caches.get(topic)
    if cache is None:
        cache = topic_caches.setdefault(topic, build_topic_cache(topic))
    return cache


#%% APP

app = FastAPI(title=config.SERVICE_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=512)


@app.get("/", response_class=PlainTextResponse)
def root():
    return config.WELCOME_TEXT


@app.get("/health")
def health():
    state = news_cache.state
    age = news_cache.age_seconds()
    last_fetch = None
    if state.last_refresh is not None:
        last_fetch = datetime.fromtimestamp(state.last_refresh, tz=timezone.utc).isoformat()
    return {
        "status": "OK",
        "service": config.SERVICE_NAME,
        "cached_articles": len(state.articles),
        "last_fetch": last_fetch,
        "cache_age_minutes": int(age // 60) if age is not None else None,
        "cache_fresh": news_cache.is_fresh(),
        "api_key_configured": config.api_key_configured(),
        "sources": dict(state.sources),
    }


@app.get("/topics")
def get_topics():
    return {"status": "success", "data": list(config.TOPIC_QUERIES.keys())}


@app.get("/news")
def get_news():
    try:
        articles = news_cache.get_articles()
    except Exception as e:
        logger.error("Error fetching sports news: %s", e)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch sports news", "message": str(e), "articles": []},
        )
    return [a.to_json() for a in articles]


@app.get("/news/{topic}")
def get_topic_news(topic: str):
    topic = topic.lower()
    if topic not in config.TOPIC_QUERIES:
        raise HTTPException(404, f"Unknown topic '{topic}'")
    if not config.api_key_configured():
        return JSONResponse(
            status_code=503,
            content={"error": "Service unavailable", "message": "NEWS_API_KEY is not configured"},
        )
    try:
        articles = get_topic_cache(topic).get_articles()
    except CacheRefreshError as e:
        logger.error("Error fetching %s news: %s", topic, e)
        return JSONResponse(
            status_code=500,
            content={"error": f"Failed to fetch {topic} news", "message": str(e), "articles": []},
        )
    return [a.to_json() for a in articles]


# POST
@app.post("/refresh")
def force_refresh():
    articles = news_cache.refresh()
    return {"status": "success", "count": len(articles)}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("sportsnews.api.main:app", host="0.0.0.0", port=config.PORT)
