import os
import logging
from typing import Dict, List, Optional
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Carrega variáveis do .env
load_dotenv(override=True)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid integer for %s=%r, using default %s", name, raw, default)
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if not raw:
        return list(default)
    return [w.strip().lower() for w in raw.split(",") if w.strip()]


SERVICE_NAME = "UK Sports News API"
WELCOME_TEXT = "UK Sports News API - Access /news for sports articles"

PORT = _env_int("PORT", 3000)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Upstream
NEWS_API_KEY: Optional[str] = os.getenv("NEWS_API_KEY") or None
NEWS_API_BASE_URL = os.getenv("NEWS_API_BASE_URL", "https://newsapi.org/v2")
ESPN_NEWS_URL = os.getenv(
    "ESPN_NEWS_URL",
    "https://site.api.espn.com/apis/site/v2/sports/soccer/eng.1/news",
)
HTTP_TIMEOUT_SECONDS = _env_int("HTTP_TIMEOUT_SECONDS", 10)
PAGE_SIZE = _env_int("PAGE_SIZE", 30)

# Cache / scheduler
CACHE_TTL_MINUTES = _env_int("CACHE_TTL_MINUTES", 60)
REFRESH_INTERVAL_MINUTES = _env_int("REFRESH_INTERVAL_MINUTES", 30)
ARTICLE_THRESHOLD = _env_int("ARTICLE_THRESHOLD", 20)

DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "Europe/London")
PLACEHOLDER_IMAGE = "https://via.placeholder.com/400x200?text=Sports+News"

# Query building blocks
SPORT_TERMS = ["football", "premier league", "rugby", "cricket", "tennis", "golf", "formula 1"]
REGION_TERMS = ["UK", "England", "Scotland", "Wales", "Britain"]
TRUSTED_DOMAINS = ["bbc.co.uk", "skysports.com", "theguardian.com"]
TRUSTED_SOURCES = ["bbc-sport", "espn", "four-four-two", "fox-sports", "talksport"]
HEADLINES_CATEGORY = "sports"
HEADLINES_COUNTRY = "gb"

TOPIC_QUERIES: Dict[str, str] = {
    "football": '(football OR soccer OR "premier league") AND (UK OR England OR Scotland)',
    "rugby": '(rugby OR "six nations" OR "premiership rugby") AND (UK OR England OR Wales OR Scotland)',
    "cricket": '(cricket OR "test match" OR "the ashes") AND (England OR UK)',
    "tennis": '(tennis OR wimbledon) AND (UK OR British)',
    "golf": '(golf OR "ryder cup" OR "the open") AND (UK OR England OR Scotland)',
    "formula1": '("formula 1" OR F1 OR "grand prix") AND (British OR Silverstone)',
}

# Exclusões: /news é mais estrito que os tópicos
# Casamento por palavra inteira, aceitando plural com "s" (ver filters/content_filter.py);
# vale também para listas vindas do .env
ENTERTAINMENT_WORDS = [
    "movie", "film", "celebrity", "entertainment", "music", "album",
    "concert", "festival", "actor", "actress", "director",
]
# termos que não colidem com linguagem esportiva ("shooting boots", "title assault")
HARD_NEWS_WORDS = ["drugs", "murder", "stabbing", "manslaughter", "trafficking", "arrested"]

NEWS_EXCLUDED_WORDS = _env_list("NEWS_EXCLUDED_WORDS", ENTERTAINMENT_WORDS + HARD_NEWS_WORDS)
TOPIC_EXCLUDED_WORDS = _env_list("TOPIC_EXCLUDED_WORDS", ENTERTAINMENT_WORDS)


def api_key_configured() -> bool:
    return bool(NEWS_API_KEY)
