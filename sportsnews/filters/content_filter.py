import re
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Pattern, Sequence, TypeVar

T = TypeVar("T")

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _field(item: Any, name: str) -> str:
    # aceita Article (atributo) ou dict cru do upstream
    if isinstance(item, dict):
        value = item.get(name)
    else:
        value = getattr(item, name, None)
    return value if isinstance(value, str) else ""


def _keyword_pattern(word: str) -> Optional[Pattern]:
    word = word.strip().casefold()
    if not word:
        return None
    # palavra inteira, singular ou plural: "drugs" pega "drug trafficking", "bets" não pega "better"
    stem = word[:-1] if len(word) > 3 and word.endswith("s") else word
    return re.compile(r"\b" + re.escape(stem) + r"s?\b")


def filter_articles(articles: Iterable[T], excluded: Iterable[str]) -> List[T]:
    """
    Mantém só artigos com título e descrição não vazios e que não citam
    nenhuma palavra excluída (case-insensitive, palavra inteira) em título ou descrição.
    """
    patterns = [p for p in (_keyword_pattern(w) for w in excluded) if p is not None]
    kept: List[T] = []
    for article in articles:
        title = _field(article, "title").strip()
        description = _field(article, "description").strip()
        if not title or not description:
            continue
        text = f"{title.casefold()}\n{description.casefold()}"
        if any(p.search(text) for p in patterns):
            continue
        kept.append(article)
    return kept


def dedupe_by_title(articles: Iterable[T]) -> List[T]:
    """Primeira ocorrência vence; títulos iguais depois dela são descartados."""
    seen = set()
    unique: List[T] = []
    for article in articles:
        title = _field(article, "title").strip()
        if title in seen:
            continue
        seen.add(title)
        unique.append(article)
    return unique


def sort_newest_first(articles: Sequence[T]) -> List[T]:
    # sorted é estável mesmo com reverse=True: empates mantêm a ordem de acúmulo
    def key(article: Any) -> datetime:
        ts = getattr(article, "published_ts", None)
        return ts if isinstance(ts, datetime) else _OLDEST

    return sorted(articles, key=key, reverse=True)
