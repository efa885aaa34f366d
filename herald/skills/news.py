# herald/skills/news.py
from __future__ import annotations

import requests

from herald.config import (
    NEWS_API_KEY, NEWS_COUNTRY, NEWS_FALLBACK_QUERY, NEWS_LIMIT, HTTP_TIMEOUT_SECS,
)
from herald.errors import NotFound, UpstreamError

NEWS_TOP_HEADLINES = "https://newsapi.org/v2/top-headlines"
NEWS_EVERYTHING = "https://newsapi.org/v2/everything"


def _get_articles(url: str, params: dict) -> list[dict]:
    params = dict(params, apiKey=NEWS_API_KEY)
    r = requests.get(url, params=params, timeout=HTTP_TIMEOUT_SECS)
    print(f"[Herald][News][DBG] GET {url} status={r.status_code}")
    r.raise_for_status()
    return (r.json() or {}).get("articles") or []


def fetch_headlines(limit: int | None = None) -> list[dict]:
    """
    Top headlines for NEWS_COUNTRY, falling back to a keyword search when
    the headline list is empty. Returns [{"title", "url"}, ...].
    """
    limit = NEWS_LIMIT if limit is None else limit
    try:
        articles = _get_articles(NEWS_TOP_HEADLINES, {"country": NEWS_COUNTRY})
        if not articles:
            articles = _get_articles(NEWS_EVERYTHING, {"q": NEWS_FALLBACK_QUERY})
    except (requests.RequestException, ValueError) as e:
        raise UpstreamError(f"Failed to fetch news: {e}") from e

    if not articles:
        raise NotFound("No news articles found. Check your News API key.")

    return [{"title": a.get("title"), "url": a.get("url")} for a in articles[:limit]]
