# herald/skills/music.py
from __future__ import annotations

from urllib.parse import quote_plus

import requests

from herald.config import YOUTUBE_API_KEY, HTTP_TIMEOUT_SECS
from herald.errors import CommandError, UpstreamError
from herald.skills.browser import open_url

YOUTUBE_SEARCH_API = "https://www.googleapis.com/youtube/v3/search"
YOUTUBE_WATCH = "https://www.youtube.com/watch?v={id}"
YOUTUBE_RESULTS = "https://www.youtube.com/results?search_query={q}"


def search_video(song: str) -> tuple[str, str] | None:
    """
    First YouTube video matching `song` as (title, url), or None when no
    API key is configured or nothing matched. Network errors propagate.
    """
    if not YOUTUBE_API_KEY or not song:
        return None
    params = {
        "part": "snippet",
        "q": song,
        "key": YOUTUBE_API_KEY,
        "maxResults": 1,
        "type": "video",
    }
    r = requests.get(YOUTUBE_SEARCH_API, params=params, timeout=HTTP_TIMEOUT_SECS)
    print(f"[Herald][Music][DBG] search status={r.status_code}")
    r.raise_for_status()
    items = (r.json() or {}).get("items") or []
    if not items:
        return None
    video = items[0]
    video_id = (video.get("id") or {}).get("videoId")
    if not video_id:
        return None
    title = (video.get("snippet") or {}).get("title") or song
    return title, YOUTUBE_WATCH.format(id=video_id)


def _open(song: str, url: str):
    try:
        open_url(url)
    except CommandError as e:
        raise UpstreamError(f"Failed to open YouTube for {song}: {e}") from e


def play_music(song: str) -> dict:
    """
    Open the best YouTube match for `song`; falls back to the YouTube
    search results page. Returns {"message", "url"}.
    """
    try:
        found = search_video(song)
    except (requests.RequestException, ValueError) as e:
        print(f"[Herald][Music] search failed, using results page: {e}")
        found = None

    if found:
        title, url = found
        _open(song, url)
        return {"message": f"Playing {title}", "url": url}

    url = YOUTUBE_RESULTS.format(q=quote_plus(song or ""))
    _open(song, url)
    return {"message": f"Searching for {song} on YouTube", "url": url}
