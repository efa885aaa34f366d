# herald/skills/gemini.py
import os
import re

from google import genai
from google.genai import types

from herald.config import GEMINI_MODEL, GEMINI_SEARCH_GROUNDING, GEMINI_MAX_WORDS
from herald.errors import UpstreamError

# Optional: Google Search grounding tool
GSEARCH_TOOL = types.Tool(google_search=types.GoogleSearch())


def _get_client() -> "genai.Client":
    """
    Lazy-initialize the Gemini client so .env is loaded before this is called.
    Looks for GEMINI_API_KEY first, then GOOGLE_API_KEY.
    """
    api_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    if not api_key:
        raise RuntimeError("Missing GEMINI_API_KEY (or GOOGLE_API_KEY).")
    return genai.Client(api_key=api_key)


def _response_text(resp) -> str:
    # Preferred convenience field
    text = (getattr(resp, "text", "") or "").strip()
    if text:
        return text

    # Fallback parse
    cands = getattr(resp, "candidates", None) or []
    if not cands or not getattr(cands[0], "content", None):
        return ""
    parts = getattr(cands[0].content, "parts", None) or []
    return " ".join(getattr(p, "text", "") for p in parts if getattr(p, "text", "")).strip()


def clean_response(text: str, max_words: int | None = None) -> str:
    """Strip punctuation/symbols, collapse whitespace and cap the word count for speech."""
    max_words = GEMINI_MAX_WORDS if max_words is None else max_words
    text = re.sub(r"[^\w\s]", "", text or "")
    text = re.sub(r"\s+", " ", text).strip()
    return " ".join(text.split(" ")[:max_words])


def ask_gemini(query: str) -> str:
    """
    Ask Gemini and return a short, speakable answer.
    Raises UpstreamError when the key is missing or the call fails.
    """
    try:
        client = _get_client()
        config = None
        if GEMINI_SEARCH_GROUNDING:
            config = types.GenerateContentConfig(tools=[GSEARCH_TOOL])
        resp = client.models.generate_content(
            model=GEMINI_MODEL,
            contents=query,
            config=config,
        )
        text = _response_text(resp)
    except Exception as e:
        raise UpstreamError(f"Failed to query Gemini API: {e}") from e

    print(f"[Herald][Gemini] {len(text)} chars from {GEMINI_MODEL}")
    return clean_response(text)
