import re
from dataclasses import dataclass

@dataclass
class IntentResult:
    intent: str                # "open_app" | "news" | "play_music" | "ask"
    entity: str | None         # app name, song, or the question itself

# ===== Helpers =====
def _normalize(s: str) -> str:
    t = (s or "").strip()
    t = re.sub(r"[\u2018\u2019]", "'", t)
    t = re.sub(r"[\u201c\u201d]", '"', t)
    t = re.sub(r"[\u2013\u2014]", "-", t)
    t = re.sub(r"\s+", " ", t)
    return t

def _after_first(text: str, word: str) -> str:
    return text.replace(word, "", 1).strip()

# ===== Main parser =====
def parse_command(command: str) -> IntentResult:
    """
    Route a short text command:
      "open <app>"  -> open_app
      "...news..."  -> news
      "play <song>" -> play_music
      anything else -> ask (sent to Gemini verbatim)
    """
    raw = _normalize(command)
    t = raw.lower()

    if t.startswith("open"):
        return IntentResult("open_app", _after_first(t, "open"))
    if "news" in t:
        return IntentResult("news", None)
    if t.startswith("play"):
        return IntentResult("play_music", _after_first(t, "play"))
    return IntentResult("ask", raw)
