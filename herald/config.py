# herald/config.py
import os
import tempfile

from dotenv import load_dotenv

load_dotenv()

def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))

# News (newsapi.org)
NEWS_API_KEY = os.getenv("NEWS_API_KEY", "")
NEWS_COUNTRY = os.getenv("NEWS_COUNTRY", "in").strip()
NEWS_FALLBACK_QUERY = os.getenv("NEWS_FALLBACK_QUERY", "india").strip()
NEWS_LIMIT = int(os.getenv("NEWS_LIMIT", "5"))

# Gemini
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
GEMINI_SEARCH_GROUNDING = _flag("GEMINI_SEARCH_GROUNDING", "0")
GEMINI_MAX_WORDS = int(os.getenv("GEMINI_MAX_WORDS", "40"))

# Music
YOUTUBE_API_KEY = os.getenv("YOUTUBE_API_KEY", "")

# TTS settings
TTS_ENGINE = os.getenv("TTS_ENGINE", "espeak").strip()                # synthesizer binary
TTS_PLAYERS = [p.strip() for p in os.getenv("TTS_PLAYERS", "aplay,paplay,play").split(",") if p.strip()]
TTS_TEMP_DIR = os.getenv("TTS_TEMP_DIR", "").strip() or tempfile.gettempdir()
TTS_CLEANUP_DELAY = float(os.getenv("TTS_CLEANUP_DELAY", "1.0"))      # seconds; 0 = delete inline
TTS_TIMEOUT_SECS = float(os.getenv("TTS_TIMEOUT_SECS", "30"))

# Session defaults injected when the ambient environment lacks them
AUDIO_DEFAULT_DISPLAY = os.getenv("AUDIO_DEFAULT_DISPLAY", ":0")
AUDIO_DEFAULT_RUNTIME_DIR = os.getenv("AUDIO_DEFAULT_RUNTIME_DIR", "/run/user/1000")

# Narration
STARTUP_SPEECH = _flag("STARTUP_SPEECH", "1")
STARTUP_TEXT = os.getenv("STARTUP_TEXT", "Server started successfully").strip()
TEST_SPEECH_TEXT = os.getenv("TEST_SPEECH_TEXT", "Hello, this is a test").strip()

# Timeouts for launchers / outbound HTTP
COMMAND_TIMEOUT_SECS = float(os.getenv("COMMAND_TIMEOUT_SECS", "15"))
HTTP_TIMEOUT_SECS = float(os.getenv("HTTP_TIMEOUT_SECS", "10"))

# Logging
LOGS_PATH = os.getenv("LOGS_PATH", os.path.join("logs", "events.jsonl"))
