# --- load .env *before anything else* so keys are available to all modules ---
from dotenv import load_dotenv
load_dotenv()

import os
import threading

from herald.config import HOST, PORT, STARTUP_SPEECH, STARTUP_TEXT
from herald.errors import HeraldError
from herald.events import log_event
from herald.server import create_app
from herald.tts import speak_text

app = create_app()

def _announce_startup():
    print("[Herald] Testing speech on startup...")
    try:
        result = speak_text(STARTUP_TEXT)
        log_event({"type": "startup_speech", "status": "success", "method": result.method})
    except HeraldError as e:
        print(f"[Herald][TTS] Startup speech failed: {e}")
        log_event({"type": "startup_speech", "status": "failed", "error": str(e)})

def main():
    print(f"[Herald] Server running on http://localhost:{PORT}")
    print("[Herald] GEMINI_API_KEY present:",
          bool(os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")))
    print("[Herald] NEWS_API_KEY present:", bool(os.getenv("NEWS_API_KEY")))
    log_event({"type": "boot", "host": HOST, "port": PORT})

    if STARTUP_SPEECH:
        threading.Thread(target=_announce_startup, daemon=True).start()

    try:
        app.run(host=HOST, port=PORT, threaded=True)
    except KeyboardInterrupt:
        print("\n[Herald] Shutting down...")
    finally:
        log_event({"type": "shutdown"})

if __name__ == "__main__":
    main()
