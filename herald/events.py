# herald/events.py
import json
import os
from datetime import datetime, UTC

from herald.config import LOGS_PATH


def log_event(event: dict):
    event["ts"] = datetime.now(UTC).isoformat()
    try:
        folder = os.path.dirname(LOGS_PATH)
        if folder:
            os.makedirs(folder, exist_ok=True)
        with open(LOGS_PATH, "a", encoding="utf-8") as f:
            f.write(json.dumps(event, ensure_ascii=False, default=str) + "\n")
    except OSError as e:
        print(f"[Herald][Log] Could not write event to {LOGS_PATH}: {e}")

def log_action(name: str, status: str, **fields):
    payload = {"type": "action", "name": name, "status": status}
    payload.update(fields)
    log_event(payload)
