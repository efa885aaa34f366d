import platform
import re
import shutil
from typing import Optional

from herald.config import AUDIO_DEFAULT_DISPLAY, COMMAND_TIMEOUT_SECS
from herald.errors import CommandError, InvalidRequest, NotFound, UnsupportedPlatform, UpstreamError
from herald.shell import run_command, session_environment, spawn_detached

# Spoken names -> executables commonly found on Linux desktops
LINUX_ALIASES = {
    "vscode": ["code", "codium"],
    "code": ["code", "codium"],
    "chrome": ["google-chrome", "google-chrome-stable", "chromium", "chromium-browser"],
    "googlechrome": ["google-chrome", "google-chrome-stable"],
    "chromium": ["chromium", "chromium-browser"],
    "edge": ["microsoft-edge", "microsoft-edge-stable"],
    "brave": ["brave-browser", "brave"],
    "calculator": ["gnome-calculator", "kcalc", "galculator"],
    "calc": ["gnome-calculator", "kcalc", "galculator"],
    "terminal": ["gnome-terminal", "konsole", "xterm"],
    "files": ["nautilus", "dolphin", "thunar"],
    "texteditor": ["gedit", "gnome-text-editor", "kate"],
    "notepad": ["gedit", "gnome-text-editor", "kate"],
}

_UNSAFE = re.compile(r"[^a-zA-Z0-9_-]")

def sanitize_app_name(app: str) -> str:
    return _UNSAFE.sub("", app or "")

# Helper to find an executable on PATH
def _which_any(candidates: list[str]) -> Optional[str]:
    for c in candidates:
        p = shutil.which(c)
        if p:
            return p
    return None

def open_app(app: str) -> str:
    """
    Launch a desktop application by name. Returns a confirmation message.
    """
    name = sanitize_app_name(app)
    if not name:
        raise InvalidRequest("Invalid app name")

    system = platform.system()
    print(f"[Herald][Apps] Opening {name!r} on {system}")
    try:
        if system == "Darwin":
            run_command(["open", "-a", name], timeout=COMMAND_TIMEOUT_SECS)
        elif system == "Windows":
            run_command(["cmd", "/c", "start", "", name], timeout=COMMAND_TIMEOUT_SECS)
        elif system == "Linux":
            candidates = [name] + LINUX_ALIASES.get(name.lower(), [])
            path = _which_any(candidates)
            if not path:
                raise NotFound(f"Application {name} not found")
            spawn_detached([path], env=session_environment(DISPLAY=AUDIO_DEFAULT_DISPLAY))
        else:
            raise UnsupportedPlatform("Unsupported OS")
    except CommandError as e:
        raise UpstreamError(f"Failed to open {name}: {e}") from e

    return f"{name} opened successfully"
