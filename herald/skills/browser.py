import platform

from herald.config import AUDIO_DEFAULT_DISPLAY, COMMAND_TIMEOUT_SECS
from herald.errors import UnsupportedPlatform
from herald.shell import run_command, session_environment

def _ensure_scheme(url: str) -> str:
    if not (url.startswith("http://") or url.startswith("https://")):
        url = "https://" + url
    return url

def open_url(url: str) -> str:
    """
    Open `url` with the desktop's default handler. Returns the URL opened.
    Raises CommandError if the opener fails.
    """
    url = _ensure_scheme(url)
    system = platform.system()

    if system == "Darwin":
        run_command(["open", url], timeout=COMMAND_TIMEOUT_SECS)
    elif system == "Windows":
        run_command(["cmd", "/c", "start", "", url], timeout=COMMAND_TIMEOUT_SECS)
    elif system == "Linux":
        env = session_environment(DISPLAY=AUDIO_DEFAULT_DISPLAY)
        run_command(["xdg-open", url], env=env, timeout=COMMAND_TIMEOUT_SECS)
    else:
        raise UnsupportedPlatform("Unsupported OS")
    return url
