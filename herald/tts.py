import os
import platform
import threading
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable, Optional

from herald.config import (
    TTS_ENGINE, TTS_PLAYERS, TTS_TEMP_DIR, TTS_CLEANUP_DELAY, TTS_TIMEOUT_SECS,
    AUDIO_DEFAULT_DISPLAY, AUDIO_DEFAULT_RUNTIME_DIR,
)
from herald.errors import CommandError, SpeechFailure, StrategyFailure, UnsupportedPlatform
from herald.shell import run_command, session_environment

LINUX = "Linux"
MACOS = "Darwin"
WINDOWS = "Windows"


@dataclass
class DispatchResult:
    success: bool
    method: str


def _escape_ps_quotes(s: str) -> str:
    # The text ends up inside a single-quoted PowerShell literal passed on a command line.
    return s.replace('"', "'").replace("'", "''")

def _powershell(script: str) -> list[str]:
    return ["powershell", "-NoProfile", "-Command", script]


# ---------- temp file handling ----------
def _remove_quietly(path: str):
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        print(f"[Herald][TTS] Could not delete {path}: {e}")

def schedule_cleanup(path: str, delay: float) -> Optional[threading.Timer]:
    """Delete `path` after `delay` seconds on a daemon timer (inline when delay <= 0)."""
    if delay <= 0:
        _remove_quietly(path)
        return None
    timer = threading.Timer(delay, _remove_quietly, args=(path,))
    timer.daemon = True
    timer.start()
    return timer

@contextmanager
def scratch_file(path: str, cleanup_delay: float):
    """Hand out `path` and always schedule its deletion on the way out."""
    try:
        yield path
    finally:
        try:
            schedule_cleanup(path, cleanup_delay)
        except Exception as e:
            print(f"[Herald][TTS] Cleanup scheduling failed for {path}: {e}")


# ---------- strategies ----------
class SpeechStrategy:
    """
    One way of turning text into audible speech.

    Subclasses implement `_speak(text, system)` and list the platform
    identifiers (as returned by platform.system()) they handle. `speak()`
    either returns (success) or raises StrategyFailure.
    """
    name = ""
    platforms: tuple[str, ...] = (LINUX, MACOS, WINDOWS)
    failure_prefix = "Failed to speak"

    def __init__(self, engine: Optional[str] = None, timeout: Optional[float] = None,
                 system: Optional[str] = None):
        self.engine = engine or TTS_ENGINE
        self.timeout = TTS_TIMEOUT_SECS if timeout is None else timeout
        self._system = system

    @property
    def system(self) -> str:
        return self._system or platform.system()

    def speak(self, text: str):
        system = self.system
        if system not in self.platforms:
            raise UnsupportedPlatform(f"{self.failure_prefix}: unsupported platform '{system}'")
        try:
            self._speak(text, system)
        except StrategyFailure:
            raise
        except CommandError as e:
            raise StrategyFailure(f"{self.failure_prefix}: {e}") from e

    def _speak(self, text: str, system: str):
        raise NotImplementedError

    def _run(self, args: list[str], env: Optional[dict] = None):
        return run_command(args, env=env, timeout=self.timeout)

    def __repr__(self):
        return f"<{type(self).__name__} {self.name!r}>"


class DirectInvocation(SpeechStrategy):
    """espeak on Linux, `say` on macOS, System.Speech via PowerShell on Windows."""
    name = "System Espeak"

    def command(self, text: str, system: str) -> list[str]:
        # "--" ends option parsing so text starting with "-" is spoken, not parsed
        if system == LINUX:
            return [self.engine, "--", text]
        if system == MACOS:
            return ["say", "--", text]
        phrase = _escape_ps_quotes(text)
        return _powershell(
            "Add-Type -AssemblyName System.Speech; "
            f"(New-Object System.Speech.Synthesis.SpeechSynthesizer).Speak('{phrase}')"
        )

    def environment(self) -> Optional[dict]:
        return None

    def _speak(self, text: str, system: str):
        self._run(self.command(text, system), env=self.environment())


class RenderAndPlay(SpeechStrategy):
    """
    Render to a WAV file with the offline synthesizer, then play it.
    Linux tries each configured player in order; the temp file is always
    scheduled for deletion, and deletion problems never fail the strategy.
    """
    name = "WAV Generation"
    failure_prefix = "Failed to speak with WAV generation"

    def __init__(self, engine: Optional[str] = None, timeout: Optional[float] = None,
                 system: Optional[str] = None, players: Optional[Iterable[str]] = None,
                 temp_dir: Optional[str] = None, cleanup_delay: Optional[float] = None):
        super().__init__(engine=engine, timeout=timeout, system=system)
        self.players = list(players) if players is not None else list(TTS_PLAYERS)
        self.temp_dir = temp_dir or TTS_TEMP_DIR
        self.cleanup_delay = TTS_CLEANUP_DELAY if cleanup_delay is None else cleanup_delay

    def temp_path(self) -> str:
        return os.path.join(self.temp_dir, f"speech_{time.time_ns()}_{uuid.uuid4().hex[:8]}.wav")

    def _speak(self, text: str, system: str):
        with scratch_file(self.temp_path(), self.cleanup_delay) as wav:
            self._run([self.engine, "-w", wav, "--", text])
            self._play(wav, system)

    def _play(self, wav: str, system: str):
        if system == MACOS:
            self._run(["afplay", wav])
            return
        if system == WINDOWS:
            self._run(_powershell(f"(New-Object Media.SoundPlayer '{_escape_ps_quotes(wav)}').PlaySync()"))
            return

        last_error = None
        for player in self.players:
            try:
                self._run([player, wav])
                return
            except CommandError as e:
                print(f"[Herald][TTS] Player {player} failed: {e}")
                last_error = e
        raise last_error or CommandError("no audio player configured")


class EnvironmentAdjusted(DirectInvocation):
    """Direct invocation with display/audio session variables defaulted (headless/service contexts)."""
    name = "Audio Config"
    failure_prefix = "Failed to speak with audio config"

    def __init__(self, engine: Optional[str] = None, timeout: Optional[float] = None,
                 system: Optional[str] = None, display: Optional[str] = None,
                 runtime_dir: Optional[str] = None):
        super().__init__(engine=engine, timeout=timeout, system=system)
        self.display = display or AUDIO_DEFAULT_DISPLAY
        self.runtime_dir = runtime_dir or AUDIO_DEFAULT_RUNTIME_DIR

    def environment(self) -> dict:
        runtime = os.environ.get("XDG_RUNTIME_DIR") or self.runtime_dir
        return session_environment(
            DISPLAY=self.display,
            XDG_RUNTIME_DIR=runtime,
            PULSE_RUNTIME_PATH=f"{runtime}/pulse",
        )


def default_strategies() -> list[SpeechStrategy]:
    return [DirectInvocation(), RenderAndPlay(), EnvironmentAdjusted()]


# ---------- dispatcher ----------
class SpeechDispatcher:
    """
    Tries each strategy in order and stops at the first one that works.
    Returns DispatchResult(success=True, method=<name>) or raises
    SpeechFailure carrying the last strategy's error.
    """
    def __init__(self, strategies: Optional[Iterable[SpeechStrategy]] = None):
        self.strategies = list(strategies) if strategies is not None else default_strategies()

    @property
    def names(self) -> list[str]:
        return [s.name for s in self.strategies]

    def dispatch(self, text: str) -> DispatchResult:
        last_error = None
        for strategy in self.strategies:
            print(f"[Herald][TTS] Trying {strategy.name}...")
            try:
                strategy.speak(text)
            except Exception as e:
                print(f"[Herald][TTS] {strategy.name} failed: {e}")
                last_error = e
                continue
            print(f"[Herald][TTS] {strategy.name} succeeded")
            return DispatchResult(success=True, method=strategy.name)

        if last_error is None:
            raise SpeechFailure("All speech methods failed")
        raise SpeechFailure(str(last_error)) from last_error


_dispatcher: Optional[SpeechDispatcher] = None
_dispatcher_lock = threading.Lock()

def default_dispatcher() -> SpeechDispatcher:
    global _dispatcher
    with _dispatcher_lock:
        if _dispatcher is None:
            _dispatcher = SpeechDispatcher()
        return _dispatcher

def speak_text(text: str) -> DispatchResult:
    return default_dispatcher().dispatch(text)
