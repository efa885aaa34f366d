import subprocess

import pytest

from herald.errors import CommandError
from herald.tts import SpeechStrategy


@pytest.fixture(autouse=True)
def event_log(tmp_path, monkeypatch):
    path = tmp_path / "logs" / "events.jsonl"
    monkeypatch.setattr("herald.events.LOGS_PATH", str(path))
    return path


class FakeRunner:
    """
    Stands in for herald.shell.run_command. `fail_when(args, env)` returns an
    error message for calls that should fail, or None for success.
    """
    def __init__(self, fail_when=None, on_call=None):
        self.calls = []
        self.fail_when = fail_when or (lambda args, env: None)
        self.on_call = on_call

    def __call__(self, args, env=None, timeout=None):
        args = list(args)
        self.calls.append((args, env))
        if self.on_call:
            self.on_call(args, env)
        reason = self.fail_when(args, env)
        if reason:
            raise CommandError(reason, returncode=1)
        return subprocess.CompletedProcess(args, 0, b"", b"")

    @property
    def programs(self):
        return [args[0] for args, _ in self.calls]


@pytest.fixture
def fake_runner(monkeypatch):
    def install(fail_when=None, on_call=None):
        runner = FakeRunner(fail_when, on_call)
        monkeypatch.setattr("herald.tts.run_command", runner)
        return runner
    return install


class Scripted(SpeechStrategy):
    """Strategy whose outcome is fixed up front."""
    def __init__(self, name, error=None):
        super().__init__(system="Linux")
        self.name = name
        self.error = error
        self.calls = []

    def _speak(self, text, system):
        self.calls.append(text)
        if self.error is not None:
            raise self.error


@pytest.fixture
def scripted():
    return Scripted
