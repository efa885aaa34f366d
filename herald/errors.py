# herald/errors.py
"""
Exception hierarchy. Every error carries the HTTP status the server
should answer with when it reaches a route.
"""


class HeraldError(Exception):
    status = 500


class InvalidRequest(HeraldError):
    status = 400


class NotFound(HeraldError):
    status = 404


class UpstreamError(HeraldError):
    """An external API or process behind a skill failed."""


class CommandError(HeraldError):
    """An external command was missing, failed to spawn, exited non-zero or timed out."""

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode


class StrategyFailure(HeraldError):
    """One speech strategy failed; the dispatcher moves on to the next."""


class UnsupportedPlatform(StrategyFailure):
    status = 400


class SpeechFailure(HeraldError):
    """Every speech strategy failed. Carries the last strategy's reason."""
