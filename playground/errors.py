"""
Exceptions raised inside the engine.

None of these cross the service boundary: the coordinator turns them into
``error`` results.
"""
from __future__ import annotations

from .languages import UnsupportedLanguageError


class PlaygroundError(Exception):
    """Base class for engine failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class SynthesisError(PlaygroundError):
    """Output could not be produced for the matched pattern."""


class InjectedFailure(PlaygroundError):
    """Failure injected by a variability source to mimic a flaky runtime."""


__all__ = [
    "PlaygroundError",
    "SynthesisError",
    "InjectedFailure",
    "UnsupportedLanguageError",
]
