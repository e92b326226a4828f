"""
Injectable sources of run-to-run variability.

The playground can pretend to be a real runtime by adding latency and the
odd crash. Both come from a ``Variability`` object so tests can pin them.
"""
from __future__ import annotations

import random
from typing import Optional

from .config import Settings


class Variability:
    """Deterministic default: no added latency, never fails."""

    def latency_ms(self) -> int:
        return 0

    def failure(self) -> Optional[str]:
        """Message of a failure to inject for this request, or None."""
        return None


class FixedVariability(Variability):
    """Same latency and failure on every request."""

    def __init__(self, latency_ms: int = 0, failure: Optional[str] = None):
        self._latency_ms = latency_ms
        self._failure = failure

    def latency_ms(self) -> int:
        return self._latency_ms

    def failure(self) -> Optional[str]:
        return self._failure


class RandomVariability(Variability):
    """Uniform latency in ``[min_ms, max_ms]`` and failures at ``failure_rate``."""

    FAILURE_MESSAGE = "RuntimeError: simulated runtime failure"

    def __init__(self, min_ms: int, max_ms: int, failure_rate: float = 0.0, seed: Optional[int] = None):
        if max_ms < min_ms:
            raise ValueError(f"max_ms ({max_ms}) must not be below min_ms ({min_ms})")
        self.min_ms = min_ms
        self.max_ms = max_ms
        self.failure_rate = failure_rate
        self._rng = random.Random(seed)

    def latency_ms(self) -> int:
        return self._rng.randint(self.min_ms, self.max_ms)

    def failure(self) -> Optional[str]:
        if self.failure_rate and self._rng.random() < self.failure_rate:
            return self.FAILURE_MESSAGE
        return None


def variability_from_settings(settings: Settings) -> Variability:
    """Build the variability source described by the settings."""
    if not settings.SIMULATED_LATENCY_MAX_MS and not settings.FAILURE_RATE:
        return Variability()
    return RandomVariability(
        min_ms=settings.SIMULATED_LATENCY_MIN_MS,
        max_ms=max(settings.SIMULATED_LATENCY_MIN_MS, settings.SIMULATED_LATENCY_MAX_MS),
        failure_rate=settings.FAILURE_RATE,
        seed=settings.RANDOM_SEED,
    )
