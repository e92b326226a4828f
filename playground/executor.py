"""
Execution coordinator.

Validation, classification and synthesis run as one coroutine raced against
the execution budget. Whatever happens inside, the caller gets an
``ExecutionResult`` back.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional

from .config import settings
from .errors import InjectedFailure
from .languages import Language
from .models import ExecutionResult, ExecutionStatus
from .patterns import PatternClassifier
from .synthesizer import OutputSynthesizer
from .validator import SyntaxValidator
from .variability import Variability, variability_from_settings

logger = logging.getLogger("playground.executor")

EMPTY_CODE_MESSAGE = "error: no code to execute"
TIMEOUT_MESSAGE = (
    "Execution timed out after {budget} ms. "
    "Check for infinite loops or reduce the input size."
)


class ExecutionCoordinator:
    """Runs a snippet through the engine within a fixed time budget."""

    def __init__(
        self,
        validator: Optional[SyntaxValidator] = None,
        classifier: Optional[PatternClassifier] = None,
        synthesizer: Optional[OutputSynthesizer] = None,
        timeout_ms: Optional[int] = None,
        variability: Optional[Variability] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.validator = validator or SyntaxValidator()
        self.classifier = classifier or PatternClassifier()
        self.synthesizer = synthesizer or OutputSynthesizer()
        self.timeout_ms = timeout_ms if timeout_ms is not None else settings.EXECUTION_TIMEOUT_MS
        self.variability = variability if variability is not None else variability_from_settings(settings)
        self._clock = clock

    def _elapsed_ms(self, start: float) -> int:
        return max(0, int(round((self._clock() - start) * 1000)))

    async def _execute(self, code: str, language: "str | Language") -> tuple[ExecutionStatus, str]:
        language = Language.parse(language)

        delay = self.variability.latency_ms()
        if delay:
            await asyncio.sleep(delay / 1000)

        diagnostic = self.validator.validate(code, language)
        if diagnostic:
            return ExecutionStatus.ERROR, diagnostic

        failure = self.variability.failure()
        if failure:
            raise InjectedFailure(failure)

        outcome = self.classifier.classify(code, language)
        return ExecutionStatus.SUCCESS, self.synthesizer.synthesize(outcome, language)

    async def run(self, code: str, language: "str | Language") -> ExecutionResult:
        """
        Simulate running ``code``.

        Returns:
            ExecutionResult with status success, error or timeout
        """
        if not code or not code.strip():
            return ExecutionResult(status=ExecutionStatus.ERROR, output=EMPTY_CODE_MESSAGE, executionTime=0)

        start = self._clock()
        try:
            status, output = await asyncio.wait_for(
                self._execute(code, language),
                timeout=self.timeout_ms / 1000,
            )
        except asyncio.TimeoutError:
            return self._timed_out()
        except Exception as exc:
            logger.error("Execution failed: %s: %s", type(exc).__name__, exc)
            return ExecutionResult(
                status=ExecutionStatus.ERROR,
                output=str(exc) or type(exc).__name__,
                executionTime=self._elapsed_ms(start),
            )

        # Synchronous steps never yield, so wait_for cannot interrupt them
        elapsed = self._elapsed_ms(start)
        if elapsed > self.timeout_ms:
            return self._timed_out()
        return ExecutionResult(status=status, output=output, executionTime=elapsed)

    def _timed_out(self) -> ExecutionResult:
        logger.warning("Execution timed out after %d ms", self.timeout_ms)
        return ExecutionResult(
            status=ExecutionStatus.TIMEOUT,
            output=TIMEOUT_MESSAGE.format(budget=self.timeout_ms),
            executionTime=self.timeout_ms,
        )
