"""
Output synthesizer.

Turns a detector outcome into the text the simulated program "prints".
"""
from __future__ import annotations

from typing import Callable, Optional

from .config import settings
from .errors import SynthesisError
from .languages import PROFILES, Language, format_array
from .patterns import PLACEHOLDER_VALUE, DetectorOutcome, PatternCase

SORT_SAMPLE = [5, 1, 4, 2, 8]
ITERATION_SAMPLE = [1, 2, 3, 4, 5]
FACTORIAL_SAMPLE = 5


def fibonacci(n: int) -> int:
    """Iterative Fibonacci: F(0) = 0, F(1) = 1."""
    if n <= 0:
        return 0
    if n == 1:
        return 1
    a, b = 0, 1
    for _ in range(n - 1):
        a, b = b, a + b
    return b


def factorial(n: int) -> int:
    result = 1
    for i in range(2, n + 1):
        result *= i
    return result


_FACTORIAL_LABELS = {
    Language.PYTHON: "factorial({n}) = {value}",
    Language.JAVA: "Factorial of {n} is: {value}",
    Language.CPP: "Factorial of {n} = {value}",
    Language.C: "Factorial of {n} = {value}",
    Language.JAVASCRIPT: "factorial({n}) = {value}",
}


class OutputSynthesizer:
    """Deterministic output text for every pattern case."""

    def __init__(self, max_fibonacci_argument: Optional[int] = None):
        if max_fibonacci_argument is None:
            max_fibonacci_argument = settings.MAX_FIBONACCI_ARGUMENT
        self.max_fibonacci_argument = max_fibonacci_argument
        self._handlers: dict[PatternCase, Callable[[DetectorOutcome, Language], str]] = {
            PatternCase.BLOCKING_INPUT: self._blocking_input,
            PatternCase.LITERAL_OUTPUT: self._literal_output,
            PatternCase.FIBONACCI: self._fibonacci,
            PatternCase.BUBBLE_SORT: self._sorted_sample,
            PatternCase.SELECTION_SORT: self._sorted_sample,
            PatternCase.HELLO_WORLD: self._hello_world,
            PatternCase.ITERATION_OUTPUT: self._iteration,
            PatternCase.FACTORIAL: self._factorial,
            PatternCase.LOOP: self._loop,
            PatternCase.RECURSION: self._recursion,
            PatternCase.DEFAULT: self._default,
        }

    def synthesize(self, outcome: DetectorOutcome, language: "str | Language") -> str:
        language = Language.parse(language)
        return self._handlers[outcome.case](outcome, language)

    def _blocking_input(self, outcome: DetectorOutcome, language: Language) -> str:
        lines = [f"Simulated input: {PLACEHOLDER_VALUE}"]
        if outcome.params.get("arithmetic"):
            lines.append(f"Result: {PLACEHOLDER_VALUE * 2}")
        return "\n".join(lines)

    def _literal_output(self, outcome: DetectorOutcome, language: Language) -> str:
        text = outcome.params.get("text")
        if not text:
            raise SynthesisError("literal output requested without extracted text")
        return text

    def _fibonacci(self, outcome: DetectorOutcome, language: Language) -> str:
        n = int(outcome.params["n"])
        if n > self.max_fibonacci_argument:
            raise SynthesisError(
                f"fibonacci argument {n} exceeds the supported maximum of {self.max_fibonacci_argument}"
            )
        value = fibonacci(n)
        if outcome.params.get("wrapped"):
            return str(value)
        return f"Fibonacci({n}) = {value}"

    def _sorted_sample(self, outcome: DetectorOutcome, language: Language) -> str:
        return (
            f"Original array: {format_array(SORT_SAMPLE, language)}\n"
            f"Sorted array: {format_array(sorted(SORT_SAMPLE), language)}"
        )

    def _hello_world(self, outcome: DetectorOutcome, language: Language) -> str:
        return "Hello, World!"

    def _iteration(self, outcome: DetectorOutcome, language: Language) -> str:
        return format_array(ITERATION_SAMPLE, language)

    def _factorial(self, outcome: DetectorOutcome, language: Language) -> str:
        return _FACTORIAL_LABELS[language].format(n=FACTORIAL_SAMPLE, value=factorial(FACTORIAL_SAMPLE))

    def _loop(self, outcome: DetectorOutcome, language: Language) -> str:
        return PROFILES[language].loop_output

    def _recursion(self, outcome: DetectorOutcome, language: Language) -> str:
        return PROFILES[language].recursion_output

    def _default(self, outcome: DetectorOutcome, language: Language) -> str:
        return PROFILES[language].default_output
