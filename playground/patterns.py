"""
Pattern classifier.

An ordered chain of named detectors. The first detector whose predicate holds
wins; its ``act`` extracts whatever parameters the output synthesizer needs.
Detectors keep no state, so the same snippet always lands on the same case.
"""
from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

from . import shapes
from .languages import Language

logger = logging.getLogger("playground.patterns")


class PatternCase(str, Enum):
    BLOCKING_INPUT = "blocking_input"
    LITERAL_OUTPUT = "literal_output"
    FIBONACCI = "fibonacci"
    BUBBLE_SORT = "bubble_sort"
    SELECTION_SORT = "selection_sort"
    HELLO_WORLD = "hello_world"
    ITERATION_OUTPUT = "iteration_output"
    FACTORIAL = "factorial"
    LOOP = "loop"
    RECURSION = "recursion"
    DEFAULT = "default"


class DetectorOutcome(BaseModel):
    """Winning case plus the parameters pulled out of the snippet."""

    model_config = ConfigDict(frozen=True)

    case: PatternCase
    detector: str
    params: dict[str, Any] = Field(default_factory=dict)


class Detector(ABC):
    """A named predicate over ``(snippet, language)`` with an action."""

    name: str
    case: PatternCase

    @abstractmethod
    def matches(self, code: str, language: Language) -> bool:
        ...

    def extract(self, code: str, language: Language) -> dict[str, Any]:
        return {}

    def act(self, code: str, language: Language) -> DetectorOutcome:
        return DetectorOutcome(case=self.case, detector=self.name, params=self.extract(code, language))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class PredicateDetector(Detector):
    """Detector whose match is a plain predicate and which extracts nothing."""

    def __init__(self, name: str, case: PatternCase, predicate: Callable[[str, Language], bool]):
        self.name = name
        self.case = case
        self._predicate = predicate

    def matches(self, code: str, language: Language) -> bool:
        return self._predicate(code, language)


# ---------------------------------------------------------------------------
# Literal output extraction
# ---------------------------------------------------------------------------


PLACEHOLDER_VALUE = 42

_QUOTED = re.compile(
    r"""^(?:"((?:[^"\\]|\\.)*)"|'((?:[^'\\]|\\.)*)'|`((?:[^`\\$]|\\.)*)`)$""",
    re.DOTALL,
)
_IDENTIFIER = re.compile(r"^[A-Za-z_]\w*$")
_NUMBER = re.compile(r"^-?\d+(?:\.\d+)?$")
_CONSTANTS = frozenset({"True", "False", "None", "true", "false", "null", "undefined"})
_FORMAT_SPEC = re.compile(r"%[^%]")
_ESCAPES = {"n": "\n", "t": "\t", '"': '"', "'": "'", "`": "`", "\\": "\\"}
_FORMAT_CALLS = frozenset({"printf", "System.out.printf"})


def _unescape(text: str) -> str:
    return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(0)), text)


def _quoted_text(argument: str) -> Optional[str]:
    m = _QUOTED.match(argument)
    if not m:
        return None
    raw = next(group for group in m.groups() if group is not None)
    return _unescape(raw)


def _render_call(call: shapes.PrintCall) -> Optional[str]:
    """Text printed by one call, or None when its argument is not plain."""
    if len(call.arguments) != 1:
        return None
    argument = call.arguments[0]

    if call.name in _FORMAT_CALLS:
        text = _quoted_text(argument)
        if text is None or _FORMAT_SPEC.search(text.replace("%%", "")):
            return None
        text = text.replace("%%", "%")
    else:
        text = _quoted_text(argument)
        if text is None:
            if _NUMBER.match(argument) or argument in _CONSTANTS:
                text = argument
            elif _IDENTIFIER.match(argument):
                text = f"{argument} = {PLACEHOLDER_VALUE}"
            else:
                return None
    return text + ("\n" if call.newline else "")


def literal_output(code: str, language: Language) -> Optional[str]:
    """
    Output of a snippet whose print calls only carry literals or bare names.

    Returns None when there is no print call or any call prints an expression.
    """
    calls = shapes.print_calls(code, language)
    if not calls:
        return None
    pieces = []
    for call in calls:
        rendered = _render_call(call)
        if rendered is None:
            return None
        pieces.append(rendered)
    output = "".join(pieces).rstrip("\n")
    return output if output.strip() else None


class LiteralOutputDetector(Detector):
    name = "literal-output"
    case = PatternCase.LITERAL_OUTPUT

    def matches(self, code: str, language: Language) -> bool:
        return literal_output(code, language) is not None

    def extract(self, code: str, language: Language) -> dict[str, Any]:
        return {"text": literal_output(code, language)}


# ---------------------------------------------------------------------------
# Parameterised detectors
# ---------------------------------------------------------------------------


DEFAULT_FIBONACCI_ARGUMENT = 10
_FIB_CALL = re.compile(r"\w*fib\w*\s*\(", re.IGNORECASE)


class BlockingInputDetector(Detector):
    name = "blocking-input"
    case = PatternCase.BLOCKING_INPUT

    def matches(self, code: str, language: Language) -> bool:
        return shapes.has_blocking_input(code, language)

    def extract(self, code: str, language: Language) -> dict[str, Any]:
        return {"arithmetic": shapes.has_arithmetic(code, language)}


class FibonacciDetector(Detector):
    name = "fibonacci"
    case = PatternCase.FIBONACCI

    def matches(self, code: str, language: Language) -> bool:
        return shapes.has_fibonacci_shape(code, language)

    def extract(self, code: str, language: Language) -> dict[str, Any]:
        n = shapes.fibonacci_argument(code, language)
        wrapped = any(
            _FIB_CALL.search(argument)
            for call in shapes.print_calls(code, language)
            for argument in call.arguments
        )
        return {
            "n": DEFAULT_FIBONACCI_ARGUMENT if n is None else n,
            "wrapped": wrapped,
        }


def _bubble_sort(code: str, language: Language) -> bool:
    return (
        shapes.has_nested_loops(code, language)
        and shapes.has_swap(code, language)
        and (shapes.has_adjacent_compare(code, language) or shapes.mentions_bubble(code, language))
    )


def _selection_sort(code: str, language: Language) -> bool:
    return shapes.has_nested_loops(code, language) and (
        shapes.has_minimum_search(code, language) or shapes.has_swap(code, language)
    )


def _hello_world(code: str, language: Language) -> bool:
    return shapes.has_print(code, language) and shapes.has_hello_literal(code)


def _iteration_output(code: str, language: Language) -> bool:
    return shapes.has_print(code, language) and (
        shapes.has_array_vocabulary(code, language) or shapes.has_loop(code, language)
    )


DEFAULT_DETECTORS: tuple[Detector, ...] = (
    BlockingInputDetector(),
    LiteralOutputDetector(),
    FibonacciDetector(),
    PredicateDetector("bubble-sort", PatternCase.BUBBLE_SORT, _bubble_sort),
    PredicateDetector("selection-sort", PatternCase.SELECTION_SORT, _selection_sort),
    PredicateDetector("hello-world", PatternCase.HELLO_WORLD, _hello_world),
    PredicateDetector("iteration-output", PatternCase.ITERATION_OUTPUT, _iteration_output),
    PredicateDetector("factorial", PatternCase.FACTORIAL, shapes.has_factorial_shape),
    PredicateDetector("loop", PatternCase.LOOP, shapes.has_loop),
    PredicateDetector("recursion", PatternCase.RECURSION, shapes.has_recursion),
)


class PatternClassifier:
    """Runs detectors in order and reports the first match."""

    def __init__(self, detectors: tuple[Detector, ...] = DEFAULT_DETECTORS):
        self.detectors = tuple(detectors)

    def classify(self, code: str, language: "str | Language") -> DetectorOutcome:
        language = Language.parse(language)
        for detector in self.detectors:
            if detector.matches(code, language):
                outcome = detector.act(code, language)
                logger.debug("Detector %s matched (%s)", detector.name, language.value)
                return outcome
        return DetectorOutcome(case=PatternCase.DEFAULT, detector="default")
