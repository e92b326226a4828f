"""
Complexity classifier.

Ordered rules mapping snippet shape to a complexity profile. Evaluated on
its own, independently of the pattern classifier.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from . import shapes
from .languages import Language
from .models import ComplexityClass, ComplexityProfile, TimeComplexity

logger = logging.getLogger("playground.complexity")

C = ComplexityClass


@dataclass(frozen=True)
class ComplexityRule:
    """A named shape predicate and the profile it implies."""

    name: str
    predicate: Callable[[str, Language], bool]
    profile: ComplexityProfile


def _profile(time: TimeComplexity, space: ComplexityClass, analysis: str) -> ComplexityProfile:
    return ComplexityProfile(timeComplexity=time, spaceComplexity=space, analysis=analysis)


FIBONACCI_RECURSION = ComplexityRule(
    "fibonacci-recursion",
    shapes.has_recursive_fibonacci,
    _profile(
        TimeComplexity.uniform(C.EXPONENTIAL),
        C.LINEAR,
        "The recursive implementation of Fibonacci has exponential time complexity: every call "
        "branches into two more calls, so the same values are recomputed over and over. The "
        "recursion is at most n frames deep, giving linear space. Consider dynamic programming "
        "or memoization to improve performance.",
    ),
)

MEMOIZATION = ComplexityRule(
    "memoization",
    shapes.has_memoization,
    _profile(
        TimeComplexity.uniform(C.LINEAR),
        C.LINEAR,
        "The code stores previously computed results, so each subproblem is solved once. With n "
        "subproblems this gives linear time, and the memo table or DP array holds n entries.",
    ),
)

BINARY_SEARCH = ComplexityRule(
    "binary-search",
    shapes.has_binary_search,
    _profile(
        TimeComplexity(best=C.CONSTANT, average=C.LOGARITHMIC, worst=C.LOGARITHMIC),
        C.CONSTANT,
        "The search range is halved on every step, so at most log n comparisons are needed. The "
        "best case finds the target at the first midpoint. Only a few index variables are kept.",
    ),
)

DIVIDE_AND_CONQUER = ComplexityRule(
    "divide-and-conquer",
    shapes.has_divide_and_conquer,
    _profile(
        TimeComplexity.uniform(C.LINEARITHMIC),
        C.LINEAR,
        "The input is split in half log n times and each level does linear work to merge the "
        "halves, giving n log n time. Merging needs an auxiliary buffer of size n.",
    ),
)

GREEDY = ComplexityRule(
    "greedy",
    shapes.has_greedy_choice,
    _profile(
        TimeComplexity.uniform(C.LINEARITHMIC),
        C.CONSTANT,
        "The greedy strategy sorts the candidates once in n log n time and then makes a single "
        "linear pass picking the locally best option, which sorting dominates. Only the running "
        "choice is stored.",
    ),
)

NESTED_LOOPS = ComplexityRule(
    "nested-loops",
    shapes.has_nested_loops,
    _profile(
        TimeComplexity.uniform(C.QUADRATIC),
        C.CONSTANT,
        "The code contains nested loops, resulting in quadratic time complexity. Each iteration "
        "of the outer loop runs the inner loop over all elements. No extra memory grows with the "
        "input.",
    ),
)

SINGLE_LOOP = ComplexityRule(
    "single-loop",
    shapes.has_loop,
    _profile(
        TimeComplexity.uniform(C.LINEAR),
        C.CONSTANT,
        "The code has linear time complexity as it processes each element once with a single "
        "loop. Space complexity is constant as it uses a fixed amount of memory regardless of "
        "input size.",
    ),
)

CONSTANT_PROFILE = _profile(
    TimeComplexity.uniform(C.CONSTANT),
    C.CONSTANT,
    "The code appears to have constant time complexity as it does not contain loops or "
    "recursive calls. It performs a fixed number of operations regardless of input size.",
)

DEFAULT_RULES: tuple[ComplexityRule, ...] = (
    FIBONACCI_RECURSION,
    MEMOIZATION,
    BINARY_SEARCH,
    DIVIDE_AND_CONQUER,
    GREEDY,
    NESTED_LOOPS,
    SINGLE_LOOP,
)


class ComplexityClassifier:
    """First matching rule decides the profile; otherwise constant."""

    def __init__(self, rules: tuple[ComplexityRule, ...] = DEFAULT_RULES):
        self.rules = tuple(rules)

    def classify(self, code: str, language: "str | Language") -> ComplexityProfile:
        language = Language.parse(language)
        for rule in self.rules:
            if rule.predicate(code, language):
                logger.debug("Complexity rule %s matched (%s)", rule.name, language.value)
                return rule.profile.model_copy()
        return CONSTANT_PROFILE.model_copy()
