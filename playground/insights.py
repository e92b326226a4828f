"""
Insight generator.

Primary insights follow the dominant shape of the snippet (recursive
Fibonacci, nested loops, single loop, or nothing recognisable). Language
idiom insights are appended after them in a fixed order.
"""
from __future__ import annotations

import logging
import re
from typing import Callable, Optional

from . import shapes
from .languages import Language
from .models import ComplexityClass, ComplexityProfile, Insight
from .templates import code_sample

logger = logging.getLogger("playground.insights")

_RANGE_LEN = re.compile(r"\brange\s*\(\s*len\s*\(")
_JAVA_INDEX_FOR = re.compile(
    r"\bfor\s*\(\s*int\s+(\w+)\s*=\s*0\s*;\s*\1\s*<\s*\w+\s*\.\s*(?:length\b|size\s*\(\s*\))"
)
_PUSH_BACK = re.compile(r"\.push_back\s*\(")
_RESERVE = re.compile(r"\.reserve\s*\(")
_VAR = re.compile(r"\bvar\s+[A-Za-z_$]")


def _fibonacci_insights(language: Language, profile: ComplexityProfile) -> list[Insight]:
    worst = profile.timeComplexity.worst.value
    return [
        Insight(
            type="optimization",
            title="Use Memoization",
            description=(
                "The current recursive implementation recalculates the same values multiple times. "
                f"Using memoization can reduce time complexity from {worst} to O(n)."
            ),
            rationale="Each Fibonacci number depends only on the two before it, so caching them removes the repeated work.",
            impact=f"{worst} → O(n)",
            code=code_sample("memoization", language),
        ),
        Insight(
            type="optimization",
            title="Use Iteration Instead of Recursion",
            description=(
                "An iterative approach can be more efficient for calculating Fibonacci numbers, avoiding "
                "stack overhead and potential stack overflow for large inputs."
            ),
            rationale="Two running variables are enough to walk the sequence forward.",
            impact=f"{worst} → O(n) time, O(n) → O(1) space",
            code=code_sample("iteration", language),
        ),
        Insight(
            type="warning",
            title="Stack Overflow Risk",
            description=(
                "The current recursive implementation may cause stack overflow for large values of n "
                "(typically n > 40-50 already takes seconds). Consider adding a guard for large inputs."
            ),
            rationale="Every pending call keeps a stack frame alive until its children return.",
            code=code_sample("depth_guard", language),
        ),
    ]


def _nested_loop_insights(language: Language, profile: ComplexityProfile) -> list[Insight]:
    worst = profile.timeComplexity.worst.value
    return [
        Insight(
            type="optimization",
            title="Consider Time Complexity",
            description=(
                f"The nested loops give {worst} time complexity, which grows quickly with input size. "
                "A hash-based lookup or sorting the data first can often bring this down to O(n) or O(n log n)."
            ),
            rationale="The inner loop repeats its full work for every iteration of the outer loop.",
            impact=f"{worst} → {ComplexityClass.LINEARITHMIC.value}",
        ),
        Insight(
            type="suggestion",
            title="Early Termination",
            description=(
                "Consider adding early termination conditions to your loops when the goal is achieved "
                "before iterating through all elements."
            ),
            rationale="Returning on the first match skips the remaining iterations entirely.",
            code=code_sample("early_termination", language),
        ),
    ]


def _single_loop_insights(code: str, language: Language, profile: ComplexityProfile) -> list[Insight]:
    insights = [
        Insight(
            type="suggestion",
            title="Handle Edge Cases",
            description=(
                "Make sure your loop handles edge cases correctly, such as empty collections or "
                "boundary conditions."
            ),
            rationale="A guard clause keeps the loop body free of special cases.",
            code=code_sample("edge_case_guard", language),
        )
    ]
    if shapes.has_array_vocabulary(code, language):
        insights.append(
            Insight(
                type="optimization",
                title="Consider Pre-allocation",
                description=(
                    "When the final size of a collection is known, allocate it once instead of growing "
                    "it element by element."
                ),
                rationale="Growing a container repeatedly triggers reallocations and copies.",
                impact=f"Fewer reallocations, still {profile.timeComplexity.worst.value}",
                code=code_sample("pre_allocation", language),
            )
        )
    return insights


def generic_insights() -> list[Insight]:
    return [
        Insight(
            type="suggestion",
            title="Add Error Handling",
            description=(
                "Consider adding error handling to make your code more robust. This will help catch and "
                "manage unexpected inputs or runtime errors."
            ),
        ),
        Insight(
            type="suggestion",
            title="Add Documentation",
            description=(
                "Adding comments and documentation can make your code more maintainable and easier for "
                "others to understand."
            ),
        ),
    ]


# ---------------------------------------------------------------------------
# Language idioms
# ---------------------------------------------------------------------------


def _enumerate_idiom(code: str, masked: str, language: Language) -> Optional[Insight]:
    if language is not Language.PYTHON or not _RANGE_LEN.search(masked):
        return None
    return Insight(
        type="suggestion",
        title="Use enumerate()",
        description="Iterating over range(len(...)) and indexing is less readable than enumerate().",
        code=code_sample("enumerate", language),
    )


def _enhanced_for_idiom(code: str, masked: str, language: Language) -> Optional[Insight]:
    if language is not Language.JAVA or not _JAVA_INDEX_FOR.search(masked):
        return None
    return Insight(
        type="suggestion",
        title="Use Enhanced For Loop",
        description="When the index is only used to read elements, the enhanced for loop is shorter and avoids off-by-one errors.",
        code=code_sample("enhanced_for", language),
    )


def _reserve_idiom(code: str, masked: str, language: Language) -> Optional[Insight]:
    if language is not Language.CPP or _RESERVE.search(masked):
        return None
    spans = shapes.loop_spans(masked)
    in_loop = any(
        start < m.start() < end
        for m in _PUSH_BACK.finditer(masked)
        for start, end in spans
    )
    if not in_loop:
        return None
    return Insight(
        type="optimization",
        title="Reserve Vector Capacity",
        description="push_back inside a loop may reallocate the vector several times; call reserve() first when the size is known.",
        impact="Amortised reallocations removed",
        code=code_sample("reserve", language),
    )


def _let_const_idiom(code: str, masked: str, language: Language) -> Optional[Insight]:
    if language is not Language.JAVASCRIPT or not _VAR.search(masked):
        return None
    return Insight(
        type="suggestion",
        title="Prefer let/const",
        description="var is function-scoped and hoisted; let and const are block-scoped and catch accidental reassignment.",
        code=code_sample("let_const", language),
    )


def _format_output_idiom(code: str, masked: str, language: Language) -> Optional[Insight]:
    if not shapes.has_print(code, language):
        return None
    if shapes.has_loop(code, language) or shapes.has_recursive_fibonacci(code, language):
        return None
    return Insight(
        type="suggestion",
        title="Format Output",
        description="Use formatting to make your output more readable and structured.",
        code=code_sample("format_output", language),
    )


IDIOM_RULES: tuple[Callable[[str, str, Language], Optional[Insight]], ...] = (
    _enumerate_idiom,
    _enhanced_for_idiom,
    _reserve_idiom,
    _let_const_idiom,
    _format_output_idiom,
)


class InsightGenerator:
    """Builds the ordered insight list for a snippet."""

    def generate(self, code: str, language: "str | Language", profile: ComplexityProfile) -> list[Insight]:
        language = Language.parse(language)

        if shapes.has_recursive_fibonacci(code, language):
            insights = _fibonacci_insights(language, profile)
        elif shapes.has_nested_loops(code, language):
            insights = _nested_loop_insights(language, profile)
        elif shapes.has_loop(code, language):
            insights = _single_loop_insights(code, language, profile)
        else:
            insights = generic_insights()

        masked = shapes.mask_code(code, language)
        for rule in IDIOM_RULES:
            insight = rule(code, masked, language)
            if insight is not None:
                insights.append(insight)

        logger.debug("Generated %d insights (%s)", len(insights), language.value)
        return insights
