"""Tests for complexity classification and the complexity models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from playground.complexity import DEFAULT_RULES, ComplexityClassifier
from playground.models import ComplexityClass, TimeComplexity
from tests.snippets import (
    JAVA_FIBONACCI,
    JAVA_HELLO,
    JAVA_NESTED_LOOPS,
    PY_BINARY_SEARCH,
    PY_BUBBLE_SORT,
    PY_CLIMB_MEMO,
    PY_DP_TABLE,
    PY_FIBONACCI,
    PY_GREEDY,
    PY_MEMO_FIBONACCI_WITH_LOOPS,
    PY_MERGE,
    PY_NESTED_LOOPS,
    PY_SEQUENTIAL_LOOPS,
    PY_SILENT_LOOP,
)

C = ComplexityClass


@pytest.fixture
def classifier():
    return ComplexityClassifier()


def _shape(profile):
    t = profile.timeComplexity
    return (t.best, t.average, t.worst, profile.spaceComplexity)


class TestRules:
    @pytest.mark.parametrize(
        "code, language, expected",
        [
            (PY_FIBONACCI, "python", (C.EXPONENTIAL, C.EXPONENTIAL, C.EXPONENTIAL, C.LINEAR)),
            (JAVA_FIBONACCI, "java", (C.EXPONENTIAL, C.EXPONENTIAL, C.EXPONENTIAL, C.LINEAR)),
            (PY_CLIMB_MEMO, "python", (C.LINEAR, C.LINEAR, C.LINEAR, C.LINEAR)),
            (PY_DP_TABLE, "python", (C.LINEAR, C.LINEAR, C.LINEAR, C.LINEAR)),
            (PY_BINARY_SEARCH, "python", (C.CONSTANT, C.LOGARITHMIC, C.LOGARITHMIC, C.CONSTANT)),
            (PY_MERGE, "python", (C.LINEARITHMIC, C.LINEARITHMIC, C.LINEARITHMIC, C.LINEAR)),
            (PY_GREEDY, "python", (C.LINEARITHMIC, C.LINEARITHMIC, C.LINEARITHMIC, C.CONSTANT)),
            (PY_NESTED_LOOPS, "python", (C.QUADRATIC, C.QUADRATIC, C.QUADRATIC, C.CONSTANT)),
            (JAVA_NESTED_LOOPS, "java", (C.QUADRATIC, C.QUADRATIC, C.QUADRATIC, C.CONSTANT)),
            (PY_BUBBLE_SORT, "python", (C.QUADRATIC, C.QUADRATIC, C.QUADRATIC, C.CONSTANT)),
            (PY_SEQUENTIAL_LOOPS, "python", (C.LINEAR, C.LINEAR, C.LINEAR, C.CONSTANT)),
            (PY_SILENT_LOOP, "python", (C.LINEAR, C.LINEAR, C.LINEAR, C.CONSTANT)),
            (JAVA_HELLO, "java", (C.CONSTANT, C.CONSTANT, C.CONSTANT, C.CONSTANT)),
            ("x = 5", "python", (C.CONSTANT, C.CONSTANT, C.CONSTANT, C.CONSTANT)),
        ],
    )
    def test_profile(self, classifier, code, language, expected):
        assert _shape(classifier.classify(code, language)) == expected

    def test_rule_order(self):
        assert [rule.name for rule in DEFAULT_RULES] == [
            "fibonacci-recursion",
            "memoization",
            "binary-search",
            "divide-and-conquer",
            "greedy",
            "nested-loops",
            "single-loop",
        ]

    def test_fibonacci_shape_beats_memo_and_loops(self, classifier):
        profile = classifier.classify(PY_MEMO_FIBONACCI_WITH_LOOPS, "python")
        assert profile.timeComplexity.worst is C.EXPONENTIAL

    @pytest.mark.parametrize(
        "body",
        ["count++;", "sum += i * j;", 'System.out.println(i + "," + j);'],
    )
    def test_nested_loops_ignore_body(self, classifier, body):
        code = (
            "public class Main {\n"
            "    public static void main(String[] args) {\n"
            "        for (int i = 0; i < 10; i++) {\n"
            "            for (int j = 0; j < 10; j++) {\n"
            f"                {body}\n"
            "            }\n"
            "        }\n"
            "    }\n"
            "}\n"
        )
        assert classifier.classify(code, "java").timeComplexity.worst is C.QUADRATIC

    def test_loop_keyword_in_comment_is_constant(self, classifier):
        code = "// for (int i = 0; i < n; i++) {\nint x = 1;\n"
        assert classifier.classify(code, "c").timeComplexity.worst is C.CONSTANT

    def test_idempotent(self, classifier):
        assert classifier.classify(PY_FIBONACCI, "python") == classifier.classify(PY_FIBONACCI, "python")

    def test_analysis_text_present(self, classifier):
        assert "exponential" in classifier.classify(PY_FIBONACCI, "python").analysis

    def test_empty_rule_chain(self):
        profile = ComplexityClassifier(()).classify(PY_NESTED_LOOPS, "python")
        assert profile.timeComplexity.worst is C.CONSTANT


class TestComplexityModels:
    def test_class_ordering(self):
        assert C.CONSTANT < C.LOGARITHMIC < C.LINEAR < C.LINEARITHMIC < C.QUADRATIC < C.EXPONENTIAL

    def test_sorted_by_growth(self):
        assert sorted([C.EXPONENTIAL, C.CONSTANT, C.QUADRATIC]) == [C.CONSTANT, C.QUADRATIC, C.EXPONENTIAL]

    def test_labels(self):
        assert [c.value for c in C] == ["O(1)", "O(log n)", "O(n)", "O(n log n)", "O(n²)", "O(2^n)"]

    def test_best_cannot_exceed_worst(self):
        with pytest.raises(ValidationError):
            TimeComplexity(best=C.QUADRATIC, average=C.LINEAR, worst=C.LINEAR)

    def test_uniform(self):
        t = TimeComplexity.uniform(C.LINEAR)
        assert (t.best, t.average, t.worst) == (C.LINEAR, C.LINEAR, C.LINEAR)
