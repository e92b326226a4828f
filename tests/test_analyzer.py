"""Tests for the playground facade and its module-level operations."""

from __future__ import annotations

import pytest

from playground import analyze_complexity, execute_code, get_ai_insights
from playground.analyzer import CodePlayground
from playground.complexity import ComplexityClassifier
from playground.insights import InsightGenerator
from playground.models import ComplexityClass, ExecutionStatus
from tests.snippets import PY_FIBONACCI, PY_NESTED_LOOPS


class BrokenComplexity(ComplexityClassifier):
    def classify(self, code, language):
        raise RuntimeError("rules unavailable")


class BrokenInsights(InsightGenerator):
    def generate(self, code, language, profile):
        raise RuntimeError("templates unavailable")


class TestModuleOperations:
    @pytest.mark.asyncio
    async def test_execute_code(self):
        result = await execute_code(PY_FIBONACCI, "python")
        assert result.status is ExecutionStatus.SUCCESS
        assert result.output == "55"

    @pytest.mark.asyncio
    async def test_analyze_complexity(self):
        profile = await analyze_complexity(PY_NESTED_LOOPS, "python")
        assert profile.timeComplexity.worst is ComplexityClass.QUADRATIC

    @pytest.mark.asyncio
    async def test_get_ai_insights(self):
        profile = await analyze_complexity(PY_FIBONACCI, "python")
        insights = await get_ai_insights(PY_FIBONACCI, "python", profile)
        assert insights[0].title == "Use Memoization"


class TestFallbacks:
    @pytest.mark.asyncio
    async def test_analysis_failure_returns_constant_profile(self):
        playground = CodePlayground(complexity=BrokenComplexity())
        profile = await playground.analyze(PY_NESTED_LOOPS, "python")
        assert profile.timeComplexity.worst is ComplexityClass.CONSTANT

    @pytest.mark.asyncio
    async def test_unknown_language_analysis_returns_constant_profile(self):
        profile = await CodePlayground().analyze(PY_NESTED_LOOPS, "cobol")
        assert profile.spaceComplexity is ComplexityClass.CONSTANT

    @pytest.mark.asyncio
    async def test_insight_failure_returns_generic(self):
        playground = CodePlayground(insights=BrokenInsights())
        profile = await playground.analyze(PY_FIBONACCI, "python")
        insights = await playground.get_insights(PY_FIBONACCI, "python", profile)
        assert [i.title for i in insights] == ["Add Error Handling", "Add Documentation"]
