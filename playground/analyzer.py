"""
Code Playground service.

The three operations a playground UI calls: execute a snippet, analyze its
complexity, and generate improvement insights.
"""
from __future__ import annotations

import logging
from typing import Optional

from .complexity import CONSTANT_PROFILE, ComplexityClassifier
from .executor import ExecutionCoordinator
from .insights import InsightGenerator, generic_insights
from .languages import Language
from .models import ComplexityProfile, ExecutionResult, Insight

logger = logging.getLogger("playground.analyzer")


class CodePlayground:
    """
    Simulated code playground.

    Takes a snippet and a language tag, returns structured results. None of
    the operations raise: failures come back as error results or fall back to
    the default profile and generic insights.
    """

    def __init__(
        self,
        coordinator: Optional[ExecutionCoordinator] = None,
        complexity: Optional[ComplexityClassifier] = None,
        insights: Optional[InsightGenerator] = None,
    ):
        self.coordinator = coordinator or ExecutionCoordinator()
        self.complexity = complexity or ComplexityClassifier()
        self.insights = insights or InsightGenerator()

    async def execute(self, code: str, language: "str | Language") -> ExecutionResult:
        """
        Simulate running a snippet.

        Args:
            code: Source snippet
            language: Language tag

        Returns:
            ExecutionResult (success, error or timeout)
        """
        logger.debug("Executing %s snippet (%d chars)", language, len(code or ""))
        return await self.coordinator.run(code, language)

    async def analyze(self, code: str, language: "str | Language") -> ComplexityProfile:
        """
        Classify time and space complexity.

        Returns:
            ComplexityProfile; the constant profile if classification fails
        """
        try:
            return self.complexity.classify(code, language)
        except Exception as e:
            logger.error(f"Complexity analysis failed: {e}")
            return CONSTANT_PROFILE.model_copy()

    async def get_insights(
        self,
        code: str,
        language: "str | Language",
        profile: ComplexityProfile,
    ) -> list[Insight]:
        """
        Generate ordered improvement insights.

        Returns:
            List of insights, most actionable first; generic advice on failure
        """
        try:
            return self.insights.generate(code, language, profile)
        except Exception as e:
            logger.error(f"Insight generation failed: {e}")
            return generic_insights()


_default_playground: Optional[CodePlayground] = None


def get_playground() -> CodePlayground:
    """Get or create the shared playground."""
    global _default_playground
    if _default_playground is None:
        _default_playground = CodePlayground()
    return _default_playground


async def execute_code(code: str, language: "str | Language") -> ExecutionResult:
    return await get_playground().execute(code, language)


async def analyze_complexity(code: str, language: "str | Language") -> ComplexityProfile:
    return await get_playground().analyze(code, language)


async def get_ai_insights(
    code: str,
    language: "str | Language",
    profile: ComplexityProfile,
) -> list[Insight]:
    return await get_playground().get_insights(code, language, profile)
