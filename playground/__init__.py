"""Simulated code playground: execution, complexity analysis and insights."""

__version__ = "1.0.0"

from .languages import Language
from .models import (
    CodeSample,
    ComplexityClass,
    ComplexityProfile,
    ExecutionResult,
    ExecutionStatus,
    Insight,
    TimeComplexity,
)
from .analyzer import (
    CodePlayground,
    analyze_complexity,
    execute_code,
    get_ai_insights,
)

__all__ = [
    "Language",
    "CodeSample",
    "ComplexityClass",
    "ComplexityProfile",
    "ExecutionResult",
    "ExecutionStatus",
    "Insight",
    "TimeComplexity",
    "CodePlayground",
    "execute_code",
    "analyze_complexity",
    "get_ai_insights",
]
