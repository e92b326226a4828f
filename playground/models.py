"""
Data models for the Code Playground engine.

Pydantic models shared by the engine and the HTTP layer.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .languages import Language


class ExecutionStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    # Transient UI state; the coordinator never returns it
    RUNNING = "running"
    TIMEOUT = "timeout"


class ExecutionResult(BaseModel):
    """Simulated execution outcome."""

    model_config = ConfigDict(frozen=True)

    status: ExecutionStatus
    output: str = Field(..., description="Program output or diagnostic")
    executionTime: Optional[int] = Field(default=None, ge=0, description="Elapsed milliseconds")

    @model_validator(mode="after")
    def check_output(self) -> "ExecutionResult":
        if self.status in (ExecutionStatus.SUCCESS, ExecutionStatus.ERROR) and not self.output:
            raise ValueError(f"{self.status.value} result requires non-empty output")
        return self


class ComplexityClass(str, Enum):
    """Big-O labels, declared in ascending order of growth."""

    CONSTANT = "O(1)"
    LOGARITHMIC = "O(log n)"
    LINEAR = "O(n)"
    LINEARITHMIC = "O(n log n)"
    QUADRATIC = "O(n²)"
    EXPONENTIAL = "O(2^n)"

    @property
    def rank(self) -> int:
        return _COMPLEXITY_ORDER.index(self)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, ComplexityClass):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, ComplexityClass):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, ComplexityClass):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, ComplexityClass):
            return NotImplemented
        return self.rank >= other.rank


_COMPLEXITY_ORDER = list(ComplexityClass)


class TimeComplexity(BaseModel):
    """Time complexity breakdown."""

    model_config = ConfigDict(frozen=True)

    best: ComplexityClass
    average: ComplexityClass
    worst: ComplexityClass

    @model_validator(mode="after")
    def check_ordering(self) -> "TimeComplexity":
        if not (self.best <= self.average <= self.worst):
            raise ValueError(
                f"expected best <= average <= worst, got "
                f"{self.best.value}, {self.average.value}, {self.worst.value}"
            )
        return self

    @classmethod
    def uniform(cls, label: ComplexityClass) -> "TimeComplexity":
        return cls(best=label, average=label, worst=label)


class ComplexityProfile(BaseModel):
    """Complexity classification of a snippet."""

    model_config = ConfigDict(frozen=True)

    timeComplexity: TimeComplexity
    spaceComplexity: ComplexityClass
    analysis: str = Field(..., description="Explanation of the classification")


class CodeSample(BaseModel):
    """Replacement code attached to an insight."""

    model_config = ConfigDict(frozen=True)

    language: Language
    source: str = Field(..., min_length=1)


class Insight(BaseModel):
    """A single piece of improvement advice."""

    model_config = ConfigDict(frozen=True)

    type: Literal["suggestion", "optimization", "warning"] = Field(..., description="Insight category")
    title: str
    description: str
    rationale: Optional[str] = None
    impact: Optional[str] = None
    code: Optional[CodeSample] = None
