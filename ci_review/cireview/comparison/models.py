"""Data models for workflow comparison."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DifferenceType(str, Enum):
    structure = "structure"
    content = "content"
    optimization = "optimization"
    security = "security"


class Severity(str, Enum):
    """Severity of a difference, also used as the impact of a structural change."""

    low = "low"
    medium = "medium"
    high = "high"


class ChangeType(str, Enum):
    added = "added"
    removed = "removed"
    modified = "modified"


class ChangeElement(str, Enum):
    job = "job"
    step = "step"
    trigger = "trigger"
    permission = "permission"


class OptimizationType(str, Enum):
    cache = "cache"
    parallelization = "parallelization"
    matrix = "matrix"
    condition = "condition"


class OptimizationImpact(str, Enum):
    performance = "performance"
    cost = "cost"
    reliability = "reliability"


class WorkflowDifference(BaseModel):
    """A single difference between two workflows.

    ``path`` is a dotted locator into the compared documents for display
    only, e.g. ``jobs.build.steps[].uses``.
    """

    model_config = ConfigDict(frozen=True)

    type: DifferenceType
    path: str
    description: str
    severity: Severity
    old_value: Any = None
    new_value: Any = None


class StructuralChange(BaseModel):
    """An added/removed job or trigger."""

    model_config = ConfigDict(frozen=True)

    type: ChangeType
    element: ChangeElement
    name: str
    impact: Severity


class OptimizationChange(BaseModel):
    """A caching/matrix/conditional delta between two workflows."""

    model_config = ConfigDict(frozen=True)

    type: OptimizationType
    description: str
    impact: OptimizationImpact
    improvement: bool


class WorkflowComparison(BaseModel):
    """Complete result of comparing two workflows."""

    similarity: float = 1.0
    differences: list[WorkflowDifference] = Field(default_factory=list)
    structural_changes: list[StructuralChange] = Field(default_factory=list)
    optimization_changes: list[OptimizationChange] = Field(default_factory=list)
