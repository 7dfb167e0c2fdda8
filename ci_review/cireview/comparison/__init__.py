"""Workflow comparison: structural diff, similarity and change summaries."""

from cireview.comparison.engine import compare_workflows
from cireview.comparison.models import (
    OptimizationChange,
    StructuralChange,
    WorkflowComparison,
    WorkflowDifference,
)

__all__ = [
    "OptimizationChange",
    "StructuralChange",
    "WorkflowComparison",
    "WorkflowDifference",
    "compare_workflows",
]
