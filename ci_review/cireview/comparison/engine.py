"""Workflow comparison entry point."""

from __future__ import annotations

import logging

from cireview.comparison.changes import (
    analyze_optimization_changes,
    analyze_structural_changes,
)
from cireview.comparison.differ import find_differences
from cireview.comparison.models import WorkflowComparison
from cireview.comparison.similarity import calculate_similarity
from cireview.workflow.errors import ParseError, WorkflowComparisonError
from cireview.workflow.loader import parse_workflow

logger = logging.getLogger(__name__)


def compare_workflows(baseline: str, candidate: str) -> WorkflowComparison:
    """Compare two workflow YAML texts.

    Both documents must parse to mappings; otherwise the call fails as a
    whole with WorkflowComparisonError and no partial result.
    """
    try:
        old = parse_workflow(baseline)
        new = parse_workflow(candidate)
    except ParseError as e:
        raise WorkflowComparisonError(f"Workflow comparison failed: {e}") from e

    differences = find_differences(old, new)
    comparison = WorkflowComparison(
        similarity=calculate_similarity(old, new, differences),
        differences=differences,
        structural_changes=analyze_structural_changes(old, new),
        optimization_changes=analyze_optimization_changes(old, new),
    )

    logger.debug(
        "Compared workflows: similarity=%.2f, %d difference(s)",
        comparison.similarity,
        len(differences),
    )
    return comparison
