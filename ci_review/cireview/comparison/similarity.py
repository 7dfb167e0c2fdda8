"""Similarity scoring from a difference list."""

from __future__ import annotations

from cireview.comparison.models import Severity, WorkflowDifference
from cireview.workflow.document import WorkflowDocument

SEVERITY_PENALTIES: dict[Severity, float] = {
    Severity.high: 0.2,
    Severity.medium: 0.1,
    Severity.low: 0.05,
}


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def calculate_similarity(
    old: WorkflowDocument,
    new: WorkflowDocument,
    differences: list[WorkflowDifference],
) -> float:
    """Score how alike two workflows are, from 0.0 to 1.0.

    Each difference subtracts a severity-weighted penalty from 1.0. When
    both workflows define jobs, the result is averaged with the job-count
    ratio so workflows of similar size stay closer together.
    """
    similarity = 1.0
    for diff in differences:
        similarity -= SEVERITY_PENALTIES[diff.severity]

    old_count, new_count = old.job_count(), new.job_count()
    if old_count > 0 and new_count > 0:
        job_ratio = min(old_count, new_count) / max(old_count, new_count)
        similarity = (similarity + job_ratio) / 2

    return clamp(similarity)
