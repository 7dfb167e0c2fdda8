"""Human-readable summaries of comparison and validation results."""

from __future__ import annotations

from cireview.comparison.models import Severity, WorkflowComparison
from cireview.practices.models import BestPracticesValidation


def differences_by_type(comparison: WorkflowComparison) -> dict[str, int]:
    """Count differences per type, e.g. ``{"structure": 2, "security": 1}``."""
    counts: dict[str, int] = {}
    for diff in comparison.differences:
        counts[diff.type.value] = counts.get(diff.type.value, 0) + 1
    return counts


def summarize_comparison(comparison: WorkflowComparison) -> str:
    if not comparison.differences:
        return "Workflows are identical."

    counts: dict[str, int] = {}
    for diff in comparison.differences:
        counts[diff.severity.value] = counts.get(diff.severity.value, 0) + 1

    severity_labels = [
        f"{counts[sev.value]} {sev.value}"
        for sev in (Severity.high, Severity.medium, Severity.low)
        if sev.value in counts
    ]
    return (
        f"Workflows are {comparison.similarity:.0%} similar with "
        f"{len(comparison.differences)} difference(s): "
        + ", ".join(severity_labels)
        + "."
    )


def summarize_validation(validation: BestPracticesValidation) -> str:
    return (
        f"Best practices score {validation.score:.0%}: "
        f"{len(validation.good_practices)} good, "
        f"{len(validation.improvements)} improvement(s), "
        f"{len(validation.critical_issues)} critical."
    )
