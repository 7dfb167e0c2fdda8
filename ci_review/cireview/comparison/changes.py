"""Summary classifiers for job/trigger and optimization changes.

These are presentation-oriented views; similarity scoring does not use them.
"""

from __future__ import annotations

from typing import Callable

from cireview.comparison.keydiff import diff_keys
from cireview.comparison.models import (
    ChangeElement,
    ChangeType,
    OptimizationChange,
    OptimizationImpact,
    OptimizationType,
    Severity,
    StructuralChange,
)
from cireview.workflow.document import WorkflowDocument, key_set
from cireview.workflow.predicates import (
    has_caching,
    has_conditional_execution,
    has_matrix_strategy,
)

# (type, predicate, impact, label)
OPTIMIZATION_FEATURES: list[
    tuple[OptimizationType, Callable[[WorkflowDocument], bool], OptimizationImpact, str]
] = [
    (OptimizationType.cache, has_caching, OptimizationImpact.performance, "Dependency caching"),
    (OptimizationType.matrix, has_matrix_strategy, OptimizationImpact.reliability, "Matrix strategy"),
    (OptimizationType.condition, has_conditional_execution, OptimizationImpact.cost, "Conditional execution"),
]


def _key_changes(
    old_keys: list[str] | None,
    new_keys: list[str] | None,
    element: ChangeElement,
    impact: Severity,
) -> list[StructuralChange]:
    diff = diff_keys(old_keys, new_keys)
    changes = [
        StructuralChange(type=ChangeType.added, element=element, name=key, impact=impact)
        for key in diff.added
    ]
    changes.extend(
        StructuralChange(type=ChangeType.removed, element=element, name=key, impact=impact)
        for key in diff.removed
    )
    return changes


def analyze_structural_changes(
    old: WorkflowDocument, new: WorkflowDocument
) -> list[StructuralChange]:
    """Added/removed jobs (medium impact) and triggers (high impact)."""
    changes = _key_changes(
        key_set(old.raw_jobs), key_set(new.raw_jobs), ChangeElement.job, Severity.medium,
    )
    changes.extend(
        _key_changes(
            key_set(old.triggers), key_set(new.triggers),
            ChangeElement.trigger, Severity.high,
        )
    )
    return changes


def analyze_optimization_changes(
    old: WorkflowDocument, new: WorkflowDocument
) -> list[OptimizationChange]:
    """Caching, matrix and conditional execution gained or lost."""
    changes: list[OptimizationChange] = []
    for kind, predicate, impact, label in OPTIMIZATION_FEATURES:
        before, after = predicate(old), predicate(new)
        if before == after:
            continue
        changes.append(
            OptimizationChange(
                type=kind,
                description=f"{label} {'added' if after else 'removed'}",
                impact=impact,
                improvement=after,
            )
        )
    return changes
