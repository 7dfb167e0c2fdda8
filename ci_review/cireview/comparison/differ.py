"""Structural differ -- key-driven walk over two workflow documents.

Order: name, then triggers, then jobs (runner, steps, strategy), then permissions.
A section missing on exactly one side is reported once for the whole
section; sections present on both sides are itemized by key.
"""

from __future__ import annotations

from typing import Any

from cireview.comparison.keydiff import (
    changed_values,
    diff_keys,
    itemize,
    join_path,
    whole_section,
)
from cireview.comparison.models import DifferenceType, Severity, WorkflowDifference
from cireview.workflow.document import Job, WorkflowDocument, as_mapping, key_set


def find_differences(
    old: WorkflowDocument, new: WorkflowDocument
) -> list[WorkflowDifference]:
    """Return every difference between *old* and *new*, in walk order."""
    differences: list[WorkflowDifference] = []

    if old.name != new.name:
        differences.append(
            WorkflowDifference(
                type=DifferenceType.content,
                path="name",
                description="Workflow name changed",
                severity=Severity.low,
                old_value=old.name,
                new_value=new.name,
            )
        )

    differences.extend(compare_triggers(old.triggers, new.triggers, "on"))
    differences.extend(compare_jobs(old, new, "jobs"))
    differences.extend(
        compare_permissions(old.permissions, new.permissions, "permissions")
    )
    return differences


def compare_triggers(old: Any, new: Any, path: str) -> list[WorkflowDifference]:
    whole = whole_section(
        old, new, path,
        kind=DifferenceType.structure,
        severity=Severity.high,
        description="Triggers added or removed",
    )
    if whole is not None:
        return whole

    diff = diff_keys(key_set(old), key_set(new))
    return itemize(
        diff, old, new, path,
        kind=DifferenceType.structure,
        severity=Severity.medium,
        label="Trigger",
    )


def compare_jobs(
    old: WorkflowDocument, new: WorkflowDocument, path: str
) -> list[WorkflowDifference]:
    old_jobs, new_jobs = old.raw_jobs, new.raw_jobs
    whole = whole_section(
        old_jobs, new_jobs, path,
        kind=DifferenceType.structure,
        severity=Severity.high,
        description="Jobs structure changed completely",
    )
    if whole is not None:
        return whole

    diff = diff_keys(key_set(old_jobs), key_set(new_jobs))
    differences = itemize(
        diff, old_jobs, new_jobs, path,
        kind=DifferenceType.structure,
        severity=Severity.medium,
        label="Job",
    )

    for name in diff.common:
        old_job, new_job = old.job(name), new.job(name)
        if old_job is None or new_job is None:
            # a job body that is not a mapping has nothing to walk
            continue
        differences.extend(compare_job(old_job, new_job, join_path(path, name)))

    return differences


def compare_job(old: Job, new: Job, path: str) -> list[WorkflowDifference]:
    differences: list[WorkflowDifference] = []

    if old.runs_on != new.runs_on:
        differences.append(
            WorkflowDifference(
                type=DifferenceType.content,
                path=join_path(path, "runs-on"),
                description="Runner changed",
                severity=Severity.medium,
                old_value=old.runs_on,
                new_value=new.runs_on,
            )
        )

    differences.extend(compare_steps(old, new, join_path(path, "steps")))
    differences.extend(
        compare_strategy(old.strategy, new.strategy, join_path(path, "strategy"))
    )
    return differences


def compare_steps(old: Job, new: Job, path: str) -> list[WorkflowDifference]:
    old_steps, new_steps = old.raw_steps, new.raw_steps
    whole = whole_section(
        old_steps, new_steps, path,
        kind=DifferenceType.structure,
        severity=Severity.high,
        description="Steps structure changed completely",
    )
    if whole is not None:
        return whole

    differences: list[WorkflowDifference] = []
    if len(old_steps) != len(new_steps):
        differences.append(
            WorkflowDifference(
                type=DifferenceType.structure,
                path=path,
                description=(
                    f"Number of steps changed from {len(old_steps)} to {len(new_steps)}"
                ),
                severity=Severity.medium,
                old_value=len(old_steps),
                new_value=len(new_steps),
            )
        )

    # Step content is compared only through the actions it uses
    diff = diff_keys(
        list(dict.fromkeys(old.actions())), list(dict.fromkeys(new.actions()))
    )
    uses_path = f"{path}[].uses"
    for action in diff.added:
        differences.append(
            WorkflowDifference(
                type=DifferenceType.content,
                path=uses_path,
                description=f"Action '{action}' added",
                severity=Severity.low,
                new_value=action,
            )
        )
    for action in diff.removed:
        differences.append(
            WorkflowDifference(
                type=DifferenceType.content,
                path=uses_path,
                description=f"Action '{action}' removed",
                severity=Severity.low,
                old_value=action,
            )
        )
    return differences


def compare_strategy(
    old: dict[str, Any] | None, new: dict[str, Any] | None, path: str
) -> list[WorkflowDifference]:
    whole = whole_section(
        old, new, path,
        kind=DifferenceType.optimization,
        severity=Severity.medium,
        description="Strategy added or removed",
    )
    if whole is not None:
        return whole

    return compare_matrix(old.get("matrix"), new.get("matrix"), join_path(path, "matrix"))


def compare_matrix(old: Any, new: Any, path: str) -> list[WorkflowDifference]:
    whole = whole_section(
        old, new, path,
        kind=DifferenceType.optimization,
        severity=Severity.medium,
        description="Matrix strategy added or removed",
    )
    if whole is not None:
        return whole

    # An expression-valued matrix (fromJSON) has no dimensions to compare
    old_matrix, new_matrix = as_mapping(old), as_mapping(new)
    diff = diff_keys(key_set(old_matrix), key_set(new_matrix))
    return itemize(
        diff, old_matrix, new_matrix, path,
        kind=DifferenceType.optimization,
        severity=Severity.low,
        label="Matrix dimension",
    )


def compare_permissions(old: Any, new: Any, path: str) -> list[WorkflowDifference]:
    whole = whole_section(
        old, new, path,
        kind=DifferenceType.security,
        severity=Severity.high,
        description="Permissions added or removed",
    )
    if whole is not None:
        return whole

    old_perms, new_perms = as_mapping(old), as_mapping(new)
    if old_perms is None or new_perms is None:
        # read-all / write-all / {} or a mix of level string and mapping
        if old != new:
            return [
                WorkflowDifference(
                    type=DifferenceType.security,
                    path=path,
                    description="Permission level changed",
                    severity=Severity.high,
                    old_value=old,
                    new_value=new,
                )
            ]
        return []

    diff = diff_keys(key_set(old_perms), key_set(new_perms))
    differences = itemize(
        diff, old_perms, new_perms, path,
        kind=DifferenceType.security,
        severity=Severity.medium,
        label="Permission",
    )
    differences.extend(
        changed_values(
            diff, old_perms, new_perms, path,
            kind=DifferenceType.security,
            severity=Severity.high,
            label="Permission",
        )
    )
    return differences
