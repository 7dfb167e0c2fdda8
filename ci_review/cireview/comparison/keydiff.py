"""Key-set diffing shared by the trigger, job, matrix and permission comparisons."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cireview.comparison.models import DifferenceType, Severity, WorkflowDifference


@dataclass
class KeyDiff:
    """Keys of two mappings split by side, each list in source order."""

    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    common: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


def diff_keys(old: list[str] | None, new: list[str] | None) -> KeyDiff:
    """Compare two ordered key lists; None is treated as empty."""
    old = old or []
    new = new or []
    old_set, new_set = set(old), set(new)
    return KeyDiff(
        added=[k for k in new if k not in old_set],
        removed=[k for k in old if k not in new_set],
        common=[k for k in old if k in new_set],
    )


def join_path(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _lookup(container: Any, key: str) -> Any:
    return container.get(key) if isinstance(container, dict) else None


def itemize(
    diff: KeyDiff,
    old: Any,
    new: Any,
    path: str,
    *,
    kind: DifferenceType,
    severity: Severity,
    label: str,
) -> list[WorkflowDifference]:
    """One difference per added and per removed key.

    *label* names the element in the description, e.g. ``Job 'build' added``.
    """
    differences = [
        WorkflowDifference(
            type=kind,
            path=join_path(path, key),
            description=f"{label} '{key}' added",
            severity=severity,
            new_value=_lookup(new, key),
        )
        for key in diff.added
    ]
    differences.extend(
        WorkflowDifference(
            type=kind,
            path=join_path(path, key),
            description=f"{label} '{key}' removed",
            severity=severity,
            old_value=_lookup(old, key),
        )
        for key in diff.removed
    )
    return differences


def changed_values(
    diff: KeyDiff,
    old: dict[str, Any],
    new: dict[str, Any],
    path: str,
    *,
    kind: DifferenceType,
    severity: Severity,
    label: str,
) -> list[WorkflowDifference]:
    """One difference per shared key whose value differs."""
    return [
        WorkflowDifference(
            type=kind,
            path=join_path(path, key),
            description=f"{label} '{key}' changed",
            severity=severity,
            old_value=old[key],
            new_value=new[key],
        )
        for key in diff.common
        if old[key] != new[key]
    ]


def whole_section(
    old: Any,
    new: Any,
    path: str,
    *,
    kind: DifferenceType,
    severity: Severity,
    description: str,
) -> list[WorkflowDifference] | None:
    """Handle the absent-on-one-side case shared by every section.

    Returns an empty list when both sides are absent, a single difference
    when exactly one side is present, and None when both are present so
    the caller goes on to itemize.
    """
    has_old, has_new = old is not None, new is not None
    if not has_old and not has_new:
        return []
    if has_old != has_new:
        return [
            WorkflowDifference(
                type=kind,
                path=path,
                description=description,
                severity=severity,
                old_value=old,
                new_value=new,
            )
        ]
    return None
