"""Named heuristics over workflow documents.

Each predicate answers one question about a workflow so the best-practice
rules and the optimization classifier can share them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterator

from cireview.workflow.document import WorkflowDocument

CACHE_ACTIONS = ("actions/cache",)
ARTIFACT_ACTIONS = ("actions/upload-artifact", "actions/download-artifact")

# @v4, @v4.1.0, @1.2.3, @sha-..., @<40-hex commit>
_VERSION_REF_RE = re.compile(r"@(v\d|\d+(\.\d+)*$|sha)")
_COMMIT_REF_RE = re.compile(r"@[0-9a-fA-F]{40}$")
_DOCKER_DIGEST_RE = re.compile(r"@sha256:[0-9a-f]{64}$")

_SECRET_KEY_RE = re.compile(r"password|passwd|token|secret|api[_-]?key", re.IGNORECASE)
_EXPRESSION_RE = re.compile(r"\$\{\{.*?\}\}", re.DOTALL)
_SECRETS_REF_RE = re.compile(r"\$\{\{[^}]*\bsecrets\.", re.IGNORECASE)

MINIMAL_PERMISSION_LEVELS = {"read-all", "none"}
MAX_WRITE_PERMISSIONS = 2


def is_local_action(action: str) -> bool:
    """Actions referenced by path live in the same repository."""
    return action.startswith("./")


def is_action_pinned(action: str) -> bool:
    """True if a ``uses`` reference points at a version tag, sha or digest."""
    if action.startswith("docker://"):
        return bool(_DOCKER_DIGEST_RE.search(action))
    return bool(_VERSION_REF_RE.search(action) or _COMMIT_REF_RE.search(action))


def extract_actions(workflow: WorkflowDocument) -> list[str]:
    """Remote action references subject to pinning."""
    return [a for a in workflow.actions() if not is_local_action(a)]


def has_minimal_permissions(permissions: Any) -> bool:
    if isinstance(permissions, str):
        return permissions in MINIMAL_PERMISSION_LEVELS
    if isinstance(permissions, dict):
        writes = sum(1 for level in permissions.values() if level == "write")
        return writes <= MAX_WRITE_PERMISSIONS
    return False


def uses_cache_action(action: str | None) -> bool:
    return bool(action) and any(name in action for name in CACHE_ACTIONS)


def uses_artifact_action(action: str | None) -> bool:
    return bool(action) and any(name in action for name in ARTIFACT_ACTIONS)


def has_caching(workflow: WorkflowDocument) -> bool:
    """A cache action, or a setup action configured with ``with.cache``."""
    for step in workflow.steps():
        if uses_cache_action(step.uses):
            return True
        if step.with_ and step.with_.get("cache"):
            return True
    return False


def has_matrix_strategy(workflow: WorkflowDocument) -> bool:
    return any(job.matrix is not None for job in workflow.jobs)


def has_conditional_execution(workflow: WorkflowDocument) -> bool:
    for job in workflow.jobs:
        if job.condition is not None:
            return True
        if any(step.condition is not None for step in job.steps):
            return True
    return False


def has_timeout_settings(workflow: WorkflowDocument) -> bool:
    for job in workflow.jobs:
        if job.timeout_minutes is not None:
            return True
        if any(step.timeout_minutes is not None for step in job.steps):
            return True
    return False


def has_artifact_management(workflow: WorkflowDocument) -> bool:
    return any(uses_artifact_action(step.uses) for step in workflow.steps())


def has_environment_protection(workflow: WorkflowDocument) -> bool:
    return any(job.environment is not None for job in workflow.jobs)


def _walk_strings(obj: Any) -> Iterator[str]:
    if isinstance(obj, str):
        yield obj
    elif isinstance(obj, dict):
        for value in obj.values():
            yield from _walk_strings(value)
    elif isinstance(obj, list):
        for item in obj:
            yield from _walk_strings(item)


def references_secrets(workflow: WorkflowDocument) -> bool:
    """True if any string in the workflow contains a ``${{ secrets.* }}`` expression."""
    return any(_SECRETS_REF_RE.search(s) for s in _walk_strings(workflow.raw))


def _sensitive_mappings(workflow: WorkflowDocument) -> Iterator[tuple[str, dict[str, Any]]]:
    """Yield (path, mapping) for every env/with block at any level."""
    if workflow.env:
        yield "env", workflow.env
    for job in workflow.jobs:
        if job.env:
            yield f"jobs.{job.name}.env", job.env
        for i, step in enumerate(job.steps):
            if step.env:
                yield f"jobs.{job.name}.steps[{i}].env", step.env
            if step.with_:
                yield f"jobs.{job.name}.steps[{i}].with", step.with_


def is_hardcoded_secret(key: Any, value: Any) -> bool:
    """A secret-looking key bound to a non-empty string with no expression."""
    if not _SECRET_KEY_RE.search(str(key)):
        return False
    if not isinstance(value, str):
        return False
    text = value.strip()
    return bool(text) and not _EXPRESSION_RE.search(text)


def find_hardcoded_secrets(workflow: WorkflowDocument) -> list[str]:
    """Locators of env/with entries that look like literal credentials."""
    found: list[str] = []
    for path, mapping in _sensitive_mappings(workflow):
        for key, value in mapping.items():
            if is_hardcoded_secret(key, value):
                found.append(f"{path}.{key}")
    return found


@dataclass
class SecretsUsage:
    """Outcome of the secrets-handling heuristic."""

    secure: bool = True
    issues: list[str] = field(default_factory=list)
    hardcoded: list[str] = field(default_factory=list)


def analyze_secrets_usage(workflow: WorkflowDocument) -> SecretsUsage:
    usage = SecretsUsage()

    usage.hardcoded = find_hardcoded_secrets(workflow)
    if usage.hardcoded:
        usage.issues.append("Potential hardcoded secrets detected")
        usage.secure = False

    if references_secrets(workflow) and workflow.permissions is None:
        usage.issues.append("Using secrets without explicit permissions")
        usage.secure = False

    return usage
