"""Deterministic best-practice checks for GitHub Actions workflows.

Each check looks at one concern and returns zero or more findings. Checks
are independent; ``run_all_checks`` runs them in a fixed order.
"""

from __future__ import annotations

from cireview.practices.models import PracticeFinding, PracticeLevel
from cireview.workflow.document import WorkflowDocument
from cireview.workflow.predicates import (
    analyze_secrets_usage,
    extract_actions,
    has_artifact_management,
    has_caching,
    has_conditional_execution,
    has_environment_protection,
    has_matrix_strategy,
    has_minimal_permissions,
    has_timeout_settings,
    is_action_pinned,
)


def _good(check: str, tag: str) -> list[PracticeFinding]:
    return [PracticeFinding(check=check, level=PracticeLevel.good, message=tag)]


def _improve(check: str, message: str) -> list[PracticeFinding]:
    return [PracticeFinding(check=check, level=PracticeLevel.improvement, message=message)]


def _critical(check: str, message: str) -> list[PracticeFinding]:
    return [PracticeFinding(check=check, level=PracticeLevel.critical, message=message)]


def check_action_pinning(workflow: WorkflowDocument) -> list[PracticeFinding]:
    """All remote actions should reference a tag, sha or commit."""
    actions = extract_actions(workflow)
    if not actions:
        return []

    pinned = [a for a in actions if is_action_pinned(a)]
    if len(pinned) == len(actions):
        return _good("action_pinning", "pinned-action-versions")
    if pinned:
        return _improve("action_pinning", "Some actions are not pinned to specific versions")
    return _critical("action_pinning", "No actions are pinned to specific versions")


def check_permissions(workflow: WorkflowDocument) -> list[PracticeFinding]:
    """Explicit and minimal ``permissions``. Absence is an improvement, not critical."""
    permissions = workflow.permissions
    if permissions is None:
        return _improve("permissions", "Add explicit permissions to workflow")
    if has_minimal_permissions(permissions):
        return _good("permissions", "minimal-permissions")
    return _improve("permissions", "Consider using more restrictive permissions")


def check_caching(workflow: WorkflowDocument) -> list[PracticeFinding]:
    if has_caching(workflow):
        return _good("caching", "dependency-caching")
    return _improve("caching", "Add dependency caching to improve performance")


def check_matrix_strategy(workflow: WorkflowDocument) -> list[PracticeFinding]:
    if has_matrix_strategy(workflow):
        return _good("matrix_strategy", "matrix-testing")
    return []


def check_conditional_execution(workflow: WorkflowDocument) -> list[PracticeFinding]:
    if has_conditional_execution(workflow):
        return _good("conditional_execution", "conditional-execution")
    return []


def check_secrets_handling(workflow: WorkflowDocument) -> list[PracticeFinding]:
    """Flag literal credentials and secrets used without a permissions block."""
    usage = analyze_secrets_usage(workflow)
    if usage.secure:
        return _good("secrets_handling", "secure-secrets-handling")
    findings: list[PracticeFinding] = []
    for issue in usage.issues:
        findings.extend(_critical("secrets_handling", issue))
    return findings


def check_timeouts(workflow: WorkflowDocument) -> list[PracticeFinding]:
    if has_timeout_settings(workflow):
        return _good("timeouts", "timeout-settings")
    return _improve("timeouts", "Add timeout settings to prevent hanging jobs")


def check_artifact_management(workflow: WorkflowDocument) -> list[PracticeFinding]:
    if has_artifact_management(workflow):
        return _good("artifact_management", "artifact-management")
    return []


def check_environment_protection(workflow: WorkflowDocument) -> list[PracticeFinding]:
    if has_environment_protection(workflow):
        return _good("environment_protection", "environment-protection")
    return []


ALL_CHECKS = (
    check_action_pinning,
    check_permissions,
    check_caching,
    check_matrix_strategy,
    check_conditional_execution,
    check_secrets_handling,
    check_timeouts,
    check_artifact_management,
    check_environment_protection,
)


def run_all_checks(workflow: WorkflowDocument) -> list[PracticeFinding]:
    """Run every best-practice check on a single workflow."""
    findings: list[PracticeFinding] = []
    for check in ALL_CHECKS:
        findings.extend(check(workflow))
    return findings
