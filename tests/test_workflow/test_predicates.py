"""Tests for cireview.workflow.predicates."""

from __future__ import annotations

import pytest

from cireview.workflow.document import WorkflowDocument
from cireview.workflow.predicates import (
    analyze_secrets_usage,
    extract_actions,
    find_hardcoded_secrets,
    has_artifact_management,
    has_caching,
    has_conditional_execution,
    has_environment_protection,
    has_matrix_strategy,
    has_minimal_permissions,
    has_timeout_settings,
    is_action_pinned,
    is_hardcoded_secret,
    references_secrets,
)

SHA = "8ade135a41bc03ea155e62e844d188df1ea18608"


def _doc(job: dict | None = None, **top) -> WorkflowDocument:
    raw = {"on": "push", "jobs": {"test": job or {"runs-on": "ubuntu-latest", "steps": []}}}
    raw.update(top)
    return WorkflowDocument(raw)


def _steps(*steps: dict) -> dict:
    return {"runs-on": "ubuntu-latest", "steps": list(steps)}


class TestIsActionPinned:
    @pytest.mark.parametrize(
        "action",
        [
            "actions/checkout@v4",
            "actions/checkout@v4.1.7",
            "owner/action@1.2.3",
            f"actions/checkout@{SHA}",
            "owner/action@sha-1234",
            "docker://alpine@sha256:" + "a" * 64,
        ],
    )
    def test_pinned(self, action: str) -> None:
        assert is_action_pinned(action) is True

    @pytest.mark.parametrize(
        "action",
        [
            "actions/checkout@main",
            "actions/checkout@master",
            "actions/checkout",
            "owner/action@release-branch",
            "docker://alpine:3.19",
        ],
    )
    def test_not_pinned(self, action: str) -> None:
        assert is_action_pinned(action) is False

    def test_local_actions_are_not_extracted(self) -> None:
        doc = _doc(_steps({"uses": "./.github/actions/setup"}, {"uses": "actions/checkout@v4"}))
        assert extract_actions(doc) == ["actions/checkout@v4"]


class TestHasMinimalPermissions:
    @pytest.mark.parametrize("perms", ["read-all", "none", {}, {"contents": "read"}])
    def test_minimal(self, perms) -> None:
        assert has_minimal_permissions(perms) is True

    def test_two_writes_allowed(self) -> None:
        assert has_minimal_permissions({"contents": "write", "packages": "write"}) is True

    def test_three_writes_not_minimal(self) -> None:
        perms = {"contents": "write", "packages": "write", "id-token": "write"}
        assert has_minimal_permissions(perms) is False

    @pytest.mark.parametrize("perms", ["write-all", "read", None, 3])
    def test_not_minimal(self, perms) -> None:
        assert has_minimal_permissions(perms) is False


class TestFeaturePredicates:
    def test_caching_via_action(self) -> None:
        assert has_caching(_doc(_steps({"uses": "actions/cache@v4"}))) is True

    def test_caching_via_with_cache(self) -> None:
        step = {"uses": "actions/setup-python@v5", "with": {"cache": "pip"}}
        assert has_caching(_doc(_steps(step))) is True

    def test_no_caching(self) -> None:
        step = {"uses": "actions/setup-python@v5", "with": {"cache": False}}
        assert has_caching(_doc(_steps(step))) is False

    def test_matrix(self) -> None:
        job = _steps()
        job["strategy"] = {"matrix": {"os": ["ubuntu-latest"]}}
        assert has_matrix_strategy(_doc(job)) is True
        assert has_matrix_strategy(_doc()) is False

    def test_strategy_without_matrix(self) -> None:
        job = _steps()
        job["strategy"] = {"fail-fast": False}
        assert has_matrix_strategy(_doc(job)) is False

    def test_conditional_on_job(self) -> None:
        job = _steps()
        job["if"] = "github.event_name == 'push'"
        assert has_conditional_execution(_doc(job)) is True

    def test_conditional_on_step(self) -> None:
        assert has_conditional_execution(_doc(_steps({"run": "x", "if": "failure()"}))) is True
        assert has_conditional_execution(_doc(_steps({"run": "x"}))) is False

    def test_timeouts(self) -> None:
        assert has_timeout_settings(_doc(_steps({"run": "x", "timeout-minutes": 5}))) is True
        job = _steps()
        job["timeout-minutes"] = 30
        assert has_timeout_settings(_doc(job)) is True
        assert has_timeout_settings(_doc()) is False

    def test_artifacts(self) -> None:
        assert has_artifact_management(_doc(_steps({"uses": "actions/download-artifact@v4"}))) is True
        assert has_artifact_management(_doc(_steps({"uses": "actions/checkout@v4"}))) is False

    def test_environment(self) -> None:
        job = _steps()
        job["environment"] = "production"
        assert has_environment_protection(_doc(job)) is True
        assert has_environment_protection(_doc()) is False

    def test_workflow_without_jobs(self) -> None:
        doc = WorkflowDocument({"on": "push"})
        assert has_caching(doc) is False
        assert has_matrix_strategy(doc) is False
        assert has_conditional_execution(doc) is False
        assert has_timeout_settings(doc) is False


class TestSecrets:
    def test_literal_password_is_hardcoded(self) -> None:
        assert is_hardcoded_secret("DB_PASSWORD", "hunter2") is True

    def test_expression_is_not_hardcoded(self) -> None:
        assert is_hardcoded_secret("DB_PASSWORD", "${{ secrets.DB_PASSWORD }}") is False

    def test_non_secret_key(self) -> None:
        assert is_hardcoded_secret("NODE_ENV", "production") is False

    def test_non_string_values_ignored(self) -> None:
        assert is_hardcoded_secret("TOKEN_TTL", 3600) is False
        assert is_hardcoded_secret("API_KEY", "") is False

    def test_step_names_and_scripts_not_scanned(self) -> None:
        doc = _doc(_steps({"name": "Rotate token", "run": "echo rotating token"}))
        assert find_hardcoded_secrets(doc) == []

    def test_locates_hardcoded_entries(self) -> None:
        doc = _doc(
            _steps({"uses": "some/deploy@v1", "with": {"api-key": "abc123"}}),
            env={"REGISTRY_TOKEN": "plain"},
        )
        assert find_hardcoded_secrets(doc) == [
            "env.REGISTRY_TOKEN",
            "jobs.test.steps[0].with.api-key",
        ]

    def test_references_secrets(self) -> None:
        doc = _doc(_steps({"run": "x", "env": {"T": "${{ secrets.T }}"}}))
        assert references_secrets(doc) is True
        assert references_secrets(_doc()) is False

    def test_secrets_without_permissions(self) -> None:
        doc = _doc(_steps({"run": "x", "env": {"T": "${{ secrets.T }}"}}))
        usage = analyze_secrets_usage(doc)
        assert usage.secure is False
        assert usage.issues == ["Using secrets without explicit permissions"]

    def test_secrets_with_permissions_are_secure(self) -> None:
        doc = _doc(
            _steps({"run": "x", "env": {"T": "${{ secrets.T }}"}}),
            permissions={"contents": "read"},
        )
        assert analyze_secrets_usage(doc).secure is True

    def test_both_issues(self) -> None:
        doc = _doc(
            _steps({"run": "x", "env": {"PASSWORD": "pw", "T": "${{ secrets.T }}"}}),
        )
        usage = analyze_secrets_usage(doc)
        assert usage.issues == [
            "Potential hardcoded secrets detected",
            "Using secrets without explicit permissions",
        ]
        assert usage.hardcoded == ["jobs.test.steps[0].env.PASSWORD"]
