"""Tests for cireview.workflow.document accessors."""

from __future__ import annotations

from cireview.workflow.document import (
    WorkflowDocument,
    as_mapping,
    as_sequence,
    as_string,
    key_set,
)


class TestAccessors:
    def test_as_mapping(self) -> None:
        assert as_mapping({"a": 1}) == {"a": 1}
        assert as_mapping([1]) is None
        assert as_mapping(None) is None

    def test_as_sequence(self) -> None:
        assert as_sequence([1]) == [1]
        assert as_sequence("x") is None

    def test_as_string(self) -> None:
        assert as_string("x") == "x"
        assert as_string(3) is None


class TestKeySet:
    def test_mapping(self) -> None:
        assert key_set({"push": None, "pull_request": {}}) == ["push", "pull_request"]

    def test_sequence_deduplicates_in_order(self) -> None:
        assert key_set(["push", "pull_request", "push"]) == ["push", "pull_request"]

    def test_scalar(self) -> None:
        assert key_set("push") == ["push"]

    def test_absent(self) -> None:
        assert key_set(None) is None

    def test_empty_mapping_is_present(self) -> None:
        assert key_set({}) == []


class TestWorkflowDocument:
    def test_jobs_skip_non_mapping_bodies(self) -> None:
        doc = WorkflowDocument({"jobs": {"ok": {"runs-on": "x"}, "bad": "oops"}})
        assert [j.name for j in doc.jobs] == ["ok"]
        assert doc.job_count() == 2
        assert doc.job("bad") is None

    def test_triggers_accepts_yaml11_boolean_key(self) -> None:
        doc = WorkflowDocument({True: {"push": None}})
        assert doc.triggers == {"push": None}

    def test_missing_jobs(self) -> None:
        doc = WorkflowDocument({"name": "x"})
        assert doc.raw_jobs is None
        assert doc.jobs == []
        assert doc.actions() == []

    def test_job_views(self) -> None:
        doc = WorkflowDocument(
            {
                "jobs": {
                    "build": {
                        "runs-on": "ubuntu-latest",
                        "needs": "lint",
                        "strategy": {"matrix": {"python": ["3.11", "3.12"]}},
                        "steps": [
                            {"uses": "actions/checkout@v4"},
                            {"run": "make", "if": "success()"},
                            "not-a-step",
                        ],
                    }
                }
            }
        )
        job = doc.job("build")
        assert job is not None
        assert job.needs == ["lint"]
        assert job.matrix == {"python": ["3.11", "3.12"]}
        assert len(job.steps) == 2
        assert job.steps[1].condition == "success()"
        assert job.actions() == ["actions/checkout@v4"]
