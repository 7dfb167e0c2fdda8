"""Read-only views over a parsed GitHub Actions workflow.

The parsed YAML is an untyped tree of dicts, lists and scalars. The
accessors here return ``None`` when a key is missing or null, and also
when it holds a value of the wrong shape, so callers never branch on
truthiness. ``has_key`` tells the two apart where that matters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def as_mapping(value: Any) -> dict[str, Any] | None:
    """Return *value* if it is a mapping, else None."""
    return value if isinstance(value, dict) else None


def as_sequence(value: Any) -> list[Any] | None:
    """Return *value* if it is a sequence, else None."""
    return value if isinstance(value, list) else None


def as_string(value: Any) -> str | None:
    """Return *value* if it is a string, else None."""
    return value if isinstance(value, str) else None


def is_present(value: Any) -> bool:
    """A key counts as present unless it is missing or explicitly null."""
    return value is not None


def key_set(value: Any) -> list[str] | None:
    """Normalize a mapping, sequence or scalar into an ordered list of keys.

    ``on: push``, ``on: [push, pull_request]`` and ``on: {push: ...}`` all
    reduce to the trigger names. Returns None when *value* is absent.
    """
    if value is None:
        return None
    if isinstance(value, dict):
        return [str(k) for k in value]
    if isinstance(value, list):
        return list(dict.fromkeys(str(item) for item in value))
    return [str(value)]


@dataclass(frozen=True)
class Step:
    """A single entry in a job's ``steps`` list."""

    raw: dict[str, Any]

    @property
    def uses(self) -> str | None:
        return as_string(self.raw.get("uses"))

    @property
    def run(self) -> str | None:
        return as_string(self.raw.get("run"))

    @property
    def with_(self) -> dict[str, Any] | None:
        return as_mapping(self.raw.get("with"))

    @property
    def env(self) -> dict[str, Any] | None:
        return as_mapping(self.raw.get("env"))

    @property
    def condition(self) -> Any:
        return self.raw.get("if")

    @property
    def timeout_minutes(self) -> Any:
        return self.raw.get("timeout-minutes")


@dataclass(frozen=True)
class Job:
    """A named job under the workflow's ``jobs`` mapping."""

    name: str
    raw: dict[str, Any]

    @property
    def runs_on(self) -> Any:
        return self.raw.get("runs-on")

    @property
    def raw_steps(self) -> list[Any] | None:
        return as_sequence(self.raw.get("steps"))

    @property
    def steps(self) -> list[Step]:
        return [Step(s) for s in self.raw_steps or [] if isinstance(s, dict)]

    @property
    def strategy(self) -> dict[str, Any] | None:
        return as_mapping(self.raw.get("strategy"))

    @property
    def matrix(self) -> Any:
        strategy = self.strategy
        return strategy.get("matrix") if strategy is not None else None

    @property
    def environment(self) -> Any:
        return self.raw.get("environment")

    @property
    def condition(self) -> Any:
        return self.raw.get("if")

    @property
    def needs(self) -> list[str]:
        return key_set(self.raw.get("needs")) or []

    @property
    def env(self) -> dict[str, Any] | None:
        return as_mapping(self.raw.get("env"))

    @property
    def timeout_minutes(self) -> Any:
        return self.raw.get("timeout-minutes")

    def actions(self) -> list[str]:
        """All ``uses`` references in step order."""
        return [s.uses for s in self.steps if s.uses]


class WorkflowDocument:
    """A parsed workflow with typed accessors for the recognized keys."""

    def __init__(self, raw: dict[str, Any]) -> None:
        self.raw = raw

    def has_key(self, key: str) -> bool:
        return key in self.raw

    @property
    def name(self) -> Any:
        return self.raw.get("name")

    @property
    def triggers(self) -> Any:
        # YAML 1.1 loaders read a bare `on` key as boolean true
        if "on" in self.raw:
            return self.raw["on"]
        return self.raw.get(True)

    @property
    def permissions(self) -> Any:
        return self.raw.get("permissions")

    @property
    def env(self) -> dict[str, Any] | None:
        return as_mapping(self.raw.get("env"))

    @property
    def raw_jobs(self) -> dict[str, Any] | None:
        return as_mapping(self.raw.get("jobs"))

    @property
    def jobs(self) -> list[Job]:
        return [
            Job(str(name), body)
            for name, body in (self.raw_jobs or {}).items()
            if isinstance(body, dict)
        ]

    def job(self, name: str) -> Job | None:
        body = as_mapping((self.raw_jobs or {}).get(name))
        return Job(name, body) if body is not None else None

    def job_count(self) -> int:
        return len(self.raw_jobs or {})

    def steps(self) -> list[Step]:
        return [step for job in self.jobs for step in job.steps]

    def actions(self) -> list[str]:
        """Every ``uses`` reference across all jobs."""
        return [action for job in self.jobs for action in job.actions()]
