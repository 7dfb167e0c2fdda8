"""Exceptions raised while loading, comparing, or validating workflows."""

from __future__ import annotations


class WorkflowError(Exception):
    """Base class for all workflow review failures."""


class ParseError(WorkflowError):
    """Workflow text is not well-formed YAML or is not a mapping."""

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


class WorkflowComparisonError(WorkflowError):
    """Raised by compare_workflows when either input cannot be compared."""


class BestPracticesError(WorkflowError):
    """Raised by validate_best_practices when the input cannot be checked."""
