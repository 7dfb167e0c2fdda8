"""YAML loading for GitHub Actions workflows using ruamel.yaml."""

from __future__ import annotations

from io import StringIO
from typing import Any

from ruamel.yaml import YAML, YAMLError

from cireview.workflow.document import WorkflowDocument
from cireview.workflow.errors import ParseError


def _plain(value: Any) -> Any:
    """Convert ruamel round-trip containers and scalar subclasses to builtins.

    Mapping keys become strings so `2024:` and `true:` keys look up the
    same way everywhere downstream.
    """
    if isinstance(value, dict):
        return {str(_plain(k)): _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    if isinstance(value, bool):
        return bool(value)
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return float(value)
    if isinstance(value, str):
        return str(value)
    return value


def load_yaml(yaml_str: str) -> dict[str, Any]:
    """Parse workflow text into a plain dict.

    Raises ParseError for empty input, malformed YAML, or a document
    whose top level is not a mapping.
    """
    if not yaml_str or not yaml_str.strip():
        raise ParseError("Empty workflow YAML")

    yaml = YAML()
    yaml.preserve_quotes = True

    try:
        parsed = yaml.load(StringIO(yaml_str))
    except YAMLError as e:
        line = None
        if getattr(e, "problem_mark", None) is not None:
            line = e.problem_mark.line + 1  # 0-indexed to 1-indexed
        raise ParseError(str(e), line=line) from e

    if parsed is None:
        raise ParseError("YAML parsed to empty/null value")
    if not isinstance(parsed, dict):
        raise ParseError(
            f"Workflow must be a mapping, got {type(parsed).__name__}"
        )

    return _plain(parsed)


def parse_workflow(yaml_str: str) -> WorkflowDocument:
    """Load workflow text and wrap it in a WorkflowDocument."""
    return WorkflowDocument(load_yaml(yaml_str))
