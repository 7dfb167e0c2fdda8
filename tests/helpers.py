"""Builders shared by the workflow tests."""

from __future__ import annotations

import copy
from io import StringIO
from typing import Any

from ruamel.yaml import YAML

_yaml = YAML()
_yaml.default_flow_style = False

BASE_WORKFLOW: dict[str, Any] = {
    "name": "CI",
    "on": {"push": {"branches": ["main"]}},
    "jobs": {
        "test": {
            "runs-on": "ubuntu-latest",
            "steps": [
                {"uses": "actions/checkout@v4"},
                {"run": "npm test"},
            ],
        },
    },
}


def workflow(**overrides: Any) -> dict[str, Any]:
    """A deep copy of BASE_WORKFLOW with top-level keys replaced.

    A value of None removes the key.
    """
    data = copy.deepcopy(BASE_WORKFLOW)
    for key, value in overrides.items():
        if value is None:
            data.pop(key, None)
        else:
            data[key] = value
    return data


def dump(data: dict[str, Any]) -> str:
    buf = StringIO()
    _yaml.dump(data, buf)
    return buf.getvalue()
