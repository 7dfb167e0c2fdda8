"""Shared test fixtures and configuration."""

import sys
from pathlib import Path

# Add ci_review/ to Python path so `from cireview.xxx` imports work,
# and tests/ so the shared builders in helpers.py import by name
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "ci_review"))
sys.path.insert(0, str(Path(__file__).resolve().parent))

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def load_workflow(fixtures_dir: Path):
    """Return a loader for workflow YAML fixtures by file stem."""

    def _load(name: str) -> str:
        return (fixtures_dir / "workflows" / f"{name}.yml").read_text()

    return _load
