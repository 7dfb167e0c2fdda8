"""Data models for best-practice validation."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class PracticeLevel(str, Enum):
    """Which bucket a check outcome lands in."""

    good = "good"
    improvement = "improvement"
    critical = "critical"


class PracticeFinding(BaseModel):
    """One outcome of one check.

    For ``good`` outcomes ``message`` is a stable tag such as
    ``pinned-action-versions``; otherwise it is a sentence for the user.
    """

    check: str
    level: PracticeLevel
    message: str


class BestPracticesValidation(BaseModel):
    """Aggregated best-practice result for a single workflow."""

    score: float = 0.0
    good_practices: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    critical_issues: list[str] = Field(default_factory=list)
    findings: list[PracticeFinding] = Field(default_factory=list)
