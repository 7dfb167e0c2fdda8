"""Batch comparison of generated workflows against their baselines."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from cireview.comparison.engine import compare_workflows
from cireview.comparison.models import DifferenceType, Severity, WorkflowComparison
from cireview.workflow.errors import WorkflowError

logger = logging.getLogger(__name__)

DEFAULT_SIMILARITY_THRESHOLD = 0.8


class ComparisonPair(BaseModel):
    """A named baseline/candidate pair of workflow YAML texts."""

    name: str
    baseline: str
    candidate: str


class PairResult(BaseModel):
    """Outcome of comparing a single pair."""

    name: str
    passed: bool
    similarity: float | None = None
    difference_count: int = 0
    security_regressions: list[str] = Field(default_factory=list)
    error: str = ""


class BatchComparisonResult(BaseModel):
    """Result of a batch comparison run."""

    total: int
    passed: int
    failed: int
    errored: int
    similarity_threshold: float
    results: list[PairResult] = Field(default_factory=list)


def security_regressions(comparison: WorkflowComparison) -> list[str]:
    """Paths of high-severity security differences."""
    return [
        d.path
        for d in comparison.differences
        if d.type == DifferenceType.security and d.severity == Severity.high
    ]


def run_batch(
    pairs: list[ComparisonPair],
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> BatchComparisonResult:
    """Compare each pair independently.

    A pair passes when its similarity meets the threshold and it carries no
    high-severity security difference. A pair that fails to parse is
    recorded with its error and does not stop the batch.
    """
    results: list[PairResult] = []

    for pair in pairs:
        try:
            comparison = compare_workflows(pair.baseline, pair.candidate)
        except WorkflowError as e:
            logger.warning("Comparison failed for %s: %s", pair.name, e)
            results.append(PairResult(name=pair.name, passed=False, error=str(e)))
            continue

        regressions = security_regressions(comparison)
        passed = comparison.similarity >= similarity_threshold and not regressions
        if not passed:
            logger.warning(
                "Workflow %s regressed: similarity=%.2f, security=%s",
                pair.name,
                comparison.similarity,
                regressions,
            )
        results.append(
            PairResult(
                name=pair.name,
                passed=passed,
                similarity=comparison.similarity,
                difference_count=len(comparison.differences),
                security_regressions=regressions,
            )
        )

    errored = sum(1 for r in results if r.error)
    passed_count = sum(1 for r in results if r.passed)
    logger.info(
        "Batch comparison: %d pair(s), %d passed, %d errored",
        len(results), passed_count, errored,
    )
    return BatchComparisonResult(
        total=len(results),
        passed=passed_count,
        failed=len(results) - passed_count - errored,
        errored=errored,
        similarity_threshold=similarity_threshold,
        results=results,
    )
