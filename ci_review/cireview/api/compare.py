"""Workflow comparison API endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from cireview.comparison.batch import BatchComparisonResult, ComparisonPair, run_batch
from cireview.comparison.engine import compare_workflows
from cireview.comparison.models import WorkflowComparison
from cireview.comparison.report import differences_by_type, summarize_comparison
from cireview.deps import ServiceOptions, get_options
from cireview.workflow.errors import WorkflowError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["compare"])


class CompareRequest(BaseModel):
    baseline: str = Field(..., description="YAML of the reference workflow")
    candidate: str = Field(..., description="YAML of the workflow to compare against it")


class CompareResponse(BaseModel):
    comparison: WorkflowComparison
    summary: str = ""
    counts_by_type: dict[str, int] = Field(default_factory=dict)


class BatchCompareRequest(BaseModel):
    pairs: list[ComparisonPair] = Field(default_factory=list)
    similarity_threshold: float | None = Field(
        None, ge=0.0, le=1.0,
        description="Overrides the configured threshold for this run",
    )


@router.post("/compare", response_model=CompareResponse)
def compare(body: CompareRequest) -> CompareResponse:
    """Compare two workflows and return differences with a summary."""
    try:
        comparison = compare_workflows(body.baseline, body.candidate)
    except WorkflowError as e:
        logger.info("Rejected comparison request: %s", e)
        raise HTTPException(status_code=422, detail=str(e))

    return CompareResponse(
        comparison=comparison,
        summary=summarize_comparison(comparison),
        counts_by_type=differences_by_type(comparison),
    )


@router.post("/compare/batch", response_model=BatchComparisonResult)
def compare_batch(
    body: BatchCompareRequest,
    options: ServiceOptions = Depends(get_options),
) -> BatchComparisonResult:
    """Compare many baseline/candidate pairs; per-pair errors are reported inline."""
    if len(body.pairs) > options.max_batch_pairs:
        raise HTTPException(
            status_code=400,
            detail=(
                f"Too many pairs: {len(body.pairs)} "
                f"(max {options.max_batch_pairs})"
            ),
        )

    threshold = (
        body.similarity_threshold
        if body.similarity_threshold is not None
        else options.similarity_threshold
    )
    return run_batch(body.pairs, similarity_threshold=threshold)
