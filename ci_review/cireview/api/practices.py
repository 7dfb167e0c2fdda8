"""Best-practice validation API endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from cireview.comparison.report import summarize_validation
from cireview.practices.models import BestPracticesValidation
from cireview.practices.validator import validate_best_practices
from cireview.workflow.errors import WorkflowError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["practices"])


class PracticesRequest(BaseModel):
    workflow: str


class PracticesResponse(BaseModel):
    validation: BestPracticesValidation
    summary: str = ""


@router.post("/practices", response_model=PracticesResponse)
def validate_practices(body: PracticesRequest) -> PracticesResponse:
    """Score a workflow against GitHub Actions best practices."""
    try:
        validation = validate_best_practices(body.workflow)
    except WorkflowError as e:
        logger.info("Rejected validation request: %s", e)
        raise HTTPException(status_code=422, detail=str(e))

    return PracticesResponse(
        validation=validation,
        summary=summarize_validation(validation),
    )
