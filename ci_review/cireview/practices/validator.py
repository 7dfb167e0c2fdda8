"""Best-practice validation entry point."""

from __future__ import annotations

import logging

from cireview.practices.models import (
    BestPracticesValidation,
    PracticeFinding,
    PracticeLevel,
)
from cireview.practices.rules import run_all_checks
from cireview.workflow.errors import BestPracticesError, ParseError
from cireview.workflow.loader import parse_workflow

logger = logging.getLogger(__name__)


def score_findings(findings: list[PracticeFinding]) -> BestPracticesValidation:
    """Bucket findings and score them as good / total, or 0 when none fired."""
    result = BestPracticesValidation(findings=list(findings))
    for finding in findings:
        if finding.level == PracticeLevel.good:
            result.good_practices.append(finding.message)
        elif finding.level == PracticeLevel.improvement:
            result.improvements.append(finding.message)
        else:
            result.critical_issues.append(finding.message)

    total = len(findings)
    result.score = len(result.good_practices) / total if total else 0.0
    return result


def validate_best_practices(workflow_yaml: str) -> BestPracticesValidation:
    """Run all best-practice checks on a workflow YAML text."""
    try:
        workflow = parse_workflow(workflow_yaml)
    except ParseError as e:
        raise BestPracticesError(f"Best practices validation failed: {e}") from e

    result = score_findings(run_all_checks(workflow))
    logger.debug(
        "Best practices: score=%.2f (%d good, %d improvements, %d critical)",
        result.score,
        len(result.good_practices),
        len(result.improvements),
        len(result.critical_issues),
    )
    return result
