"""Best-practice validation for GitHub Actions workflows."""

from cireview.practices.models import BestPracticesValidation, PracticeFinding, PracticeLevel
from cireview.practices.validator import validate_best_practices

__all__ = [
    "BestPracticesValidation",
    "PracticeFinding",
    "PracticeLevel",
    "validate_best_practices",
]
