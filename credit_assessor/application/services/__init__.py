"""Application services (use cases)."""

from .assessment_service import CreditAssessmentService, validate_application
from .credit_agent import CreditAssessorAgent

__all__ = [
    "CreditAssessmentService",
    "CreditAssessorAgent",
    "validate_application",
]
