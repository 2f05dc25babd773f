"""Dependency injection for FastAPI."""

from typing import Annotated

from fastapi import Depends

from credit_assessor.application.interfaces import ReportRenderer
from credit_assessor.application.services import CreditAssessmentService, CreditAssessorAgent
from credit_assessor.presentation.reports import MarkdownReportRenderer
from credit_assessor.service.scoring.settings import ScoringSettings, get_scoring_settings


def get_settings_for_scoring() -> ScoringSettings:
    """Get the cached scoring policy settings."""
    return get_scoring_settings()


# Service dependencies
def get_assessment_service(
    settings: Annotated[ScoringSettings, Depends(get_settings_for_scoring)],
) -> CreditAssessmentService:
    """Get a CreditAssessmentService bound to the scoring settings."""
    return CreditAssessmentService(settings=settings)


def get_report_renderer() -> ReportRenderer:
    """Get the Markdown renderer for agent responses."""
    return MarkdownReportRenderer()


def get_credit_agent(
    service: Annotated[CreditAssessmentService, Depends(get_assessment_service)],
    renderer: Annotated[ReportRenderer, Depends(get_report_renderer)],
) -> CreditAssessorAgent:
    """Get a CreditAssessorAgent backed by the assessment service."""
    return CreditAssessorAgent(service=service, renderer=renderer)
