"""Loan monitoring API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from credit_assessor.application.services import CreditAssessmentService
from credit_assessor.core.dependencies import get_assessment_service
from credit_assessor.presentation.schemas import (
    ErrorResponseSchema,
    MonitoringResponseSchema,
    MonitorRequestSchema,
)

monitoring_router = APIRouter(
    prefix="/monitor",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid application"},
        500: {"model": ErrorResponseSchema, "description": "Monitoring failed"},
    },
)


@monitoring_router.post(
    "",
    response_model=MonitoringResponseSchema,
    status_code=200,
    summary="Monitor Existing Loan",
    description="""
    Re-score a loan with current data, run early-warning rules and report
    the action required: none, monitor, review, restructure or escalate.
    """,
)
async def monitor_loan(
    request: MonitorRequestSchema,
    service: Annotated[CreditAssessmentService, Depends(get_assessment_service)],
) -> MonitoringResponseSchema:
    report = service.monitor_loan(
        request.original_application,
        request.current_financials,
        current_banking=request.current_banking,
        current_alternative=request.current_alternative,
        current_credit=request.current_credit,
    )
    return MonitoringResponseSchema.model_validate(report.to_dict())
