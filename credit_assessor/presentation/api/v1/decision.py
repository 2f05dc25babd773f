"""Decision and fraud API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from credit_assessor.application.services import CreditAssessmentService
from credit_assessor.core.dependencies import get_assessment_service
from credit_assessor.presentation.schemas import (
    ApplicationRequestSchema,
    DecisionResponseSchema,
    ErrorResponseSchema,
    FraudResponseSchema,
)

_error_responses = {
    400: {"model": ErrorResponseSchema, "description": "Invalid application"},
    500: {"model": ErrorResponseSchema, "description": "Decisioning failed"},
}

decision_router = APIRouter(prefix="/decision", responses=_error_responses)
fraud_router = APIRouter(prefix="/fraud", responses=_error_responses)


@decision_router.post(
    "",
    response_model=DecisionResponseSchema,
    status_code=200,
    summary="Request Instant Decision",
    description="""
    Make an instant approve / decline / manual review decision.

    Runs pre-qualification, fraud checks and the score-based approval
    policy. Approvals include loan terms, score-driven declines include
    improvement suggestions and manual reviews include a priority.
    """,
)
async def create_decision(
    request: ApplicationRequestSchema,
    service: Annotated[CreditAssessmentService, Depends(get_assessment_service)],
) -> DecisionResponseSchema:
    decision = service.decide(request.application)
    return DecisionResponseSchema.model_validate(decision.to_dict())


@fraud_router.post(
    "",
    response_model=FraudResponseSchema,
    status_code=200,
    summary="Detect Fraud Indicators",
    description="Run the fraud rules and return the risk score, flags and recommendation.",
)
async def detect_fraud(
    request: ApplicationRequestSchema,
    service: Annotated[CreditAssessmentService, Depends(get_assessment_service)],
) -> FraudResponseSchema:
    assessment = service.detect_fraud(request.application)
    return FraudResponseSchema.model_validate(assessment.to_dict())
