"""Scoring API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from credit_assessor.application.services import CreditAssessmentService
from credit_assessor.core.dependencies import get_assessment_service
from credit_assessor.presentation.schemas import (
    ErrorResponseSchema,
    ScoreRequestSchema,
    ScoreResponseSchema,
)

scoring_router = APIRouter(
    prefix="/score",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid application"},
        500: {"model": ErrorResponseSchema, "description": "Scoring failed"},
    },
)


@scoring_router.post(
    "",
    response_model=ScoreResponseSchema,
    status_code=200,
    summary="Score Credit Application",
    description="""
    Score a credit application on the 300-850 scale.

    Combines traditional credit factors with alternative, behavioral and
    economic data. Optionally includes ranked what-if scenarios and a
    recommended credit limit.
    """,
)
async def score_application(
    request: ScoreRequestSchema,
    service: Annotated[CreditAssessmentService, Depends(get_assessment_service)],
) -> ScoreResponseSchema:
    result = service.score(
        request.application,
        alternative_data=request.alternative_data,
        behavioral_data=request.behavioral_data,
    )
    body = result.to_dict()

    if request.include_what_if:
        _, scenarios = service.explain(request.application)
        body["what_if_scenarios"] = [
            {
                "change": s.change,
                "current_value": s.current_value,
                "suggested_value": s.suggested_value,
                "score_impact": s.score_impact,
            }
            for s in scenarios
        ]

    if request.include_credit_limit:
        limit = service.recommend_credit_limit(request.application, result)
        body["credit_limit"] = limit.to_dict()

    return ScoreResponseSchema.model_validate(body)
