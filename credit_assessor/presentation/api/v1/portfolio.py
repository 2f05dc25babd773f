"""Portfolio API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from credit_assessor.application.services import CreditAssessmentService
from credit_assessor.core.dependencies import get_assessment_service
from credit_assessor.presentation.schemas import (
    CompareRequestSchema,
    CompareResponseSchema,
    ErrorResponseSchema,
    PortfolioRequestSchema,
    PortfolioResponseSchema,
)

portfolio_router = APIRouter(
    prefix="/portfolio",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid application"},
        500: {"model": ErrorResponseSchema, "description": "Analysis failed"},
    },
)


@portfolio_router.post(
    "",
    response_model=PortfolioResponseSchema,
    status_code=200,
    summary="Analyze Portfolio",
    description="""
    Score and decide every application, then aggregate exposure, expected
    loss, concentration and the riskiest loans. An empty list returns an
    empty report.
    """,
)
async def analyze_portfolio(
    request: PortfolioRequestSchema,
    service: Annotated[CreditAssessmentService, Depends(get_assessment_service)],
) -> PortfolioResponseSchema:
    report = service.analyze_portfolio(request.applications, top_n=request.top_n)
    body = report.to_dict()

    if request.stress_scenario is not None:
        scenario = request.stress_scenario
        result = service.stress_test(
            request.applications,
            economic_downturn=scenario.economic_downturn,
            interest_rate_shock=scenario.interest_rate_shock,
            industry_collapse=scenario.industry_collapse,
        )
        body["stress_test"] = result.to_dict()

    return PortfolioResponseSchema.model_validate(body)


@portfolio_router.post(
    "/compare",
    response_model=CompareResponseSchema,
    status_code=200,
    summary="Compare Applications",
    description="Rank applications by credit score, best first, with each one's decision outcome.",
)
async def compare_applications(
    request: CompareRequestSchema,
    service: Annotated[CreditAssessmentService, Depends(get_assessment_service)],
) -> CompareResponseSchema:
    comparison = service.compare_applications(request.applications)
    return CompareResponseSchema.model_validate(comparison.to_dict())
