"""Portfolio Pydantic schemas."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from credit_assessor.service.scoring.models import CreditApplication


class StressScenarioSchema(BaseModel):
    economic_downturn: bool = False
    interest_rate_shock: bool = False
    industry_collapse: Optional[str] = Field(
        None,
        description="Industry whose loans double their default rate",
    )


class PortfolioRequestSchema(BaseModel):
    """Schema for POST /v1/portfolio request body."""

    applications: List[CreditApplication] = Field(
        ...,
        description="Applications to aggregate; may be empty",
    )
    top_n: Optional[int] = Field(
        None,
        ge=0,
        le=100,
        description="Size of the top risks list",
    )
    stress_scenario: Optional[StressScenarioSchema] = Field(
        None,
        description="Also run a stress test under this scenario",
    )


class ApplicationScoreSchema(BaseModel):
    applicant_id: str
    business_name: str
    industry: str
    score: int
    risk_level: str
    default_probability: float
    loan_amount: float
    outcome: str


class PortfolioMetricsSchema(BaseModel):
    average_score: float
    average_default_probability: float
    approval_rate: float = Field(..., ge=0, le=1)


class PortfolioRiskSchema(BaseModel):
    total_exposure: float
    portfolio_default_probability: float
    expected_loss: float
    expected_loss_rate: float
    concentration_risk: float = Field(..., description="Largest industry share of exposure")
    largest_exposure_share: float = Field(..., description="Largest single loan share of exposure")
    industry_exposure: Dict[str, float]
    risk_rating: str
    recommendations: List[str]


class StressTestSchema(BaseModel):
    baseline_default_rate: float
    stressed_default_rate: float
    additional_losses: float
    affected_loans: int


class PortfolioResponseSchema(BaseModel):
    """Schema for POST /v1/portfolio response body."""

    total_applications: int
    portfolio_metrics: PortfolioMetricsSchema
    risk_distribution: Dict[str, int] = Field(
        ...,
        description="Counts per risk level, summing to total_applications",
    )
    portfolio_risk: PortfolioRiskSchema
    applications: List[ApplicationScoreSchema]
    top_risks: List[ApplicationScoreSchema]
    recommendations: List[str]
    stress_test: Optional[StressTestSchema] = None


class CompareRequestSchema(BaseModel):
    """Schema for POST /v1/portfolio/compare request body."""

    applications: List[CreditApplication]


class ApplicationRankingSchema(BaseModel):
    applicant_id: str
    business_name: str
    score: int
    rank: int = Field(..., ge=1)
    recommendation: str


class CompareResponseSchema(BaseModel):
    """Schema for POST /v1/portfolio/compare response body."""

    rankings: List[ApplicationRankingSchema]
    best_candidate: Optional[str] = None
    analysis: str
