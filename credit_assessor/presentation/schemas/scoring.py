"""Scoring-related Pydantic schemas."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from credit_assessor.service.scoring.models import (
    AlternativeData,
    BehavioralData,
    CreditApplication,
)

EXAMPLE_APPLICATION = {
    "applicant_id": "biz-1001",
    "business": {
        "business_name": "Acme Bakery LLC",
        "industry": "food_service",
        "years_in_business": 6,
        "number_of_employees": 12,
    },
    "financials": {
        "monthly_revenue": 85000,
        "annual_revenue": 1020000,
        "monthly_expenses": 70000,
        "net_income": 153000,
        "cash_reserves": 260000,
        "total_debt": 150000,
        "profit_margin": 0.15,
        "revenue_growth_rate": 0.08,
        "customer_churn_rate": 0.1,
    },
    "banking": {
        "average_daily_balance": 45000,
        "overdrafts": 0,
        "deposit_frequency": 22,
        "cash_flow_volatility": 0.2,
        "account_age_years": 8,
    },
    "credit": {
        "payment_history": {"on_time_payments": 120, "late_payments": 0, "missed_payments": 0},
        "utilization": {
            "total_credit_limit": 100000,
            "total_balance": 10000,
            "utilization_percentage": 10,
        },
        "history": {
            "average_account_age": 8,
            "oldest_account_age": 12,
            "total_accounts": 10,
            "active_accounts": 8,
        },
        "mix": {"credit_cards": 2, "installment_loans": 1, "mortgages": 1, "other_accounts": 1},
        "new_credit": {"recent_inquiries": 0, "new_accounts": 0, "months_since_last_inquiry": 24},
    },
    "loan_request": {"amount": 75000, "term_months": 36, "purpose": "equipment"},
}


class ApplicationRequestSchema(BaseModel):
    """Schema for request bodies that carry a single credit application."""

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"application": EXAMPLE_APPLICATION}]}
    )

    application: CreditApplication = Field(
        ...,
        description="The credit application; omitted sections default to empty values",
    )


class ScoreRequestSchema(ApplicationRequestSchema):
    """Schema for POST /v1/score request body."""

    alternative_data: Optional[AlternativeData] = Field(
        None,
        description="Overrides the application's alternative data section",
    )
    behavioral_data: Optional[BehavioralData] = Field(
        None,
        description="Overrides the application's behavioral data section",
    )
    include_what_if: bool = Field(
        False,
        description="Include ranked what-if improvement scenarios",
    )
    include_credit_limit: bool = Field(
        False,
        description="Include a recommended credit limit",
    )


class ScoringFactorsSchema(BaseModel):
    """Sub-scores, each in the range 0-100."""

    payment_history: float = Field(..., ge=0, le=100)
    credit_utilization: float = Field(..., ge=0, le=100)
    credit_history: float = Field(..., ge=0, le=100)
    credit_mix: float = Field(..., ge=0, le=100)
    new_credit: float = Field(..., ge=0, le=100)
    alternative_data: float = Field(..., ge=0, le=100)
    behavioral_data: float = Field(..., ge=0, le=100)
    economic_factors: float = Field(..., ge=0, le=100)


class WhatIfScenarioSchema(BaseModel):
    change: str
    current_value: str
    suggested_value: str
    score_impact: int = Field(..., gt=0, description="Display-score gain")


class CreditLimitSchema(BaseModel):
    recommended_limit: int = Field(..., ge=0)
    minimum_limit: int = Field(..., ge=0)
    maximum_limit: int = Field(..., ge=0)
    review_period_months: int
    reasoning: str


class ScoreResponseSchema(BaseModel):
    """Schema for POST /v1/score response body."""

    overall_score: int = Field(
        ...,
        ge=300,
        le=850,
        description="Display score (300-850)",
        examples=[784],
    )
    composite_score: float = Field(
        ...,
        ge=0,
        le=100,
        description="Weighted 0-100 blend the display score is derived from",
    )
    score_range: str = Field(..., examples=["Very Good"])
    risk_level: str = Field(..., examples=["low"])
    confidence: float = Field(..., ge=0, le=0.95)
    default_probability: float = Field(..., ge=0, le=1)
    factors: ScoringFactorsSchema
    recommendations: List[str]
    next_steps: List[str]
    model_version: str
    last_updated: str = Field(..., description="ISO 8601 timestamp of the evaluation")
    what_if_scenarios: Optional[List[WhatIfScenarioSchema]] = None
    credit_limit: Optional[CreditLimitSchema] = None
