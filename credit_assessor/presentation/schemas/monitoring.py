"""Loan monitoring Pydantic schemas."""

from typing import List, Optional

from pydantic import BaseModel, Field

from credit_assessor.service.scoring.models import (
    AlternativeData,
    BankingBehavior,
    CreditApplication,
    CreditProfile,
    FinancialData,
)


class MonitorRequestSchema(BaseModel):
    """Schema for POST /v1/monitor request body."""

    original_application: CreditApplication = Field(
        ...,
        description="The application the loan was granted on",
    )
    current_financials: FinancialData
    current_banking: Optional[BankingBehavior] = None
    current_alternative: Optional[AlternativeData] = None
    current_credit: Optional[CreditProfile] = None


class MonitoringResponseSchema(BaseModel):
    """Schema for POST /v1/monitor response body."""

    loan_id: str
    monitoring_date: str
    original_score: int
    current_score: int
    score_delta: int = Field(..., description="Current minus original display score")
    original_risk: float
    current_risk: float
    risk_delta: float
    warnings: List[str]
    severity: str = Field(..., examples=["medium"])
    action_required: str = Field(
        ...,
        description="none, monitor, review, restructure or escalate",
    )
    recommendations: List[str]
