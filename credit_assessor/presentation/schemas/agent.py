"""Agent Pydantic schemas."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from credit_assessor.service.scoring.models import (
    AlternativeData,
    BankingBehavior,
    CreditApplication,
    CreditProfile,
    FinancialData,
)


class AgentExecuteRequestSchema(BaseModel):
    """Schema for POST /v1/agent/execute request body."""

    task: str = Field(
        "general",
        max_length=64,
        description=(
            "ai_credit_score, instant_decision, fraud_detection, portfolio_analysis, "
            "monitor_loan, explain_score or general"
        ),
        examples=["ai_credit_score"],
    )
    application: Optional[CreditApplication] = None
    applications: Optional[List[CreditApplication]] = None
    current_financials: Optional[FinancialData] = None
    current_banking: Optional[BankingBehavior] = None
    current_alternative: Optional[AlternativeData] = None
    current_credit: Optional[CreditProfile] = None

    @field_validator("task")
    @classmethod
    def normalize_task(cls, v: str) -> str:
        return v.strip().lower()


class AgentExecuteResponseSchema(BaseModel):
    """Schema for POST /v1/agent/execute response body."""

    task: str
    content: str = Field(..., description="Markdown response")
    suggestions: List[str]
    data: Optional[Dict[str, Any]] = Field(
        None,
        description="Structured result when the task completed",
    )
