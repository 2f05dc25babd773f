"""Decision and fraud Pydantic schemas."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LoanTermsSchema(BaseModel):
    """Schema for the terms offered with an approval."""

    amount: float = Field(..., ge=0)
    term_months: int = Field(..., gt=0)
    rate: float = Field(..., ge=0, description="Annual interest rate in percent")
    monthly_payment: float = Field(..., ge=0)


class DecisionResponseSchema(BaseModel):
    """Schema for POST /v1/decision response body."""

    outcome: str = Field(
        ...,
        description="approve, decline or manual_review",
        examples=["approve"],
    )
    reason: str
    requires_manual_review: bool
    score: Optional[int] = Field(
        None,
        description="Display score; null when pre-qualification failed",
    )
    approved_amount: Optional[float] = None
    interest_rate: Optional[float] = None
    terms: Optional[LoanTermsSchema] = None
    improvement_suggestions: List[str] = Field(default_factory=list)
    review_priority: Optional[str] = Field(None, examples=["high"])

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "outcome": "approve",
                    "reason": "Excellent credit profile meets auto-approval criteria",
                    "requires_manual_review": False,
                    "score": 784,
                    "approved_amount": 75000,
                    "interest_rate": 6.73,
                    "terms": {
                        "amount": 75000,
                        "term_months": 36,
                        "rate": 6.73,
                        "monthly_payment": 2306.4,
                    },
                    "improvement_suggestions": [],
                    "review_priority": None,
                }
            ]
        }
    )


class FraudResponseSchema(BaseModel):
    """Schema for POST /v1/fraud response body."""

    risk_score: int = Field(..., ge=0, le=100)
    is_fraudulent: bool
    flags: List[str] = Field(..., description="Names of the triggered rules")
    recommendation: str = Field(..., examples=["proceed"])
