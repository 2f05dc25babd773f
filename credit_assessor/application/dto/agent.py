"""Data transfer objects for agent task dispatch."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from credit_assessor.service.scoring.models import (
    AlternativeData,
    BankingBehavior,
    CreditApplication,
    CreditProfile,
    FinancialData,
)


class CreditTask(str, Enum):
    """Tasks the credit assessor agent can perform."""
    AI_CREDIT_SCORE = "ai_credit_score"
    INSTANT_DECISION = "instant_decision"
    FRAUD_DETECTION = "fraud_detection"
    PORTFOLIO_ANALYSIS = "portfolio_analysis"
    MONITOR_LOAN = "monitor_loan"
    EXPLAIN_SCORE = "explain_score"
    GENERAL = "general"

    @classmethod
    def parse(cls, value) -> "CreditTask":
        """Resolve a task name, falling back to GENERAL for unknown names."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.GENERAL


@dataclass(frozen=True)
class AgentOptions:
    """
    Input bag for an agent task.

    Each task reads only the fields it needs: ``application`` for scoring,
    decisions, fraud and explanations; ``applications`` for portfolio
    analysis; ``application`` plus ``current_financials`` (and optionally
    the other ``current_*`` sections) for loan monitoring.
    """
    application: Optional[CreditApplication] = None
    applications: Optional[List[CreditApplication]] = None
    current_financials: Optional[FinancialData] = None
    current_banking: Optional[BankingBehavior] = None
    current_alternative: Optional[AlternativeData] = None
    current_credit: Optional[CreditProfile] = None


@dataclass(frozen=True)
class AgentResponse:
    """Conversational response with an optional structured payload."""
    task: CreditTask
    content: str
    suggestions: List[str] = field(default_factory=list)
    data: Optional[dict] = None

    def to_dict(self) -> dict:
        return {
            "task": self.task.value,
            "content": self.content,
            "suggestions": list(self.suggestions),
            "data": self.data,
        }
