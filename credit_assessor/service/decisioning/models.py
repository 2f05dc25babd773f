"""
Data models for decisioning.

These models carry the outcomes derived from a score result: instant
decisions, fraud assessments, portfolio aggregates and loan monitoring
reports. Like the scoring models they are plain frozen dataclasses with a
``to_dict`` used by the HTTP layer.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from credit_assessor.service.scoring.models import RiskLevel


class DecisionOutcome(str, Enum):
    APPROVE = "approve"
    DECLINE = "decline"
    MANUAL_REVIEW = "manual_review"


class ReviewPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class FraudRecommendation(str, Enum):
    PROCEED = "proceed"
    INVESTIGATE = "investigate"
    REJECT = "reject"


class WarningSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class MonitoringAction(str, Enum):
    """Action tiers for an existing loan, mildest first."""
    NONE = "none"
    MONITOR = "monitor"
    REVIEW = "review"
    RESTRUCTURE = "restructure"
    ESCALATE = "escalate"

    @property
    def rank(self) -> int:
        return list(MonitoringAction).index(self)


# =============================================================================
# Instant decisions
# =============================================================================

@dataclass(frozen=True)
class LoanTerms:
    """
    Terms offered with an approval.

    Attributes:
        rate: Annual interest rate in percent
        monthly_payment: Fully amortizing payment for amount over term_months
    """
    amount: float
    term_months: int
    rate: float
    monthly_payment: float


@dataclass(frozen=True)
class Decision:
    """
    An instant decision on a credit application.

    Approvals carry approved_amount, interest_rate and terms. Declines
    driven by the score carry improvement_suggestions. Manual reviews carry
    a review_priority. The score is None when pre-qualification failed
    before scoring.
    """
    outcome: DecisionOutcome
    reason: str
    requires_manual_review: bool
    score: Optional[int] = None
    approved_amount: Optional[float] = None
    interest_rate: Optional[float] = None
    terms: Optional[LoanTerms] = None
    improvement_suggestions: List[str] = field(default_factory=list)
    review_priority: Optional[ReviewPriority] = None

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "outcome": self.outcome.value,
            "reason": self.reason,
            "requires_manual_review": self.requires_manual_review,
            "score": self.score,
            "approved_amount": self.approved_amount,
            "interest_rate": self.interest_rate,
            "terms": asdict(self.terms) if self.terms else None,
            "improvement_suggestions": list(self.improvement_suggestions),
            "review_priority": self.review_priority.value if self.review_priority else None,
        }


@dataclass(frozen=True)
class DecisionStatistics:
    total_applications: int
    approved: int
    declined: int
    requires_review: int
    approval_rate: float
    average_approved_amount: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ApplicationRanking:
    applicant_id: str
    business_name: str
    score: int
    rank: int
    recommendation: DecisionOutcome

    def to_dict(self) -> dict:
        return {**asdict(self), "recommendation": self.recommendation.value}


@dataclass(frozen=True)
class ApplicationComparison:
    """
    Applications ranked by credit score, best first.

    best_candidate is None when there was nothing to compare.
    """
    rankings: List[ApplicationRanking]
    best_candidate: Optional[str]
    analysis: str

    def to_dict(self) -> dict:
        return {
            "rankings": [r.to_dict() for r in self.rankings],
            "best_candidate": self.best_candidate,
            "analysis": self.analysis,
        }


# =============================================================================
# Fraud
# =============================================================================

@dataclass(frozen=True)
class FraudAssessment:
    """
    Result of the fraud rule pass.

    Attributes:
        risk_score: Sum of triggered rule points, capped at 100
        flags: Names of the triggered rules, in rule order
    """
    risk_score: int
    is_fraudulent: bool
    flags: List[str]
    recommendation: FraudRecommendation

    def to_dict(self) -> dict:
        return {
            "risk_score": self.risk_score,
            "is_fraudulent": self.is_fraudulent,
            "flags": list(self.flags),
            "recommendation": self.recommendation.value,
        }


# =============================================================================
# Portfolio
# =============================================================================

@dataclass(frozen=True)
class ApplicationScore:
    """Per-application line of a portfolio report."""
    applicant_id: str
    business_name: str
    industry: str
    score: int
    risk_level: RiskLevel
    default_probability: float
    loan_amount: float
    outcome: DecisionOutcome

    def to_dict(self) -> dict:
        data = asdict(self)
        data["risk_level"] = self.risk_level.value
        data["outcome"] = self.outcome.value
        return data


@dataclass(frozen=True)
class PortfolioMetrics:
    average_score: float
    average_default_probability: float
    approval_rate: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PortfolioRisk:
    """
    Exposure-level risk of a portfolio.

    Attributes:
        portfolio_default_probability: Exposure-weighted default probability
        expected_loss: Sum of amount x default probability x loss given default
        concentration_risk: Largest single industry share of total exposure
        largest_exposure_share: Largest single loan share of total exposure
    """
    total_exposure: float
    portfolio_default_probability: float
    expected_loss: float
    expected_loss_rate: float
    concentration_risk: float
    largest_exposure_share: float
    industry_exposure: Dict[str, float]
    risk_rating: str
    recommendations: List[str]

    def to_dict(self) -> dict:
        data = asdict(self)
        data["industry_exposure"] = dict(self.industry_exposure)
        return data


@dataclass(frozen=True)
class PortfolioReport:
    total_applications: int
    portfolio_metrics: PortfolioMetrics
    risk_distribution: Dict[str, int]
    portfolio_risk: PortfolioRisk
    applications: List[ApplicationScore]
    top_risks: List[ApplicationScore]
    recommendations: List[str]

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "total_applications": self.total_applications,
            "portfolio_metrics": self.portfolio_metrics.to_dict(),
            "risk_distribution": dict(self.risk_distribution),
            "portfolio_risk": self.portfolio_risk.to_dict(),
            "applications": [a.to_dict() for a in self.applications],
            "top_risks": [a.to_dict() for a in self.top_risks],
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class StressTestResult:
    baseline_default_rate: float
    stressed_default_rate: float
    additional_losses: float
    affected_loans: int

    def to_dict(self) -> dict:
        return asdict(self)


# =============================================================================
# Monitoring
# =============================================================================

@dataclass(frozen=True)
class MonitoringReport:
    """
    Comparison of an existing loan against its original assessment.

    Deltas are current minus original, so a deteriorating loan has a
    negative score_delta and a positive risk_delta.
    """
    loan_id: str
    original_score: int
    current_score: int
    score_delta: int
    original_risk: float
    current_risk: float
    risk_delta: float
    warnings: List[str]
    severity: WarningSeverity
    action_required: MonitoringAction
    recommendations: List[str]
    monitoring_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "loan_id": self.loan_id,
            "monitoring_date": self.monitoring_date.isoformat(),
            "original_score": self.original_score,
            "current_score": self.current_score,
            "score_delta": self.score_delta,
            "original_risk": self.original_risk,
            "current_risk": self.current_risk,
            "risk_delta": self.risk_delta,
            "warnings": list(self.warnings),
            "severity": self.severity.value,
            "action_required": self.action_required.value,
            "recommendations": list(self.recommendations),
        }


# =============================================================================
# Limits and pricing
# =============================================================================

@dataclass(frozen=True)
class CreditLimitRecommendation:
    """
    Attributes:
        review_period_months: How long the limit stands before re-evaluation
        reasoning: Sentence-joined factors behind the limit
    """
    recommended_limit: int
    minimum_limit: int
    maximum_limit: int
    review_period_months: int
    reasoning: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class LoanPricing:
    optimal_rate: float
    rate_min: float
    rate_max: float
    expected_return: float
    competitiveness: str
    reasoning: str

    def to_dict(self) -> dict:
        return asdict(self)
