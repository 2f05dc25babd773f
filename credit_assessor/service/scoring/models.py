"""
Data models for credit scoring.

These models represent the data structures used throughout the scoring
pipeline, from the submitted credit application to the final score result.

Input records are frozen: the engine never mutates an application. Every
field carries a zero or neutral default so that partially filled records
are still well-formed and simply score low on the missing sections.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Tuple


class RiskLevel(str, Enum):
    """Risk bucket derived from the display score."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"


class ScoreRange(str, Enum):
    """Consumer-facing label for the display score."""
    EXCEPTIONAL = "Exceptional"
    VERY_GOOD = "Very Good"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


# =============================================================================
# Application sections
# =============================================================================

@dataclass(frozen=True)
class BusinessInfo:
    """Identity of the applying business."""
    business_name: str = ""
    industry: str = "default"
    years_in_business: float = 0.0
    number_of_employees: int = 0


@dataclass(frozen=True)
class FinancialData:
    """
    Reported business financials.

    Attributes:
        profit_margin: Net margin as a fraction (0.15 = 15%)
        revenue_growth_rate: Year-over-year growth as a fraction
        customer_churn_rate: Share of customers lost per year (0-1)
    """
    monthly_revenue: float = 0.0
    annual_revenue: float = 0.0
    monthly_expenses: float = 0.0
    net_income: float = 0.0
    cash_reserves: float = 0.0
    total_debt: float = 0.0
    profit_margin: float = 0.0
    revenue_growth_rate: float = 0.0
    customer_churn_rate: float = 0.0


@dataclass(frozen=True)
class BankingBehavior:
    """Business bank account behavior."""
    average_daily_balance: float = 0.0
    overdrafts: int = 0
    deposit_frequency: float = 0.0  # deposits per month
    cash_flow_volatility: float = 0.0  # 0-1
    account_age_years: float = 0.0


@dataclass(frozen=True)
class PaymentHistory:
    on_time_payments: int = 0
    late_payments: int = 0
    missed_payments: int = 0
    average_days_late: float = 0.0


@dataclass(frozen=True)
class CreditUtilization:
    total_credit_limit: float = 0.0
    total_balance: float = 0.0
    utilization_percentage: float = 0.0


@dataclass(frozen=True)
class CreditHistory:
    """Account ages are in years."""
    average_account_age: float = 0.0
    oldest_account_age: float = 0.0
    total_accounts: int = 0
    active_accounts: int = 0


@dataclass(frozen=True)
class CreditMix:
    """Number of open accounts per type."""
    credit_cards: int = 0
    installment_loans: int = 0
    mortgages: int = 0
    other_accounts: int = 0

    @property
    def distinct_types(self) -> int:
        return sum(
            1 for count in (
                self.credit_cards,
                self.installment_loans,
                self.mortgages,
                self.other_accounts,
            )
            if count > 0
        )


@dataclass(frozen=True)
class NewCredit:
    recent_inquiries: int = 0
    new_accounts: int = 0
    months_since_last_inquiry: float = 0.0


@dataclass(frozen=True)
class CreditProfile:
    """Traditional bureau data."""
    payment_history: PaymentHistory = field(default_factory=PaymentHistory)
    utilization: CreditUtilization = field(default_factory=CreditUtilization)
    history: CreditHistory = field(default_factory=CreditHistory)
    mix: CreditMix = field(default_factory=CreditMix)
    new_credit: NewCredit = field(default_factory=NewCredit)
    bankruptcies: int = 0
    collections: int = 0


@dataclass(frozen=True)
class IncomeStability:
    """
    Attributes:
        employment_length: Years with the current employer or venture
        job_stability: 0-1, share of the last years without gaps
        income_history: Yearly income, oldest first
    """
    current_income: float = 0.0
    employment_length: float = 0.0
    job_stability: float = 0.0
    income_history: Tuple[float, ...] = ()


@dataclass(frozen=True)
class SpendingPatterns:
    """
    Attributes:
        savings_rate: Share of income saved (0.1 = 10%)
        expense_variability: Month-over-month coefficient of variation
        discretionary_spending: Monthly discretionary spend in dollars
    """
    monthly_expenses: float = 0.0
    savings_rate: float = 0.0
    expense_variability: float = 0.0
    discretionary_spending: float = 0.0


@dataclass(frozen=True)
class DigitalFootprint:
    """All signals are normalized to 0-1."""
    social_media_activity: float = 0.0
    online_shopping_behavior: float = 0.0
    digital_payment_usage: float = 0.0
    app_usage_patterns: float = 0.0


@dataclass(frozen=True)
class IndustryRisk:
    """All signals are normalized to 0-1."""
    industry_stability: float = 0.0
    market_volatility: float = 0.0
    regulatory_environment: float = 0.0


@dataclass(frozen=True)
class AlternativeData:
    income_stability: IncomeStability = field(default_factory=IncomeStability)
    spending_patterns: SpendingPatterns = field(default_factory=SpendingPatterns)
    digital_footprint: DigitalFootprint = field(default_factory=DigitalFootprint)
    industry_risk: IndustryRisk = field(default_factory=IndustryRisk)


@dataclass(frozen=True)
class BehavioralData:
    """All signals are normalized to 0-1."""
    account_login_frequency: float = 0.0
    payment_method_consistency: float = 0.0
    financial_goal_setting: float = 0.0
    risk_tolerance: float = 0.0


@dataclass(frozen=True)
class EconomicIndicators:
    """Macro indicators in percent. Defaults describe a neutral economy."""
    unemployment_rate: float = 4.0
    inflation_rate: float = 2.5
    gdp_growth: float = 2.0


@dataclass(frozen=True)
class LoanRequest:
    amount: float = 0.0
    term_months: int = 36
    purpose: str = ""


@dataclass(frozen=True)
class CreditApplication:
    """
    A submitted credit application.

    Created by the caller and never mutated by the engine. The scorer reads
    the credit, alternative, behavioral and economic sections; the fraud
    rules read the business, financials and banking sections.
    """
    applicant_id: str
    business: BusinessInfo = field(default_factory=BusinessInfo)
    financials: FinancialData = field(default_factory=FinancialData)
    banking: BankingBehavior = field(default_factory=BankingBehavior)
    credit: CreditProfile = field(default_factory=CreditProfile)
    alternative: AlternativeData = field(default_factory=AlternativeData)
    behavioral: BehavioralData = field(default_factory=BehavioralData)
    economic: EconomicIndicators = field(default_factory=EconomicIndicators)
    loan_request: LoanRequest = field(default_factory=LoanRequest)


# =============================================================================
# Score outputs
# =============================================================================

@dataclass(frozen=True)
class ScoringFactors:
    """
    Sub-scores for each scoring category, each in the range 0-100.

    Derived per request and never persisted on their own.
    """
    payment_history: float
    credit_utilization: float
    credit_history: float
    credit_mix: float
    new_credit: float
    alternative_data: float
    behavioral_data: float
    economic_factors: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ScoreResult:
    """
    The outcome of one scoring evaluation.

    Attributes:
        overall_score: Display score on the 300-850 scale
        composite_score: Weighted 0-100 blend the display score is derived from
        score_range: Consumer-facing label for the display score
        risk_level: Risk bucket for the display score
        confidence: 0.0-0.95, driven by data completeness and consistency
        default_probability: Estimated probability of default (0.01-0.99)
        factors: Sub-scores that produced the composite
        recommendations: Ordered improvement suggestions
        next_steps: Ordered follow-up actions
        model_version: Version label of the scoring policy
        last_updated: UTC time of evaluation, the only non-deterministic field
    """
    overall_score: int
    composite_score: float
    score_range: ScoreRange
    risk_level: RiskLevel
    confidence: float
    default_probability: float
    factors: ScoringFactors
    recommendations: List[str]
    next_steps: List[str]
    model_version: str
    last_updated: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "overall_score": self.overall_score,
            "composite_score": self.composite_score,
            "score_range": self.score_range.value,
            "risk_level": self.risk_level.value,
            "confidence": self.confidence,
            "default_probability": self.default_probability,
            "factors": self.factors.to_dict(),
            "recommendations": list(self.recommendations),
            "next_steps": list(self.next_steps),
            "model_version": self.model_version,
            "last_updated": self.last_updated.isoformat(),
        }


@dataclass(frozen=True)
class WhatIfScenario:
    """A single input change and the display-score gain it would produce."""
    change: str
    current_value: str
    suggested_value: str
    score_impact: int
