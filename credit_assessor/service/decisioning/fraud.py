"""
Fraud detection for the Credit Assessor engine.

Fraud detection is a rule pass over the business, financials and banking
sections of an application. Each rule is a named predicate worth a fixed
number of points; the triggered points add up to a risk score. A rule whose
inputs were not supplied (zero headcount, zero account age) does not fire.

The credit scorer never reads these sections, so a fraud assessment and a
credit score can be computed independently of each other.
"""

from dataclasses import dataclass
from typing import Callable, Sequence

from credit_assessor.service.scoring.models import CreditApplication
from credit_assessor.service.scoring.settings import ScoringSettings, scoring_settings

from .models import FraudAssessment, FraudRecommendation

EXPECTED_REVENUE_PER_EMPLOYEE = 100_000
ROUND_FIGURE_UNIT = 10_000


@dataclass(frozen=True)
class FraudRule:
    """A named red-flag check."""
    name: str
    points: int
    check: Callable[[CreditApplication], bool]


def is_round_number(value: float) -> bool:
    """Positive and an exact multiple of 10,000."""
    return value > 0 and value % ROUND_FIGURE_UNIT == 0


def _revenue_exceeds_headcount(app: CreditApplication) -> bool:
    if app.business.number_of_employees <= 0:
        return False
    expected = app.business.number_of_employees * EXPECTED_REVENUE_PER_EMPLOYEE
    return app.financials.annual_revenue > expected * 3


def _high_deposit_frequency(app: CreditApplication) -> bool:
    return app.banking.deposit_frequency > 50


def _business_older_than_account(app: CreditApplication) -> bool:
    if app.banking.account_age_years <= 0:
        return False
    return app.business.years_in_business > app.banking.account_age_years


def _round_financials(app: CreditApplication) -> bool:
    return (
        is_round_number(app.financials.annual_revenue)
        and is_round_number(app.financials.net_income)
    )


def _volatility_inconsistent_with_margin(app: CreditApplication) -> bool:
    return app.banking.cash_flow_volatility > 0.7 and app.financials.profit_margin > 0.20


def _overdrafts_despite_reserves(app: CreditApplication) -> bool:
    return (
        app.banking.overdrafts > 3
        and app.financials.monthly_expenses > 0
        and app.financials.cash_reserves > app.financials.monthly_expenses * 6
    )


DEFAULT_FRAUD_RULES = (
    FraudRule(
        "Revenue significantly higher than typical for employee count",
        20,
        _revenue_exceeds_headcount,
    ),
    FraudRule("Unusually high deposit frequency", 15, _high_deposit_frequency),
    FraudRule(
        "Business age exceeds age of its bank account",
        25,
        _business_older_than_account,
    ),
    FraudRule("Suspiciously round financial figures", 10, _round_financials),
    FraudRule(
        "High cash flow volatility inconsistent with reported profitability",
        15,
        _volatility_inconsistent_with_margin,
    ),
    FraudRule(
        "Repeated overdrafts despite large reported cash reserves",
        15,
        _overdrafts_despite_reserves,
    ),
)


def fraud_recommendation(
    risk_score: int,
    settings: ScoringSettings = scoring_settings,
) -> FraudRecommendation:
    """reject above 50, investigate above 30, otherwise proceed."""
    if risk_score > settings.fraud_reject_threshold:
        return FraudRecommendation.REJECT
    elif risk_score > settings.fraud_investigate_threshold:
        return FraudRecommendation.INVESTIGATE
    return FraudRecommendation.PROCEED


def detect_fraud(
    application: CreditApplication,
    rules: Sequence[FraudRule] = DEFAULT_FRAUD_RULES,
    settings: ScoringSettings = scoring_settings,
) -> FraudAssessment:
    """
    Run the fraud rules against an application.

    Args:
        application: The credit application
        rules: Rule list to evaluate (defaults to the standard rule set)
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        FraudAssessment with the triggered rule names in rule order
    """
    flags = []
    risk_score = 0

    for rule in rules:
        if rule.check(application):
            flags.append(rule.name)
            risk_score += rule.points

    risk_score = min(risk_score, 100)

    return FraudAssessment(
        risk_score=risk_score,
        is_fraudulent=risk_score > settings.fraud_reject_threshold,
        flags=flags,
        recommendation=fraud_recommendation(risk_score, settings),
    )
