"""Text recommendations and next steps attached to a score result."""

from typing import List

from .models import AlternativeData, CreditApplication, RiskLevel
from .settings import ScoringSettings, scoring_settings


def generate_recommendations(
    application: CreditApplication,
    alternative: AlternativeData,
    overall_score: int,
    settings: ScoringSettings = scoring_settings,
) -> List[str]:
    """Improvement suggestions, factor-specific first, then score-tier advice."""
    credit = application.credit
    recommendations = []

    if credit.payment_history.late_payments > 0:
        recommendations.append("Set up automatic payments to avoid late payments")

    if credit.utilization.utilization_percentage > 30:
        recommendations.append(
            "Pay down credit card balances to reduce utilization below 30%"
        )

    if credit.mix.distinct_types < 2:
        recommendations.append(
            "Consider diversifying your credit mix with different account types"
        )

    if alternative.income_stability.job_stability < 0.7:
        recommendations.append("Focus on building job stability and consistent income")

    if alternative.spending_patterns.savings_rate < 0.1:
        recommendations.append("Increase your savings rate to at least 10% of income")

    if overall_score < settings.risk_medium_threshold:
        recommendations.append(
            "Focus on building positive credit history with secured credit cards"
        )
    elif overall_score < settings.risk_low_threshold:
        recommendations.append(
            "Continue building credit history and maintaining low utilization"
        )
    else:
        recommendations.append(
            "Maintain your excellent credit habits and consider premium credit products"
        )

    return recommendations


def generate_next_steps(
    overall_score: int,
    risk_level: RiskLevel,
    settings: ScoringSettings = scoring_settings,
) -> List[str]:
    """Follow-up actions for the applicant's score tier."""
    if overall_score >= settings.risk_low_threshold:
        next_steps = [
            "Apply for premium credit products with the best rates",
            "Consider investment opportunities and wealth building",
            "Help others improve their credit through mentoring",
        ]
    elif overall_score >= settings.risk_medium_threshold:
        next_steps = [
            "Continue building credit history with responsible usage",
            "Monitor your credit report monthly for improvements",
            "Set up credit monitoring alerts",
        ]
    else:
        next_steps = [
            "Create a credit improvement plan with specific goals",
            "Consider credit counseling or financial education",
            "Focus on paying down existing debt",
        ]

    if risk_level == RiskLevel.VERY_HIGH:
        next_steps.append("Resolve missed payments before applying for new credit")

    next_steps.append("Review and update your financial goals quarterly")
    next_steps.append("Stay informed about credit and financial best practices")
    return next_steps
