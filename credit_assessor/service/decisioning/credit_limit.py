"""
Credit Limit Recommendation for the Credit Assessor.

This module sizes a revolving credit limit from monthly revenue, scaled by
the display score and adjusted for cash reserves, profitability and
business age.
"""

from credit_assessor.service.scoring.models import CreditApplication, RiskLevel, ScoreResult
from credit_assessor.service.scoring.settings import ScoringSettings, scoring_settings

from .models import CreditLimitRecommendation


def score_multiplier(
    overall_score: int,
    settings: ScoringSettings = scoring_settings,
) -> float:
    """
    Map a display score to a limit multiplier between 0.5 and 1.0.

    The floor score keeps half of the revenue-based limit, the ceiling keeps
    all of it.
    """
    position = (overall_score - settings.score_floor) / settings.score_span
    position = max(0.0, min(1.0, position))
    return 0.5 + position * 0.5


def recommend_credit_limit(
    application: CreditApplication,
    score_result: ScoreResult,
    settings: ScoringSettings = scoring_settings,
) -> CreditLimitRecommendation:
    """
    Recommend a credit limit for an application.

    Algorithm:
        - Base limit: two months of revenue x score multiplier
        - Cash reserves above 3 months of revenue: x1.2, below 1 month: x0.8
        - Profit margin above 15%: x1.1, below 5%: x0.9
        - More than 5 years in business: x1.1, under 2 years: x0.85

    The minimum and maximum are 70% and 130% of the recommendation. Low and
    medium risk limits are reviewed yearly, the rest every six months.

    Args:
        application: The credit application
        score_result: Score for the application
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        CreditLimitRecommendation with limits rounded to whole dollars
    """
    financials = application.financials
    monthly_revenue = financials.monthly_revenue
    years = application.business.years_in_business
    reasons = [f"Based on monthly revenue of ${monthly_revenue:,.0f}"]
    reasons.append(
        f"Credit score of {score_result.overall_score} ({score_result.score_range.value})"
    )

    limit = monthly_revenue * 2 * score_multiplier(score_result.overall_score, settings)

    if financials.cash_reserves > monthly_revenue * 3:
        limit *= 1.2
        reasons.append("Strong cash reserves support higher limit")
    elif financials.cash_reserves < monthly_revenue:
        limit *= 0.8

    if financials.profit_margin > 0.15:
        limit *= 1.1
        reasons.append("Healthy profit margins indicate strong repayment capacity")
    elif financials.profit_margin < 0.05:
        limit *= 0.9

    if years > 5:
        limit *= 1.1
        reasons.append("Established business history reduces risk")
    elif years < 2:
        limit *= 0.85

    if score_result.risk_level in (RiskLevel.LOW, RiskLevel.MEDIUM):
        review_period = 12
    else:
        review_period = 6

    return CreditLimitRecommendation(
        recommended_limit=round(limit),
        minimum_limit=round(limit * 0.7),
        maximum_limit=round(limit * 1.3),
        review_period_months=review_period,
        reasoning=". ".join(reasons),
    )
