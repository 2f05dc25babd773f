"""
Alternative, Behavioral and Economic Factor Scoring.

These signals augment the traditional bureau factors for applicants whose
credit file alone does not tell the whole story (thin files, new
businesses, gig income). Each function returns a 0-100 sub-score.
"""

from .models import (
    AlternativeData,
    BehavioralData,
    DigitalFootprint,
    EconomicIndicators,
    IncomeStability,
    IndustryRisk,
    SpendingPatterns,
)
from .risk_factors import clamp_score
from .settings import ScoringSettings, scoring_settings


def score_income_stability(income: IncomeStability) -> float:
    """
    Score how dependable the applicant's income is.

    Algorithm:
        - Employment length: >=5y 40, >=3y 30, >=1y 20
        - Job stability fraction x 30
        - Income growth between first and last reported year:
          >10% adds 20, any growth adds 10

    Edge Cases:
        - Fewer than two income data points or a non-positive first year:
          no growth bonus
    """
    score = 0.0

    if income.employment_length >= 5:
        score += 40
    elif income.employment_length >= 3:
        score += 30
    elif income.employment_length >= 1:
        score += 20

    score += income.job_stability * 30

    history = income.income_history
    if len(history) >= 2 and history[0] > 0:
        growth_rate = (history[-1] - history[0]) / history[0]
        if growth_rate > 0.1:
            score += 20
        elif growth_rate > 0:
            score += 10

    return clamp_score(score)


def score_spending_patterns(spending: SpendingPatterns) -> float:
    """
    Score spending discipline.

    Algorithm:
        - Savings rate: >=20% 40, >=10% 30, >=5% 20, >=0% 10
        - Expense variability: 30 - variability x 10 (floored at 0)
        - Discretionary control: 30 - monthly discretionary x 0.1 (floored at 0)
    """
    score = 0.0

    savings_rate = spending.savings_rate
    if savings_rate >= 0.2:
        score += 40
    elif savings_rate >= 0.1:
        score += 30
    elif savings_rate >= 0.05:
        score += 20
    elif savings_rate >= 0:
        score += 10

    score += max(0.0, 30 - spending.expense_variability * 10)
    score += max(0.0, 30 - spending.discretionary_spending * 0.1)

    return clamp_score(score)


def score_digital_footprint(footprint: DigitalFootprint) -> float:
    """
    Score digital activity signals.

    Social media activity has a sweet spot: 0.3-0.7 earns 25 points,
    0.1-0.9 earns 15. Shopping, payment and app usage each contribute up
    to 25 points linearly.
    """
    score = 0.0

    activity = footprint.social_media_activity
    if 0.3 <= activity <= 0.7:
        score += 25
    elif 0.1 <= activity <= 0.9:
        score += 15

    score += min(footprint.online_shopping_behavior * 25, 25)
    score += min(footprint.digital_payment_usage * 25, 25)
    score += min(footprint.app_usage_patterns * 25, 25)

    return clamp_score(score)


def score_industry_risk(industry: IndustryRisk) -> float:
    """
    Score the operating environment of the applicant's industry.

    Base 50, plus stability x 30, plus (1 - volatility) x 20, plus
    regulatory environment x 20, clamped to 0-100.
    """
    score = 50.0
    score += industry.industry_stability * 30
    score += (1 - industry.market_volatility) * 20
    score += industry.regulatory_environment * 20
    return clamp_score(score)


def score_alternative_data(
    alternative: AlternativeData,
    settings: ScoringSettings = scoring_settings,
) -> float:
    """
    Blend the four alternative data signals into one 0-100 sub-score.

    Default blend: income stability 40%, spending patterns 30%, digital
    footprint 20%, industry risk 10%.

    Args:
        alternative: Alternative data section of the application
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        Score from 0-100
    """
    score = (
        score_income_stability(alternative.income_stability) * settings.alt_weight_income_stability
        + score_spending_patterns(alternative.spending_patterns) * settings.alt_weight_spending_patterns
        + score_digital_footprint(alternative.digital_footprint) * settings.alt_weight_digital_footprint
        + score_industry_risk(alternative.industry_risk) * settings.alt_weight_industry_risk
    )
    return clamp_score(score)


def score_behavioral_data(behavioral: BehavioralData) -> float:
    """
    Score financial behavior signals.

    Login frequency, payment-method consistency and goal setting each
    contribute up to 25 points. Risk tolerance follows a sweet-spot curve:
    0.3-0.7 earns 25, 0.1-0.9 earns 15, extremes earn nothing.
    """
    score = 0.0

    score += min(behavioral.account_login_frequency * 25, 25)
    score += min(behavioral.payment_method_consistency * 25, 25)
    score += min(behavioral.financial_goal_setting * 25, 25)

    tolerance = behavioral.risk_tolerance
    if 0.3 <= tolerance <= 0.7:
        score += 25
    elif 0.1 <= tolerance <= 0.9:
        score += 15

    return clamp_score(score)


def score_economic_factors(economic: EconomicIndicators) -> float:
    """
    Score the macro environment.

    Algorithm:
        Base 50, then:
        - Unemployment: <=3% +20, <=5% +10, <=7% +0, above -10
        - Inflation: 1-3% +15, 0-5% +10, otherwise -5
        - GDP growth: >=2% +15, >=0% +10, negative -10
    """
    score = 50.0

    if economic.unemployment_rate <= 3:
        score += 20
    elif economic.unemployment_rate <= 5:
        score += 10
    elif economic.unemployment_rate > 7:
        score -= 10

    if 1 <= economic.inflation_rate <= 3:
        score += 15
    elif 0 <= economic.inflation_rate <= 5:
        score += 10
    else:
        score -= 5

    if economic.gdp_growth >= 2:
        score += 15
    elif economic.gdp_growth >= 0:
        score += 10
    else:
        score -= 10

    return clamp_score(score)
