"""
Composite Score Calculation for the Credit Assessor engine.

This module combines the per-category sub-scores into a weighted composite,
rescales it to the 300-850 display range, and derives the risk level,
score range label, confidence and default probability that drive
decisioning.
"""

import math
from typing import Optional

from .alternative_data import (
    score_alternative_data,
    score_behavioral_data,
    score_economic_factors,
)
from .models import (
    AlternativeData,
    BehavioralData,
    CreditApplication,
    RiskLevel,
    ScoreRange,
    ScoreResult,
    ScoringFactors,
)
from .recommendations import generate_next_steps, generate_recommendations
from .risk_factors import (
    on_time_payment_rate,
    score_credit_history,
    score_credit_mix,
    score_credit_utilization,
    score_new_credit,
    score_payment_history,
)
from .settings import ScoringSettings, scoring_settings


def calculate_factors(
    application: CreditApplication,
    alternative: AlternativeData,
    behavioral: BehavioralData,
    settings: ScoringSettings = scoring_settings,
) -> ScoringFactors:
    """
    Compute every sub-score for an application.

    Each sub-score is clamped to 0-100 independently before weighting.
    """
    credit = application.credit
    return ScoringFactors(
        payment_history=round(score_payment_history(credit.payment_history), 2),
        credit_utilization=round(score_credit_utilization(credit.utilization), 2),
        credit_history=round(score_credit_history(credit.history), 2),
        credit_mix=round(score_credit_mix(credit.mix), 2),
        new_credit=round(score_new_credit(credit.new_credit), 2),
        alternative_data=round(score_alternative_data(alternative, settings), 2),
        behavioral_data=round(score_behavioral_data(behavioral), 2),
        economic_factors=round(score_economic_factors(application.economic), 2),
    )


def calculate_composite_score(
    factors: ScoringFactors,
    settings: ScoringSettings = scoring_settings,
) -> float:
    """
    Weighted blend of the sub-scores on the 0-100 scale.

    The configured weights (0.35/0.30/0.15/0.10/0.10 for the traditional
    factors, 0.20/0.10/0.05 for alternative, behavioral and economic) are
    renormalized by their sum, so the result never leaves 0-100.
    """
    values = factors.to_dict()
    composite = sum(
        values[name] * weight
        for name, weight in settings.normalized_weights.items()
    )
    return max(0.0, min(100.0, composite))


def composite_to_display_score(
    composite: float,
    settings: ScoringSettings = scoring_settings,
) -> int:
    """Rescale a 0-100 composite linearly onto the 300-850 display range."""
    return int(round(settings.score_floor + composite / 100 * settings.score_span))


def determine_risk_level(
    overall_score: float,
    settings: ScoringSettings = scoring_settings,
) -> RiskLevel:
    """
    Classify a display score into a risk bucket.

    >=750 low, >=650 medium, >=550 high, else very_high.
    """
    if overall_score >= settings.risk_low_threshold:
        return RiskLevel.LOW
    elif overall_score >= settings.risk_medium_threshold:
        return RiskLevel.MEDIUM
    elif overall_score >= settings.risk_high_threshold:
        return RiskLevel.HIGH
    return RiskLevel.VERY_HIGH


def determine_score_range(
    overall_score: float,
    settings: ScoringSettings = scoring_settings,
) -> ScoreRange:
    """
    Label a display score.

    >=800 Exceptional, >=740 Very Good, >=670 Good, >=580 Fair, else Poor.
    """
    if overall_score >= settings.range_exceptional_threshold:
        return ScoreRange.EXCEPTIONAL
    elif overall_score >= settings.range_very_good_threshold:
        return ScoreRange.VERY_GOOD
    elif overall_score >= settings.range_good_threshold:
        return ScoreRange.GOOD
    elif overall_score >= settings.range_fair_threshold:
        return ScoreRange.FAIR
    return ScoreRange.POOR


def estimate_default_probability(
    overall_score: float,
    settings: ScoringSettings = scoring_settings,
) -> float:
    """
    Map a display score to a probability of default.

    A logistic curve centred on pd_midpoint_score: every pd_scale points
    above the midpoint divides the odds of default by e. The result is
    clamped to [pd_floor, pd_ceiling].
    """
    exponent = (overall_score - settings.pd_midpoint_score) / settings.pd_scale
    # Guard the exponential against overflow for extreme custom settings
    exponent = max(-50.0, min(50.0, exponent))
    probability = 1 / (1 + math.exp(exponent))
    return round(max(settings.pd_floor, min(settings.pd_ceiling, probability)), 4)


def calculate_data_completeness(
    application: CreditApplication,
    alternative: AlternativeData,
    behavioral: BehavioralData,
) -> float:
    """
    Fraction of the expected data points that are present and non-zero.

    Nine data points are expected: five traditional (payments, credit
    limit, accounts, account types, inquiry recency) and four alternative
    (income, expenses, digital activity, login behavior).
    """
    credit = application.credit
    present = [
        credit.payment_history.on_time_payments > 0,
        credit.utilization.total_credit_limit > 0,
        credit.history.total_accounts > 0,
        credit.mix.credit_cards > 0 or credit.mix.installment_loans > 0,
        credit.new_credit.months_since_last_inquiry > 0,
        alternative.income_stability.current_income > 0,
        alternative.spending_patterns.monthly_expenses > 0,
        alternative.digital_footprint.social_media_activity > 0,
        behavioral.account_login_frequency > 0,
    ]
    return sum(present) / len(present)


def calculate_pattern_consistency(
    application: CreditApplication,
    alternative: AlternativeData,
    behavioral: BehavioralData,
) -> float:
    """
    How consistent the applicant's patterns are, from 0.0 to 1.0.

    Payment rate (>=95%: 0.3, >=90%: 0.2), job stability (>=0.8: 0.3,
    >=0.6: 0.2), expense variability (<=0.2: 0.2, <=0.4: 0.1) and payment
    method consistency (>=0.8: 0.2, >=0.6: 0.1).
    """
    consistency = 0.0

    payment_rate = on_time_payment_rate(application.credit.payment_history)
    if payment_rate >= 0.95:
        consistency += 0.3
    elif payment_rate >= 0.9:
        consistency += 0.2

    job_stability = alternative.income_stability.job_stability
    if job_stability >= 0.8:
        consistency += 0.3
    elif job_stability >= 0.6:
        consistency += 0.2

    variability = alternative.spending_patterns.expense_variability
    if variability <= 0.2:
        consistency += 0.2
    elif variability <= 0.4:
        consistency += 0.1

    method_consistency = behavioral.payment_method_consistency
    if method_consistency >= 0.8:
        consistency += 0.2
    elif method_consistency >= 0.6:
        consistency += 0.1

    return min(1.0, consistency)


def calculate_confidence(
    application: CreditApplication,
    alternative: AlternativeData,
    behavioral: BehavioralData,
    settings: ScoringSettings = scoring_settings,
) -> float:
    """
    Confidence in the score, from 0.0 to confidence_cap (0.95).

    0.5 base + 0.3 x data completeness + 0.2 x pattern consistency.
    """
    confidence = (
        settings.confidence_base
        + calculate_data_completeness(application, alternative, behavioral)
        * settings.confidence_completeness_weight
        + calculate_pattern_consistency(application, alternative, behavioral)
        * settings.confidence_consistency_weight
    )
    return round(max(0.0, min(settings.confidence_cap, confidence)), 4)


def score(
    application: CreditApplication,
    alternative_data: Optional[AlternativeData] = None,
    behavioral_data: Optional[BehavioralData] = None,
    settings: ScoringSettings = scoring_settings,
) -> ScoreResult:
    """
    Score a credit application.

    This is the main entry point of the scoring engine. It:
    1. Computes the eight category sub-scores
    2. Blends them with the renormalized weights
    3. Rescales the composite to the 300-850 display range
    4. Derives risk level, score range, confidence and default probability
    5. Generates recommendations and next steps

    The function is pure: identical input always yields an identical
    result apart from last_updated.

    Args:
        application: The credit application
        alternative_data: Overrides the application's alternative data section
        behavioral_data: Overrides the application's behavioral data section
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        ScoreResult with the display score and its breakdown
    """
    alternative = alternative_data if alternative_data is not None else application.alternative
    behavioral = behavioral_data if behavioral_data is not None else application.behavioral

    factors = calculate_factors(application, alternative, behavioral, settings)
    composite = calculate_composite_score(factors, settings)
    overall_score = composite_to_display_score(composite, settings)
    risk_level = determine_risk_level(overall_score, settings)

    return ScoreResult(
        overall_score=overall_score,
        composite_score=round(composite, 2),
        score_range=determine_score_range(overall_score, settings),
        risk_level=risk_level,
        confidence=calculate_confidence(application, alternative, behavioral, settings),
        default_probability=estimate_default_probability(overall_score, settings),
        factors=factors,
        recommendations=generate_recommendations(
            application, alternative, overall_score, settings
        ),
        next_steps=generate_next_steps(overall_score, risk_level, settings),
        model_version=settings.model_version,
    )
