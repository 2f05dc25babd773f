"""
Instant Decision Engine for the Credit Assessor.

This module orchestrates the complete decision-making process:
1. Run pre-qualification checks (fast fail, no scoring)
2. Score the application and run the fraud rules
3. Decline fraudulent applications and flag them for review
4. Auto-approve strong, low-risk applications within the instant ceiling
5. Auto-decline weak applications with improvement suggestions
6. Send everything else to manual review with a priority

Instant decisions are intended for loans up to the instant ceiling
(100,000 by default). Larger requests are never auto-approved; they fall
through to manual review unless the score alone declines them.
"""

from typing import Dict, Iterable, Optional, Sequence

from credit_assessor.service.scoring.explain import what_if_scenarios
from credit_assessor.service.scoring.models import CreditApplication, ScoreResult
from credit_assessor.service.scoring.risk_score import score
from credit_assessor.service.scoring.settings import ScoringSettings, scoring_settings

from .fraud import detect_fraud
from .models import (
    ApplicationComparison,
    ApplicationRanking,
    Decision,
    DecisionOutcome,
    DecisionStatistics,
    FraudAssessment,
    LoanTerms,
    ReviewPriority,
)
from .pricing import interest_rate_for, monthly_payment


def check_prequalification(
    application: CreditApplication,
    settings: ScoringSettings = scoring_settings,
) -> Optional[str]:
    """
    Run the pre-qualification checks in order.

    Returns:
        The reason of the first failed check, or None if all pass
    """
    business = application.business
    financials = application.financials
    credit = application.credit

    if business.years_in_business < settings.min_years_in_business:
        return f"Business must be operating for at least {settings.min_years_in_business:g} year"

    if credit.bankruptcies > 0:
        return "Recent bankruptcy on record - not eligible for instant approval"

    if financials.annual_revenue < settings.min_annual_revenue:
        return f"Annual revenue below minimum threshold of ${settings.min_annual_revenue:,.0f}"

    if financials.net_income < 0:
        return "Business must demonstrate profitability"

    # annual_revenue is positive here unless min_annual_revenue is 0
    if financials.annual_revenue > 0:
        debt_to_revenue = financials.total_debt / financials.annual_revenue
    else:
        debt_to_revenue = float("inf") if financials.total_debt > 0 else 0.0
    if debt_to_revenue > settings.max_debt_to_revenue:
        return "Debt-to-revenue ratio exceeds maximum threshold"

    if credit.collections > settings.max_collections:
        return "Multiple accounts in collections - requires manual review"

    return None


def review_priority(
    score_result: ScoreResult,
    application: CreditApplication,
    settings: ScoringSettings = scoring_settings,
) -> ReviewPriority:
    """
    Priority for manual underwriting.

    High for a good score or a large amount, medium for a moderate score,
    low otherwise.
    """
    if (
        score_result.overall_score >= settings.review_high_priority_score
        or application.loan_request.amount > settings.review_high_priority_amount
    ):
        return ReviewPriority.HIGH
    if score_result.overall_score >= settings.review_medium_priority_score:
        return ReviewPriority.MEDIUM
    return ReviewPriority.LOW


def _decline_reason(score_result: ScoreResult, settings: ScoringSettings) -> str:
    if score_result.overall_score < settings.auto_decline_threshold:
        return (
            f"Credit score of {score_result.overall_score} is below the minimum "
            f"of {settings.auto_decline_threshold}"
        )
    return (
        f"Estimated default probability of {score_result.default_probability:.0%} "
        f"exceeds the maximum of {settings.decline_min_default_probability:.0%}"
    )


def decide(
    application: CreditApplication,
    settings: ScoringSettings = scoring_settings,
    score_result: Optional[ScoreResult] = None,
    fraud: Optional[FraudAssessment] = None,
) -> Decision:
    """
    Make an instant decision on a credit application.

    This is the main entry point for decisioning. The checks run in a
    fixed order and the first one that applies decides the outcome.

    Decision Logic:
        - Pre-qualification failure: decline, no score
        - Fraudulent: decline, flagged for manual review
        - Score >= 750, default probability < 10%, amount <= instant
          ceiling: approve with terms
        - Score < 500 or default probability > 50%: decline with
          improvement suggestions
        - Anything else: manual review with a priority

    Args:
        application: The credit application
        settings: Scoring settings (uses defaults if not provided)
        score_result: Precomputed score, computed here if not provided
        fraud: Precomputed fraud assessment, computed here if not provided

    Returns:
        Decision with the outcome and its supporting fields
    """
    prequal_failure = check_prequalification(application, settings)
    if prequal_failure is not None:
        return Decision(
            outcome=DecisionOutcome.DECLINE,
            reason=prequal_failure,
            requires_manual_review=False,
        )

    if score_result is None:
        score_result = score(application, settings=settings)
    if fraud is None:
        fraud = detect_fraud(application, settings=settings)

    if fraud.is_fraudulent:
        return Decision(
            outcome=DecisionOutcome.DECLINE,
            reason="Application flagged for fraud review",
            requires_manual_review=True,
            score=score_result.overall_score,
        )

    loan = application.loan_request
    rate = interest_rate_for(score_result.overall_score, score_result.risk_level, settings)

    if (
        score_result.overall_score >= settings.auto_approve_threshold
        and score_result.default_probability < settings.approve_max_default_probability
        and loan.amount <= settings.max_auto_approve_amount
        and rate is not None
    ):
        return Decision(
            outcome=DecisionOutcome.APPROVE,
            reason="Excellent credit profile meets auto-approval criteria",
            requires_manual_review=False,
            score=score_result.overall_score,
            approved_amount=loan.amount,
            interest_rate=rate,
            terms=LoanTerms(
                amount=loan.amount,
                term_months=loan.term_months,
                rate=rate,
                monthly_payment=monthly_payment(loan.amount, rate, loan.term_months),
            ),
        )

    if (
        score_result.overall_score < settings.auto_decline_threshold
        or score_result.default_probability > settings.decline_min_default_probability
    ):
        suggestions = [s.change for s in what_if_scenarios(application, settings)]
        if not suggestions:
            suggestions = list(score_result.recommendations)
        return Decision(
            outcome=DecisionOutcome.DECLINE,
            reason=_decline_reason(score_result, settings),
            requires_manual_review=False,
            score=score_result.overall_score,
            improvement_suggestions=suggestions,
        )

    return Decision(
        outcome=DecisionOutcome.MANUAL_REVIEW,
        reason="Application requires underwriter review",
        requires_manual_review=True,
        score=score_result.overall_score,
        review_priority=review_priority(score_result, application, settings),
    )


def batch_decide(
    applications: Iterable[CreditApplication],
    settings: ScoringSettings = scoring_settings,
) -> Dict[str, Decision]:
    """
    Decide many applications independently.

    Returns:
        Decisions keyed by applicant_id, in input order. A repeated
        applicant_id keeps the last decision.
    """
    return {app.applicant_id: decide(app, settings) for app in applications}


def decision_statistics(decisions: Dict[str, Decision]) -> DecisionStatistics:
    """Counts, approval rate and average approved amount for a batch."""
    values = list(decisions.values())
    total = len(values)

    approved = [d for d in values if d.outcome == DecisionOutcome.APPROVE]
    declined = sum(1 for d in values if d.outcome == DecisionOutcome.DECLINE)
    review = sum(1 for d in values if d.outcome == DecisionOutcome.MANUAL_REVIEW)

    amounts = [d.approved_amount for d in approved if d.approved_amount is not None]

    return DecisionStatistics(
        total_applications=total,
        approved=len(approved),
        declined=declined,
        requires_review=review,
        approval_rate=len(approved) / total if total else 0.0,
        average_approved_amount=sum(amounts) / len(amounts) if amounts else 0.0,
    )


def compare_applications(
    applications: Sequence[CreditApplication],
    settings: ScoringSettings = scoring_settings,
) -> ApplicationComparison:
    """
    Rank applications by credit score, highest first.

    Each ranking carries the instant decision outcome as its recommendation.
    Equal scores keep their input order.
    """
    scored = []
    for app in applications:
        result = score(app, settings=settings)
        decision = decide(app, settings, score_result=result)
        scored.append((app, result, decision))

    scored.sort(key=lambda item: item[1].overall_score, reverse=True)

    rankings = [
        ApplicationRanking(
            applicant_id=app.applicant_id,
            business_name=app.business.business_name,
            score=result.overall_score,
            rank=index,
            recommendation=decision.outcome,
        )
        for index, (app, result, decision) in enumerate(scored, start=1)
    ]

    if not rankings:
        return ApplicationComparison(
            rankings=[],
            best_candidate=None,
            analysis="No applications to compare",
        )

    best = rankings[0]
    return ApplicationComparison(
        rankings=rankings,
        best_candidate=best.applicant_id,
        analysis=(
            f"{best.business_name} ranks highest with a score of {best.score} "
            f"(recommendation: {best.recommendation.value.replace('_', ' ')})"
        ),
    )
