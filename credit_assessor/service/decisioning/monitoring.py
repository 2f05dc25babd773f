"""
Loan Monitoring for the Credit Assessor.

An existing loan is re-assessed in two ways:
1. Early-warning rules over the borrower's current financials and banking
   behavior produce a severity
2. The application is re-scored with any updated sections and the score
   delta is classified against fixed thresholds

The stricter of the two resulting action tiers is reported.
"""

from dataclasses import replace
from typing import List, Optional, Tuple

from credit_assessor.service.scoring.models import (
    AlternativeData,
    BankingBehavior,
    CreditApplication,
    CreditProfile,
    FinancialData,
)
from credit_assessor.service.scoring.risk_score import score
from credit_assessor.service.scoring.settings import ScoringSettings, scoring_settings

from .models import MonitoringAction, MonitoringReport, WarningSeverity

CASH_RESERVES_WARNING = "Cash reserves critically low - less than 2 months runway"
CASH_WATCH_WARNING = "Cash reserves below 3 months - monitor closely"
OVERDRAFT_WARNING = "Multiple overdraft incidents detected"
REVENUE_WARNING = "Revenue declining by more than 10%"


def early_warnings(
    financials: FinancialData,
    banking: BankingBehavior,
) -> Tuple[List[str], int]:
    """
    Evaluate the early-warning rules.

    Returns:
        (warnings, severity points)
    """
    warnings = []
    points = 0

    if financials.revenue_growth_rate < -0.10:
        warnings.append(REVENUE_WARNING)
        points += 3

    if financials.profit_margin < 0.05:
        warnings.append("Profit margins compressed below 5%")
        points += 2

    # No expenses means no burn, so runway is unlimited
    if financials.monthly_expenses > 0:
        runway = financials.cash_reserves / financials.monthly_expenses
        if runway < 2:
            warnings.append(CASH_RESERVES_WARNING)
            points += 4
        elif runway < 3:
            warnings.append(CASH_WATCH_WARNING)
            points += 2

    if banking.overdrafts > 3:
        warnings.append(OVERDRAFT_WARNING)
        points += 2

    if banking.cash_flow_volatility > 0.6:
        warnings.append("High cash flow volatility indicates instability")
        points += 2

    if financials.customer_churn_rate > 0.30:
        warnings.append("High customer churn rate above 30%")
        points += 2

    return warnings, points


def warning_severity(points: int) -> WarningSeverity:
    """>=8 critical, >=5 high, >=3 medium, else low."""
    if points >= 8:
        return WarningSeverity.CRITICAL
    if points >= 5:
        return WarningSeverity.HIGH
    if points >= 3:
        return WarningSeverity.MEDIUM
    return WarningSeverity.LOW


def action_for_severity(severity: WarningSeverity, has_warnings: bool) -> MonitoringAction:
    if severity == WarningSeverity.CRITICAL:
        return MonitoringAction.ESCALATE
    if severity == WarningSeverity.HIGH:
        return MonitoringAction.RESTRUCTURE
    if severity == WarningSeverity.MEDIUM:
        return MonitoringAction.REVIEW
    if has_warnings:
        return MonitoringAction.MONITOR
    return MonitoringAction.NONE


def action_for_score_delta(
    score_delta: int,
    settings: ScoringSettings = scoring_settings,
) -> MonitoringAction:
    """
    Classify a display-score change.

    <= -100 escalate, <= -60 restructure, <= -30 review, < -10 monitor.
    """
    if score_delta <= settings.monitor_escalate_delta:
        return MonitoringAction.ESCALATE
    if score_delta <= settings.monitor_restructure_delta:
        return MonitoringAction.RESTRUCTURE
    if score_delta <= settings.monitor_review_delta:
        return MonitoringAction.REVIEW
    if score_delta < settings.monitor_watch_delta:
        return MonitoringAction.MONITOR
    return MonitoringAction.NONE


_ACTION_RECOMMENDATIONS = {
    MonitoringAction.NONE: [
        "Continue standard monitoring procedures",
        "Next review in 90 days",
    ],
    MonitoringAction.MONITOR: [
        "Increase monitoring frequency to monthly",
        "Request updated financials next month",
        "Watch for further deterioration",
    ],
    MonitoringAction.REVIEW: [
        "Schedule meeting with borrower within 2 weeks",
        "Request detailed financial projections",
        "Assess need for additional collateral or guarantees",
        "Consider covenant modifications",
    ],
    MonitoringAction.RESTRUCTURE: [
        "PRIORITY: Immediate borrower meeting required",
        "Engage workout team",
        "Evaluate restructuring options",
        "Consider payment plan modifications",
        "Assess collateral liquidation value",
    ],
    MonitoringAction.ESCALATE: [
        "URGENT: Escalate to special assets team",
        "Consider acceleration of loan",
        "Evaluate legal remedies",
        "Begin collection procedures",
        "Update loss reserves",
    ],
}


def monitoring_recommendations(action: MonitoringAction, warnings: List[str]) -> List[str]:
    """Action-tier recommendations followed by warning-specific ones."""
    recommendations = list(_ACTION_RECOMMENDATIONS[action])

    if CASH_RESERVES_WARNING in warnings or CASH_WATCH_WARNING in warnings:
        recommendations.append("Require cash injection or additional equity")
    if OVERDRAFT_WARNING in warnings:
        recommendations.append("Implement cash management controls")
    if REVENUE_WARNING in warnings:
        recommendations.append("Request business plan update with recovery strategy")

    return recommendations


def monitor_loan(
    original_application: CreditApplication,
    current_financials: FinancialData,
    *,
    current_banking: Optional[BankingBehavior] = None,
    current_alternative: Optional[AlternativeData] = None,
    current_credit: Optional[CreditProfile] = None,
    settings: ScoringSettings = scoring_settings,
) -> MonitoringReport:
    """
    Compare an existing loan's current state with its original assessment.

    Sections not provided keep their original values. Early warnings read
    the current financials and banking behavior; the score delta reflects
    changes to the scored sections (credit, alternative data).

    The scorer does not read financials or banking, so a call with only
    ``current_financials`` always yields a zero score delta and any action
    comes from the early-warning severity alone. Pass ``current_credit`` or
    ``current_alternative`` for the delta tiers to take effect.

    Args:
        original_application: The application the loan was granted on
        current_financials: Latest reported financials
        current_banking: Latest banking behavior
        current_alternative: Latest alternative data
        current_credit: Latest bureau data
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        MonitoringReport with the stricter of the warning and delta actions
    """
    updated = replace(
        original_application,
        financials=current_financials,
        banking=current_banking or original_application.banking,
        alternative=current_alternative or original_application.alternative,
        credit=current_credit or original_application.credit,
    )

    original_score = score(original_application, settings=settings)
    current_score = score(updated, settings=settings)

    score_delta = current_score.overall_score - original_score.overall_score
    risk_delta = round(current_score.default_probability - original_score.default_probability, 4)

    warnings, points = early_warnings(current_financials, updated.banking)
    severity = warning_severity(points)

    action = max(
        action_for_severity(severity, bool(warnings)),
        action_for_score_delta(score_delta, settings),
        key=lambda a: a.rank,
    )

    return MonitoringReport(
        loan_id=original_application.applicant_id,
        original_score=original_score.overall_score,
        current_score=current_score.overall_score,
        score_delta=score_delta,
        original_risk=original_score.default_probability,
        current_risk=current_score.default_probability,
        risk_delta=risk_delta,
        warnings=warnings,
        severity=severity,
        action_required=action,
        recommendations=monitoring_recommendations(action, warnings),
    )
