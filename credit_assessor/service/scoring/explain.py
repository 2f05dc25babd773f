"""
What-if analysis for the Credit Assessor engine.

Each scenario applies one realistic change to a copy of the application
and re-scores it. The reported impact is the actual display-score gain,
so improvement suggestions are always consistent with the scoring model.
"""

from dataclasses import replace
from typing import Callable, List, Tuple

from .models import CreditApplication, WhatIfScenario
from .risk_score import score
from .settings import ScoringSettings, scoring_settings

MAX_SCENARIOS = 5


def _candidate_changes(
    application: CreditApplication,
) -> List[Tuple[str, str, str, Callable[[CreditApplication], CreditApplication]]]:
    """Build (change, current, suggested, transform) tuples that apply."""
    credit = application.credit
    income = application.alternative.income_stability
    spending = application.alternative.spending_patterns
    payments = credit.payment_history
    candidates = []

    if credit.utilization.utilization_percentage > 30:
        candidates.append((
            "Reduce credit utilization to 30%",
            f"{credit.utilization.utilization_percentage:g}%",
            "30%",
            lambda app: replace(app, credit=replace(
                app.credit,
                utilization=replace(app.credit.utilization, utilization_percentage=30),
            )),
        ))

    if payments.late_payments > 0 or payments.missed_payments > 0:
        candidates.append((
            "Bring all accounts current and keep paying on time",
            f"{payments.late_payments} late, {payments.missed_payments} missed",
            "0 late, 0 missed",
            lambda app: replace(app, credit=replace(
                app.credit,
                payment_history=replace(
                    app.credit.payment_history,
                    on_time_payments=(
                        app.credit.payment_history.on_time_payments
                        + app.credit.payment_history.late_payments
                        + app.credit.payment_history.missed_payments
                    ),
                    late_payments=0,
                    missed_payments=0,
                    average_days_late=0,
                ),
            )),
        ))

    new_credit = credit.new_credit
    if new_credit.recent_inquiries > 0 or new_credit.new_accounts > 0:
        candidates.append((
            "Avoid new credit applications for 12 months",
            f"{new_credit.recent_inquiries} inquiries, {new_credit.new_accounts} new accounts",
            "0 inquiries, 0 new accounts",
            lambda app: replace(app, credit=replace(
                app.credit,
                new_credit=replace(
                    app.credit.new_credit,
                    recent_inquiries=0,
                    new_accounts=0,
                    months_since_last_inquiry=max(12, app.credit.new_credit.months_since_last_inquiry),
                ),
            )),
        ))

    if credit.mix.distinct_types < 2:
        if credit.mix.credit_cards == 0:
            mix_change = {"credit_cards": 1}
        else:
            mix_change = {"installment_loans": 1}
        candidates.append((
            "Diversify your credit mix with another account type",
            f"{credit.mix.distinct_types} account types",
            f"{credit.mix.distinct_types + 1} account types",
            lambda app: replace(app, credit=replace(
                app.credit, mix=replace(app.credit.mix, **mix_change),
            )),
        ))

    if spending.savings_rate < 0.1:
        candidates.append((
            "Increase savings rate to 10%",
            f"{spending.savings_rate * 100:.1f}%",
            "10%",
            lambda app: replace(app, alternative=replace(
                app.alternative,
                spending_patterns=replace(app.alternative.spending_patterns, savings_rate=0.1),
            )),
        ))

    if income.job_stability < 0.8:
        candidates.append((
            "Improve income stability",
            f"{income.job_stability:.2f}",
            "0.80",
            lambda app: replace(app, alternative=replace(
                app.alternative,
                income_stability=replace(app.alternative.income_stability, job_stability=0.8),
            )),
        ))

    return candidates


def what_if_scenarios(
    application: CreditApplication,
    settings: ScoringSettings = scoring_settings,
) -> List[WhatIfScenario]:
    """
    Rank the changes that would raise the applicant's score the most.

    Args:
        application: The credit application
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        Up to five scenarios with a positive impact, largest first
    """
    baseline = score(application, settings=settings).overall_score
    scenarios = []

    for change, current_value, suggested_value, transform in _candidate_changes(application):
        improved = score(transform(application), settings=settings).overall_score
        impact = improved - baseline
        if impact > 0:
            scenarios.append(WhatIfScenario(
                change=change,
                current_value=current_value,
                suggested_value=suggested_value,
                score_impact=impact,
            ))

    scenarios.sort(key=lambda s: s.score_impact, reverse=True)
    return scenarios[:MAX_SCENARIOS]
