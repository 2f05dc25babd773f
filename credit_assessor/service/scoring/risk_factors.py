"""
Traditional Credit Factor Scoring for the Credit Assessor engine.

This module converts bureau-style credit data into 0-100 sub-scores:
- Payment History
- Credit Utilization
- Credit History (account age and depth)
- Credit Mix
- New Credit (inquiries and recently opened accounts)

Each factor is documented with:
- The calculation algorithm
- Business rationale for why this factor matters
- Edge cases and how they're handled

All functions are total: empty or zero-valued input degrades to a low
score instead of raising.
"""

from .models import (
    CreditHistory,
    CreditMix,
    CreditUtilization,
    NewCredit,
    PaymentHistory,
)


def clamp_score(value: float) -> float:
    """Clamp a sub-score into the 0-100 range."""
    return max(0.0, min(100.0, value))


def on_time_payment_rate(payment_history: PaymentHistory) -> float:
    """
    Share of payments made on time.

    Returns 0.0 when no payments have been reported.
    """
    total = (
        payment_history.on_time_payments
        + payment_history.late_payments
        + payment_history.missed_payments
    )
    if total <= 0:
        return 0.0
    return payment_history.on_time_payments / total


def score_payment_history(payment_history: PaymentHistory) -> float:
    """
    Score the payment track record.

    Algorithm:
        1. Start from the on-time ratio x 100
        2. Subtract 10 per late payment (at most 50)
        3. Subtract 25 per missed payment (at most 75)
        4. Subtract 2 per average day late (at most 30)
        5. Clamp to 0-100

    Business Rationale:
        Payment history is the strongest predictor of future repayment.
        Missed payments weigh more than late ones because they usually
        end up in collections.

    Edge Cases:
        - No payments reported: on-time ratio is 0, so the score is 0

    Args:
        payment_history: Bureau payment counts

    Returns:
        Score from 0-100
    """
    score = on_time_payment_rate(payment_history) * 100

    if payment_history.late_payments > 0:
        score -= min(payment_history.late_payments * 10, 50)

    if payment_history.missed_payments > 0:
        score -= min(payment_history.missed_payments * 25, 75)

    if payment_history.average_days_late > 0:
        score -= min(payment_history.average_days_late * 2, 30)

    return clamp_score(score)


def score_credit_utilization(utilization: CreditUtilization) -> float:
    """
    Score revolving credit utilization.

    A monotonic step function mirroring common underwriting rules of thumb:
    <=10% -> 100, <=20% -> 90, <=30% -> 80, <=50% -> 60, <=70% -> 40,
    <=90% -> 20, above -> 0.

    Args:
        utilization: Revolving balances and limits

    Returns:
        Score from 0-100
    """
    util_rate = utilization.utilization_percentage

    if util_rate <= 10:
        return 100.0
    elif util_rate <= 20:
        return 90.0
    elif util_rate <= 30:
        return 80.0
    elif util_rate <= 50:
        return 60.0
    elif util_rate <= 70:
        return 40.0
    elif util_rate <= 90:
        return 20.0
    else:
        return 0.0


def score_credit_history(history: CreditHistory) -> float:
    """
    Score the depth and age of the credit file.

    Algorithm (points add up to 100):
        - Average account age: >=7y 40, >=5y 30, >=3y 20, >=1y 10
        - Oldest account age: >=10y 30, >=7y 25, >=5y 20, >=3y 15, >=1y 10
        - Total accounts: >=10 20, >=5 15, >=3 10, >=1 5
        - Active / total accounts x 10

    Edge Cases:
        - No accounts: the active ratio contributes 0

    Args:
        history: Account age and count data

    Returns:
        Score from 0-100
    """
    score = 0.0

    if history.average_account_age >= 7:
        score += 40
    elif history.average_account_age >= 5:
        score += 30
    elif history.average_account_age >= 3:
        score += 20
    elif history.average_account_age >= 1:
        score += 10

    if history.oldest_account_age >= 10:
        score += 30
    elif history.oldest_account_age >= 7:
        score += 25
    elif history.oldest_account_age >= 5:
        score += 20
    elif history.oldest_account_age >= 3:
        score += 15
    elif history.oldest_account_age >= 1:
        score += 10

    if history.total_accounts >= 10:
        score += 20
    elif history.total_accounts >= 5:
        score += 15
    elif history.total_accounts >= 3:
        score += 10
    elif history.total_accounts >= 1:
        score += 5

    if history.total_accounts > 0:
        active_rate = min(1.0, history.active_accounts / history.total_accounts)
        score += active_rate * 10

    return clamp_score(score)


def score_credit_mix(mix: CreditMix) -> float:
    """
    Score the variety of account types held.

    Business Rationale:
        Borrowers who have managed several kinds of credit (revolving,
        installment, mortgage) have demonstrated broader repayment discipline.

    Returns:
        100 / 80 / 60 / 40 / 0 for 4+ / 3 / 2 / 1 / 0 distinct types
    """
    total_types = mix.distinct_types

    if total_types >= 4:
        return 100.0
    elif total_types >= 3:
        return 80.0
    elif total_types >= 2:
        return 60.0
    elif total_types >= 1:
        return 40.0
    return 0.0


def score_new_credit(new_credit: NewCredit) -> float:
    """
    Score recent credit-seeking behavior.

    Algorithm:
        1. Start at 100
        2. Subtract 5 per recent inquiry (at most 30)
        3. Subtract 10 per newly opened account (at most 40)
        4. Add 10 if the last inquiry was 12+ months ago, 5 if 6+ months
        5. Clamp to 0-100

    Args:
        new_credit: Inquiry and new account counts

    Returns:
        Score from 0-100
    """
    score = 100.0

    score -= min(new_credit.recent_inquiries * 5, 30)
    score -= min(new_credit.new_accounts * 10, 40)

    if new_credit.months_since_last_inquiry >= 12:
        score += 10
    elif new_credit.months_since_last_inquiry >= 6:
        score += 5

    return clamp_score(score)
