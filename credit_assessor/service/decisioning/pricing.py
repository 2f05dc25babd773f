"""
Loan pricing for the Credit Assessor engine.

The offered rate is a policy table keyed by risk level. Within a level the
rate falls linearly as the display score approaches the ceiling:

    rate = base + spread * (1 - score / score_ceiling)

Defaults:
    low:       6.5% + 3% spread
    medium:    8.5% + 4% spread
    high:     12.0% + 5% spread
    very_high: no offer
"""

from typing import List, Optional

from credit_assessor.service.scoring.models import CreditApplication, RiskLevel, ScoreResult
from credit_assessor.service.scoring.settings import ScoringSettings, scoring_settings

from .models import LoanPricing


def interest_rate_for(
    overall_score: int,
    risk_level: RiskLevel,
    settings: ScoringSettings = scoring_settings,
) -> Optional[float]:
    """
    Look up the annual interest rate offered for a score.

    Args:
        overall_score: Display score (300-850)
        risk_level: Risk bucket of the score
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        Rate in percent rounded to 2 decimals, or None when the risk level
        receives no offer
    """
    tier = settings.interest_rate_tiers.get(risk_level.value)
    if tier is None:
        return None

    base_rate, spread = tier
    position = max(0.0, min(1.0, overall_score / settings.score_ceiling))
    return round(base_rate + spread * (1 - position), 2)


def monthly_payment(principal: float, annual_rate: float, term_months: int) -> float:
    """
    Fully amortizing monthly payment.

    A zero rate divides the principal evenly over the term. A non-positive
    term returns the full principal.
    """
    if term_months <= 0:
        return round(principal, 2)

    monthly_rate = annual_rate / 12 / 100
    if monthly_rate == 0:
        return round(principal / term_months, 2)

    growth = (1 + monthly_rate) ** term_months
    return round(principal * monthly_rate * growth / (growth - 1), 2)


def optimize_loan_pricing(
    application: CreditApplication,
    score_result: ScoreResult,
    base_rate: float,
    competitor_rates: List[float],
    demand_level: str = "medium",
    settings: ScoringSettings = scoring_settings,
) -> LoanPricing:
    """
    Price a loan against market conditions.

    Algorithm:
        - Start from the market base rate
        - Add a risk premium of default probability x 10 (10% at most)
        - Add a score adjustment of up to 3% as the score drops from the ceiling
        - High demand adds 0.5%, low demand subtracts 0.5%
        - Compare with the average competitor rate to label competitiveness

    Expected return is simple interest over the term, discounted by the
    probability of default.

    Args:
        application: The credit application (loan amount and term)
        score_result: Score for the application
        base_rate: Market base rate in percent
        competitor_rates: Competitor rates in percent; empty means the base rate
        demand_level: "low", "medium" or "high"
        settings: Scoring settings (uses defaults if not provided)
    """
    risk_premium = score_result.default_probability * 10
    score_adjustment = (
        (settings.score_ceiling - score_result.overall_score) / settings.score_ceiling * 3
    )

    optimal_rate = base_rate + risk_premium + score_adjustment
    if demand_level == "high":
        optimal_rate += 0.5
    elif demand_level == "low":
        optimal_rate -= 0.5

    if competitor_rates:
        market_average = sum(competitor_rates) / len(competitor_rates)
    else:
        market_average = base_rate

    if optimal_rate < market_average - 0.5:
        competitiveness = "Highly Competitive"
    elif optimal_rate < market_average:
        competitiveness = "Competitive"
    elif optimal_rate < market_average + 0.5:
        competitiveness = "Market Rate"
    else:
        competitiveness = "Premium Pricing"

    loan = application.loan_request
    expected_return = (
        loan.amount * optimal_rate / 100 * loan.term_months / 12
        * (1 - score_result.default_probability)
    )

    reasoning = (
        f"Rate based on {base_rate}% base + {risk_premium:.2f}% risk premium "
        f"+ {score_adjustment:.2f}% credit adjustment. {competitiveness} compared "
        f"to market average of {market_average:.2f}%."
    )

    return LoanPricing(
        optimal_rate=round(optimal_rate, 2),
        rate_min=round(optimal_rate - 1, 2),
        rate_max=round(optimal_rate + 1, 2),
        expected_return=round(expected_return, 2),
        competitiveness=competitiveness,
        reasoning=reasoning,
    )
