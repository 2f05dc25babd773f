"""
Portfolio Analysis for the Credit Assessor.

A portfolio report is built fresh from a list of applications: every
application is scored and decided on its own, then the results are
aggregated into exposure, expected loss and concentration figures.
"""

from typing import Dict, List, Optional, Sequence

from credit_assessor.service.scoring.models import CreditApplication, RiskLevel
from credit_assessor.service.scoring.risk_score import score
from credit_assessor.service.scoring.settings import ScoringSettings, scoring_settings

from .decision import decide
from .models import (
    ApplicationScore,
    DecisionOutcome,
    PortfolioMetrics,
    PortfolioReport,
    PortfolioRisk,
    StressTestResult,
)

NO_EXPOSURE_RATING = "No Exposure"

DOWNTURN_MULTIPLIER = 1.5
RATE_SHOCK_MULTIPLIER = 1.3


def score_application(
    application: CreditApplication,
    settings: ScoringSettings = scoring_settings,
) -> ApplicationScore:
    """Score and decide one application for portfolio aggregation."""
    score_result = score(application, settings=settings)
    decision = decide(application, settings, score_result=score_result)
    return ApplicationScore(
        applicant_id=application.applicant_id,
        business_name=application.business.business_name,
        industry=application.business.industry,
        score=score_result.overall_score,
        risk_level=score_result.risk_level,
        default_probability=score_result.default_probability,
        loan_amount=application.loan_request.amount,
        outcome=decision.outcome,
    )


def determine_portfolio_risk_rating(default_probability: float, concentration: float) -> str:
    """
    Rate a portfolio from its default probability and concentration.

    Both conditions of a tier must hold: PD < 10% and concentration < 30%
    is Low, < 20% and < 40% Moderate, < 30% and < 50% Elevated, else High.
    """
    if default_probability < 0.10 and concentration < 0.30:
        return "Low Risk"
    if default_probability < 0.20 and concentration < 0.40:
        return "Moderate Risk"
    if default_probability < 0.30 and concentration < 0.50:
        return "Elevated Risk"
    return "High Risk"


def portfolio_recommendations(
    default_probability: float,
    concentration: float,
    industry_exposure: Dict[str, float],
) -> List[str]:
    recommendations = []

    if default_probability > 0.20:
        recommendations.append("Tighten underwriting standards for new loans")
        recommendations.append("Consider increasing interest rates to compensate for risk")
        recommendations.append("Implement enhanced monitoring for high-risk loans")

    if concentration > 0.40 and industry_exposure:
        top_industry = max(industry_exposure.items(), key=lambda item: item[1])[0]
        recommendations.append("Diversify portfolio across more industries")
        recommendations.append(f"Reduce exposure to {top_industry} sector")
        recommendations.append("Set industry concentration limits")

    if default_probability > 0.15 and concentration > 0.35:
        recommendations.append("Implement enhanced monitoring for high-risk segments")
        recommendations.append("Consider portfolio hedging strategies")

    if default_probability < 0.10:
        recommendations.append("Portfolio performing well - maintain current standards")
        recommendations.append("Consider modest expansion in low-risk segments")

    return recommendations


def calculate_portfolio_risk(
    scores: Sequence[ApplicationScore],
    settings: ScoringSettings = scoring_settings,
) -> PortfolioRisk:
    """
    Exposure-level risk figures for a set of scored applications.

    A portfolio without exposure (no applications or only zero amounts)
    reports zeros, an empty industry breakdown and no recommendations.
    """
    total_exposure = sum(s.loan_amount for s in scores)

    industry_exposure: Dict[str, float] = {}
    for s in scores:
        industry_exposure[s.industry] = industry_exposure.get(s.industry, 0.0) + s.loan_amount

    if total_exposure <= 0:
        return PortfolioRisk(
            total_exposure=0.0,
            portfolio_default_probability=0.0,
            expected_loss=0.0,
            expected_loss_rate=0.0,
            concentration_risk=0.0,
            largest_exposure_share=0.0,
            industry_exposure=industry_exposure,
            risk_rating=NO_EXPOSURE_RATING,
            recommendations=[],
        )

    weighted_pd = sum(s.default_probability * s.loan_amount for s in scores) / total_exposure
    expected_loss = sum(
        s.loan_amount * s.default_probability * settings.loss_given_default for s in scores
    )
    concentration = max(industry_exposure.values()) / total_exposure
    largest_share = max(s.loan_amount for s in scores) / total_exposure

    return PortfolioRisk(
        total_exposure=total_exposure,
        portfolio_default_probability=round(weighted_pd, 4),
        expected_loss=round(expected_loss, 2),
        expected_loss_rate=round(expected_loss / total_exposure, 4),
        concentration_risk=round(concentration, 4),
        largest_exposure_share=round(largest_share, 4),
        industry_exposure=industry_exposure,
        risk_rating=determine_portfolio_risk_rating(weighted_pd, concentration),
        recommendations=portfolio_recommendations(weighted_pd, concentration, industry_exposure),
    )


def analyze_portfolio(
    applications: Sequence[CreditApplication],
    top_n: Optional[int] = None,
    settings: ScoringSettings = scoring_settings,
) -> PortfolioReport:
    """
    Analyze a portfolio of credit applications.

    Args:
        applications: Applications to aggregate; may be empty
        top_n: Size of the top risks list (defaults to portfolio_top_risks)
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        PortfolioReport whose risk distribution always sums to
        total_applications
    """
    if top_n is None:
        top_n = settings.portfolio_top_risks

    scores = [score_application(app, settings) for app in applications]
    count = len(scores)

    distribution = {level.value: 0 for level in RiskLevel}
    for s in scores:
        distribution[s.risk_level.value] += 1

    if count:
        metrics = PortfolioMetrics(
            average_score=round(sum(s.score for s in scores) / count, 2),
            average_default_probability=round(
                sum(s.default_probability for s in scores) / count, 4
            ),
            approval_rate=round(
                sum(1 for s in scores if s.outcome == DecisionOutcome.APPROVE) / count, 4
            ),
        )
    else:
        metrics = PortfolioMetrics(
            average_score=0.0,
            average_default_probability=0.0,
            approval_rate=0.0,
        )

    portfolio_risk = calculate_portfolio_risk(scores, settings)
    top_risks = sorted(scores, key=lambda s: (-s.default_probability, s.score))[:max(top_n, 0)]

    return PortfolioReport(
        total_applications=count,
        portfolio_metrics=metrics,
        risk_distribution=distribution,
        portfolio_risk=portfolio_risk,
        applications=scores,
        top_risks=top_risks,
        recommendations=list(portfolio_risk.recommendations),
    )


def stress_test(
    applications: Sequence[CreditApplication],
    economic_downturn: bool = False,
    interest_rate_shock: bool = False,
    industry_collapse: Optional[str] = None,
    settings: ScoringSettings = scoring_settings,
) -> StressTestResult:
    """
    Stress the portfolio default rate under adverse scenarios.

    Scenarios:
        - Economic downturn: default rate x1.5, affects every loan
        - Interest rate shock: default rate x1.3, affects every loan
        - Industry collapse: adds the collapsed industry's share of loans
          times the baseline rate

    The stressed rate is capped at 1.0. Additional losses are the stressed
    minus baseline expected loss on total exposure.
    """
    if not applications:
        return StressTestResult(
            baseline_default_rate=0.0,
            stressed_default_rate=0.0,
            additional_losses=0.0,
            affected_loans=0,
        )

    scores = [score(app, settings=settings) for app in applications]
    count = len(applications)
    baseline = sum(s.default_probability for s in scores) / count

    stressed = baseline
    affected = 0

    if economic_downturn:
        stressed *= DOWNTURN_MULTIPLIER
        affected = count

    if interest_rate_shock:
        stressed *= RATE_SHOCK_MULTIPLIER
        affected = count

    if industry_collapse:
        industry_loans = sum(
            1 for app in applications if app.business.industry == industry_collapse
        )
        stressed += industry_loans / count * baseline
        affected = max(affected, industry_loans)

    stressed = min(1.0, stressed)
    total_exposure = sum(app.loan_request.amount for app in applications)
    additional_losses = total_exposure * (stressed - baseline) * settings.loss_given_default

    return StressTestResult(
        baseline_default_rate=round(baseline, 4),
        stressed_default_rate=round(stressed, 4),
        additional_losses=round(additional_losses, 2),
        affected_loans=affected,
    )
