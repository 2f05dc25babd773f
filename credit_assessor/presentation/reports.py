"""
Markdown report rendering.

These functions turn engine results into chat-friendly Markdown. They are
presentation only: nothing in scoring or decisioning depends on them, and
the structured results remain the contract.
"""

from typing import List, Optional, Sequence

from credit_assessor.application.interfaces import ReportRenderer
from credit_assessor.service.decisioning.models import (
    Decision,
    DecisionOutcome,
    FraudAssessment,
    MonitoringAction,
    MonitoringReport,
    PortfolioReport,
)
from credit_assessor.service.scoring.models import (
    CreditApplication,
    ScoreResult,
    WhatIfScenario,
)
from credit_assessor.service.scoring.settings import ScoringSettings, scoring_settings

FACTOR_LABELS = {
    "payment_history": "Payment History",
    "credit_utilization": "Credit Utilization",
    "credit_history": "Credit History",
    "credit_mix": "Credit Mix",
    "new_credit": "New Credit",
    "alternative_data": "Alternative Data",
    "behavioral_data": "Behavioral Data",
    "economic_factors": "Economic Factors",
}

_ACTION_EMOJI = {
    MonitoringAction.ESCALATE: "🚨",
    MonitoringAction.RESTRUCTURE: "⚠️",
    MonitoringAction.REVIEW: "📋",
    MonitoringAction.MONITOR: "👀",
    MonitoringAction.NONE: "✅",
}


def _bullets(items: Sequence[str]) -> str:
    return "\n".join(f"• {item}" for item in items)


def _percent(value: float, digits: int = 2) -> str:
    return f"{value * 100:.{digits}f}%"


def _factor_lines(score_result: ScoreResult) -> List[str]:
    return [
        f"{FACTOR_LABELS.get(name, name)}: {value:.0f}/100"
        for name, value in score_result.factors.to_dict().items()
    ]


def format_score_report(
    score_result: ScoreResult,
    application: Optional[CreditApplication] = None,
    scenarios: Sequence[WhatIfScenario] = (),
) -> str:
    """Render a score result, optionally with applicant details and what-ifs."""
    sections = ["**📊 AI Credit Score Report**"]

    if application is not None:
        business = application.business
        sections.append(
            f"**Applicant:** {business.business_name or application.applicant_id}\n"
            f"**Industry:** {business.industry}\n"
            f"**Years in Business:** {business.years_in_business:g}"
        )

    sections.append(
        f"**Credit Score:** {score_result.overall_score}/850 ({score_result.score_range.value})\n"
        f"**Risk Level:** {score_result.risk_level.value.replace('_', ' ').upper()}\n"
        f"**Default Probability:** {_percent(score_result.default_probability)}\n"
        f"**Confidence:** {_percent(score_result.confidence, 0)}"
    )
    sections.append("**🔍 Score Breakdown:**\n" + _bullets(_factor_lines(score_result)))

    if scenarios:
        sections.append(
            "**📈 Improvement Opportunities:**\n"
            + _bullets([f"{s.change}: +{s.score_impact} points" for s in scenarios[:3]])
        )

    sections.append("**💡 Recommendations:**\n" + _bullets(score_result.recommendations))
    sections.append("**🎯 Next Steps:**\n" + _bullets(score_result.next_steps))
    return "\n\n".join(sections)


def format_score_explanation(
    score_result: ScoreResult,
    scenarios: Sequence[WhatIfScenario],
    settings: ScoringSettings = scoring_settings,
) -> str:
    """Explain how each factor contributed and what would move the score."""
    weights = settings.normalized_weights
    factors = score_result.factors.to_dict()

    ranked = sorted(factors.items(), key=lambda item: item[1], reverse=True)
    contributions = [
        f"{FACTOR_LABELS.get(name, name)}: {value:.0f}/100 "
        f"(weight {weights[name] * 100:.1f}%, contributes {value * weights[name]:.1f} points)"
        for name, value in ranked
    ]

    strengths = [FACTOR_LABELS.get(name, name) for name, value in ranked if value >= 80]
    concerns = [FACTOR_LABELS.get(name, name) for name, value in ranked if value < 50]

    sections = [
        "**🧠 Score Explanation**",
        f"**Credit Score:** {score_result.overall_score}/850 "
        f"(composite {score_result.composite_score:.1f}/100)",
        "**⚖️ Factor Contributions:**\n" + _bullets(contributions),
    ]
    if strengths:
        sections.append("**💪 Key Strengths:**\n" + _bullets(strengths))
    if concerns:
        sections.append("**⚠️ Key Concerns:**\n" + _bullets(concerns))

    if scenarios:
        sections.append(
            "**🔮 What-If Scenarios:**\n"
            + _bullets([
                f"{s.change} ({s.current_value} → {s.suggested_value}): +{s.score_impact} points"
                for s in scenarios
            ])
        )
    else:
        sections.append("**🔮 What-If Scenarios:**\nNo single change would raise this score.")

    return "\n\n".join(sections)


def format_decision_report(decision: Decision) -> str:
    """Render an instant decision."""
    score_text = str(decision.score) if decision.score is not None else "N/A"
    sections = [
        "**⚡ Instant Decision Result**",
        f"**Decision:** {decision.outcome.value.replace('_', ' ').upper()}\n"
        f"**Credit Score:** {score_text}",
    ]

    if decision.outcome == DecisionOutcome.APPROVE and decision.terms is not None:
        terms = decision.terms
        sections.append(
            "✅ **APPROVED**\n\n**Loan Terms:**\n"
            + _bullets([
                f"Approved Amount: ${decision.approved_amount:,.2f}",
                f"Interest Rate: {decision.interest_rate:.2f}%",
                f"Term: {terms.term_months} months",
                f"Monthly Payment: ${terms.monthly_payment:,.2f}",
            ])
        )
        sections.append(f"**Reason:** {decision.reason}")
    elif decision.outcome == DecisionOutcome.DECLINE:
        sections.append(f"❌ **DECLINED**\n\n**Reason:** {decision.reason}")
        if decision.requires_manual_review:
            sections.append("🔎 Flagged for manual review.")
        if decision.improvement_suggestions:
            sections.append(
                "**Improvement Suggestions:**\n" + _bullets(decision.improvement_suggestions)
            )
    else:
        priority = decision.review_priority.value.upper() if decision.review_priority else "N/A"
        sections.append(
            "📋 **REQUIRES MANUAL REVIEW**\n\n"
            f"**Reason:** {decision.reason}\n"
            f"**Priority:** {priority}"
        )

    return "\n\n".join(sections)


def format_fraud_report(
    fraud: FraudAssessment,
    settings: ScoringSettings = scoring_settings,
) -> str:
    """Render a fraud assessment with the actions its tier calls for."""
    elevated = fraud.risk_score > settings.fraud_investigate_threshold
    if fraud.is_fraudulent:
        emoji, assessment = "🚨", "HIGH FRAUD RISK"
        actions = (
            "**⚠️ IMMEDIATE ACTIONS REQUIRED:**\n"
            + _bullets([
                "Escalate to fraud investigation team",
                "Verify applicant identity",
                "Request additional documentation",
                "Conduct enhanced due diligence",
            ])
        )
    elif elevated:
        emoji, assessment = "⚠️", "MODERATE RISK"
        actions = (
            "**📋 RECOMMENDED ACTIONS:**\n"
            + _bullets([
                "Perform additional verification",
                "Request supporting documentation",
                "Conduct reference checks",
            ])
        )
    else:
        emoji, assessment = "✅", "LOW RISK"
        actions = (
            "**✅ PROCEED WITH STANDARD PROCESS**\n"
            + _bullets([
                "Continue normal underwriting",
                "No additional fraud checks required",
            ])
        )

    if fraud.flags:
        flags = "**🚩 Red Flags Detected:**\n" + _bullets(fraud.flags)
    else:
        flags = "**✅ No significant fraud indicators detected**"

    return "\n\n".join([
        f"**{emoji} Fraud Detection Analysis**",
        f"**Risk Score:** {fraud.risk_score}/100\n"
        f"**Assessment:** {assessment}\n"
        f"**Recommendation:** {fraud.recommendation.value.upper()}",
        flags,
        actions,
    ])


def format_portfolio_report(report: PortfolioReport) -> str:
    """Render a portfolio analysis."""
    metrics = report.portfolio_metrics
    risk = report.portfolio_risk
    total = report.total_applications

    distribution = []
    for level, count in report.risk_distribution.items():
        share = count / total * 100 if total else 0.0
        distribution.append(f"{level.replace('_', ' ').upper()}: {count} ({share:.1f}%)")

    sections = [
        "**📊 Portfolio Risk Analysis**",
        "**Portfolio Overview:**\n"
        + _bullets([
            f"Total Applications: {total}",
            f"Average Credit Score: {round(metrics.average_score)}",
            f"Average Default Probability: {_percent(metrics.average_default_probability)}",
            f"Approval Rate: {_percent(metrics.approval_rate, 1)}",
        ]),
        "**Risk Distribution:**\n" + _bullets(distribution),
        f"**Portfolio Risk Rating:** {risk.risk_rating}\n"
        + _bullets([
            f"Total Exposure: ${risk.total_exposure:,.0f}",
            f"Expected Loss: ${risk.expected_loss:,.0f}",
            f"Expected Loss Rate: {_percent(risk.expected_loss_rate)}",
            f"Concentration Risk: {_percent(risk.concentration_risk, 1)}",
            f"Largest Single Exposure: {_percent(risk.largest_exposure_share, 1)}",
        ]),
    ]

    if report.top_risks:
        sections.append(
            "**⚠️ Top Risks:**\n"
            + "\n".join(
                f"{i}. {r.business_name or r.applicant_id} - Score: {r.score}, "
                f"Default Risk: {_percent(r.default_probability)}"
                for i, r in enumerate(report.top_risks[:5], start=1)
            )
        )

    if report.recommendations:
        sections.append("**💡 Recommendations:**\n" + _bullets(report.recommendations))

    return "\n\n".join(sections)


def format_monitoring_report(report: MonitoringReport) -> str:
    """Render a loan monitoring report."""
    emoji = _ACTION_EMOJI[report.action_required]
    score_sign = "+" if report.score_delta > 0 else ""
    risk_sign = "+" if report.risk_delta > 0 else ""

    sections = [
        f"**{emoji} Loan Monitoring Report**",
        f"**Loan ID:** {report.loan_id}\n"
        f"**Monitoring Date:** {report.monitoring_date.date().isoformat()}",
        "**Score Changes:**\n"
        + _bullets([
            f"Original Score: {report.original_score}",
            f"Current Score: {report.current_score}",
            f"Change: {score_sign}{report.score_delta} points",
        ]),
        "**Risk Changes:**\n"
        + _bullets([
            f"Original Risk: {_percent(report.original_risk)}",
            f"Current Risk: {_percent(report.current_risk)}",
            f"Change: {risk_sign}{_percent(report.risk_delta)}",
        ]),
        f"**Severity:** {report.severity.value.upper()}\n"
        f"**Action Required:** {report.action_required.value.upper()}",
    ]

    if report.warnings:
        sections.append("**⚠️ Warnings:**\n" + _bullets(report.warnings))

    sections.append("**Recommendations:**\n" + _bullets(report.recommendations))
    return "\n\n".join(sections)


class MarkdownReportRenderer(ReportRenderer):
    """Renders agent responses with the Markdown formatters above."""

    def score_report(self, score_result, application, scenarios):
        return format_score_report(score_result, application, scenarios)

    def score_explanation(self, score_result, scenarios, settings):
        return format_score_explanation(score_result, scenarios, settings)

    def decision_report(self, decision):
        return format_decision_report(decision)

    def fraud_report(self, fraud, settings):
        return format_fraud_report(fraud, settings)

    def portfolio_report(self, report):
        return format_portfolio_report(report)

    def monitoring_report(self, report):
        return format_monitoring_report(report)
