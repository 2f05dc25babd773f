"""
Unit Tests for Loan Monitoring.

These tests verify:
1. Early-warning rules and their severity points
2. Severity and score-delta action tiers
3. The stricter of the two actions is reported
4. Recommendations follow the action and the warnings
"""

from dataclasses import replace

import pytest

from credit_assessor.service.decisioning import (
    MonitoringAction,
    WarningSeverity,
    monitor_loan,
)
from credit_assessor.service.decisioning.monitoring import (
    CASH_RESERVES_WARNING,
    OVERDRAFT_WARNING,
    REVENUE_WARNING,
    action_for_score_delta,
    action_for_severity,
    early_warnings,
    monitoring_recommendations,
    warning_severity,
)
from credit_assessor.service.scoring import FinancialData
from tests.factories import healthy_banking, healthy_financials, strong_application


class TestEarlyWarnings:
    """Tests for early_warnings."""

    def test_healthy_borrower_has_no_warnings(self):
        warnings, points = early_warnings(healthy_financials(), healthy_banking())

        assert warnings == []
        assert points == 0

    def test_critical_runway(self):
        financials = replace(healthy_financials(), cash_reserves=100_000)

        warnings, points = early_warnings(financials, healthy_banking())

        assert warnings == [CASH_RESERVES_WARNING]
        assert points == 4

    def test_watch_runway(self):
        financials = replace(healthy_financials(), cash_reserves=175_000)

        warnings, points = early_warnings(financials, healthy_banking())

        assert warnings == ["Cash reserves below 3 months - monitor closely"]
        assert points == 2

    def test_no_expenses_skips_runway(self):
        financials = FinancialData(profit_margin=0.2)

        warnings, _ = early_warnings(financials, healthy_banking())

        assert CASH_RESERVES_WARNING not in warnings

    def test_all_signals(self):
        financials = replace(
            healthy_financials(),
            revenue_growth_rate=-0.2,
            profit_margin=0.02,
            cash_reserves=50_000,
            customer_churn_rate=0.4,
        )
        banking = replace(healthy_banking(), overdrafts=5, cash_flow_volatility=0.7)

        warnings, points = early_warnings(financials, banking)

        assert len(warnings) == 6
        assert warnings[0] == REVENUE_WARNING
        assert OVERDRAFT_WARNING in warnings
        assert points == 15


class TestActionTiers:
    """Tests for severity, action tiers and their ordering."""

    @pytest.mark.parametrize(
        "points,expected",
        [
            (0, WarningSeverity.LOW),
            (3, WarningSeverity.MEDIUM),
            (5, WarningSeverity.HIGH),
            (8, WarningSeverity.CRITICAL),
        ],
    )
    def test_severity(self, points, expected):
        assert warning_severity(points) == expected

    def test_severity_actions(self):
        assert action_for_severity(WarningSeverity.CRITICAL, True) == MonitoringAction.ESCALATE
        assert action_for_severity(WarningSeverity.HIGH, True) == MonitoringAction.RESTRUCTURE
        assert action_for_severity(WarningSeverity.MEDIUM, True) == MonitoringAction.REVIEW
        assert action_for_severity(WarningSeverity.LOW, True) == MonitoringAction.MONITOR
        assert action_for_severity(WarningSeverity.LOW, False) == MonitoringAction.NONE

    @pytest.mark.parametrize(
        "delta,expected",
        [
            (20, MonitoringAction.NONE),
            (-10, MonitoringAction.NONE),
            (-11, MonitoringAction.MONITOR),
            (-30, MonitoringAction.REVIEW),
            (-60, MonitoringAction.RESTRUCTURE),
            (-100, MonitoringAction.ESCALATE),
        ],
    )
    def test_score_delta_actions(self, delta, expected):
        assert action_for_score_delta(delta) == expected

    def test_rank_order(self):
        ranks = [action.rank for action in (
            MonitoringAction.NONE,
            MonitoringAction.MONITOR,
            MonitoringAction.REVIEW,
            MonitoringAction.RESTRUCTURE,
            MonitoringAction.ESCALATE,
        )]
        assert ranks == sorted(ranks)
        assert len(set(ranks)) == 5

    def test_recommendations_include_warning_specific_advice(self):
        recommendations = monitoring_recommendations(
            MonitoringAction.REVIEW,
            [CASH_RESERVES_WARNING, OVERDRAFT_WARNING],
        )

        assert recommendations[0] == "Schedule meeting with borrower within 2 weeks"
        assert "Require cash injection or additional equity" in recommendations
        assert "Implement cash management controls" in recommendations


class TestMonitorLoan:
    """Tests for monitor_loan."""

    def test_unchanged_loan_needs_no_action(self):
        app = strong_application()

        report = monitor_loan(app, app.financials)

        assert report.loan_id == app.applicant_id
        assert report.score_delta == 0
        assert report.risk_delta == 0.0
        assert report.severity == WarningSeverity.LOW
        assert report.action_required == MonitoringAction.NONE
        assert report.recommendations[0] == "Continue standard monitoring procedures"

    def test_deteriorating_financials_escalate(self):
        app = strong_application()
        current = replace(
            app.financials,
            revenue_growth_rate=-0.2,
            profit_margin=0.02,
            cash_reserves=70_000,
        )

        report = monitor_loan(app, current)

        assert report.severity == WarningSeverity.CRITICAL
        assert report.action_required == MonitoringAction.ESCALATE
        assert report.score_delta == 0

    def test_financial_collapse_alone_leaves_score_unchanged(self):
        """Financials feed early warnings only, never the score delta."""
        app = strong_application()
        collapsed = FinancialData(
            monthly_revenue=5_000,
            annual_revenue=60_000,
            monthly_expenses=90_000,
            net_income=-400_000,
            cash_reserves=1_000,
            total_debt=900_000,
            profit_margin=-0.5,
            revenue_growth_rate=-0.6,
            customer_churn_rate=0.5,
        )

        report = monitor_loan(app, collapsed)

        assert report.score_delta == 0
        assert report.risk_delta == 0.0
        assert report.severity == WarningSeverity.CRITICAL
        assert report.action_required == MonitoringAction.ESCALATE
        assert action_for_score_delta(report.score_delta) == MonitoringAction.NONE

    def test_score_drop_overrides_low_severity(self):
        """A large score drop escalates even without early warnings."""
        app = strong_application()
        degraded_credit = replace(
            app.credit,
            utilization=replace(app.credit.utilization, utilization_percentage=95),
        )

        report = monitor_loan(app, app.financials, current_credit=degraded_credit)

        assert report.warnings == []
        assert report.severity == WarningSeverity.LOW
        assert report.score_delta <= -100
        assert report.risk_delta > 0
        assert report.action_required == MonitoringAction.ESCALATE

    def test_current_banking_feeds_warnings(self):
        app = strong_application()
        banking = replace(app.banking, overdrafts=6)

        report = monitor_loan(app, app.financials, current_banking=banking)

        assert report.warnings == [OVERDRAFT_WARNING]
        assert report.action_required == MonitoringAction.MONITOR
        assert "Implement cash management controls" in report.recommendations

    def test_to_dict(self):
        app = strong_application()

        body = monitor_loan(app, app.financials).to_dict()

        assert body["severity"] == "low"
        assert body["action_required"] == "none"
        assert isinstance(body["monitoring_date"], str)
