"""
Unit Tests for Credit Limit Recommendation.

These tests verify:
1. The score multiplier spans 0.5 to 1.0 over the display range
2. Reserve, margin and business age adjustments
3. Minimum / maximum bounds and the review period
"""

from dataclasses import replace

import pytest

from credit_assessor.service.decisioning import recommend_credit_limit
from credit_assessor.service.decisioning.credit_limit import score_multiplier
from credit_assessor.service.scoring import RiskLevel, score
from tests.factories import strong_application


class TestScoreMultiplier:
    """Tests for score_multiplier."""

    @pytest.mark.parametrize(
        "overall,expected",
        [(300, 0.5), (575, 0.75), (850, 1.0), (200, 0.5), (900, 1.0)],
    )
    def test_multiplier(self, overall, expected):
        assert score_multiplier(overall) == pytest.approx(expected)


class TestRecommendCreditLimit:
    """Tests for recommend_credit_limit."""

    def test_strong_application(self):
        """Two months of revenue, x1.2 for reserves and x1.1 for business age."""
        app = strong_application()
        result = score(app)

        recommendation = recommend_credit_limit(app, result)

        expected = 85_000 * 2 * score_multiplier(result.overall_score) * 1.2 * 1.1
        assert recommendation.recommended_limit == round(expected)
        assert recommendation.minimum_limit == round(expected * 0.7)
        assert recommendation.maximum_limit == round(expected * 1.3)
        assert recommendation.review_period_months == 12
        assert "Strong cash reserves support higher limit" in recommendation.reasoning
        assert "Established business history reduces risk" in recommendation.reasoning

    def test_thin_reserves_and_margin_reduce_limit(self):
        app = strong_application()
        app = replace(
            app,
            financials=replace(app.financials, cash_reserves=10_000, profit_margin=0.02),
            business=replace(app.business, years_in_business=1.5),
        )
        result = score(app)

        recommendation = recommend_credit_limit(app, result)

        expected = 85_000 * 2 * score_multiplier(result.overall_score) * 0.8 * 0.9 * 0.85
        assert recommendation.recommended_limit == round(expected)

    def test_high_risk_reviewed_every_six_months(self):
        app = strong_application()
        result = replace(score(app), risk_level=RiskLevel.HIGH)

        assert recommend_credit_limit(app, result).review_period_months == 6

    def test_no_revenue_gives_zero_limit(self):
        app = strong_application()
        app = replace(app, financials=replace(app.financials, monthly_revenue=0))

        recommendation = recommend_credit_limit(app, score(app))

        assert recommendation.recommended_limit == 0
        assert recommendation.maximum_limit == 0
