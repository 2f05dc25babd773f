"""
Integration tests for the Portfolio and Monitoring API endpoints.

These tests verify:
1. POST /v1/portfolio - aggregation, empty portfolios and stress scenarios
2. POST /v1/portfolio/compare - ranking by score
3. POST /v1/monitor - early warnings and action tiers
"""

import pytest
from httpx import AsyncClient

from tests.factories import application_payload, strong_application, weak_application


@pytest.fixture
def portfolio_request() -> dict:
    return {
        "applications": [
            application_payload(strong_application("strong-1")),
            application_payload(weak_application("weak-1")),
        ]
    }


# =============================================================================
# POST /v1/portfolio Tests
# =============================================================================

class TestAnalyzePortfolio:
    """Tests for POST /v1/portfolio endpoint."""

    @pytest.mark.asyncio
    async def test_mixed_portfolio(
        self,
        client: AsyncClient,
        portfolio_request: dict,
    ):
        response = await client.post("/v1/portfolio", json=portfolio_request)

        assert response.status_code == 200

        data = response.json()
        assert data["total_applications"] == 2
        assert sum(data["risk_distribution"].values()) == 2
        assert data["portfolio_risk"]["total_exposure"] == 125_000
        assert data["portfolio_risk"]["industry_exposure"] == {
            "food_service": 75_000,
            "retail": 50_000,
        }
        assert data["top_risks"][0]["applicant_id"] == "weak-1"
        assert data["portfolio_metrics"]["approval_rate"] == 0.5
        assert data["stress_test"] is None

    @pytest.mark.asyncio
    async def test_empty_portfolio(self, client: AsyncClient):
        response = await client.post("/v1/portfolio", json={"applications": []})

        assert response.status_code == 200

        data = response.json()
        assert data["total_applications"] == 0
        assert data["risk_distribution"] == {"low": 0, "medium": 0, "high": 0, "very_high": 0}
        assert data["portfolio_risk"]["risk_rating"] == "No Exposure"
        assert data["recommendations"] == []

    @pytest.mark.asyncio
    async def test_stress_scenario(
        self,
        client: AsyncClient,
        portfolio_request: dict,
    ):
        portfolio_request["stress_scenario"] = {
            "economic_downturn": True,
            "industry_collapse": "retail",
        }

        response = await client.post("/v1/portfolio", json=portfolio_request)

        assert response.status_code == 200

        stress = response.json()["stress_test"]
        assert stress["affected_loans"] == 2
        assert stress["stressed_default_rate"] > stress["baseline_default_rate"]
        assert stress["additional_losses"] > 0

    @pytest.mark.asyncio
    async def test_negative_top_n_returns_422(
        self,
        client: AsyncClient,
        portfolio_request: dict,
    ):
        portfolio_request["top_n"] = -1

        response = await client.post("/v1/portfolio", json=portfolio_request)

        assert response.status_code == 422


# =============================================================================
# POST /v1/portfolio/compare Tests
# =============================================================================

class TestCompareApplications:
    """Tests for POST /v1/portfolio/compare endpoint."""

    @pytest.mark.asyncio
    async def test_rankings(
        self,
        client: AsyncClient,
        portfolio_request: dict,
    ):
        portfolio_request["applications"].reverse()

        response = await client.post("/v1/portfolio/compare", json=portfolio_request)

        assert response.status_code == 200

        data = response.json()
        assert data["best_candidate"] == "strong-1"
        assert [r["applicant_id"] for r in data["rankings"]] == ["strong-1", "weak-1"]
        assert data["rankings"][0] == {
            "applicant_id": "strong-1",
            "business_name": "Acme Bakery LLC",
            "score": 829,
            "rank": 1,
            "recommendation": "approve",
        }
        assert data["rankings"][1]["recommendation"] == "decline"

    @pytest.mark.asyncio
    async def test_empty_list(self, client: AsyncClient):
        response = await client.post("/v1/portfolio/compare", json={"applications": []})

        assert response.status_code == 200
        assert response.json() == {
            "rankings": [],
            "best_candidate": None,
            "analysis": "No applications to compare",
        }


# =============================================================================
# POST /v1/monitor Tests
# =============================================================================

class TestMonitorLoan:
    """Tests for POST /v1/monitor endpoint."""

    @pytest.mark.asyncio
    async def test_stable_loan(self, client: AsyncClient):
        app = application_payload(strong_application())

        response = await client.post(
            "/v1/monitor",
            json={"original_application": app, "current_financials": app["financials"]},
        )

        assert response.status_code == 200

        data = response.json()
        assert data["loan_id"] == "biz-strong"
        assert data["score_delta"] == 0
        assert data["severity"] == "low"
        assert data["action_required"] == "none"

    @pytest.mark.asyncio
    async def test_distressed_loan_escalates(self, client: AsyncClient):
        app = application_payload(strong_application())
        current = dict(
            app["financials"],
            revenue_growth_rate=-0.25,
            profit_margin=0.01,
            cash_reserves=50_000,
        )

        response = await client.post(
            "/v1/monitor",
            json={
                "original_application": app,
                "current_financials": current,
                "current_banking": dict(app["banking"], overdrafts=6),
            },
        )

        assert response.status_code == 200

        data = response.json()
        assert data["severity"] == "critical"
        assert data["action_required"] == "escalate"
        assert "Multiple overdraft incidents detected" in data["warnings"]
        assert data["recommendations"][0] == "URGENT: Escalate to special assets team"

    @pytest.mark.asyncio
    async def test_missing_current_financials_returns_422(self, client: AsyncClient):
        response = await client.post(
            "/v1/monitor",
            json={"original_application": application_payload(strong_application())},
        )

        assert response.status_code == 422
