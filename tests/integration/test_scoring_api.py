"""
Integration tests for the Scoring API endpoints.

These tests verify:
1. POST /v1/score - Score a credit application
2. Optional what-if scenarios and credit limit
3. Validation and error responses
4. GET /v1/health
"""

import pytest
from httpx import AsyncClient


# =============================================================================
# POST /v1/score Tests
# =============================================================================

class TestScoreApplication:
    """Tests for POST /v1/score endpoint."""

    @pytest.mark.asyncio
    async def test_strong_application(
        self,
        client: AsyncClient,
        strong_request: dict,
    ):
        """A clean credit file scores in the low risk band."""
        response = await client.post("/v1/score", json=strong_request)

        assert response.status_code == 200

        data = response.json()
        assert data["overall_score"] == 829
        assert data["risk_level"] == "low"
        assert data["score_range"] == "Exceptional"
        assert data["default_probability"] == 0.01
        assert data["model_version"] == "AI-Credit-Scorer-v2.1"
        assert set(data["factors"]) == {
            "payment_history",
            "credit_utilization",
            "credit_history",
            "credit_mix",
            "new_credit",
            "alternative_data",
            "behavioral_data",
            "economic_factors",
        }
        assert data["what_if_scenarios"] is None
        assert data["credit_limit"] is None

    @pytest.mark.asyncio
    async def test_weak_application(
        self,
        client: AsyncClient,
        weak_request: dict,
    ):
        """Missed payments and high utilization land at very high risk."""
        response = await client.post("/v1/score", json=weak_request)

        assert response.status_code == 200

        data = response.json()
        assert data["overall_score"] < 550
        assert data["risk_level"] == "very_high"

    @pytest.mark.asyncio
    async def test_minimal_application(self, client: AsyncClient):
        """Omitted sections default to empty values and still score."""
        response = await client.post(
            "/v1/score",
            json={"application": {"applicant_id": "biz-minimal"}},
        )

        assert response.status_code == 200
        assert 300 <= response.json()["overall_score"] <= 850

    @pytest.mark.asyncio
    async def test_with_what_if_and_credit_limit(
        self,
        client: AsyncClient,
        weak_request: dict,
    ):
        weak_request["include_what_if"] = True
        weak_request["include_credit_limit"] = True

        response = await client.post("/v1/score", json=weak_request)

        assert response.status_code == 200

        data = response.json()
        impacts = [s["score_impact"] for s in data["what_if_scenarios"]]
        assert impacts == sorted(impacts, reverse=True)
        assert data["credit_limit"]["review_period_months"] == 6
        assert data["credit_limit"]["recommended_limit"] > 0

    @pytest.mark.asyncio
    async def test_behavioral_override(
        self,
        client: AsyncClient,
        weak_request: dict,
    ):
        baseline = await client.post("/v1/score", json=weak_request)

        weak_request["behavioral_data"] = {
            "account_login_frequency": 1.0,
            "payment_method_consistency": 1.0,
            "financial_goal_setting": 1.0,
            "risk_tolerance": 0.5,
        }
        boosted = await client.post("/v1/score", json=weak_request)

        assert boosted.json()["overall_score"] > baseline.json()["overall_score"]

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(
        self,
        client: AsyncClient,
        strong_request: dict,
    ):
        response = await client.post(
            "/v1/score",
            json=strong_request,
            headers={"X-Request-ID": "req-123"},
        )

        assert response.headers["X-Request-ID"] == "req-123"


class TestScoreErrors:
    """Tests for error handling on POST /v1/score."""

    @pytest.mark.asyncio
    async def test_missing_applicant_id_returns_422(self, client: AsyncClient):
        response = await client.post("/v1/score", json={"application": {}})

        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_blank_applicant_id_returns_400(self, client: AsyncClient):
        response = await client.post(
            "/v1/score",
            json={"application": {"applicant_id": "  "}},
        )

        assert response.status_code == 400

        data = response.json()
        assert data["error"] == "INVALID_APPLICATION"
        assert "applicant_id is required" in data["message"]

    @pytest.mark.asyncio
    async def test_engine_failure_returns_500(
        self,
        failing_client: AsyncClient,
        strong_request: dict,
    ):
        response = await failing_client.post("/v1/score", json=strong_request)

        assert response.status_code == 500

        data = response.json()
        assert data["error"] == "SCORING_ERROR"
        assert data["message"] == "Unable to complete score. Please try again."


# =============================================================================
# GET /v1/health Tests
# =============================================================================

class TestHealth:
    """Tests for GET /v1/health endpoint."""

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/v1/health")

        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"
        assert data["model_version"]
