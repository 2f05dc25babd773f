"""
Integration tests for the Decision and Fraud API endpoints.

These tests verify:
1. POST /v1/decision - approve, decline and manual review outcomes
2. POST /v1/fraud - fraud risk score, flags and recommendation
3. Error responses
"""

import pytest
from httpx import AsyncClient


# =============================================================================
# POST /v1/decision Tests
# =============================================================================

class TestCreateDecision:
    """Tests for POST /v1/decision endpoint."""

    @pytest.mark.asyncio
    async def test_strong_application_approved(
        self,
        client: AsyncClient,
        strong_request: dict,
    ):
        """
        Happy path: a strong application is approved with terms.

        The strong archetype has:
        - 100 on-time payments and 10% utilization
        - Four distinct account types
        - $75,000 requested over 36 months
        """
        response = await client.post("/v1/decision", json=strong_request)

        assert response.status_code == 200

        data = response.json()
        assert data["outcome"] == "approve"
        assert data["requires_manual_review"] is False
        assert data["score"] == 829
        assert data["approved_amount"] == 75_000
        assert data["interest_rate"] == 6.57
        assert data["terms"]["term_months"] == 36
        assert data["terms"]["monthly_payment"] > 75_000 / 36
        assert data["improvement_suggestions"] == []
        assert data["review_priority"] is None

    @pytest.mark.asyncio
    async def test_weak_application_declined(
        self,
        client: AsyncClient,
        weak_request: dict,
    ):
        """A score-driven decline carries improvement suggestions."""
        response = await client.post("/v1/decision", json=weak_request)

        assert response.status_code == 200

        data = response.json()
        assert data["outcome"] == "decline"
        assert data["requires_manual_review"] is False
        assert data["terms"] is None
        assert len(data["improvement_suggestions"]) > 0

    @pytest.mark.asyncio
    async def test_large_request_requires_review(
        self,
        client: AsyncClient,
        strong_request: dict,
    ):
        """Requests above the instant ceiling go to an underwriter."""
        strong_request["application"]["loan_request"]["amount"] = 250_000

        response = await client.post("/v1/decision", json=strong_request)

        assert response.status_code == 200

        data = response.json()
        assert data["outcome"] == "manual_review"
        assert data["requires_manual_review"] is True
        assert data["review_priority"] == "high"

    @pytest.mark.asyncio
    async def test_prequalification_failure(
        self,
        client: AsyncClient,
        strong_request: dict,
    ):
        strong_request["application"]["business"]["years_in_business"] = 0.5

        response = await client.post("/v1/decision", json=strong_request)

        assert response.status_code == 200

        data = response.json()
        assert data["outcome"] == "decline"
        assert data["score"] is None
        assert data["reason"] == "Business must be operating for at least 1 year"

    @pytest.mark.asyncio
    async def test_fraudulent_application_declined(
        self,
        client: AsyncClient,
        strong_request: dict,
    ):
        strong_request["application"]["business"]["number_of_employees"] = 1
        strong_request["application"]["banking"]["account_age_years"] = 1
        strong_request["application"]["banking"]["deposit_frequency"] = 60

        response = await client.post("/v1/decision", json=strong_request)

        assert response.status_code == 200

        data = response.json()
        assert data["outcome"] == "decline"
        assert data["reason"] == "Application flagged for fraud review"
        assert data["requires_manual_review"] is True

    @pytest.mark.asyncio
    async def test_negative_amount_returns_400(
        self,
        client: AsyncClient,
        strong_request: dict,
    ):
        strong_request["application"]["loan_request"]["amount"] = -1

        response = await client.post("/v1/decision", json=strong_request)

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_APPLICATION"

    @pytest.mark.asyncio
    async def test_engine_failure_returns_500(
        self,
        failing_client: AsyncClient,
        strong_request: dict,
    ):
        response = await failing_client.post("/v1/decision", json=strong_request)

        assert response.status_code == 500
        assert response.json()["error"] == "SCORING_ERROR"


# =============================================================================
# POST /v1/fraud Tests
# =============================================================================

class TestDetectFraud:
    """Tests for POST /v1/fraud endpoint."""

    @pytest.mark.asyncio
    async def test_clean_application(
        self,
        client: AsyncClient,
        strong_request: dict,
    ):
        response = await client.post("/v1/fraud", json=strong_request)

        assert response.status_code == 200

        data = response.json()
        assert data == {
            "risk_score": 0,
            "is_fraudulent": False,
            "flags": [],
            "recommendation": "proceed",
        }

    @pytest.mark.asyncio
    async def test_investigate_tier(
        self,
        client: AsyncClient,
        strong_request: dict,
    ):
        """Young bank account (25) and high deposit frequency (15) score 40."""
        strong_request["application"]["banking"]["account_age_years"] = 1
        strong_request["application"]["banking"]["deposit_frequency"] = 60

        response = await client.post("/v1/fraud", json=strong_request)

        assert response.status_code == 200

        data = response.json()
        assert data["risk_score"] == 40
        assert data["is_fraudulent"] is False
        assert data["recommendation"] == "investigate"
        assert len(data["flags"]) == 2
