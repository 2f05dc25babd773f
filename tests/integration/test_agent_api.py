"""
Integration tests for the Agent API endpoint.

These tests verify:
1. POST /v1/agent/execute dispatches each task
2. Missing input returns guidance with a 200
3. Unknown tasks fall back to the general overview
4. Engine failures return a "try again" message instead of an error
"""

import pytest
from httpx import AsyncClient

from credit_assessor.application.services.credit_agent import TRY_AGAIN_MESSAGE


class TestExecuteTask:
    """Tests for POST /v1/agent/execute endpoint."""

    @pytest.mark.asyncio
    async def test_credit_score_task(
        self,
        client: AsyncClient,
        strong_request: dict,
    ):
        response = await client.post(
            "/v1/agent/execute",
            json={"task": "ai_credit_score", **strong_request},
        )

        assert response.status_code == 200

        data = response.json()
        assert data["task"] == "ai_credit_score"
        assert "**Credit Score:** 829/850" in data["content"]
        assert data["data"]["risk_level"] == "low"
        assert data["suggestions"]

    @pytest.mark.asyncio
    async def test_instant_decision_task(
        self,
        client: AsyncClient,
        weak_request: dict,
    ):
        response = await client.post(
            "/v1/agent/execute",
            json={"task": "INSTANT_DECISION", **weak_request},
        )

        assert response.status_code == 200

        data = response.json()
        assert data["task"] == "instant_decision"
        assert data["data"]["outcome"] == "decline"
        assert "❌ **DECLINED**" in data["content"]

    @pytest.mark.asyncio
    async def test_missing_application_returns_guidance(self, client: AsyncClient):
        response = await client.post(
            "/v1/agent/execute",
            json={"task": "fraud_detection"},
        )

        assert response.status_code == 200

        data = response.json()
        assert data["content"].startswith("Fraud detection requires application data")
        assert data["data"] is None

    @pytest.mark.asyncio
    async def test_unknown_task_returns_overview(self, client: AsyncClient):
        response = await client.post(
            "/v1/agent/execute",
            json={"task": "book_a_flight"},
        )

        assert response.status_code == 200

        data = response.json()
        assert data["task"] == "general"
        assert "AI-Enhanced Credit Assessor" in data["content"]

    @pytest.mark.asyncio
    async def test_default_task_is_general(self, client: AsyncClient):
        response = await client.post("/v1/agent/execute", json={})

        assert response.status_code == 200
        assert response.json()["task"] == "general"

    @pytest.mark.asyncio
    async def test_engine_failure_returns_try_again(
        self,
        failing_client: AsyncClient,
        strong_request: dict,
    ):
        response = await failing_client.post(
            "/v1/agent/execute",
            json={"task": "explain_score", **strong_request},
        )

        assert response.status_code == 200
        assert response.json()["content"] == TRY_AGAIN_MESSAGE
