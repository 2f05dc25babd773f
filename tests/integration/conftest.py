"""
Fixtures for integration tests.

Provides:
- Test client for the FastAPI app with default scoring settings
- Test client whose assessment service always fails
- Request bodies for the strong and weak application archetypes
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from credit_assessor.application.services import CreditAssessmentService
from credit_assessor.core.dependencies import (
    get_assessment_service,
    get_settings_for_scoring,
)
from credit_assessor.domain.exceptions import ScoringException
from credit_assessor.main import app
from credit_assessor.service.scoring import ScoringSettings
from tests.factories import application_payload, strong_application, weak_application


# =============================================================================
# Test Doubles
# =============================================================================

class FailingAssessmentService(CreditAssessmentService):
    """Assessment service whose engine fails on every call."""

    def _fail(self, operation: str):
        raise ScoringException(operation)

    def score(self, application, alternative_data=None, behavioral_data=None):
        self._fail("score")

    def explain(self, application):
        self._fail("explain")

    def decide(self, application):
        self._fail("decision")

    def detect_fraud(self, application):
        self._fail("fraud")


# =============================================================================
# Clients
# =============================================================================

@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Test client using default scoring settings, independent of the environment."""

    def override_get_settings_for_scoring():
        return ScoringSettings()

    app.dependency_overrides[get_settings_for_scoring] = override_get_settings_for_scoring

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def failing_client() -> AsyncGenerator[AsyncClient, None]:
    """Test client whose assessment service raises ScoringException."""

    def override_get_assessment_service():
        return FailingAssessmentService()

    app.dependency_overrides[get_assessment_service] = override_get_assessment_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Request Bodies
# =============================================================================

@pytest.fixture
def strong_request() -> dict:
    """Request body for an application that is auto-approved."""
    return {"application": application_payload(strong_application())}


@pytest.fixture
def weak_request() -> dict:
    """Request body for an application that is declined on score."""
    return {"application": application_payload(weak_application())}
