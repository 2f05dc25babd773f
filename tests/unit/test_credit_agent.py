"""
Unit Tests for the Credit Assessor Agent.

These tests verify:
1. Every task dispatches to its use case and returns structured data
2. Missing input returns guidance instead of raising
3. Unknown task names fall back to the general overview
4. Engine failures return a generic "try again" response
"""

from unittest.mock import MagicMock

import pytest

from credit_assessor.application.dto import AgentOptions, CreditTask
from credit_assessor.application.interfaces import ReportRenderer
from credit_assessor.application.services import CreditAssessmentService, CreditAssessorAgent
from credit_assessor.application.services.credit_agent import GENERAL_CONTENT, TRY_AGAIN_MESSAGE
from credit_assessor.domain.exceptions import ScoringException
from credit_assessor.presentation.reports import MarkdownReportRenderer
from tests.factories import strong_application, weak_application


@pytest.fixture
def agent() -> CreditAssessorAgent:
    return CreditAssessorAgent(CreditAssessmentService(), renderer=MarkdownReportRenderer())


class TestTaskParsing:
    """Tests for CreditTask.parse."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("ai_credit_score", CreditTask.AI_CREDIT_SCORE),
            (" Instant_Decision ", CreditTask.INSTANT_DECISION),
            (CreditTask.MONITOR_LOAN, CreditTask.MONITOR_LOAN),
            ("write_a_poem", CreditTask.GENERAL),
            ("", CreditTask.GENERAL),
        ],
    )
    def test_parse(self, value, expected):
        assert CreditTask.parse(value) == expected


class TestAgentTasks:
    """Tests for successful task execution."""

    @pytest.mark.asyncio
    async def test_score(self, agent: CreditAssessorAgent):
        response = await agent.execute(
            "ai_credit_score",
            AgentOptions(application=strong_application()),
        )

        assert response.task == CreditTask.AI_CREDIT_SCORE
        assert response.content.startswith("**📊 AI Credit Score Report**")
        assert response.data["overall_score"] == 829
        assert response.suggestions

    @pytest.mark.asyncio
    async def test_instant_decision(self, agent: CreditAssessorAgent):
        response = await agent.execute(
            CreditTask.INSTANT_DECISION,
            AgentOptions(application=strong_application()),
        )

        assert response.data["outcome"] == "approve"
        assert "Generate loan documents" in response.suggestions

    @pytest.mark.asyncio
    async def test_fraud_detection(self, agent: CreditAssessorAgent):
        response = await agent.execute(
            "fraud_detection",
            AgentOptions(application=strong_application()),
        )

        assert response.data["risk_score"] == 0
        assert response.suggestions == ["Proceed with application", "Continue standard process"]

    @pytest.mark.asyncio
    async def test_portfolio_analysis(self, agent: CreditAssessorAgent):
        response = await agent.execute(
            "portfolio_analysis",
            AgentOptions(applications=[strong_application("a"), weak_application("b")]),
        )

        assert response.data["total_applications"] == 2
        assert "**📊 Portfolio Risk Analysis**" in response.content

    @pytest.mark.asyncio
    async def test_empty_portfolio_is_valid(self, agent: CreditAssessorAgent):
        response = await agent.execute("portfolio_analysis", AgentOptions(applications=[]))

        assert response.data["total_applications"] == 0

    @pytest.mark.asyncio
    async def test_monitor_loan(self, agent: CreditAssessorAgent):
        app = strong_application()

        response = await agent.execute(
            "monitor_loan",
            AgentOptions(application=app, current_financials=app.financials),
        )

        assert response.data["action_required"] == "none"
        assert response.data["loan_id"] == app.applicant_id

    @pytest.mark.asyncio
    async def test_explain_score(self, agent: CreditAssessorAgent):
        response = await agent.execute(
            "explain_score",
            AgentOptions(application=weak_application()),
        )

        assert response.content.startswith("**🧠 Score Explanation**")
        assert response.data["what_if_scenarios"]
        assert response.data["score"]["risk_level"] == "very_high"

    @pytest.mark.asyncio
    async def test_general(self, agent: CreditAssessorAgent):
        response = await agent.execute("general")

        assert response.content == GENERAL_CONTENT
        assert response.data is None


class TestAgentGuidance:
    """Tests for missing input and unknown tasks."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "task",
        ["ai_credit_score", "instant_decision", "fraud_detection", "explain_score"],
    )
    async def test_missing_application(self, agent: CreditAssessorAgent, task: str):
        response = await agent.execute(task, AgentOptions())

        assert response.data is None
        assert "provide" in response.content.lower()
        assert response.suggestions

    @pytest.mark.asyncio
    async def test_portfolio_without_applications(self, agent: CreditAssessorAgent):
        response = await agent.execute("portfolio_analysis")

        assert response.content.startswith("Portfolio analysis requires")

    @pytest.mark.asyncio
    async def test_monitor_without_current_financials(self, agent: CreditAssessorAgent):
        response = await agent.execute(
            "monitor_loan",
            AgentOptions(application=strong_application()),
        )

        assert response.content.startswith("Loan monitoring requires")
        assert response.data is None

    @pytest.mark.asyncio
    async def test_unknown_task_falls_back_to_general(self, agent: CreditAssessorAgent):
        response = await agent.execute("write_a_poem")

        assert response.task == CreditTask.GENERAL
        assert response.content == GENERAL_CONTENT

    @pytest.mark.asyncio
    async def test_invalid_application(self, agent: CreditAssessorAgent):
        response = await agent.execute(
            "ai_credit_score",
            AgentOptions(application=strong_application(applicant_id=" ")),
        )

        assert response.content.startswith("The application could not be evaluated")
        assert "applicant_id is required" in response.content


class TestRendering:
    """The agent renders content through its injected renderer."""

    @pytest.mark.asyncio
    async def test_custom_renderer_supplies_content(self):
        renderer = MagicMock(spec=ReportRenderer)
        renderer.decision_report.return_value = "decision text"
        agent = CreditAssessorAgent(CreditAssessmentService(), renderer=renderer)

        response = await agent.execute(
            "instant_decision",
            AgentOptions(application=strong_application()),
        )

        assert response.content == "decision text"
        assert response.data["outcome"] == "approve"
        renderer.decision_report.assert_called_once()

    def test_markdown_renderer_is_a_report_renderer(self):
        assert isinstance(MarkdownReportRenderer(), ReportRenderer)


class TestAgentFailures:
    """Engine failures never escape execute()."""

    @pytest.mark.asyncio
    async def test_scoring_exception_returns_try_again(self):
        service = MagicMock(spec=CreditAssessmentService)
        service.decide.side_effect = ScoringException("decision")
        agent = CreditAssessorAgent(service, renderer=MarkdownReportRenderer())

        response = await agent.execute(
            "instant_decision",
            AgentOptions(application=strong_application()),
        )

        assert response.content == TRY_AGAIN_MESSAGE
        assert response.data is None

    @pytest.mark.asyncio
    async def test_unexpected_exception_returns_try_again(self):
        service = MagicMock(spec=CreditAssessmentService)
        service.explain.side_effect = RuntimeError("boom")
        agent = CreditAssessorAgent(service, renderer=MarkdownReportRenderer())

        response = await agent.execute(
            "ai_credit_score",
            AgentOptions(application=strong_application()),
        )

        assert response.content == TRY_AGAIN_MESSAGE

    @pytest.mark.asyncio
    async def test_service_wraps_engine_errors(self, monkeypatch):
        """Unexpected engine errors surface as ScoringException."""
        from credit_assessor.service import scoring

        def broken_score(*args, **kwargs):
            raise ZeroDivisionError("division by zero")

        monkeypatch.setattr(scoring, "score", broken_score)
        service = CreditAssessmentService()

        with pytest.raises(ScoringException) as exc_info:
            service.score(strong_application())

        assert exc_info.value.code == "SCORING_ERROR"
        assert exc_info.value.operation == "score"
