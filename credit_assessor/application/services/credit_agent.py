"""Credit assessor agent - maps conversational tasks to assessment use cases."""

from typing import Awaitable, Callable, Dict, Optional, Union

import structlog

from credit_assessor.application.dto import AgentOptions, AgentResponse, CreditTask
from credit_assessor.application.interfaces import ReportRenderer
from credit_assessor.core.metrics import record_agent_task
from credit_assessor.domain.exceptions import (
    InvalidApplicationException,
    MissingApplicationDataException,
    ScoringException,
)
from credit_assessor.service.decisioning import DecisionOutcome

from .assessment_service import CreditAssessmentService

logger = structlog.get_logger(__name__)

TRY_AGAIN_MESSAGE = (
    "Sorry, I wasn't able to complete the credit analysis. Please try again in a moment."
)

GENERAL_CONTENT = """**🤖 AI-Enhanced Credit Assessor**

I combine traditional credit factors with alternative and behavioral data to assess business credit applications.

**What I can do:**
• AI credit scoring on a 300-850 scale with a full factor breakdown
• Instant decisions for loans up to $100,000
• Fraud detection across business, financial and banking data
• Portfolio risk analysis with expected loss and concentration
• Monitoring of existing loans with early warnings
• Score explanations with what-if improvement scenarios

How can I help with your credit assessment needs today?"""

_MISSING_INPUT = {
    CreditTask.AI_CREDIT_SCORE: (
        "Please provide the credit application data to perform AI credit scoring.",
        ["Upload application data", "Use sample application", "View scoring methodology"],
    ),
    CreditTask.INSTANT_DECISION: (
        "Instant Decision Engine ready. Please provide application data for immediate "
        "decisioning on loans up to $100,000.",
        ["Upload application", "View decision criteria"],
    ),
    CreditTask.FRAUD_DETECTION: (
        "Fraud detection requires application data. Please provide the application to analyze.",
        ["Upload application", "View fraud indicators"],
    ),
    CreditTask.PORTFOLIO_ANALYSIS: (
        "Portfolio analysis requires a list of loan applications. Please provide portfolio data.",
        ["Upload portfolio data", "View sample analysis"],
    ),
    CreditTask.MONITOR_LOAN: (
        "Loan monitoring requires the original application and current financial data. "
        "Please provide both.",
        ["Upload loan data", "View monitoring criteria"],
    ),
    CreditTask.EXPLAIN_SCORE: (
        "Please provide the credit application data so I can explain its score.",
        ["Upload application data", "View scoring methodology"],
    ),
}

Handler = Callable[[AgentOptions], Awaitable[AgentResponse]]


class CreditAssessorAgent:
    """
    Conversational front for the credit assessment engine.

    ``execute`` never raises for expected conditions: missing input yields a
    guidance response, an invalid application yields its validation
    message, and an engine failure yields a generic "try again" response.
    """

    def __init__(
        self,
        service: Optional[CreditAssessmentService] = None,
        *,
        renderer: ReportRenderer,
    ):
        self._service = service or CreditAssessmentService()
        self._renderer = renderer
        self._handlers: Dict[CreditTask, Handler] = {
            CreditTask.AI_CREDIT_SCORE: self._score,
            CreditTask.INSTANT_DECISION: self._instant_decision,
            CreditTask.FRAUD_DETECTION: self._detect_fraud,
            CreditTask.PORTFOLIO_ANALYSIS: self._analyze_portfolio,
            CreditTask.MONITOR_LOAN: self._monitor_loan,
            CreditTask.EXPLAIN_SCORE: self._explain_score,
            CreditTask.GENERAL: self._general,
        }

    async def execute(
        self,
        task: Union[CreditTask, str],
        options: Optional[AgentOptions] = None,
    ) -> AgentResponse:
        """
        Run one agent task.

        Args:
            task: Task to perform; unknown names fall back to GENERAL
            options: Inputs for the task

        Returns:
            AgentResponse with Markdown content, follow-up suggestions and,
            on success, the structured result as ``data``
        """
        task = CreditTask.parse(task)
        options = options or AgentOptions()
        log = logger.bind(task=task.value)

        try:
            response = await self._handlers[task](options)
        except MissingApplicationDataException as e:
            log.info("agent_missing_input", section=e.section)
            record_agent_task(task.value, "missing_input")
            content, suggestions = _MISSING_INPUT[task]
            return AgentResponse(task=task, content=content, suggestions=suggestions)
        except InvalidApplicationException as e:
            log.info("agent_invalid_input", message=e.message)
            record_agent_task(task.value, "invalid_input")
            return AgentResponse(
                task=task,
                content=f"The application could not be evaluated: {e.message}. "
                        "Please correct it and try again.",
                suggestions=["Review application data", "Use sample application"],
            )
        except ScoringException:
            # Already logged with its traceback by the assessment service
            record_agent_task(task.value, "error")
            return self._try_again(task)
        except Exception as e:
            log.exception("agent_task_failed", error=str(e), error_type=type(e).__name__)
            record_agent_task(task.value, "error")
            return self._try_again(task)

        record_agent_task(task.value, "success")
        log.info("agent_task_completed")
        return response

    @staticmethod
    def _try_again(task: CreditTask) -> AgentResponse:
        return AgentResponse(
            task=task,
            content=TRY_AGAIN_MESSAGE,
            suggestions=["Try again", "Contact support"],
        )

    @staticmethod
    def _require_application(options: AgentOptions):
        if options.application is None:
            raise MissingApplicationDataException("application")
        return options.application

    async def _score(self, options: AgentOptions) -> AgentResponse:
        application = self._require_application(options)
        result, scenarios = self._service.explain(application)
        return AgentResponse(
            task=CreditTask.AI_CREDIT_SCORE,
            content=self._renderer.score_report(result, application, scenarios),
            suggestions=[
                "Explain this score",
                "Check what-if scenarios",
                "Run instant decision",
                "Check fraud indicators",
            ],
            data=result.to_dict(),
        )

    async def _instant_decision(self, options: AgentOptions) -> AgentResponse:
        application = self._require_application(options)
        decision = self._service.decide(application)

        if decision.outcome == DecisionOutcome.APPROVE:
            suggestions = ["Generate loan documents", "Send approval letter", "Schedule closing"]
        elif decision.outcome == DecisionOutcome.DECLINE:
            suggestions = ["Send decline letter", "Provide feedback", "Suggest alternatives"]
        else:
            suggestions = ["Assign to underwriter", "Request additional docs", "Schedule review"]

        return AgentResponse(
            task=CreditTask.INSTANT_DECISION,
            content=self._renderer.decision_report(decision),
            suggestions=suggestions,
            data=decision.to_dict(),
        )

    async def _detect_fraud(self, options: AgentOptions) -> AgentResponse:
        application = self._require_application(options)
        fraud = self._service.detect_fraud(application)

        if fraud.is_fraudulent:
            suggestions = ["Escalate to fraud team", "Request verification", "Decline application"]
        elif fraud.risk_score > self._service.settings.fraud_investigate_threshold:
            suggestions = ["Request additional docs", "Verify information", "Conduct checks"]
        else:
            suggestions = ["Proceed with application", "Continue standard process"]

        return AgentResponse(
            task=CreditTask.FRAUD_DETECTION,
            content=self._renderer.fraud_report(fraud, self._service.settings),
            suggestions=suggestions,
            data=fraud.to_dict(),
        )

    async def _analyze_portfolio(self, options: AgentOptions) -> AgentResponse:
        if options.applications is None:
            raise MissingApplicationDataException("applications")

        report = self._service.analyze_portfolio(options.applications)
        return AgentResponse(
            task=CreditTask.PORTFOLIO_ANALYSIS,
            content=self._renderer.portfolio_report(report),
            suggestions=[
                "View detailed risk breakdown",
                "Run stress test scenarios",
                "Export portfolio report",
                "Set monitoring alerts",
            ],
            data=report.to_dict(),
        )

    async def _monitor_loan(self, options: AgentOptions) -> AgentResponse:
        application = self._require_application(options)
        if options.current_financials is None:
            raise MissingApplicationDataException("current_financials")

        report = self._service.monitor_loan(
            application,
            options.current_financials,
            current_banking=options.current_banking,
            current_alternative=options.current_alternative,
            current_credit=options.current_credit,
        )
        return AgentResponse(
            task=CreditTask.MONITOR_LOAN,
            content=self._renderer.monitoring_report(report),
            suggestions=[
                "Schedule borrower meeting",
                "Request updated financials",
                "Escalate to workout team",
                "Update monitoring frequency",
            ],
            data=report.to_dict(),
        )

    async def _explain_score(self, options: AgentOptions) -> AgentResponse:
        application = self._require_application(options)
        result, scenarios = self._service.explain(application)
        return AgentResponse(
            task=CreditTask.EXPLAIN_SCORE,
            content=self._renderer.score_explanation(result, scenarios, self._service.settings),
            suggestions=["Run instant decision", "Get improvement plan", "Compare with portfolio"],
            data={
                "score": result.to_dict(),
                "what_if_scenarios": [
                    {
                        "change": s.change,
                        "current_value": s.current_value,
                        "suggested_value": s.suggested_value,
                        "score_impact": s.score_impact,
                    }
                    for s in scenarios
                ],
            },
        )

    async def _general(self, options: AgentOptions) -> AgentResponse:
        return AgentResponse(
            task=CreditTask.GENERAL,
            content=GENERAL_CONTENT,
            suggestions=[
                "Calculate AI credit score",
                "Perform instant decision",
                "Detect fraud indicators",
                "Analyze portfolio risk",
                "Monitor existing loans",
                "Explain a score",
            ],
        )
