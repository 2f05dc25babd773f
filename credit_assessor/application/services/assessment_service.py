"""Assessment service - orchestrates the credit scoring and decisioning use cases."""

from contextlib import contextmanager
from typing import Generator, List, Optional, Sequence, Tuple

import structlog

from credit_assessor.core.metrics import (
    record_decision,
    record_fraud_assessment,
    record_monitoring_action,
    record_score,
    track_operation_latency,
)
from credit_assessor.domain.exceptions import (
    DomainException,
    InvalidApplicationException,
    ScoringException,
)
from credit_assessor.service import decisioning, scoring
from credit_assessor.service.decisioning import (
    ApplicationComparison,
    CreditLimitRecommendation,
    Decision,
    FraudAssessment,
    MonitoringReport,
    PortfolioReport,
    StressTestResult,
)
from credit_assessor.service.scoring import (
    AlternativeData,
    BankingBehavior,
    BehavioralData,
    CreditApplication,
    CreditProfile,
    FinancialData,
    ScoreResult,
    ScoringSettings,
    WhatIfScenario,
    scoring_settings,
)

logger = structlog.get_logger(__name__)


def validate_application(application: CreditApplication) -> List[str]:
    """Return the reasons an application cannot be evaluated, if any."""
    errors = []

    if not application.applicant_id or not application.applicant_id.strip():
        errors.append("applicant_id is required")

    if application.loan_request.amount < 0:
        errors.append("loan_request.amount cannot be negative")

    if application.loan_request.term_months <= 0:
        errors.append("loan_request.term_months must be positive")

    return errors


class CreditAssessmentService:
    """
    Application service for credit assessment use cases.

    Wraps the pure scoring and decisioning functions with validation,
    structured logging and metrics. Unexpected errors inside the engine
    are logged and re-raised as ScoringException so that callers never
    receive a partial result.
    """

    def __init__(self, settings: ScoringSettings = scoring_settings):
        self._settings = settings

    @property
    def settings(self) -> ScoringSettings:
        return self._settings

    def _validate(self, application: CreditApplication) -> None:
        errors = validate_application(application)
        if errors:
            raise InvalidApplicationException("; ".join(errors))

    @contextmanager
    def _computation(self, operation: str, log) -> Generator[None, None, None]:
        with track_operation_latency(operation):
            try:
                yield
            except DomainException:
                raise
            except Exception as e:
                log.exception(
                    "computation_failed",
                    operation=operation,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise ScoringException(operation) from e

    def score(
        self,
        application: CreditApplication,
        alternative_data: Optional[AlternativeData] = None,
        behavioral_data: Optional[BehavioralData] = None,
    ) -> ScoreResult:
        """
        Score a credit application.

        Raises:
            InvalidApplicationException: If the application fails validation
            ScoringException: If scoring fails unexpectedly
        """
        self._validate(application)
        log = logger.bind(applicant_id=application.applicant_id)

        with self._computation("score", log):
            result = scoring.score(
                application,
                alternative_data=alternative_data,
                behavioral_data=behavioral_data,
                settings=self._settings,
            )

        record_score(result.risk_level.value, result.overall_score)
        log.info(
            "score_calculated",
            overall_score=result.overall_score,
            risk_level=result.risk_level.value,
            default_probability=result.default_probability,
            confidence=result.confidence,
        )
        return result

    def explain(
        self,
        application: CreditApplication,
    ) -> Tuple[ScoreResult, List[WhatIfScenario]]:
        """Score an application and rank the changes that would improve it."""
        result = self.score(application)
        log = logger.bind(applicant_id=application.applicant_id)

        with self._computation("explain", log):
            scenarios = scoring.what_if_scenarios(application, self._settings)

        log.info("score_explained", scenarios=len(scenarios))
        return result, scenarios

    def decide(self, application: CreditApplication) -> Decision:
        """
        Make an instant decision on a credit application.

        Raises:
            InvalidApplicationException: If the application fails validation
            ScoringException: If decisioning fails unexpectedly
        """
        self._validate(application)
        log = logger.bind(
            applicant_id=application.applicant_id,
            amount_requested=application.loan_request.amount,
        )
        log.info("decision_requested")

        with self._computation("decision", log):
            decision = decisioning.decide(application, self._settings)

        record_decision(decision.outcome.value)
        log.info(
            "decision_made",
            outcome=decision.outcome.value,
            score=decision.score,
            requires_manual_review=decision.requires_manual_review,
            interest_rate=decision.interest_rate,
        )
        return decision

    def detect_fraud(self, application: CreditApplication) -> FraudAssessment:
        """Run the fraud rules against an application."""
        self._validate(application)
        log = logger.bind(applicant_id=application.applicant_id)

        with self._computation("fraud", log):
            assessment = decisioning.detect_fraud(application, settings=self._settings)

        record_fraud_assessment(assessment.recommendation.value, len(assessment.flags))
        if assessment.flags:
            log.warning(
                "fraud_flags_raised",
                risk_score=assessment.risk_score,
                flags=assessment.flags,
                recommendation=assessment.recommendation.value,
            )
        else:
            log.info("fraud_check_passed")
        return assessment

    def recommend_credit_limit(
        self,
        application: CreditApplication,
        score_result: Optional[ScoreResult] = None,
    ) -> CreditLimitRecommendation:
        result = score_result or self.score(application)
        log = logger.bind(applicant_id=application.applicant_id)

        with self._computation("credit_limit", log):
            recommendation = decisioning.recommend_credit_limit(
                application, result, self._settings
            )

        log.info("credit_limit_recommended", recommended_limit=recommendation.recommended_limit)
        return recommendation

    def analyze_portfolio(
        self,
        applications: Sequence[CreditApplication],
        top_n: Optional[int] = None,
    ) -> PortfolioReport:
        """
        Analyze a portfolio of applications.

        An empty list is valid and yields an empty report.

        Raises:
            InvalidApplicationException: If any application fails validation
            ScoringException: If aggregation fails unexpectedly
        """
        for application in applications:
            self._validate(application)

        log = logger.bind(applications=len(applications))

        with self._computation("portfolio", log):
            report = decisioning.analyze_portfolio(applications, top_n, self._settings)

        log.info(
            "portfolio_analyzed",
            total_exposure=report.portfolio_risk.total_exposure,
            expected_loss=report.portfolio_risk.expected_loss,
            risk_rating=report.portfolio_risk.risk_rating,
        )
        return report

    def stress_test(
        self,
        applications: Sequence[CreditApplication],
        economic_downturn: bool = False,
        interest_rate_shock: bool = False,
        industry_collapse: Optional[str] = None,
    ) -> StressTestResult:
        for application in applications:
            self._validate(application)

        log = logger.bind(applications=len(applications))

        with self._computation("stress_test", log):
            result = decisioning.stress_test(
                applications,
                economic_downturn=economic_downturn,
                interest_rate_shock=interest_rate_shock,
                industry_collapse=industry_collapse,
                settings=self._settings,
            )

        log.info(
            "stress_test_completed",
            baseline_default_rate=result.baseline_default_rate,
            stressed_default_rate=result.stressed_default_rate,
        )
        return result

    def compare_applications(
        self,
        applications: Sequence[CreditApplication],
    ) -> ApplicationComparison:
        """Rank applications by score, best first."""
        for application in applications:
            self._validate(application)

        log = logger.bind(applications=len(applications))

        with self._computation("compare", log):
            comparison = decisioning.compare_applications(applications, self._settings)

        log.info("applications_compared", best_candidate=comparison.best_candidate)
        return comparison

    def monitor_loan(
        self,
        original_application: CreditApplication,
        current_financials: FinancialData,
        current_banking: Optional[BankingBehavior] = None,
        current_alternative: Optional[AlternativeData] = None,
        current_credit: Optional[CreditProfile] = None,
    ) -> MonitoringReport:
        """
        Compare an existing loan with its original assessment.

        Raises:
            InvalidApplicationException: If the original application fails validation
            ScoringException: If monitoring fails unexpectedly
        """
        self._validate(original_application)
        log = logger.bind(loan_id=original_application.applicant_id)

        with self._computation("monitor", log):
            report = decisioning.monitor_loan(
                original_application,
                current_financials,
                current_banking=current_banking,
                current_alternative=current_alternative,
                current_credit=current_credit,
                settings=self._settings,
            )

        record_monitoring_action(report.action_required.value)
        log.info(
            "loan_monitored",
            score_delta=report.score_delta,
            severity=report.severity.value,
            action_required=report.action_required.value,
            warnings=len(report.warnings),
        )
        return report
