"""Report rendering interface used by the credit assessor agent."""

from abc import ABC, abstractmethod
from typing import Sequence

from credit_assessor.service.decisioning.models import (
    Decision,
    FraudAssessment,
    MonitoringReport,
    PortfolioReport,
)
from credit_assessor.service.scoring.models import (
    CreditApplication,
    ScoreResult,
    WhatIfScenario,
)
from credit_assessor.service.scoring.settings import ScoringSettings


class ReportRenderer(ABC):
    """
    Abstract renderer for agent responses.

    Turns engine results into the text the agent returns as ``content``.
    The structured results travel separately in ``AgentResponse.data``.
    """

    @abstractmethod
    def score_report(
        self,
        score_result: ScoreResult,
        application: CreditApplication,
        scenarios: Sequence[WhatIfScenario],
    ) -> str:
        """Render a score with its factors, what-ifs and recommendations."""
        ...

    @abstractmethod
    def score_explanation(
        self,
        score_result: ScoreResult,
        scenarios: Sequence[WhatIfScenario],
        settings: ScoringSettings,
    ) -> str:
        """Render the factor-by-factor contribution to a score."""
        ...

    @abstractmethod
    def decision_report(self, decision: Decision) -> str:
        ...

    @abstractmethod
    def fraud_report(self, fraud: FraudAssessment, settings: ScoringSettings) -> str:
        ...

    @abstractmethod
    def portfolio_report(self, report: PortfolioReport) -> str:
        ...

    @abstractmethod
    def monitoring_report(self, report: MonitoringReport) -> str:
        ...
