"""
Decisioning Module for the Credit Assessor engine
"""

from .models import (
    ApplicationComparison,
    ApplicationRanking,
    ApplicationScore,
    CreditLimitRecommendation,
    Decision,
    DecisionOutcome,
    DecisionStatistics,
    FraudAssessment,
    FraudRecommendation,
    LoanPricing,
    LoanTerms,
    MonitoringAction,
    MonitoringReport,
    PortfolioMetrics,
    PortfolioReport,
    PortfolioRisk,
    ReviewPriority,
    StressTestResult,
    WarningSeverity,
)
from .decision import (
    batch_decide,
    check_prequalification,
    compare_applications,
    decide,
    decision_statistics,
)
from .fraud import DEFAULT_FRAUD_RULES, FraudRule, detect_fraud
from .pricing import interest_rate_for, monthly_payment, optimize_loan_pricing
from .credit_limit import recommend_credit_limit
from .portfolio import analyze_portfolio, stress_test
from .monitoring import monitor_loan

__all__ = [
    # Models
    "ApplicationComparison",
    "ApplicationRanking",
    "ApplicationScore",
    "CreditLimitRecommendation",
    "Decision",
    "DecisionOutcome",
    "DecisionStatistics",
    "FraudAssessment",
    "FraudRecommendation",
    "LoanPricing",
    "LoanTerms",
    "MonitoringAction",
    "MonitoringReport",
    "PortfolioMetrics",
    "PortfolioReport",
    "PortfolioRisk",
    "ReviewPriority",
    "StressTestResult",
    "WarningSeverity",
    # Instant Decisions
    "batch_decide",
    "check_prequalification",
    "compare_applications",
    "decide",
    "decision_statistics",
    # Fraud
    "DEFAULT_FRAUD_RULES",
    "FraudRule",
    "detect_fraud",
    # Pricing and Limits
    "interest_rate_for",
    "monthly_payment",
    "optimize_loan_pricing",
    "recommend_credit_limit",
    # Portfolio and Monitoring
    "analyze_portfolio",
    "stress_test",
    "monitor_loan",
]
