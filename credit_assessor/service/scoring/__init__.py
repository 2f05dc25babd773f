"""
Credit Scoring Module for the Credit Assessor engine
"""

from .models import (
    AlternativeData,
    BankingBehavior,
    BehavioralData,
    BusinessInfo,
    CreditApplication,
    CreditHistory,
    CreditMix,
    CreditProfile,
    CreditUtilization,
    DigitalFootprint,
    EconomicIndicators,
    FinancialData,
    IncomeStability,
    IndustryRisk,
    LoanRequest,
    NewCredit,
    PaymentHistory,
    RiskLevel,
    ScoreRange,
    ScoreResult,
    ScoringFactors,
    SpendingPatterns,
    WhatIfScenario,
)
from .settings import ScoringSettings, scoring_settings, get_scoring_settings
from .risk_factors import (
    score_payment_history,
    score_credit_utilization,
    score_credit_history,
    score_credit_mix,
    score_new_credit,
)
from .alternative_data import (
    score_alternative_data,
    score_behavioral_data,
    score_economic_factors,
)
from .risk_score import (
    calculate_factors,
    calculate_composite_score,
    calculate_confidence,
    determine_risk_level,
    determine_score_range,
    estimate_default_probability,
    score,
)
from .explain import what_if_scenarios

__all__ = [
    # Settings
    "ScoringSettings",
    "scoring_settings",
    "get_scoring_settings",
    # Models
    "AlternativeData",
    "BankingBehavior",
    "BehavioralData",
    "BusinessInfo",
    "CreditApplication",
    "CreditHistory",
    "CreditMix",
    "CreditProfile",
    "CreditUtilization",
    "DigitalFootprint",
    "EconomicIndicators",
    "FinancialData",
    "IncomeStability",
    "IndustryRisk",
    "LoanRequest",
    "NewCredit",
    "PaymentHistory",
    "RiskLevel",
    "ScoreRange",
    "ScoreResult",
    "ScoringFactors",
    "SpendingPatterns",
    "WhatIfScenario",
    # Traditional Factors
    "score_payment_history",
    "score_credit_utilization",
    "score_credit_history",
    "score_credit_mix",
    "score_new_credit",
    # AI-Enhanced Factors
    "score_alternative_data",
    "score_behavioral_data",
    "score_economic_factors",
    # Composite Scoring
    "calculate_factors",
    "calculate_composite_score",
    "calculate_confidence",
    "determine_risk_level",
    "determine_score_range",
    "estimate_default_probability",
    "score",
    # Explainability
    "what_if_scenarios",
]
