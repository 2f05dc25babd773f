"""Pydantic schemas for API request/response validation."""

from .scoring import (
    ApplicationRequestSchema,
    CreditLimitSchema,
    ScoreRequestSchema,
    ScoreResponseSchema,
    ScoringFactorsSchema,
    WhatIfScenarioSchema,
)
from .decision import DecisionResponseSchema, FraudResponseSchema, LoanTermsSchema
from .portfolio import (
    ApplicationRankingSchema,
    CompareRequestSchema,
    CompareResponseSchema,
    PortfolioRequestSchema,
    PortfolioResponseSchema,
    StressScenarioSchema,
)
from .monitoring import MonitorRequestSchema, MonitoringResponseSchema
from .agent import AgentExecuteRequestSchema, AgentExecuteResponseSchema
from .error import ErrorResponseSchema

__all__ = [
    "ApplicationRequestSchema",
    "CreditLimitSchema",
    "ScoreRequestSchema",
    "ScoreResponseSchema",
    "ScoringFactorsSchema",
    "WhatIfScenarioSchema",
    "DecisionResponseSchema",
    "FraudResponseSchema",
    "LoanTermsSchema",
    "ApplicationRankingSchema",
    "CompareRequestSchema",
    "CompareResponseSchema",
    "PortfolioRequestSchema",
    "PortfolioResponseSchema",
    "StressScenarioSchema",
    "MonitorRequestSchema",
    "MonitoringResponseSchema",
    "AgentExecuteRequestSchema",
    "AgentExecuteResponseSchema",
    "ErrorResponseSchema",
]
