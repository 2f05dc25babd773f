"""
Scoring Settings for the Credit Assessor engine.

This module contains all configurable parameters for the credit scoring and
decisioning policy. They can be adjusted via environment variables for
A/B testing, different lending products, or tuning based on observed
default rates.

Environment variables use the SCORING_ prefix:
    SCORING_WEIGHT_PAYMENT_HISTORY=0.35
    SCORING_AUTO_APPROVE_THRESHOLD=750
    SCORING_MAX_AUTO_APPROVE_AMOUNT=100000

Settings instances are frozen. Every scoring function takes the settings
object as an explicit argument, so a single instance can be shared by
concurrent callers.

Usage:
    from credit_assessor.service.scoring.settings import scoring_settings

    # Use default settings (loaded from env)
    weights = scoring_settings.normalized_weights

    # Or create custom settings for testing
    custom = ScoringSettings(auto_approve_threshold=720)
"""

import json
from functools import lru_cache
from typing import Dict, Tuple

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

FACTOR_NAMES = (
    "payment_history",
    "credit_utilization",
    "credit_history",
    "credit_mix",
    "new_credit",
    "alternative_data",
    "behavioral_data",
    "economic_factors",
)


class ScoringSettings(BaseSettings):
    """
    Configurable parameters for the credit scoring algorithm.

    All settings can be overridden via environment variables with SCORING_ prefix.
    Sub-scores are 0-100, display scores are on the 300-850 scale and
    monetary values are in dollars.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCORING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    model_version: str = Field(
        default="AI-Credit-Scorer-v2.1",
        description="Version label attached to every score result",
    )

    # === Factor Weights (raw, renormalized to sum to 1.0) ===
    weight_payment_history: float = Field(default=0.35, ge=0.0, le=1.0)
    weight_credit_utilization: float = Field(default=0.30, ge=0.0, le=1.0)
    weight_credit_history: float = Field(default=0.15, ge=0.0, le=1.0)
    weight_credit_mix: float = Field(default=0.10, ge=0.0, le=1.0)
    weight_new_credit: float = Field(default=0.10, ge=0.0, le=1.0)
    weight_alternative_data: float = Field(default=0.20, ge=0.0, le=1.0)
    weight_behavioral_data: float = Field(default=0.10, ge=0.0, le=1.0)
    weight_economic_factors: float = Field(default=0.05, ge=0.0, le=1.0)

    # === Alternative Data Blend ===
    alt_weight_income_stability: float = Field(default=0.40, ge=0.0, le=1.0)
    alt_weight_spending_patterns: float = Field(default=0.30, ge=0.0, le=1.0)
    alt_weight_digital_footprint: float = Field(default=0.20, ge=0.0, le=1.0)
    alt_weight_industry_risk: float = Field(default=0.10, ge=0.0, le=1.0)

    # === Display Scale ===
    score_floor: int = Field(
        default=300,
        description="Display score for a composite of 0",
    )
    score_ceiling: int = Field(
        default=850,
        description="Display score for a composite of 100",
    )

    # === Risk Level Thresholds (display scale) ===
    risk_low_threshold: int = Field(default=750)
    risk_medium_threshold: int = Field(default=650)
    risk_high_threshold: int = Field(default=550)

    # === Score Range Labels (display scale) ===
    range_exceptional_threshold: int = Field(default=800)
    range_very_good_threshold: int = Field(default=740)
    range_good_threshold: int = Field(default=670)
    range_fair_threshold: int = Field(default=580)

    # === Confidence ===
    confidence_base: float = Field(default=0.5, ge=0.0, le=1.0)
    confidence_completeness_weight: float = Field(default=0.3, ge=0.0, le=1.0)
    confidence_consistency_weight: float = Field(default=0.2, ge=0.0, le=1.0)
    confidence_cap: float = Field(default=0.95, ge=0.0, le=1.0)

    # === Default Probability Curve ===
    pd_midpoint_score: float = Field(
        default=575.0,
        description="Display score at which the default probability is 50%",
    )
    pd_scale: float = Field(
        default=45.0,
        gt=0.0,
        description="Score points per unit of log-odds",
    )
    pd_floor: float = Field(default=0.01, ge=0.0, le=1.0)
    pd_ceiling: float = Field(default=0.99, ge=0.0, le=1.0)

    # === Instant Decision Policy ===
    auto_approve_threshold: int = Field(
        default=750,
        description="Minimum display score for automatic approval",
    )
    auto_decline_threshold: int = Field(
        default=500,
        description="Display score below which applications are declined",
    )
    approve_max_default_probability: float = Field(default=0.10, ge=0.0, le=1.0)
    decline_min_default_probability: float = Field(default=0.50, ge=0.0, le=1.0)
    max_auto_approve_amount: float = Field(
        default=100_000.0,
        gt=0.0,
        description="Instant decision ceiling; larger requests go to review",
    )

    # === Pre-qualification ===
    min_years_in_business: float = Field(default=1.0, ge=0.0)
    min_annual_revenue: float = Field(default=100_000.0, ge=0.0)
    max_debt_to_revenue: float = Field(default=2.0, gt=0.0)
    max_collections: int = Field(default=2, ge=0)

    # === Manual Review Priority ===
    review_high_priority_score: int = Field(default=700)
    review_high_priority_amount: float = Field(default=500_000.0)
    review_medium_priority_score: int = Field(default=600)

    # === Fraud ===
    fraud_reject_threshold: int = Field(
        default=50,
        ge=0,
        le=100,
        description="Fraud risk score above this marks the application fraudulent",
    )
    fraud_investigate_threshold: int = Field(
        default=30,
        ge=0,
        le=100,
        description="Fraud risk score above this requires manual verification",
    )

    # === Portfolio ===
    loss_given_default: float = Field(default=0.45, ge=0.0, le=1.0)
    portfolio_top_risks: int = Field(default=10, ge=0)

    # === Monitoring (display score deltas) ===
    monitor_escalate_delta: int = Field(default=-100)
    monitor_restructure_delta: int = Field(default=-60)
    monitor_review_delta: int = Field(default=-30)
    monitor_watch_delta: int = Field(default=-10)

    # === Interest Rate Policy ===
    interest_rate_tiers_json: str = Field(
        default='{"low": [6.5, 3.0], "medium": [8.5, 4.0], "high": [12.0, 5.0]}',
        description=(
            "Rate curve per risk level as JSON: {risk_level: [base_rate, spread]}. "
            "Rate = base + spread * (1 - score / score_ceiling). "
            "Risk levels without an entry receive no offer."
        ),
    )

    @field_validator("interest_rate_tiers_json")
    @classmethod
    def validate_rate_tiers_json(cls, v: str) -> str:
        """Validate that the rate table is parseable and well-formed."""
        try:
            tiers = json.loads(v)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}")
        if not isinstance(tiers, dict):
            raise ValueError("Rate tiers must be an object keyed by risk level")
        for level, tier in tiers.items():
            if level not in ("low", "medium", "high", "very_high"):
                raise ValueError(f"Unknown risk level: {level}")
            if not isinstance(tier, list) or len(tier) != 2:
                raise ValueError("Each tier must be [base_rate, spread]")
            base_rate, spread = tier
            if not all(isinstance(x, (int, float)) for x in tier):
                raise ValueError("Tier values must be numbers")
            if base_rate < 0 or spread < 0:
                raise ValueError(f"Rates cannot be negative: {tier}")
        return v

    @model_validator(mode="after")
    def validate_weights(self) -> "ScoringSettings":
        """Reject configurations where every factor weight is zero."""
        if sum(self.raw_weights.values()) <= 0:
            raise ValueError("At least one factor weight must be positive")
        if self.score_ceiling <= self.score_floor:
            raise ValueError("score_ceiling must be greater than score_floor")
        return self

    @property
    def raw_weights(self) -> Dict[str, float]:
        """Factor weights as configured."""
        return {name: getattr(self, f"weight_{name}") for name in FACTOR_NAMES}

    @property
    def normalized_weights(self) -> Dict[str, float]:
        """Factor weights rescaled so they sum to exactly 1.0."""
        raw = self.raw_weights
        total = sum(raw.values())
        return {name: weight / total for name, weight in raw.items()}

    @property
    def interest_rate_tiers(self) -> Dict[str, Tuple[float, float]]:
        """Interest rate curve parameters keyed by risk level."""
        tiers = json.loads(self.interest_rate_tiers_json)
        return {level: (float(tier[0]), float(tier[1])) for level, tier in tiers.items()}

    @property
    def score_span(self) -> int:
        return self.score_ceiling - self.score_floor


@lru_cache
def get_scoring_settings() -> ScoringSettings:
    """Get cached scoring settings instance."""
    return ScoringSettings()


scoring_settings = get_scoring_settings()
