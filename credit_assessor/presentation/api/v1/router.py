from fastapi import APIRouter

from .agent import agent_router
from .decision import decision_router, fraud_router
from .health import health_router
from .monitoring import monitoring_router
from .portfolio import portfolio_router
from .scoring import scoring_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(scoring_router, tags=["Scoring"])
router.include_router(decision_router, tags=["Decisions"])
router.include_router(fraud_router, tags=["Fraud"])
router.include_router(portfolio_router, tags=["Portfolio"])
router.include_router(monitoring_router, tags=["Monitoring"])
router.include_router(agent_router, tags=["Agent"])
