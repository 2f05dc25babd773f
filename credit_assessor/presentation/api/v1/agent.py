"""Agent API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from credit_assessor.application.dto import AgentOptions
from credit_assessor.application.services import CreditAssessorAgent
from credit_assessor.core.dependencies import get_credit_agent
from credit_assessor.presentation.schemas import (
    AgentExecuteRequestSchema,
    AgentExecuteResponseSchema,
)

agent_router = APIRouter(prefix="/agent")


@agent_router.post(
    "/execute",
    response_model=AgentExecuteResponseSchema,
    status_code=200,
    summary="Execute Agent Task",
    description="""
    Run a credit assessor task and return a Markdown response.

    Missing inputs return guidance instead of an error, and unknown task
    names fall back to the general overview.
    """,
)
async def execute_task(
    request: AgentExecuteRequestSchema,
    agent: Annotated[CreditAssessorAgent, Depends(get_credit_agent)],
) -> AgentExecuteResponseSchema:
    options = AgentOptions(
        application=request.application,
        applications=request.applications,
        current_financials=request.current_financials,
        current_banking=request.current_banking,
        current_alternative=request.current_alternative,
        current_credit=request.current_credit,
    )
    response = await agent.execute(request.task, options)
    return AgentExecuteResponseSchema.model_validate(response.to_dict())
