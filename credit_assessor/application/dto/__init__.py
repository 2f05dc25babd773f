"""Data Transfer Objects for application layer."""

from .agent import AgentOptions, AgentResponse, CreditTask

__all__ = [
    "AgentOptions",
    "AgentResponse",
    "CreditTask",
]
