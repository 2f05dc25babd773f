"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .application import (
    InvalidApplicationException,
    MissingApplicationDataException,
    ScoringException,
)

__all__ = [
    "DomainException",
    "InvalidApplicationException",
    "MissingApplicationDataException",
    "ScoringException",
]
