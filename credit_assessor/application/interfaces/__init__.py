"""
Application Interfaces (Ports)
"""

from .reports import ReportRenderer

__all__ = [
    "ReportRenderer",
]
