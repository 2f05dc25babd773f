"""
Credit Assessor - AI-assisted credit scoring and decisioning service

A FastAPI-based microservice that scores business credit applications
from traditional and alternative data, makes instant lending decisions,
flags fraud, and analyzes and monitors loan portfolios.
"""

__version__ = "0.1.0"
