"""Pydantic models for request/response validation.

This module contains data models used for:
- API request validation
- API response serialization
"""

from app.models.requests import PlanRequest, QuickEditRequest, RefineRequest
from app.models.responses import (
    ChecklistItem,
    ErrorResponse,
    HealthResponse,
    PlanResponse,
    QuickEditResponse,
    RefineResponse,
)

__all__ = [
    "ChecklistItem",
    "ErrorResponse",
    "HealthResponse",
    "PlanRequest",
    "PlanResponse",
    "QuickEditRequest",
    "QuickEditResponse",
    "RefineRequest",
    "RefineResponse",
]
