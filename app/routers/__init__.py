"""API route handlers.

This module contains FastAPI routers for:
- Health check endpoint
- Plan, prompt refinement and quick-edit generation endpoints
"""

from app.routers.api import router

__all__ = ["router"]
