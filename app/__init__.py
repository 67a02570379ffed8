"""Prompt Gateway Service Application Package.

This package contains the core application components:
- models: Pydantic models for request/response validation
- routers: API route handlers
- services: Upstream completion client and prompt gateway logic
- utils: Response coercion and error mapping helpers
"""

__version__ = "0.1.0"
