"""Business logic services.

This module contains service classes for:
- Upstream chat completion calls (one shared client)
- Prompt construction and response shaping per route
"""

from app.services.completion import CompletionClient
from app.services.gateway import PromptGatewayService

__all__ = ["CompletionClient", "PromptGatewayService"]
