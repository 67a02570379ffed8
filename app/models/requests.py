"""Request bodies accepted by the gateway routes.

Field names follow the browser client's camelCase keys. Unknown keys are
ignored so older clients keep working.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GatewayRequest(BaseModel):
    """Common base for request schemas."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PlanRequest(GatewayRequest):
    """Idea to turn into a plan, with optional pitfalls and heuristics."""

    idea_text: str = Field(..., alias="ideaText", min_length=1)
    failure_tags: list[str] = Field(default_factory=list, alias="failureTags")
    heuristics: list[str] = Field(default_factory=list)


class RefineRequest(GatewayRequest):
    """Last coding prompt plus the steps that failed when it was used."""

    # Steps are free-form on the client; they are reduced to {id,label,reason} later.
    last_prompt: str = Field(..., alias="lastPrompt")
    failed_steps: Any = Field(default_factory=list, alias="failedSteps")
    file_tree: Any = Field(default=None, alias="fileTree")
    snippets: Any = None


class QuickEditRequest(GatewayRequest):
    """Selected code and what the user wants changed about it."""

    selection: str = Field(..., min_length=1)
    intent: str = Field(..., min_length=1)
