"""Response bodies returned by the gateway.

Shapes are fixed: values come from the model and vary, field names and types
do not.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool
    has_key: bool = Field(..., alias="hasKey")
    model: str


class ChecklistItem(BaseModel):
    id: str
    label: str


class PlanResponse(BaseModel):
    plan: str = ""
    checklist: list[ChecklistItem] = Field(default_factory=list)


class RefineResponse(BaseModel):
    updated_prompt: str
    reasons_for_changes: list[str] = Field(default_factory=list)
    additional_checks: list[str] = Field(default_factory=list)


class QuickEditResponse(BaseModel):
    patch_prompt: str


class ErrorResponse(BaseModel):
    """Error body shared by every failure path."""

    code: Literal["BAD_REQUEST", "KEY_INVALID", "RATE_LIMIT", "SERVER_ERROR"]
    message: str
