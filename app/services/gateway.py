"""Prompt gateway: builds prompts, calls upstream, shapes the replies.

Each operation validates its configuration, sends one completion request and
coerces whatever comes back into the route's response model. Malformed model
output never surfaces as an error.
"""

import json
import logging

from app.models import (
    ChecklistItem,
    HealthResponse,
    PlanRequest,
    PlanResponse,
    QuickEditRequest,
    QuickEditResponse,
    RefineRequest,
    RefineResponse,
)
from app.services.completion import CompletionClient
from app.utils.coercion import (
    coerce_field,
    coerce_str_list,
    parse_json_object,
    stringify,
    truncate,
)
from app.utils.errors import ErrorCode, GatewayError, map_upstream_error
from config import Settings

logger = logging.getLogger(__name__)

PLAN_SYSTEM_PROMPT = (
    "You are an assistant that turns a product idea into a concise implementation plan "
    "and a short checklist of concrete steps. Keep it terse and actionable."
)
REFINE_SYSTEM_PROMPT = (
    "You improve a coding prompt based on failed steps and context. Output strict JSON with "
    "fields: updated_prompt (string), reasons_for_changes (array of strings), "
    "additional_checks (array of strings). Keep concise."
)
QUICK_EDIT_SYSTEM_PROMPT = (
    "You generate a tiny patch instruction for code editors. "
    "Output JSON { patch_prompt: string } only."
)

PLAN_TEMPERATURE = 0.4
REFINE_TEMPERATURE = 0.3
QUICK_EDIT_TEMPERATURE = 0.5

MAX_PLAN_HINTS = 8
MAX_FAILED_STEPS = 12
MAX_LAST_PROMPT_CHARS = 4000
MAX_SELECTION_CHARS = 1200
MAX_INTENT_CHARS = 200

UNPARSEABLE_PLAN = "Unable to parse plan"
OMITTED_MARKER = "[omitted for brevity]"


class PromptGatewayService:
    """Route logic for the gateway, independent of the HTTP layer."""

    def __init__(self, settings: Settings, completion: CompletionClient | None):
        self.settings = settings
        self.completion = completion

    def health(self) -> tuple[HealthResponse, bool]:
        """Report configuration state without calling upstream."""
        has_key = self.settings.has_api_key
        ok = has_key and self.settings.has_model
        return HealthResponse(ok=ok, has_key=has_key, model=self.settings.openai_model), ok

    async def generate_plan(self, request: PlanRequest) -> PlanResponse:
        failure_tags = ", ".join(request.failure_tags[:MAX_PLAN_HINTS]) or "none"
        heuristics = ", ".join(request.heuristics[:MAX_PLAN_HINTS]) or "none"
        user = (
            f"Idea:\n{request.idea_text}\n\n"
            f"Consider known pitfalls: {failure_tags}.\n"
            f"Heuristics to apply: {heuristics}.\n"
            "Return strict JSON with fields: plan (string), checklist (array of items {id,label}). "
            "Keep checklist between 4 and 8 items."
        )

        text = await self._complete(PLAN_SYSTEM_PROMPT, user, PLAN_TEMPERATURE)
        data = parse_json_object(text, {"plan": UNPARSEABLE_PLAN, "checklist": []})

        checklist = []
        for position, item in enumerate(coerce_field(data, "checklist", list, []), start=1):
            if not isinstance(item, dict):
                continue
            raw_id = item.get("id")
            label = stringify(item.get("label"))
            if not label:
                continue
            checklist.append(
                ChecklistItem(id=stringify(position if raw_id is None else raw_id), label=label)
            )

        return PlanResponse(plan=coerce_field(data, "plan", str, ""), checklist=checklist)

    async def refine_prompt(self, request: RefineRequest) -> RefineResponse:
        steps = request.failed_steps if isinstance(request.failed_steps, list) else []
        payload = {
            "failedSteps": [_reduce_step(step) for step in steps[:MAX_FAILED_STEPS]],
            "lastPrompt": truncate(request.last_prompt, MAX_LAST_PROMPT_CHARS),
        }
        # Only presence is forwarded; file contents never leave the gateway.
        if _is_present(request.file_tree):
            payload["fileTree"] = OMITTED_MARKER
        if _is_present(request.snippets):
            payload["snippets"] = OMITTED_MARKER

        user = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
        text = await self._complete(REFINE_SYSTEM_PROMPT, user, REFINE_TEMPERATURE)
        data = parse_json_object(
            text,
            {
                "updated_prompt": request.last_prompt,
                "reasons_for_changes": [],
                "additional_checks": [],
            },
        )

        return RefineResponse(
            updated_prompt=coerce_field(data, "updated_prompt", str, request.last_prompt),
            reasons_for_changes=coerce_str_list(data.get("reasons_for_changes")),
            additional_checks=coerce_str_list(data.get("additional_checks")),
        )

    async def quick_edit(self, request: QuickEditRequest) -> QuickEditResponse:
        user = (
            f"Selection:\n{request.selection[:MAX_SELECTION_CHARS]}\n"
            f"Intent: {request.intent[:MAX_INTENT_CHARS]}"
        )
        text = await self._complete(QUICK_EDIT_SYSTEM_PROMPT, user, QUICK_EDIT_TEMPERATURE)
        data = parse_json_object(text, {})
        fallback = f"Edit the selection to satisfy: {request.intent}"
        return QuickEditResponse(patch_prompt=coerce_field(data, "patch_prompt", str, fallback))

    async def _complete(self, system: str, user: str, temperature: float) -> str:
        if not self.settings.has_api_key or self.completion is None:
            raise GatewayError(ErrorCode.KEY_INVALID)
        try:
            return await self.completion.complete_json(system, user, temperature)
        except Exception as exc:
            raise map_upstream_error(exc) from exc


def _is_present(value: object) -> bool:
    """Whether the client sent real context; empty objects and lists count."""
    if value is None or value is False or value == "":
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
        return False
    return True


def _reduce_step(step: object) -> dict[str, str]:
    source = step if isinstance(step, dict) else {}
    return {
        "id": stringify(source.get("id")),
        "label": stringify(source.get("label")),
        "reason": stringify(source.get("reason")),
    }
