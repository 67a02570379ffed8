"""HTTP routes under ``/api``.

Handlers stay thin: request bodies are validated by the models, everything
else lives in :class:`~app.services.gateway.PromptGatewayService`.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.models import (
    ErrorResponse,
    HealthResponse,
    PlanRequest,
    PlanResponse,
    QuickEditRequest,
    QuickEditResponse,
    RefineRequest,
    RefineResponse,
)
from app.services.gateway import PromptGatewayService

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

router = APIRouter(prefix="/api", tags=["gateway"])


def get_gateway(request: Request) -> PromptGatewayService:
    return request.app.state.gateway


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def health_check(gateway: PromptGatewayService = Depends(get_gateway)):
    """Report whether an API key and model are configured.

    Returns 503 until both are set. Never contacts the upstream API.
    """
    body, ok = gateway.health()
    return JSONResponse(status_code=200 if ok else 503, content=body.model_dump(by_alias=True))


@router.post("/plan", response_model=PlanResponse, responses=ERROR_RESPONSES)
async def generate_plan(
    payload: PlanRequest, gateway: PromptGatewayService = Depends(get_gateway)
):
    """Turn an idea into a plan and a short checklist."""
    return await gateway.generate_plan(payload)


@router.post("/refine", response_model=RefineResponse, responses=ERROR_RESPONSES)
async def refine_prompt(
    payload: RefineRequest, gateway: PromptGatewayService = Depends(get_gateway)
):
    """Rewrite a coding prompt given the steps that failed."""
    return await gateway.refine_prompt(payload)


@router.post("/quick-edit", response_model=QuickEditResponse, responses=ERROR_RESPONSES)
async def quick_edit(
    payload: QuickEditRequest, gateway: PromptGatewayService = Depends(get_gateway)
):
    return await gateway.quick_edit(payload)
