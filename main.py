"""Prompt Gateway Service - FastAPI Application Entry Point

A small backend proxy that keeps the OpenAI API key on the server. The browser
client posts plan, refine and quick-edit requests here; the service forwards
them to the chat completions API and returns fixed-shape JSON.
"""

import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.routers import router
from app.services import CompletionClient, PromptGatewayService
from app.utils.errors import ErrorCode, GatewayError
from config import Settings

logger = logging.getLogger("prompt_gateway")


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    settings: Settings = app.state.settings

    # Startup
    logger.info(
        "Starting Prompt Gateway Service",
        extra={"environment": settings.environment, "port": settings.port},
    )
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Model: {settings.openai_model}")
    logger.info(f"Log Level: {settings.log_level}")
    if not settings.has_api_key:
        logger.error("OPENAI_API_KEY is missing or empty. /api/health will report unavailable until set.")
    if not settings.has_model:
        logger.error("OPENAI_MODEL is missing or empty. /api/health will report unavailable until set.")

    yield

    # Shutdown
    logger.info("Shutting down Prompt Gateway Service")
    if app.state.completion is not None:
        await app.state.completion.close()


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Request body is not valid JSON"
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    if not loc:
        return "Request body must be a JSON object"
    field = ".".join(loc)
    if first.get("type") == "missing":
        return f"{field} is required"
    return f"{field}: {first.get('msg', 'invalid value')}"


def create_app(settings: Settings, completion: CompletionClient | None = None) -> FastAPI:
    """Build the FastAPI application for the given settings.

    ``completion`` overrides the upstream client; by default one is built
    from ``settings`` (or none at all when the API key is empty).
    """
    configure_logging(settings)

    app = FastAPI(
        title="Prompt Gateway Service",
        description="Keeps the AI API key server-side and shapes model output for the browser client",
        version="0.1.0",
        lifespan=lifespan,
    )

    if completion is None:
        completion = CompletionClient.from_settings(settings)
    app.state.settings = settings
    app.state.completion = completion
    app.state.gateway = PromptGatewayService(settings, completion)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        """Reject oversized bodies before any handler runs."""
        length = request.headers.get("content-length")
        if length is not None and length.isdigit():
            too_large = int(length) > settings.max_body_bytes
        else:
            # Chunked uploads carry no length header; the body is cached for the handler.
            too_large = len(await request.body()) > settings.max_body_bytes
        if too_large:
            return JSONResponse(
                status_code=413,
                content={"code": ErrorCode.BAD_REQUEST.value, "message": "Request body too large"},
            )
        return await call_next(request)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log one line per request; bodies, prompts and keys are never logged."""
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        outcome = "ok" if response.status_code < 400 else "error"
        logger.info(
            f"{request.url.path} {outcome} status={response.status_code} "
            f"model={settings.openai_model} {elapsed_ms}ms"
        )
        return response

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"code": ErrorCode.BAD_REQUEST.value, "message": _validation_message(exc)},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled errors.

        Logs the error and returns the generic SERVER_ERROR body.
        Never exposes internal error details to clients.
        """
        logger.error(
            f"Unhandled exception: {type(exc).__name__}",
            extra={
                "path": request.url.path,
                "method": request.method,
            },
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=GatewayError(ErrorCode.SERVER_ERROR).to_dict(),
        )

    app.include_router(router)
    return app


settings = Settings()
app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
