from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import AppError
from .logging_config import configure_logging
from .routers import summarize as summarize_router
from .routers import todos as todos_router
from .services import Services, build_services
from .settings import Settings, get_settings

openapi_tags = [
    {"name": "todos", "description": "CRUD operations over the hosted todos table."},
    {
        "name": "summary",
        "description": "Summarize all todos with a language model and post the result to Slack.",
    },
]


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Build the process-wide services on startup unless they were injected, and
    close the ones built here on shutdown.
    """
    owned: Optional[Services] = None
    if getattr(app.state, "services", None) is None:
        owned = build_services(app.state.settings)
        app.state.services = owned
    try:
        yield
    finally:
        if owned is not None:
            owned.close()
            app.state.services = None


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, services: Optional[Services] = None) -> FastAPI:
    """
    Create and configure the API application.

    Args:
        settings: Settings to use; read from the environment when omitted.
        services: Pre-built collaborators. When omitted they are created from
            settings during startup and closed at shutdown.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Todo Summary Backend",
        description="Todo CRUD over a hosted table plus an LLM summary posted to Slack.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=_lifespan,
    )
    app.state.settings = settings
    app.state.services = services

    # Configure CORS based on settings (CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Render taxonomy errors as {"error": message} with their status code."""
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Malformed bodies (not JSON, not an object, non-string text) are
        reported like a missing text field.

        Response format:
            {
                "error": "Text is required",
                "detail": [... pydantic/fastapi error details ...]
            }
        """
        return JSONResponse(
            status_code=400,
            content={"error": "Text is required", "detail": jsonable_encoder(exc.errors())},
        )

    app.include_router(todos_router.router)
    app.include_router(summarize_router.router)
    return app


app = create_app()
