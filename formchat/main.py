"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from formchat.api.v1.conversation_router import router as conversation_router
from formchat.core.config import settings
from formchat.core.database import Base, engine
from formchat.core.exceptions import (
    AppException,
    app_exception_handler,
    validation_exception_handler,
)
from formchat.core.logging import configure_logging
from formchat.models import conversation, form  # noqa: F401
from formchat.schemas.response_schema import ApiResponse, success_response

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    configure_logging()
    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.app.env,
        llm_provider=settings.llm.provider,
    )
    if settings.app.is_development:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()
    logger.info("Shutting down application")


app = FastAPI(
    title=settings.app.name,
    description="Form-filling chat service backed by a chat completion model",
    version="0.1.0",
    lifespan=lifespan,
    debug=settings.app.debug,
)

# Errors render as {"success": false, "error": {...}}
app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.app.is_development else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=ApiResponse[dict])
async def health_check() -> dict:
    """Report liveness along with the configured model provider."""
    return success_response(
        {
            "status": "healthy",
            "app": settings.app.name,
            "llm_provider": settings.llm.provider,
        }
    )


# Register routers
app.include_router(conversation_router)


def run() -> None:
    """Serve the application with uvicorn."""
    uvicorn.run(
        "formchat.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.app.is_development,
    )
