"""FastAPI application entry point."""

import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from policy_assistant import __version__
from policy_assistant.config import Settings, get_settings

# Import routers
from policy_assistant.routers import health, tags, titles

# Import middleware
from policy_assistant.middleware import logging_middleware, register_exception_handlers
from policy_assistant.utils.logger import configure_logging, get_logger

settings = get_settings()

# Configure logging early
configure_logging(log_level=settings.log_level, debug=settings.debug)
log = get_logger(__name__)


def configure_litellm(app_settings: Settings) -> None:
    """Set LiteLLM globals and wire Langfuse callbacks when enabled."""
    import litellm

    litellm.suppress_debug_info = True
    litellm.set_verbose = False

    if app_settings.langfuse_enabled:
        # LiteLLM's langfuse callback only reads credentials from the environment
        for env_name, value in (
            ("LANGFUSE_PUBLIC_KEY", app_settings.langfuse_public_key),
            ("LANGFUSE_SECRET_KEY", app_settings.langfuse_secret_key),
            ("LANGFUSE_HOST", app_settings.langfuse_host),
        ):
            if value:
                os.environ.setdefault(env_name, value)
        litellm.success_callback = ["langfuse"]
        litellm.failure_callback = ["langfuse"]
        log.info("langfuse_enabled", host=app_settings.langfuse_host)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    log.info("starting application", debug=settings.debug, log_level=settings.log_level)

    configure_litellm(settings)

    yield

    log.info("shutting down application")


app = FastAPI(
    title="Policy Assistant API",
    description="Conversation titles and tag suggestions for the voice policy assistant",
    version=__version__,
    lifespan=lifespan,
)

# Register exception handlers first
register_exception_handlers(app)

# CORS middleware (must be first in middleware stack)
_cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins or ["*"],
    allow_credentials=bool(_cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request logging middleware
app.middleware("http")(logging_middleware)

# Register routers
app.include_router(health.router, prefix="/api/v1", tags=["Health"])
app.include_router(titles.router, prefix="/api/v1", tags=["Titles"])
app.include_router(tags.router, prefix="/api/v1", tags=["Tags"])


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Policy Assistant API",
        "version": __version__,
        "features": [
            "Conversation title generation and regeneration",
            "Tag suggestions matched against the user's existing tags",
            "Multi-provider LLM support via LiteLLM",
            "Clerk session authentication",
        ],
        "endpoints": {
            "health": "/api/v1/health",
            "title": "/api/v1/conversations/title",
            "title_context": "/api/v1/conversations/title/context",
            "tag_suggestions": "/api/v1/tags/suggest",
            "tag_match": "/api/v1/tags/match",
        },
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "policy_assistant.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
