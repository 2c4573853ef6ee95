"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from openai import OpenAIError
from supabase import AuthError, PostgrestAPIError, StorageException

from culinary_studio.api.auth import router as auth_router
from culinary_studio.api.chat import router as chat_router
from culinary_studio.api.encyclopedia import router as encyclopedia_router
from culinary_studio.api.food_cost import router as food_cost_router
from culinary_studio.api.news import router as news_router
from culinary_studio.api.pairings import router as pairings_router
from culinary_studio.api.prices import router as prices_router
from culinary_studio.api.profile import router as profile_router
from culinary_studio.api.projects import router as projects_router
from culinary_studio.api.recipes import router as recipes_router
from culinary_studio.api.social import router as social_router
from culinary_studio.app_logging import configure_logging
from culinary_studio.config import parse_allowed_origins
from culinary_studio.containers import AppContainer
from culinary_studio.errors import StudioError

_UPSTREAM_ERRORS = (PostgrestAPIError, StorageException, OpenAIError, RuntimeError)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            app.state.container.session_manager.start()
        except AuthError:
            logger.exception("Failed to restore the auth session")
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Culinary Studio", lifespan=lifespan)
    app.state.container = container

    allowed_origins = parse_allowed_origins(container.settings.cors_allowed_origins)
    if allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(StudioError)
    async def studio_error_handler(_: Request, exc: StudioError) -> JSONResponse:
        return JSONResponse(
            status_code=int(exc.status_code), content={"detail": exc.message}
        )

    @app.exception_handler(AuthError)
    async def auth_error_handler(_: Request, exc: AuthError) -> JSONResponse:
        return JSONResponse(status_code=401, content={"detail": exc.message})

    for error_type in _UPSTREAM_ERRORS:

        @app.exception_handler(error_type)
        async def upstream_error_handler(
            request: Request, exc: Exception
        ) -> JSONResponse:
            logger.error(
                "Upstream failure on %s %s: %s",
                request.method,
                request.url.path,
                _error_message(exc),
            )
            return JSONResponse(
                status_code=502, content={"detail": _error_message(exc)}
            )

    for router in (
        auth_router,
        profile_router,
        recipes_router,
        projects_router,
        pairings_router,
        food_cost_router,
        prices_router,
        social_router,
        encyclopedia_router,
        chat_router,
        news_router,
    ):
        app.include_router(router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _error_message(exc: Exception) -> str:
    message = getattr(exc, "message", None)
    return message if isinstance(message, str) and message else str(exc)
