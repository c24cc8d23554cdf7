"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fitness_coach.api.admin import router as admin_router
from fitness_coach.api.exercise_logs import router as exercise_router
from fitness_coach.api.nutrition import router as nutrition_router
from fitness_coach.api.plans import router as plans_router
from fitness_coach.api.progress import router as progress_router
from fitness_coach.api.stats import router as stats_router
from fitness_coach.app_logging import configure_logging
from fitness_coach.containers import AppContainer
from fitness_coach.domain.errors import FitnessCoachError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(progress_router)
    app.include_router(exercise_router)
    app.include_router(nutrition_router)
    app.include_router(plans_router)
    app.include_router(stats_router)
    app.include_router(admin_router)

    @app.exception_handler(FitnessCoachError)
    async def handle_app_error(
        request: Request, exc: FitnessCoachError
    ) -> JSONResponse:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc)},
        )

    @app.exception_handler(HTTPException)
    async def handle_http_error(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else None
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "message": message or "Invalid request"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
