from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hostel_app.api.router import build_api_router
from hostel_app.config import Settings, get_settings, setup_logging
from hostel_app.core.context import AppContext, build_context
from hostel_app.core.logging import get_logger
from hostel_app.core.middleware import register_exception_handlers, register_middlewares
from hostel_app.db.init_db import init_db
from hostel_app.schemas.common import HealthResponse

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    context: Optional[AppContext] = None,
) -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Mounts the routers named in ``ENABLED_SERVICES`` under /api.

    A prebuilt ``context`` is used as is and left open on shutdown; otherwise
    one is built from settings and closed with the app.
    """
    settings = settings or (context.settings if context else get_settings())
    setup_logging(settings)

    owns_context = context is None
    app_context = context or build_context(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not settings.is_production():
            # Production schemas are managed outside the app
            init_db(app_context.database)
        yield
        if owns_context:
            app_context.close()

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.context = app_context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_middlewares(app)
    register_exception_handlers(app)

    app.include_router(build_api_router(settings.ENABLED_SERVICES), prefix="/api")

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    def health() -> HealthResponse:
        return HealthResponse(status="healthy", service=settings.APP_NAME)

    logger.info(
        f"{settings.APP_NAME} created",
        extra={"environment": settings.ENVIRONMENT, "services": settings.ENABLED_SERVICES},
    )
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("hostel_app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
