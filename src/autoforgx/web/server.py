from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from autoforgx.app import App
from autoforgx.config import Config
from autoforgx.errors import StorageUnavailableError, UserError
from autoforgx.web.error_handlers import general_exception_handler, storage_error_handler, user_error_handler
from autoforgx.web.middleware import request_context_middleware
from autoforgx.web.openapi import set_custom_openapi
from autoforgx.web.routers import admin_router, auth_router, courses_router, profile_router, purchases_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """FastAPI application lifespan management."""
        app.state.app = app_instance
        app.state.config = config
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="AutoForgX API",
        lifespan=lifespan,
    )

    app.middleware("http")(request_context_middleware)

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Health check endpoint (at root level, outside /api)
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(auth_router, prefix="/api")
    app.include_router(courses_router, prefix="/api")
    app.include_router(purchases_router, prefix="/api")
    app.include_router(profile_router, prefix="/api")
    app.include_router(admin_router, prefix="/api")

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(StorageUnavailableError, storage_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
