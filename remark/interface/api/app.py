"""FastAPI application."""

from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI, Request, Response, status

from remark.config import Settings
from remark.interface.api.errors import cors_headers, register_error_handlers
from remark.interface.api.routes import api, health
from remark.persistence.backend import StoreBackend
from remark.util.di.container import create_container, setup_di
from remark.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Missing store configuration fails startup, not the first request
    await app.state.dishka_container.get(StoreBackend)
    yield
    # Drains background like refreshes, then releases the store
    await app.state.dishka_container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to serve from (production container if None)
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Remark API",
        description="Comments, likes and users for static blog pages",
        version="0.1.0",
        lifespan=lifespan,
    )
    app_instance.state.settings = settings

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # Blog pages call from any origin; preflights never reach a route
    @app_instance.middleware("http")
    async def cors(request: Request, call_next) -> Response:
        headers = cors_headers(settings)
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_204_NO_CONTENT, headers=headers)
        response = await call_next(request)
        response.headers.update(headers)
        return response

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(api.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
