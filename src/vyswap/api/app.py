"""FastAPI application factory.

``create_app`` is the composition root: it owns the settings and the
aggregator ``OnceCell`` and hands them to request handlers via ``app.state``.
"""

import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from vyswap.api.middleware import install_middleware
from vyswap.config import Settings, get_settings
from vyswap.errors import VyswapError
from vyswap.services.aggregator_service import AggregatorService, build_aggregator_service
from vyswap.utils.once import OnceCell

logger = logging.getLogger(__name__)


def install_exception_handlers(app: FastAPI) -> None:
    """Map every error to a ``{"error", "message"}`` JSON body."""

    @app.exception_handler(VyswapError)
    async def vyswap_error_handler(request: Request, exc: VyswapError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.title}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return JSONResponse(
            status_code=400,
            content={"error": "Bad Request", "message": details or "Invalid request"},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            content = {
                "error": "Not Found",
                "message": f"Route {request.method} {request.url.path} not found",
            }
        else:
            content = {"error": "HTTP Error", "message": str(exc.detail)}
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal Server Error", "message": str(exc) or "Unknown error"},
        )


def create_app(
    settings: Optional[Settings] = None,
    aggregator_cell: Optional[OnceCell[AggregatorService]] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to the cached environment settings)
        aggregator_cell: Pre-built aggregator cell (defaults to one that builds
            the service from ``settings`` on first use)
    """
    settings = settings or get_settings()
    if aggregator_cell is None:
        aggregator_cell = OnceCell(
            lambda: build_aggregator_service(settings), name="AggregatorService"
        )

    app = FastAPI(
        title="VyFinance Swap API",
        description="REST API for estimating swaps and listing pools on the VyFinance DEX",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.aggregator_cell = aggregator_cell
    app.state.started_at = time.monotonic()

    install_middleware(app)

    # CORS middleware
    origins = settings.allowed_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    install_exception_handlers(app)

    # Register routes
    from vyswap.api.routes import health
    from vyswap.web.controllers import swaps_router

    app.include_router(health.router, tags=["Health"])
    app.include_router(swaps_router)

    return app
