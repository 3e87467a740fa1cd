"""HTTP middleware: request logging and security headers."""

import logging
import time
import uuid

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Resource-Policy": "same-origin",
}


def install_middleware(app: FastAPI) -> None:
    """Register logging and security header middleware on ``app``."""

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = uuid.uuid4().hex[:12]
        start = time.perf_counter()

        logger.debug(
            f"[{request_id}] --> {request.method} {request.url.path} "
            f"query={dict(request.query_params)}"
        )
        response = await call_next(request)

        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Request-ID"] = request_id
        logger.info(
            f"[{request_id}] <-- {request.method} {request.url.path} "
            f"{response.status_code} ({duration_ms:.0f}ms)"
        )
        return response
