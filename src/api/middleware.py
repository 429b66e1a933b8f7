"""HTTP middleware: CORS, rate limiting, security headers and request logging."""

from __future__ import annotations

import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from configs.api_config import ApiConfig


SECURE_HEADERS = {
    "X-XSS-Protection": "1; mode=block",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
}


def install_middleware(app: FastAPI, config: ApiConfig) -> None:
    """Register every middleware the API runs with.

    :param app: Application to decorate.
    :param config: Settings deciding CORS origin, rate limit and request logging.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.cors_origin],
        allow_methods=["GET"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["Content-Length", "Content-Range"],
        allow_credentials=True,
    )

    if config.rate_limit:
        app.state.limiter = Limiter(key_func=get_remote_address, default_limits=[config.rate_limit])
        app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
        app.add_middleware(SlowAPIMiddleware)

    @app.middleware("http")
    async def secure_headers(request: Request, call_next):
        response = await call_next(request)
        for header, value in SECURE_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    if config.request_logging:
        @app.middleware("http")
        async def request_logger(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            service = getattr(request.app.state, "metrics_service", None)
            if service is not None:
                service.logger.debug(
                    f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)"
                )
            return response
