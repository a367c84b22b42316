"""HTTP middleware: body size limit, per-IP rate limiting and security headers."""

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse

from devfolio.config import get_settings
from devfolio.services.realtime import get_async_redis

logger = logging.getLogger(__name__)
settings = get_settings()

CallNext = Callable[[Request], Awaitable[Response]]

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    """Error envelope shared by middleware and exception handlers."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


async def limit_body_size(request: Request, call_next: CallNext) -> Response:
    """Reject requests whose declared body exceeds the configured limit."""
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > settings.max_request_bytes:
        return error_response(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, "Request entity too large")
    return await call_next(request)


def rate_limit_key(client_ip: str, now: float | None = None) -> str:
    """Redis key of the fixed window `now` falls into."""
    window = int((now if now is not None else time.time()) // settings.rate_limit_window_seconds)
    return f"ratelimit:{client_ip}:{window}"


async def rate_limit(request: Request, call_next: CallNext) -> Response:
    """Fixed-window request counter per client IP on /api/ routes.

    The limiter fails open: if Redis is unreachable the request is served.
    """
    if not settings.rate_limit_enabled or not request.url.path.startswith("/api/"):
        return await call_next(request)

    client_ip = request.client.host if request.client else "unknown"
    key = rate_limit_key(client_ip)
    try:
        redis_client = get_async_redis()
        count = await redis_client.incr(key)
        if count == 1:
            await redis_client.expire(key, settings.rate_limit_window_seconds)
    except Exception as e:
        logger.warning(f"Rate limiter unavailable, allowing request: {e}")
        return await call_next(request)

    limit = settings.rate_limit_requests
    if count > limit:
        logger.info(f"Rate limit exceeded for {client_ip}")
        return error_response(
            status.HTTP_429_TOO_MANY_REQUESTS,
            RATE_LIMIT_MESSAGE,
            headers={"X-RateLimit-Limit": str(limit), "X-RateLimit-Remaining": "0"},
        )

    response = await call_next(request)
    response.headers["X-RateLimit-Limit"] = str(limit)
    response.headers["X-RateLimit-Remaining"] = str(limit - count)
    return response


async def security_headers(request: Request, call_next: CallNext) -> Response:
    """Attach standard hardening headers to every response."""
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    if settings.is_production:
        response.headers["Strict-Transport-Security"] = "max-age=15552000; includeSubDomains"
    return response
