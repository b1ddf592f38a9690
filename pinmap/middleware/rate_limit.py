from __future__ import annotations

import os
from collections.abc import Callable
from typing import TypedDict

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from limits import RateLimitItem
from limits import parse as parse_limit
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter

DEFAULT_READ_LIMIT = "60/minute"
DEFAULT_WRITE_LIMIT = "30/minute"
# Probes must never be throttled
_EXEMPT_PATHS = frozenset({"/healthz", "/readyz"})


class RateLimitInfo(TypedDict, total=False):
    method: str
    ip: str
    limit: str


def _client_ip(request: Request) -> str:
    # Prefer X-Forwarded-For if present (first hop), fall back to ASGI client
    xff = request.headers.get("x-forwarded-for")
    if xff:
        return xff.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "local"


_storage = MemoryStorage()
_rate = MovingWindowRateLimiter(_storage)


def _enabled() -> bool:
    # Enabled unless TESTING is set; RATE_LIMIT_ENABLED=1 forces it on
    if os.getenv("RATE_LIMIT_ENABLED") in {"1", "true", "TRUE"}:
        return True
    if os.getenv("TESTING"):
        return False
    return True


def _limit_for_method(method: str) -> str | None:
    m = method.upper()
    if m in {"GET", "HEAD"}:
        return os.getenv("RATE_LIMIT_READ", DEFAULT_READ_LIMIT)
    if m == "POST":
        return os.getenv("RATE_LIMIT_WRITE", DEFAULT_WRITE_LIMIT)
    # OPTIONS (CORS preflight) and others pass through
    return None


def reset_limits() -> None:
    _storage.reset()


def rate_limit_info(request: Request, limit_str: str) -> RateLimitInfo:
    return {"method": request.method.upper(), "ip": _client_ip(request), "limit": limit_str}


def rate_limited_response(info: RateLimitInfo) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={"error": "RateLimited", "message": "Too Many Requests", "detail": info},
    )


async def rate_limit_middleware(request: Request, call_next: Callable) -> Response:
    if not _enabled() or request.url.path in _EXEMPT_PATHS:
        return await call_next(request)

    limit_str = _limit_for_method(request.method)
    if not limit_str:
        return await call_next(request)

    key = f"ip:{_client_ip(request)}|m:{request.method.upper()}"
    limit: RateLimitItem = parse_limit(limit_str)

    if not _rate.hit(limit, key):
        info = rate_limit_info(request, limit_str)
        return rate_limited_response(info)

    response = await call_next(request)
    response.headers.setdefault("X-RateLimit-Limit", limit_str)
    return response
