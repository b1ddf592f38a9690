from __future__ import annotations

from collections.abc import Callable

from fastapi import Request, Response

# The subset of helmet defaults that makes sense for a JSON API
SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}


async def security_headers_middleware(request: Request, call_next: Callable) -> Response:
    """Attach security headers to every response without overriding route-set values."""
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response
