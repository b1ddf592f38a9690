from __future__ import annotations

import time
import uuid
from collections.abc import Callable

import sentry_sdk
import structlog
from fastapi import Request, Response

REQUEST_ID_HEADER = "X-Request-ID"


def _client_ip(request: Request) -> str:
    return (request.client.host if request.client else None) or "-"


def _tag_sentry_scope(rid: str, request: Request) -> None:
    try:
        sentry_sdk.set_tag("request_id", rid)
        sentry_sdk.set_tag("path", request.url.path)
        sentry_sdk.set_tag("method", request.method)
    except Exception:
        # Never let Sentry instrumentation break request processing
        pass


def _log_access(request: Request, rid: str, status: int, start_ns: int, *, failed: bool) -> None:
    duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000.0
    fields = dict(
        request_id=rid,
        path=request.url.path,
        method=request.method,
        status=status,
        duration_ms=round(duration_ms, 3),
        client_ip=_client_ip(request),
    )
    logger = structlog.get_logger(__name__)
    if failed:
        logger.error("http_request", exc_info=True, **fields)
    else:
        logger.info("http_request", **fields)


async def request_id_middleware(request: Request, call_next: Callable) -> Response:
    """Attach/propagate Request-ID and emit one structured access log line.

    - Inbound X-Request-ID wins; a UUID4 is generated otherwise
    - request_id/path/method are bound to contextvars so store logs carry them
    - The response always carries X-Request-ID
    """
    rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    structlog.contextvars.bind_contextvars(
        request_id=rid, path=request.url.path, method=request.method
    )
    _tag_sentry_scope(rid, request)

    start_ns = time.perf_counter_ns()
    try:
        response = await call_next(request)
    except Exception:
        _log_access(request, rid, 500, start_ns, failed=True)
        structlog.contextvars.clear_contextvars()
        raise

    _log_access(request, rid, response.status_code, start_ns, failed=False)
    response.headers[REQUEST_ID_HEADER] = rid
    # Clear per-request bindings to avoid leakage across tasks
    structlog.contextvars.clear_contextvars()
    return response
