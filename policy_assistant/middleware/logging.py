"""Request logging middleware."""

import time
from typing import Awaitable, Callable

from fastapi import Request, Response

from policy_assistant.utils.logger import bind_request_id, clear_request_context, get_logger

log = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


async def logging_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Bind a request id, log the request outcome and echo the id back."""
    clear_request_context()
    request_id = bind_request_id(request.headers.get(REQUEST_ID_HEADER))
    start = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception:
        log.exception(
            "request failed",
            method=request.method,
            path=request.url.path,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        raise

    response.headers[REQUEST_ID_HEADER] = request_id
    log.info(
        "request completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - start) * 1000, 2),
    )
    return response
