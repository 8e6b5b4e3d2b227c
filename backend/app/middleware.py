from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response

logger = logging.getLogger("app.requests")


async def log_requests(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Log a start line and an end line (status + duration) for every request."""

    method = request.method
    path = request.url.path
    start = time.perf_counter()
    logger.info("[%s] %s - Request started", method, path)

    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        logger.error("[%s] %s - Failed after %.2fms", method, path, elapsed_ms)
        raise

    elapsed_ms = (time.perf_counter() - start) * 1000.0
    logger.info("[%s] %s - Response: %d - Duration: %.2fms", method, path, response.status_code, elapsed_ms)
    return response
