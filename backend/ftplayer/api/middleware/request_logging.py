"""
Request Logging Middleware
Logs one line per request with its outcome and duration
"""
from typing import Callable
from fastapi import Request, Response
import logging
import time

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """
    Logs method, path, status and duration of every request.
    Client errors are logged as warnings, server errors as errors.
    A request whose handler raises is logged as a 500 before the
    exception is passed on.
    """

    def __init__(self, skip_paths=("/health",)):
        self.skip_paths = set(skip_paths)

    def _line(self, request: Request, status_code: int, started: float) -> str:
        duration_ms = (time.perf_counter() - started) * 1000
        client = request.client.host if request.client else "unknown"
        return (
            f"{request.method} {request.url.path} -> {status_code} "
            f"({duration_ms:.1f}ms, client {client})"
        )

    async def __call__(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(self._line(request, 500, started))
            raise

        if request.url.path in self.skip_paths:
            return response

        line = self._line(request, response.status_code, started)
        if response.status_code >= 500:
            logger.error(line)
        elif response.status_code >= 400:
            logger.warning(line)
        else:
            logger.info(line)

        return response
