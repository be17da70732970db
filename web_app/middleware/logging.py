"""Request logging middleware."""

import logging
import time
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


# Polled by load balancers; only logged at DEBUG
QUIET_PATHS = frozenset({"/health"})


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with status and duration.

    Server errors are logged at WARNING, everything else at INFO.
    """

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger("shortener.web")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        path = request.url.path

        try:
            response = await call_next(request)
        except Exception:
            self.logger.exception(f"Unhandled error for {request.method} {path} from {client_ip}")
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        if path in QUIET_PATHS:
            level = logging.DEBUG
        elif response.status_code >= 500:
            level = logging.WARNING
        else:
            level = logging.INFO

        self.logger.log(
            level,
            f"{request.method} {path} -> {response.status_code} "
            f"({duration_ms:.1f}ms, client {client_ip})",
        )
        return response
