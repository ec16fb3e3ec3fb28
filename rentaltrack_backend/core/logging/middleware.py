"""
Request tracking middleware.
Tags every request with a transaction id that ends up on each log record.
"""

import logging
import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .context import generate_transaction_id, set_transaction_id

TRANSACTION_HEADER = "x-transaction-id"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Reuse the caller's transaction id (or make one) and echo it back."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        txn_id = request.headers.get(TRANSACTION_HEADER) or generate_transaction_id()
        set_transaction_id(txn_id)

        response = await call_next(request)
        response.headers[TRANSACTION_HEADER] = txn_id
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log one line per request with method, path, status and duration."""

    def __init__(self, app, logger: logging.Logger | None = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger("rentaltrack_backend.requests")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)

        self.logger.info(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
                "client_ip": request.client.host if request.client else "unknown",
            },
        )
        return response
