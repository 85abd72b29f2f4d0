"""
HRMS Backend — Request Logging Middleware
===========================================

What:  One access log line per HTTP request.
How:   Measures the time spent in the downstream app and logs method, path,
       status, duration, request ID, client IP, and for /employee/{id}
       routes the targeted employee id.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Example:
    PUT /employee/65f1c0ffee00000000000001 404 1.3ms [a1b2c3d4] employee=65f1c0ffee00000000000001 from 10.0.0.7

Log level follows the status class:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Request bodies are never logged (employee salaries are personal data).
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from hrms.middleware.request_id import request_id_var

logger = logging.getLogger("hrms.access")

EMPLOYEE_PATH_PREFIX = "/employee/"


def employee_id_from_path(path: str) -> Optional[str]:
    """The raw `{id}` segment of /employee/{id}, or None for other paths."""
    if not path.startswith(EMPLOYEE_PATH_PREFIX):
        return None
    raw_id = path[len(EMPLOYEE_PATH_PREFIX):].strip("/")
    return raw_id or None


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one access line per employee API request."""

    # Polled every few seconds; logging them drowns out real traffic
    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        client_ip = request.client.host if request.client else "unknown"
        employee_id = employee_id_from_path(path)
        rid = request_id_var.get("")
        target = f" employee={employee_id}" if employee_id else ""

        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms [%s]%s from %s",
            request.method,
            path,
            response.status_code,
            duration_ms,
            rid,
            target,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
                "employee_id": employee_id,
                "client_ip": client_ip,
            },
        )
        return response
