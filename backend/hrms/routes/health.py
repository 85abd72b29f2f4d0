"""
HRMS Backend — Health Check Route
===================================

What:  GET /health for container and load balancer health checks.
How:   Pings MongoDB through the active EmployeeStore and reports uptime.
When:  Polled periodically; skipped by the request logging middleware.

Status levels:
    - healthy:   database answered the ping (HTTP 200)
    - unhealthy: database unreachable or not initialized (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from hrms import __version__
from hrms.schemas.employee import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request):
    db_status = "connected"
    overall = "healthy"

    store = getattr(request.app.state, "employee_store", None)
    if store is None or not await store.ping():
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable")

    body = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return JSONResponse(
        status_code=200 if overall == "healthy" else 503,
        content=body.model_dump(),
    )
