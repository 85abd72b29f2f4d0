"""
HRMS Backend — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (`uvicorn hrms.main:app`) or the `hrms` console script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────┐              │
    │  │ Req ID   │→│  Logging    │→│ CORS │              │
    │  └──────────┘ └─────────────┘ └──────┘              │
    │                                                     │
    │  Routes:                                            │
    │  ┌───────────────────────────────┐ ┌─────────────┐  │
    │  │ GET/POST /employee            │ │ GET /health │  │
    │  │ PUT/DELETE /employee/{id}     │ │             │  │
    │  └───────────────────────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Database→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Connect to MongoDB (bounded by MONGO_CONNECT_TIMEOUT); a failure aborts
       startup instead of serving a permanently broken API
    3. Attach a MongoEmployeeStore to app.state

    Shutdown:
    1. Close the MongoDB client

When create_app() is given an employee_store, the MongoDB bootstrap is
skipped entirely and that store serves every request.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hrms import __version__
from hrms.config import settings
from hrms.database import MongoConnection
from hrms.exceptions import (
    DatabaseError,
    HRMSError,
    NotFoundError,
    ValidationError,
)
from hrms.middleware.logging import RequestLoggingMiddleware
from hrms.middleware.request_id import RequestIDMiddleware, request_id_var
from hrms.routes import employees, health
from hrms.services.employee_store import EmployeeStore
from hrms.services.mongo_store import MongoEmployeeStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before the database connection.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that emit per-operation noise
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("HRMS Backend %s starting up...", __version__)

    connection: Optional[MongoConnection] = None
    if app.state.employee_store is None:
        connection = MongoConnection.from_settings(settings)
        try:
            await connection.connect()
        except DatabaseError:
            logger.error("MongoDB unreachable at startup; refusing to serve requests.")
            raise
        app.state.mongo = connection
        app.state.employee_store = MongoEmployeeStore(
            connection.collection(settings.mongo_collection),
            connection=connection,
        )

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("HRMS Backend shutting down...")
    if connection is not None:
        await connection.close()
        app.state.employee_store = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(
    status_code: int, code: str, message: str, request_id: Optional[str] = None
) -> JSONResponse:
    """Render the error envelope shared by every failure path."""
    rid = request_id if request_id is not None else request_id_var.get("")
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "request_id": rid,
            }
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the error envelope.

    Handler hierarchy:
        ValidationError / InvalidEmployeeIdError → 400
        RequestValidationError (body decode)     → 400
        NotFoundError                            → 404
        DatabaseError                            → 500 (generic message)
        HRMSError (base)                         → 500
        Exception (fallback)                     → 500
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Validation error: %s", exc.message)
        return error_response(400, exc.code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        message = format_validation_errors(exc)
        logger.warning("Malformed request body: %s", message)
        return error_response(400, ValidationError.code, message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(404, exc.code, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        # Driver details stay in the server log
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
        return error_response(500, exc.code, exc.message)

    @app.exception_handler(HRMSError)
    async def handle_app_error(request: Request, exc: HRMSError):
        logger.error("Application error: %s | Context: %s", exc.message, exc.context)
        return error_response(500, exc.code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        # Runs in ServerErrorMiddleware, outside RequestIDMiddleware: the
        # response never passes back through it, so the header is set here.
        rid = getattr(request.state, "request_id", "")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        response = error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again later.",
            request_id=rid,
        )
        if rid:
            response.headers["X-Request-ID"] = rid
        return response


def format_validation_errors(exc: RequestValidationError) -> str:
    """
    Flatten Pydantic's error list into one line.

    Example: "body.salary: Input should be a valid number, unable to parse string as a number"
    """
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        msg = err.get("msg", "invalid value")
        detail = (err.get("ctx") or {}).get("error")
        if detail and err.get("type") == "json_invalid":
            msg = f"{msg} ({detail})"
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Malformed request body"


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(employee_store: Optional[EmployeeStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        employee_store: Store to serve requests from. When None (production),
            the lifespan connects to MongoDB and builds a MongoEmployeeStore.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="HRMS API",
        description="CRUD service for employee records stored in MongoDB.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.employee_store = employee_store

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in REVERSE order of addition: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(employees.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Console-script entry point: serve `app` with uvicorn."""
    uvicorn.run(
        "hrms.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
