"""
HRMS Backend — Pydantic Request/Response Schemas
==================================================

What:  Pydantic models defining the JSON contract of the employee API.
How:   FastAPI validates request bodies against EmployeeRequest and
       serializes EmployeeResponse / ErrorResponse / HealthResponse.
Who:   Used by route handlers, the employee service, and exception handlers.

Employee JSON shape:
    {"id": "<ObjectId hex>", "name": "Ann", "salary": 5000.0, "age": 30.0}

`id` is omitted when empty and never accepted from the client: the
request model does not declare it, so a supplied value is dropped.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class EmployeeRequest(BaseModel):
    """
    Body of POST /employee and PUT /employee/{id}.

    Missing fields take their zero value. Numeric strings are coerced to
    floats by Pydantic's lax mode. NaN and infinities (including overflowing
    literals such as 1e400) are rejected: they cannot be serialized back as
    JSON numbers.
    """
    name: str = Field(default="", description="Employee name")
    salary: float = Field(default=0.0, description="Salary")
    age: float = Field(default=0.0, description="Age")

    model_config = {"extra": "ignore", "allow_inf_nan": False}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class EmployeeResponse(BaseModel):
    """A persisted employee record as returned by every read path."""
    id: Optional[str] = Field(
        default=None,
        description="Database-assigned identifier (24-char hex ObjectId)",
    )
    name: str = Field(description="Employee name")
    salary: float = Field(description="Salary")
    age: float = Field(description="Age")


class ErrorDetail(BaseModel):
    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class ErrorResponse(BaseModel):
    """
    Envelope used by every failure path.

    Example:
        {
            "error": {
                "code": "not_found",
                "message": "employee with ID '65f0...' was not found",
                "request_id": "a1b2c3d4"
            }
        }
    """
    error: ErrorDetail


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
