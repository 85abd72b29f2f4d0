"""
HRMS Backend — Employee Route Handlers
========================================

What:  The four /employee routes.
How:   Each handler takes the body/path id, delegates to EmployeeService with
       the injected EmployeeStore, and returns JSON. Failures are raised as
       HRMSError subclasses and rendered by the global exception handlers.

Route Inventory:
    GET    /employee        → 200 [employee, ...]
    POST   /employee        → 201 employee          (400, 500)
    PUT    /employee/{id}   → 200 employee          (400, 404, 500)
    DELETE /employee/{id}   → 200 empty body        (400, 404, 500)
"""

from typing import List

from fastapi import APIRouter, Depends, Response

from hrms.database import get_employee_store
from hrms.schemas.employee import EmployeeRequest, EmployeeResponse, ErrorResponse
from hrms.services.employee_service import employee_service
from hrms.services.employee_store import EmployeeStore

router = APIRouter(prefix="/employee", tags=["Employees"])


@router.get(
    "",
    response_model=List[EmployeeResponse],
    response_model_exclude_none=True,
    responses={500: {"description": "Database error", "model": ErrorResponse}},
    summary="List all employees",
)
async def list_employees(
    store: EmployeeStore = Depends(get_employee_store),
) -> List[EmployeeResponse]:
    return await employee_service.list_employees(store)


@router.post(
    "",
    status_code=201,
    response_model=EmployeeResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Malformed body", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Create an employee",
    description="Any `id` in the body is ignored; the database assigns one.",
)
async def create_employee(
    payload: EmployeeRequest,
    store: EmployeeStore = Depends(get_employee_store),
) -> EmployeeResponse:
    return await employee_service.create_employee(store, payload)


@router.put(
    "/{employee_id}",
    response_model=EmployeeResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Invalid id or malformed body", "model": ErrorResponse},
        404: {"description": "Employee not found", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Update an employee's name, salary and age",
)
async def update_employee(
    employee_id: str,
    payload: EmployeeRequest,
    store: EmployeeStore = Depends(get_employee_store),
) -> EmployeeResponse:
    """
    Returns the record as stored after the update. The path id is the only
    identifier honoured; the body cannot change it.
    """
    return await employee_service.update_employee(store, employee_id, payload)


@router.delete(
    "/{employee_id}",
    status_code=200,
    response_class=Response,
    responses={
        400: {"description": "Invalid id", "model": ErrorResponse},
        404: {"description": "Employee not found", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Delete an employee",
)
async def delete_employee(
    employee_id: str,
    store: EmployeeStore = Depends(get_employee_store),
) -> Response:
    await employee_service.delete_employee(store, employee_id)
    return Response(status_code=200)
