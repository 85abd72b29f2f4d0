"""
HRMS Backend — Employee Service
=================================

What:  The list / create / update / delete operations behind /employee.
How:   Each method performs one store operation (create also re-reads the
       inserted record) and translates the outcome into a schema object or
       an application exception.
Who:   Called by route handlers in routes/employees.py.

Error translation:
    InvalidEmployeeIdError  → propagated as-is (400, raised before any DB call)
    store returns None/False → NotFoundError (404)
    pymongo.errors.PyMongoError → DatabaseError (500, driver text logged only)

Nothing is retried: the first failure short-circuits the operation.
"""

import logging
from typing import List

from pymongo.errors import PyMongoError

from hrms.exceptions import DatabaseError, NotFoundError
from hrms.schemas.employee import EmployeeRequest, EmployeeResponse
from hrms.services.employee_store import EmployeeStore

logger = logging.getLogger(__name__)


class EmployeeService:
    """
    Stateless operations over an EmployeeStore.

    The store is passed per call (injected into the route by FastAPI), so a
    single module-level instance serves every request.
    """

    async def list_employees(self, store: EmployeeStore) -> List[EmployeeResponse]:
        """
        Return every employee record.

        Returns:
            A list, empty (never None) when the collection is empty.

        Raises:
            DatabaseError: The find failed (→ 500)
        """
        try:
            return await store.find_all()
        except PyMongoError as e:
            logger.error("Database error listing employees: %s", str(e))
            raise DatabaseError(
                message="Could not retrieve employees. Please try again.",
                context={"original_error": str(e)},
            ) from e

    async def create_employee(
        self, store: EmployeeStore, payload: EmployeeRequest
    ) -> EmployeeResponse:
        """
        Insert a new employee and return it as stored.

        Workflow:
            1. insert (storage assigns the id; the payload never carries one)
            2. find_by_id on the new id
            3. return the re-read record

        Raises:
            DatabaseError: Insert or re-read failed, or the new record was
                gone before it could be re-read (→ 500)
        """
        try:
            new_id = await store.insert(payload)
            created = await store.find_by_id(new_id)
        except PyMongoError as e:
            logger.error("Database error creating employee: %s", str(e))
            raise DatabaseError(
                message="Could not create the employee. Please try again.",
                context={"original_error": str(e)},
            ) from e

        if created is None:
            logger.error("Employee %s vanished between insert and re-read", new_id)
            raise DatabaseError(
                message="The employee was created but could not be read back.",
                context={"employee_id": str(new_id)},
            )

        logger.info("Created employee %s", created.id)
        return created

    async def update_employee(
        self, store: EmployeeStore, raw_id: str, payload: EmployeeRequest
    ) -> EmployeeResponse:
        """
        Set name/salary/age on an existing employee.

        The response is the record as persisted by the find-and-update,
        not an echo of the request body.

        Raises:
            InvalidEmployeeIdError: `raw_id` is not an ObjectId (→ 400)
            NotFoundError: No employee has that id (→ 404)
            DatabaseError: The update failed (→ 500)
        """
        employee_id = store.parse_id(raw_id)
        try:
            updated = await store.update_by_id(employee_id, payload)
        except PyMongoError as e:
            logger.error("Database error updating employee %s: %s", raw_id, str(e))
            raise DatabaseError(
                message="Could not update the employee. Please try again.",
                context={"employee_id": raw_id, "original_error": str(e)},
            ) from e

        if updated is None:
            raise NotFoundError(resource="employee", resource_id=raw_id)

        logger.info("Updated employee %s", raw_id)
        return updated

    async def delete_employee(self, store: EmployeeStore, raw_id: str) -> None:
        """
        Remove an employee.

        Raises:
            InvalidEmployeeIdError: `raw_id` is not an ObjectId (→ 400)
            NotFoundError: Nothing was deleted (→ 404)
            DatabaseError: The delete failed (→ 500)
        """
        employee_id = store.parse_id(raw_id)
        try:
            deleted = await store.delete_by_id(employee_id)
        except PyMongoError as e:
            logger.error("Database error deleting employee %s: %s", raw_id, str(e))
            raise DatabaseError(
                message="Could not delete the employee. Please try again.",
                context={"employee_id": raw_id, "original_error": str(e)},
            ) from e

        if not deleted:
            raise NotFoundError(resource="employee", resource_id=raw_id)

        logger.info("Deleted employee %s", raw_id)


# ── Singleton Instance ────────────────────────────────────────────────────
employee_service = EmployeeService()
