"""
HRMS Backend — Abstract Employee Store Interface
==================================================

What:  Abstract base class for the persistence operations the API needs.
How:   MongoEmployeeStore implements it over an AsyncCollection; the test
       suite implements it in memory. The app factory accepts any instance.
Who:   Called by EmployeeService; injected into routes via get_employee_store.

Contract:
    - parse_id() converts a client-supplied string into the store's native
      identifier, raising InvalidEmployeeIdError without touching storage.
    - Every other method performs exactly one storage round trip.
    - Driver failures propagate unchanged (pymongo.errors.PyMongoError);
      EmployeeService translates them into DatabaseError.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from hrms.schemas.employee import EmployeeRequest, EmployeeResponse


class EmployeeStore(ABC):
    """Find-all, insert, find-by-id, update-by-id, delete-by-id over one collection."""

    @abstractmethod
    def parse_id(self, raw_id: str) -> Any:
        """
        Convert a path identifier into the native identifier type.

        Raises:
            InvalidEmployeeIdError: `raw_id` is not a well-formed identifier.
        """
        ...

    @abstractmethod
    async def find_all(self) -> List[EmployeeResponse]:
        """Every stored employee, in storage order. Empty list when none."""
        ...

    @abstractmethod
    async def insert(self, payload: EmployeeRequest) -> Any:
        """Persist a new employee and return the identifier storage assigned."""
        ...

    @abstractmethod
    async def find_by_id(self, employee_id: Any) -> Optional[EmployeeResponse]:
        ...

    @abstractmethod
    async def update_by_id(
        self, employee_id: Any, payload: EmployeeRequest
    ) -> Optional[EmployeeResponse]:
        """
        Atomically set name/salary/age on the matching employee.

        Returns:
            The employee as stored after the update, or None when no
            document matches `employee_id`.
        """
        ...

    @abstractmethod
    async def delete_by_id(self, employee_id: Any) -> bool:
        """Remove the matching employee. Returns False when nothing was deleted."""
        ...

    async def ping(self) -> bool:
        """Connectivity check for GET /health. Stores without a backend are always up."""
        return True
