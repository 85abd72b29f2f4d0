"""
HRMS Backend — Employee Document Mapping
==========================================

What:  Converts between API schemas and documents in the `employees` collection.
How:   Plain functions; MongoDB has no enforced schema, so this module is the
       single place that knows the stored field names.

Stored document:
    {
        "_id":    ObjectId   (assigned by the driver on insert, immutable),
        "name":   str,
        "salary": float,
        "age":    float,
    }

Only the fields listed in MUTABLE_FIELDS are ever written by an update;
`_id` is never part of an update set.
"""

from typing import Any, Dict, Mapping

from hrms.schemas.employee import EmployeeRequest, EmployeeResponse

MUTABLE_FIELDS = ("name", "salary", "age")


def to_document(payload: EmployeeRequest) -> Dict[str, Any]:
    """Build an insertable document. Never carries an `_id`."""
    return {field: getattr(payload, field) for field in MUTABLE_FIELDS}


def to_update(payload: EmployeeRequest) -> Dict[str, Any]:
    """Build the `$set` update applied by PUT /employee/{id}."""
    return {"$set": to_document(payload)}


def from_document(document: Mapping[str, Any]) -> EmployeeResponse:
    """
    Build the API representation of a stored document.

    Absent or null fields decode to their zero value, since documents
    written outside this service may not carry all of them.
    """
    raw_id = document.get("_id")
    return EmployeeResponse(
        id=str(raw_id) if raw_id is not None else None,
        name=document.get("name") or "",
        salary=document.get("salary") or 0.0,
        age=document.get("age") or 0.0,
    )
