"""
HRMS Backend — MongoDB Employee Store
=======================================

What:  EmployeeStore implementation over a pymongo AsyncCollection.
How:   One driver call per operation; identifiers are bson ObjectIds.
Who:   Built by the application lifespan from MongoConnection.collection().

Driver calls:
    find_all      → collection.find({}).to_list()
    insert        → collection.insert_one(doc)
    find_by_id    → collection.find_one({"_id": oid})
    update_by_id  → collection.find_one_and_update({"_id": oid}, {"$set": ...},
                                                   return_document=AFTER)
    delete_by_id  → collection.delete_one({"_id": oid})
"""

import logging
from typing import List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection

from hrms.database import MongoConnection
from hrms.exceptions import InvalidEmployeeIdError
from hrms.models.employee import from_document, to_document, to_update
from hrms.schemas.employee import EmployeeRequest, EmployeeResponse
from hrms.services.employee_store import EmployeeStore

logger = logging.getLogger(__name__)


class MongoEmployeeStore(EmployeeStore):
    """
    Employee persistence backed by a single MongoDB collection.

    The collection handle is shared by every concurrent request; the
    driver's own connection pool provides the concurrency safety.
    """

    def __init__(
        self,
        collection: AsyncCollection,
        connection: Optional[MongoConnection] = None,
    ):
        self.collection = collection
        self.connection = connection

    def parse_id(self, raw_id: str) -> ObjectId:
        try:
            return ObjectId(raw_id)
        except (InvalidId, TypeError) as e:
            raise InvalidEmployeeIdError(raw_id) from e

    async def find_all(self) -> List[EmployeeResponse]:
        documents = await self.collection.find({}).to_list(length=None)
        return [from_document(doc) for doc in documents]

    async def insert(self, payload: EmployeeRequest) -> ObjectId:
        result = await self.collection.insert_one(to_document(payload))
        logger.debug("Inserted employee %s", result.inserted_id)
        return result.inserted_id

    async def find_by_id(self, employee_id: ObjectId) -> Optional[EmployeeResponse]:
        document = await self.collection.find_one({"_id": employee_id})
        if document is None:
            return None
        return from_document(document)

    async def update_by_id(
        self, employee_id: ObjectId, payload: EmployeeRequest
    ) -> Optional[EmployeeResponse]:
        document = await self.collection.find_one_and_update(
            {"_id": employee_id},
            to_update(payload),
            return_document=ReturnDocument.AFTER,
        )
        if document is None:
            return None
        return from_document(document)

    async def delete_by_id(self, employee_id: ObjectId) -> bool:
        result = await self.collection.delete_one({"_id": employee_id})
        return result.deleted_count > 0

    async def ping(self) -> bool:
        if self.connection is None:
            return True
        return await self.connection.ping()
