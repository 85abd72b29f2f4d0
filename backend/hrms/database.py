"""
HRMS Backend — MongoDB Connection Bootstrap
=============================================

What:  Owns the single AsyncMongoClient used by the whole process.
How:   `MongoConnection.connect()` builds the client with bounded server
       selection / connect timeouts and pings the server once so an
       unreachable database is detected at startup rather than on the
       first request.
Who:   Constructed by the application lifespan (main.py); the resulting
       collection handle is wrapped in a MongoEmployeeStore and stored on
       `app.state`. Route handlers reach it through `get_employee_store`.
When:  Connected once at startup, closed once at shutdown.

Lifecycle:
    startup  → MongoConnection(...).connect()   (raises DatabaseError on failure)
    requests → connection.collection(...)        (shared by every request)
    shutdown → connection.close()

There is no reconnection logic and no pooling policy beyond what pymongo
does internally; concurrency safety of the shared client is delegated to
the driver.
"""

import logging
from typing import Optional

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from hrms.config import Settings
from hrms.exceptions import DatabaseError
from hrms.services.employee_store import EmployeeStore

logger = logging.getLogger(__name__)


class MongoConnection:
    """
    A connected MongoDB client plus the selected database.

    Attributes:
        uri:             Connection string handed to the driver
        db_name:         Database selected after connecting
        timeout_seconds: Upper bound on server selection and socket connect
    """

    def __init__(self, uri: str, db_name: str, timeout_seconds: int = 20):
        self.uri = uri
        self.db_name = db_name
        self.timeout_seconds = timeout_seconds
        self._client: Optional[AsyncMongoClient] = None
        self._db: Optional[AsyncDatabase] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoConnection":
        return cls(
            uri=settings.mongo_uri,
            db_name=settings.mongo_db_name,
            timeout_seconds=settings.mongo_connect_timeout,
        )

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    @property
    def db(self) -> AsyncDatabase:
        if self._db is None:
            raise DatabaseError(
                message="Database connection is not initialized",
                context={"db_name": self.db_name},
            )
        return self._db

    def collection(self, name: str) -> AsyncCollection:
        """Return a handle to `name` in the selected database."""
        return self.db[name]

    async def connect(self) -> None:
        """
        Open the client and verify the server answers a ping.

        Raises:
            DatabaseError: The server could not be reached within
                `timeout_seconds`, or the URI was rejected by the driver.
        """
        timeout_ms = self.timeout_seconds * 1000
        client: Optional[AsyncMongoClient] = None
        try:
            client = AsyncMongoClient(
                self.uri,
                serverSelectionTimeoutMS=timeout_ms,
                connectTimeoutMS=timeout_ms,
            )
            await client.admin.command("ping")
        except PyMongoError as e:
            logger.error("Could not connect to MongoDB at %s: %s", self.uri, str(e))
            if client is not None:
                await client.close()
            raise DatabaseError(
                message="Could not connect to the database",
                context={"uri": self.uri, "original_error": str(e)},
            ) from e

        self._client = client
        self._db = client[self.db_name]
        logger.info("Connected to MongoDB database '%s'", self.db_name)

    async def ping(self) -> bool:
        """Lightweight connectivity check used by GET /health."""
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning("MongoDB ping failed: %s", str(e))
            return False

    async def close(self) -> None:
        """Close the client. Safe to call when never connected."""
        if self._client is not None:
            await self._client.close()
            logger.info("MongoDB connection closed")
        self._client = None
        self._db = None


# ── Request Dependency ────────────────────────────────────────────────────
def get_employee_store(request: Request) -> EmployeeStore:
    """
    FastAPI dependency returning the store attached to the running app.

    Example usage in a route:
        @router.get("/employee")
        async def list_employees(store: EmployeeStore = Depends(get_employee_store)):
            ...

    Raises:
        DatabaseError: The app was started without a store (→ 500).
    """
    store = getattr(request.app.state, "employee_store", None)
    if store is None:
        raise DatabaseError(message="Database connection is not initialized")
    return store
