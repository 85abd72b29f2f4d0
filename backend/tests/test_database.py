"""
HRMS Backend — Connection Bootstrap Tests
===========================================

What:  Tests for MongoConnection, get_employee_store, and the startup lifespan.
How:   Patches pymongo's AsyncMongoClient; no MongoDB server is contacted.

What we test:
    ✅ Connect pings once and selects the configured database
    ✅ Timeouts are passed to the driver in milliseconds
    ✅ Unreachable server → DatabaseError and the client is closed
    ✅ Lifespan refuses to start when MongoDB is unreachable
    ✅ Lifespan skips MongoDB entirely when a store is injected
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from fastapi import FastAPI
from pymongo.errors import ServerSelectionTimeoutError

from hrms.database import MongoConnection, get_employee_store
from hrms.exceptions import DatabaseError


def make_client(ping_error=None):
    client = MagicMock()
    client.admin.command = AsyncMock(side_effect=ping_error)
    client.close = AsyncMock()
    return client


class TestMongoConnection:

    @pytest.mark.asyncio
    async def test_connect_success(self):
        client = make_client()
        with patch("hrms.database.AsyncMongoClient", return_value=client) as client_cls:
            connection = MongoConnection("mongodb://db:27017/x", "fiber-hrms", timeout_seconds=20)
            await connection.connect()

        client_cls.assert_called_once_with(
            "mongodb://db:27017/x",
            serverSelectionTimeoutMS=20000,
            connectTimeoutMS=20000,
        )
        client.admin.command.assert_awaited_once_with("ping")
        assert connection.is_connected
        assert connection.collection("employees") is client["fiber-hrms"]["employees"]

    @pytest.mark.asyncio
    async def test_connect_failure_raises_and_closes(self):
        client = make_client(ping_error=ServerSelectionTimeoutError("timed out"))
        with patch("hrms.database.AsyncMongoClient", return_value=client):
            connection = MongoConnection("mongodb://db:27017/x", "fiber-hrms")
            with pytest.raises(DatabaseError) as exc_info:
                await connection.connect()

        assert "timed out" in exc_info.value.context["original_error"]
        client.close.assert_awaited_once()
        assert not connection.is_connected

    def test_db_before_connect_raises(self):
        connection = MongoConnection("mongodb://db:27017/x", "fiber-hrms")

        with pytest.raises(DatabaseError):
            connection.collection("employees")

    @pytest.mark.asyncio
    async def test_ping_reports_failures(self):
        client = make_client()
        with patch("hrms.database.AsyncMongoClient", return_value=client):
            connection = MongoConnection("mongodb://db:27017/x", "fiber-hrms")
            await connection.connect()

        assert await connection.ping() is True
        client.admin.command.side_effect = ServerSelectionTimeoutError("gone")
        assert await connection.ping() is False

    @pytest.mark.asyncio
    async def test_ping_without_connection(self):
        connection = MongoConnection("mongodb://db:27017/x", "fiber-hrms")

        assert await connection.ping() is False

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        client = make_client()
        with patch("hrms.database.AsyncMongoClient", return_value=client):
            connection = MongoConnection("mongodb://db:27017/x", "fiber-hrms")
            await connection.connect()

        await connection.close()
        await connection.close()

        client.close.assert_awaited_once()
        assert not connection.is_connected


class TestGetEmployeeStore:

    def test_returns_attached_store(self):
        store = object()
        request = MagicMock()
        request.app.state.employee_store = store

        assert get_employee_store(request) is store

    def test_missing_store_is_database_error(self):
        request = MagicMock()
        request.app.state.employee_store = None

        with pytest.raises(DatabaseError):
            get_employee_store(request)


class TestLifespan:

    @pytest.mark.asyncio
    async def test_startup_fails_fast_when_mongo_unreachable(self):
        from hrms.main import lifespan

        app = FastAPI()
        app.state.employee_store = None
        client = make_client(ping_error=ServerSelectionTimeoutError("timed out"))

        with patch("hrms.database.AsyncMongoClient", return_value=client):
            with pytest.raises(DatabaseError):
                async with lifespan(app):
                    pass

        assert app.state.employee_store is None

    @pytest.mark.asyncio
    async def test_startup_attaches_mongo_store_and_closes_on_shutdown(self):
        from hrms.main import lifespan
        from hrms.services.mongo_store import MongoEmployeeStore

        app = FastAPI()
        app.state.employee_store = None
        client = make_client()

        with patch("hrms.database.AsyncMongoClient", return_value=client):
            async with lifespan(app):
                assert isinstance(app.state.employee_store, MongoEmployeeStore)

        client.close.assert_awaited_once()
        assert app.state.employee_store is None

    @pytest.mark.asyncio
    async def test_injected_store_skips_mongo(self, memory_store):
        from hrms.main import lifespan

        app = FastAPI()
        app.state.employee_store = memory_store

        with patch("hrms.database.AsyncMongoClient") as client_cls:
            async with lifespan(app):
                assert app.state.employee_store is memory_store

        client_cls.assert_not_called()
