"""Tests for the connection gateway — cleanup and error translation."""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import create_async_engine

from cvecatalog.core.database import ConnectionGateway, describe_store_error
from cvecatalog.core.errors import NotFound, StoreUnavailable


@pytest.mark.asyncio
async def test_release_is_idempotent(gateway):
    conn = await gateway.acquire()
    await gateway.release(conn)
    await gateway.release(conn)
    assert conn.closed
    assert gateway.released == 1


@pytest.mark.asyncio
async def test_connection_released_when_block_raises(gateway):
    with pytest.raises(NotFound):
        async with gateway.connection() as conn:
            captured = conn
            raise NotFound("CVE-2024-0001")
    assert captured.closed
    assert gateway.acquired == gateway.released == 1


@pytest.mark.asyncio
async def test_query_failure_becomes_store_unavailable(gateway):
    with pytest.raises(StoreUnavailable) as exc_info:
        async with gateway.connection() as conn:
            await conn.execute(text("SELECT secret_column FROM missing_table"))
    err = exc_info.value
    assert err.status_code == 500
    assert "missing_table" in err.error
    assert "SELECT" not in err.error
    assert gateway.released == 1


@pytest.mark.asyncio
async def test_acquire_failure_becomes_store_unavailable(settings):
    engine = create_async_engine("sqlite+aiosqlite:////nonexistent-dir/catalog.db")
    gw = ConnectionGateway(settings, engine=engine)
    try:
        with pytest.raises(StoreUnavailable) as exc_info:
            await gw.acquire()
        assert exc_info.value.message == "Error connecting to the database"
    finally:
        await gw.dispose()


def test_describe_store_error_drops_statement():
    exc = OperationalError("SELECT * FROM cve_data WHERE cve_id = ?", ("CVE-1",), Exception("boom"))
    assert describe_store_error(exc) == "boom"


def test_describe_os_error():
    assert describe_store_error(ConnectionRefusedError("Connection refused")) == "Connection refused"
