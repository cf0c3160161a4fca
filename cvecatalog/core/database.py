"""Connection gateway — the only place that opens and closes store connections."""

from __future__ import annotations

import ssl
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError, StatementError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from cvecatalog.core.config import Settings, get_settings
from cvecatalog.core.errors import StoreUnavailable
from cvecatalog.core.logging import get_logger

logger = get_logger(__name__)

_STORE_ERRORS = (SQLAlchemyError, OSError)


def describe_store_error(exc: BaseException) -> str:
    """Return the driver's own message for *exc*.

    SQLAlchemy statement errors stringify with the SQL text and bound
    parameters appended; only the wrapped DBAPI message is kept.
    """
    if isinstance(exc, StatementError):
        return str(exc.orig) if exc.orig is not None else type(exc).__name__
    return str(exc) or type(exc).__name__


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    connect_args: dict[str, object] = {}
    if settings.db_ssl_root_cert:
        ctx = ssl.create_default_context(cafile=settings.db_ssl_root_cert)
        ctx.check_hostname = True
        ctx.verify_mode = ssl.CERT_REQUIRED
        connect_args["ssl"] = ctx
    return create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        pool_timeout=settings.db_pool_timeout,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


class ConnectionGateway:
    """Hands out connections to the catalog store and takes them back."""

    def __init__(self, settings: Settings, engine: AsyncEngine | None = None) -> None:
        self._settings = settings
        self._engine = engine if engine is not None else create_engine_from_settings(settings)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def acquire(self) -> AsyncConnection:
        try:
            conn = await self._engine.connect()
        except _STORE_ERRORS as exc:
            logger.error(
                "Database connection failed",
                database=self._settings.redacted_database_url,
                error=describe_store_error(exc),
            )
            raise StoreUnavailable(
                "Error connecting to the database", error=describe_store_error(exc)
            ) from exc
        logger.debug("Connection acquired")
        return conn

    async def release(self, conn: AsyncConnection) -> None:
        """Close *conn*. Safe to call more than once."""
        if conn.closed:
            return
        await conn.close()
        logger.debug("Connection released")

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[AsyncConnection]:
        """Yield a connection and release it on every exit path.

        Store failures raised inside the block surface as ``StoreUnavailable``.
        """
        conn = await self.acquire()
        try:
            yield conn
        except _STORE_ERRORS as exc:
            logger.error("Query execution failed", error=describe_store_error(exc))
            raise StoreUnavailable(error=describe_store_error(exc)) from exc
        finally:
            await self.release(conn)

    async def dispose(self) -> None:
        await self._engine.dispose()


_gateway: ConnectionGateway | None = None


def get_gateway() -> ConnectionGateway:
    """Return the process-wide gateway, creating it on first use."""
    global _gateway
    if _gateway is None:
        settings = get_settings()
        logger.info("Initializing connection gateway", database=settings.redacted_database_url)
        _gateway = ConnectionGateway(settings)
    return _gateway


async def close_gateway() -> None:
    global _gateway
    if _gateway is not None:
        await _gateway.dispose()
        _gateway = None
