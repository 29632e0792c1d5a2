"""
Database connection manager for the publish status store.

One aiosqlite connection is shared by the API handlers and the background
publish pipelines. Every statement runs inside ``transaction()``, which holds
an asyncio lock for the whole BEGIN..COMMIT, so the lookup-then-write done by
the repository upsert can never interleave with another task.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import aiosqlite

from .schema import ADDED_COLUMNS, SCHEMA_SQL, TABLE_NAME

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Owns the status database connection and its transaction lock."""

    def __init__(self, db_path: Path, busy_timeout: float = 5.0):
        """
        Args:
            db_path: SQLite file; the parent directory is created on init()
            busy_timeout: Seconds to wait on a lock held by another process
        """
        self.db_path = Path(db_path)
        self.busy_timeout = busy_timeout
        self._connection: Optional[aiosqlite.Connection] = None
        self._initialized = False

        self._lock = asyncio.Lock()
        self._init_lock = asyncio.Lock()
        self._transaction_owner: Optional[asyncio.Task] = None

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def init(self):
        """Open the connection and create or upgrade the schema. Idempotent."""
        async with self._init_lock:
            if self._initialized:
                return

            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            connection = await aiosqlite.connect(str(self.db_path), timeout=self.busy_timeout)
            connection.row_factory = aiosqlite.Row
            try:
                await connection.executescript(SCHEMA_SQL)
                await self._add_missing_columns(connection)
                await connection.commit()
            except Exception:
                await connection.close()
                raise

            self._connection = connection
            self._initialized = True
            logger.info("Status database ready at %s", self.db_path)

    async def _add_missing_columns(self, connection: aiosqlite.Connection) -> None:
        # Files from releases before the error message columns existed
        cursor = await connection.execute(f"PRAGMA table_info({TABLE_NAME})")
        try:
            present = {str(row["name"]) for row in await cursor.fetchall()}
        finally:
            await cursor.close()

        for column, column_def in ADDED_COLUMNS:
            if column in present:
                continue
            try:
                await connection.execute(f"ALTER TABLE {TABLE_NAME} ADD COLUMN {column} {column_def}")
                logger.info("Added column %s.%s", TABLE_NAME, column)
            except aiosqlite.OperationalError as e:
                # Another process may have migrated the file first
                if "duplicate column" not in str(e).lower():
                    raise

    async def close(self):
        """Close the connection once the running transaction (if any) ends."""
        async with self._lock:
            if self._connection is not None:
                await self._connection.close()
            self._connection = None
            self._initialized = False

    @property
    def connection(self) -> aiosqlite.Connection:
        if not self._initialized or self._connection is None:
            raise RuntimeError("Database not initialized. Call init() first.")
        return self._connection

    def _check_owner(self, operation: str) -> None:
        if self._transaction_owner is None:
            raise RuntimeError(
                f"{operation} requires an active transaction. Use 'async with db.transaction()'."
            )
        if self._transaction_owner is not asyncio.current_task():
            raise RuntimeError(f"{operation} must run within the current task's transaction.")

    async def execute(self, sql: str, parameters=None) -> aiosqlite.Cursor:
        self._check_owner("execute")
        return await self.connection.execute(sql, parameters or ())

    async def fetch_one(self, sql: str, parameters=None) -> Optional[aiosqlite.Row]:
        cursor = await self.execute(sql, parameters)
        try:
            return await cursor.fetchone()
        finally:
            await cursor.close()

    async def fetch_all(self, sql: str, parameters=None) -> list[aiosqlite.Row]:
        cursor = await self.execute(sql, parameters)
        try:
            return await cursor.fetchall()
        finally:
            await cursor.close()

    @asynccontextmanager
    async def transaction(self):
        """
        Locked write transaction (BEGIN IMMEDIATE).

        Usage:
            async with db.transaction():
                row = await db.fetch_one("SELECT ...")
                await db.execute("UPDATE ...")

        Commits on success and rolls back on exception. The lock is not
        reentrant, so nesting raises RuntimeError instead of deadlocking.
        """
        task = asyncio.current_task()
        if task is not None and self._transaction_owner is task:
            raise RuntimeError("Nested transaction() is not allowed.")

        async with self._lock:
            connection = self.connection
            self._transaction_owner = task
            try:
                await connection.execute("BEGIN IMMEDIATE")
                try:
                    yield self
                except BaseException:
                    await connection.rollback()
                    raise
                await connection.commit()
            finally:
                self._transaction_owner = None


# ==================== Global Instance ====================

_db_manager: Optional[DatabaseManager] = None


def get_db_manager(db_path: Optional[Path] = None) -> DatabaseManager:
    """
    Process-wide DatabaseManager for scripts that do not build an app.

    Raises:
        ValueError: If db_path is not provided on the first call
    """
    global _db_manager

    if _db_manager is None:
        if db_path is None:
            raise ValueError("db_path required for first call to get_db_manager()")
        _db_manager = DatabaseManager(db_path)

    return _db_manager


def reset_db_manager():
    global _db_manager
    _db_manager = None
