"""Tests for the status database connection manager and repository."""

import asyncio
import sqlite3

import pytest

from backend.src.common.types import CourtListType, PublishStatus
from backend.src.db import CourtListStatusRepository, DatabaseManager, get_db_manager, reset_db_manager

CENTRE = "f8254db1-1683-483e-afb3-b87fde5a0a23"

OLD_TABLE = """
CREATE TABLE court_list_publish_status (
    court_list_id TEXT PRIMARY KEY,
    court_centre_id TEXT NOT NULL,
    publish_status TEXT NOT NULL DEFAULT 'REQUESTED',
    file_status TEXT NOT NULL DEFAULT 'REQUESTED',
    court_list_type TEXT NOT NULL,
    court_list_file_id TEXT,
    file_url TEXT,
    publish_date TEXT NOT NULL,
    last_updated TEXT NOT NULL
);
"""


class TestDatabaseManager:
    def test_init_is_idempotent_and_creates_parent(self, tmp_path):
        db_path = tmp_path / "nested" / "status.db"

        async def scenario():
            db = DatabaseManager(db_path)
            await db.init()
            await db.init()
            async with db.transaction():
                row = await db.fetch_one("SELECT COUNT(*) AS n FROM court_list_publish_status")
            await db.close()
            return row["n"], db.is_initialized

        count, initialized = asyncio.run(scenario())

        assert db_path.exists()
        assert count == 0
        assert initialized is False

    def test_statements_need_a_transaction(self, db_path):
        async def scenario():
            db = DatabaseManager(db_path)
            await db.init()
            try:
                await db.fetch_one("SELECT 1")
            finally:
                await db.close()

        with pytest.raises(RuntimeError, match="active transaction"):
            asyncio.run(scenario())

    def test_nested_transaction_rejected(self, db_path):
        async def scenario():
            db = DatabaseManager(db_path)
            await db.init()
            try:
                async with db.transaction():
                    async with db.transaction():
                        pass
            finally:
                await db.close()

        with pytest.raises(RuntimeError, match="Nested"):
            asyncio.run(scenario())

    def test_failed_transaction_rolls_back(self, db_path):
        async def scenario():
            db = DatabaseManager(db_path)
            await db.init()
            repo = CourtListStatusRepository(db)
            record, _ = await repo.upsert_requested(CENTRE, "2026-01-05", CourtListType.STANDARD)
            try:
                async with db.transaction():
                    await db.execute(
                        "UPDATE court_list_publish_status SET file_url = 'x' WHERE court_list_id = ?",
                        (record.court_list_id,),
                    )
                    raise ValueError("abort")
            except ValueError:
                pass
            reread = await repo.get(record.court_list_id)
            await db.close()
            return reread

        assert asyncio.run(scenario()).file_url is None

    def test_old_file_gets_error_columns(self, db_path):
        with sqlite3.connect(db_path) as conn:
            conn.executescript(OLD_TABLE)

        async def scenario():
            db = DatabaseManager(db_path)
            await db.init()
            async with db.transaction():
                rows = await db.fetch_all("PRAGMA table_info(court_list_publish_status)")
            await db.close()
            return {row["name"] for row in rows}

        columns = asyncio.run(scenario())

        assert {"publish_error_message", "file_error_message"} <= columns

    def test_global_manager(self, db_path):
        reset_db_manager()
        try:
            with pytest.raises(ValueError):
                get_db_manager()
            first = get_db_manager(db_path)
            assert get_db_manager() is first
        finally:
            reset_db_manager()


class TestRepository:
    def test_upsert_is_keyed_on_centre_date_and_type(self, db_path):
        async def scenario():
            db = DatabaseManager(db_path)
            await db.init()
            repo = CourtListStatusRepository(db)
            first, created_first = await repo.upsert_requested(CENTRE, "2026-01-05", CourtListType.STANDARD)
            await repo.mark_publish(first.court_list_id, PublishStatus.SUCCESSFUL, "hub down")
            again, created_again = await repo.upsert_requested(CENTRE, "2026-01-05", CourtListType.STANDARD)
            other, created_other = await repo.upsert_requested(CENTRE, "2026-01-06", CourtListType.STANDARD)
            await db.close()
            return first, created_first, again, created_again, other, created_other

        first, created_first, again, created_again, other, created_other = asyncio.run(scenario())

        assert created_first and not created_again and created_other
        assert again.court_list_id == first.court_list_id
        assert again.publish_status == PublishStatus.REQUESTED
        assert again.publish_error_message is None
        assert other.court_list_id != first.court_list_id

    def test_concurrent_upserts_create_one_record(self, db_path):
        async def scenario():
            db = DatabaseManager(db_path)
            await db.init()
            repo = CourtListStatusRepository(db)
            results = await asyncio.gather(
                *(repo.upsert_requested(CENTRE, "2026-01-05", CourtListType.PUBLIC) for _ in range(5))
            )
            rows = await repo.find_by_centre_and_date(CENTRE, "2026-01-05")
            await db.close()
            return results, rows

        results, rows = asyncio.run(scenario())

        assert len({record.court_list_id for record, _ in results}) == 1
        assert sum(1 for _, created in results if created) == 1
        assert len(rows) == 1

    def test_last_updated_never_moves_backwards(self, db_path):
        async def scenario():
            db = DatabaseManager(db_path)
            await db.init()
            repo = CourtListStatusRepository(db)
            record, _ = await repo.upsert_requested(CENTRE, "2026-01-05", CourtListType.STANDARD)
            async with db.transaction():
                await db.execute(
                    "UPDATE court_list_publish_status SET last_updated = ? WHERE court_list_id = ?",
                    ("2999-01-01T00:00:00.000000Z", record.court_list_id),
                )
            updated = await repo.record_file_error(record.court_list_id, "late")
            await db.close()
            return updated

        assert asyncio.run(scenario()).last_updated == "2999-01-01T00:00:00.000000Z"

    def test_delete(self, db_path):
        async def scenario():
            db = DatabaseManager(db_path)
            await db.init()
            repo = CourtListStatusRepository(db)
            record, _ = await repo.upsert_requested(CENTRE, "2026-01-05", CourtListType.STANDARD)
            deleted = await repo.delete(record.court_list_id)
            deleted_again = await repo.delete(record.court_list_id)
            gone = await repo.get(record.court_list_id)
            await db.close()
            return deleted, deleted_again, gone

        assert asyncio.run(scenario()) == (True, False, None)
