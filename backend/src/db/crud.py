"""
CRUD operations for court list publish status records.

Provides CourtListStatusRepository for:
- Idempotent upsert on the natural key (centre, publish date, list type)
- Point lookup by court list id and range lookup by centre/date
- Milestone updates from the publish pipeline
"""

import uuid
from typing import List, Optional, Tuple

from .connection import DatabaseManager
from .schema import PublishStatusRecord, now_iso8601
from ..common.types import CourtListType, PublishStatus


class CourtListStatusRepository:
    """
    Repository for the court_list_publish_status table.

    Each public method runs in exactly one transaction, so a read followed
    by a write inside a method cannot interleave with another task.
    """

    def __init__(self, db: DatabaseManager):
        self.db = db

    # ==================== Upsert ====================

    async def upsert_requested(
        self,
        court_centre_id: str,
        publish_date: str,
        court_list_type: CourtListType,
    ) -> Tuple[PublishStatusRecord, bool]:
        """
        Create or restart the record for a natural key.

        An existing record keeps its court_list_id and file fields; only the
        publish dimension is reset to REQUESTED. A missing record is created
        with a fresh UUID and both statuses REQUESTED.

        Returns:
            (record, created)
        """
        now = now_iso8601()
        list_type = CourtListType(court_list_type).value

        async with self.db.transaction():
            row = await self.db.fetch_one(
                """
                SELECT court_list_id FROM court_list_publish_status
                WHERE court_centre_id = ? AND publish_date = ? AND court_list_type = ?
                """,
                (court_centre_id, publish_date, list_type),
            )

            if row:
                court_list_id = row["court_list_id"]
                created = False
                await self.db.execute(
                    """
                    UPDATE court_list_publish_status
                    SET publish_status = 'REQUESTED',
                        publish_error_message = NULL,
                        last_updated = MAX(last_updated, ?)
                    WHERE court_list_id = ?
                    """,
                    (now, court_list_id),
                )
            else:
                court_list_id = str(uuid.uuid4())
                created = True
                await self.db.execute(
                    """
                    INSERT INTO court_list_publish_status (
                        court_list_id, court_centre_id, publish_status, file_status,
                        court_list_type, publish_date, last_updated
                    ) VALUES (?, ?, 'REQUESTED', 'REQUESTED', ?, ?, ?)
                    """,
                    (court_list_id, court_centre_id, list_type, publish_date, now),
                )

            saved = await self.db.fetch_one(
                "SELECT * FROM court_list_publish_status WHERE court_list_id = ?",
                (court_list_id,),
            )

        return PublishStatusRecord.from_row(saved), created

    # ==================== Queries ====================

    async def get(self, court_list_id: str) -> Optional[PublishStatusRecord]:
        async with self.db.transaction():
            row = await self.db.fetch_one(
                "SELECT * FROM court_list_publish_status WHERE court_list_id = ?",
                (court_list_id,),
            )
        return PublishStatusRecord.from_row(row) if row else None

    async def find_by_centre_and_date(
        self,
        court_centre_id: str,
        publish_date: str,
        court_list_type: Optional[CourtListType] = None,
    ) -> List[PublishStatusRecord]:
        """
        List records for a court centre on a date, newest first.

        Args:
            court_list_type: Narrow to one list type (None = all types)
        """
        async with self.db.transaction():
            if court_list_type is not None:
                rows = await self.db.fetch_all(
                    """
                    SELECT * FROM court_list_publish_status
                    WHERE court_centre_id = ? AND publish_date = ? AND court_list_type = ?
                    ORDER BY last_updated DESC
                    """,
                    (court_centre_id, publish_date, CourtListType(court_list_type).value),
                )
            else:
                rows = await self.db.fetch_all(
                    """
                    SELECT * FROM court_list_publish_status
                    WHERE court_centre_id = ? AND publish_date = ?
                    ORDER BY last_updated DESC
                    """,
                    (court_centre_id, publish_date),
                )

        return [PublishStatusRecord.from_row(row) for row in rows]

    # ==================== Milestone updates ====================

    async def mark_publish(
        self,
        court_list_id: str,
        status: PublishStatus,
        error_message: Optional[str] = None,
    ) -> Optional[PublishStatusRecord]:
        """
        Set the publish dimension. Returns None if the record does not exist.
        """
        return await self._update(
            court_list_id,
            """
            UPDATE court_list_publish_status
            SET publish_status = ?, publish_error_message = ?,
                last_updated = MAX(last_updated, ?)
            WHERE court_list_id = ?
            """,
            (PublishStatus(status).value, error_message, now_iso8601(), court_list_id),
        )

    async def mark_file(
        self,
        court_list_id: str,
        status: PublishStatus,
        file_id: Optional[str] = None,
        file_url: Optional[str] = None,
        error_message: Optional[str] = None,
    ) -> Optional[PublishStatusRecord]:
        """
        Set the file dimension. file_id/file_url are kept when passed as None.
        """
        return await self._update(
            court_list_id,
            """
            UPDATE court_list_publish_status
            SET file_status = ?,
                court_list_file_id = COALESCE(?, court_list_file_id),
                file_url = COALESCE(?, file_url),
                file_error_message = ?,
                last_updated = MAX(last_updated, ?)
            WHERE court_list_id = ?
            """,
            (
                PublishStatus(status).value,
                file_id,
                file_url,
                error_message,
                now_iso8601(),
                court_list_id,
            ),
        )

    async def record_publish_error(
        self, court_list_id: str, error_message: str
    ) -> Optional[PublishStatusRecord]:
        """Store a publish error without touching publish_status."""
        return await self._update(
            court_list_id,
            """
            UPDATE court_list_publish_status
            SET publish_error_message = ?, last_updated = MAX(last_updated, ?)
            WHERE court_list_id = ?
            """,
            (error_message, now_iso8601(), court_list_id),
        )

    async def record_file_error(
        self, court_list_id: str, error_message: str
    ) -> Optional[PublishStatusRecord]:
        """Store a file error without touching file_status."""
        return await self._update(
            court_list_id,
            """
            UPDATE court_list_publish_status
            SET file_error_message = ?, last_updated = MAX(last_updated, ?)
            WHERE court_list_id = ?
            """,
            (error_message, now_iso8601(), court_list_id),
        )

    async def delete(self, court_list_id: str) -> bool:
        """Hard delete a record (operational clean-up and tests)."""
        async with self.db.transaction():
            cursor = await self.db.execute(
                "DELETE FROM court_list_publish_status WHERE court_list_id = ?",
                (court_list_id,),
            )
            deleted = cursor.rowcount > 0
            await cursor.close()
        return deleted

    async def _update(self, court_list_id: str, sql: str, params: tuple) -> Optional[PublishStatusRecord]:
        async with self.db.transaction():
            cursor = await self.db.execute(sql, params)
            changed = cursor.rowcount
            await cursor.close()
            if not changed:
                return None
            row = await self.db.fetch_one(
                "SELECT * FROM court_list_publish_status WHERE court_list_id = ?",
                (court_list_id,),
            )
        return PublishStatusRecord.from_row(row)
