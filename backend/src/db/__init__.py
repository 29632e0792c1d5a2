"""
Database module for court list publish status persistence.

Usage:
    from backend.src.db import get_db_manager, CourtListStatusRepository

    db = get_db_manager(Path("data/court_lists.db"))
    await db.init()

    repo = CourtListStatusRepository(db)
    record, created = await repo.upsert_requested(centre_id, "2026-01-05", CourtListType.STANDARD)
"""

from .connection import DatabaseManager, get_db_manager, reset_db_manager
from .crud import CourtListStatusRepository
from .schema import PublishStatusRecord, now_iso8601

__all__ = [
    # Connection
    "DatabaseManager",
    "get_db_manager",
    "reset_db_manager",
    # Repository
    "CourtListStatusRepository",
    # Models
    "PublishStatusRecord",
    "now_iso8601",
]
