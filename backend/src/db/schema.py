"""
Database schema definitions for court list publish status persistence.

Uses SQLite with:
- TEXT timestamps (ISO8601 format, UTC)
- CHECK constraints for status columns
- A UNIQUE index on the natural key (centre, publish date, list type)
"""

from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from ..common.types import CourtListType, PublishStatus


TABLE_NAME = "court_list_publish_status"


# ==================== Pydantic Models ====================

class PublishStatusRecord(BaseModel):
    """Court list publish status record (one row per published court list)."""
    court_list_id: str
    court_centre_id: str
    court_list_type: CourtListType
    publish_date: str  # yyyy-MM-dd
    publish_status: PublishStatus
    file_status: PublishStatus
    file_id: Optional[str] = None  # Equals court_list_id once uploaded
    file_url: Optional[str] = None  # Opaque retrieval URL / SAS URL
    publish_error_message: Optional[str] = None
    file_error_message: Optional[str] = None
    last_updated: str  # ISO8601 timestamp

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "PublishStatusRecord":
        """Build a record from a court_list_publish_status row."""
        return cls(
            court_list_id=row["court_list_id"],
            court_centre_id=row["court_centre_id"],
            court_list_type=row["court_list_type"],
            publish_date=row["publish_date"],
            publish_status=row["publish_status"],
            file_status=row["file_status"],
            file_id=row["court_list_file_id"],
            file_url=row["file_url"],
            publish_error_message=row["publish_error_message"],
            file_error_message=row["file_error_message"],
            last_updated=row["last_updated"],
        )


# ==================== SQL DDL ====================

SCHEMA_SQL = """
-- Optimize for web app workload
PRAGMA journal_mode = WAL;
PRAGMA synchronous = NORMAL;
PRAGMA busy_timeout = 5000;

CREATE TABLE IF NOT EXISTS court_list_publish_status (
    court_list_id TEXT PRIMARY KEY,
    court_centre_id TEXT NOT NULL,
    publish_status TEXT NOT NULL DEFAULT 'REQUESTED'
        CHECK (publish_status IN ('REQUESTED', 'SUCCESSFUL', 'FAILED')),
    file_status TEXT NOT NULL DEFAULT 'REQUESTED'
        CHECK (file_status IN ('REQUESTED', 'SUCCESSFUL', 'FAILED')),
    court_list_type TEXT NOT NULL
        CHECK (court_list_type IN ('STANDARD', 'PUBLIC', 'ONLINE_PUBLIC')),
    court_list_file_id TEXT,
    file_url TEXT,
    publish_error_message TEXT,
    file_error_message TEXT,
    publish_date TEXT NOT NULL,  -- yyyy-MM-dd
    last_updated TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);

-- Natural key: one record per centre, date and list type
CREATE UNIQUE INDEX IF NOT EXISTS ux_publish_status_natural_key
    ON court_list_publish_status(court_centre_id, publish_date, court_list_type);
CREATE INDEX IF NOT EXISTS idx_publish_status_last_updated
    ON court_list_publish_status(last_updated DESC);
"""

# Columns added after the first release; created by ALTER TABLE on older files
ADDED_COLUMNS = (
    ("publish_error_message", "TEXT"),
    ("file_error_message", "TEXT"),
)


# ==================== Helpers ====================

def now_iso8601() -> str:
    """Get current UTC timestamp in ISO8601 format."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
