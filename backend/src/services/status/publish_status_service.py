"""
Publish Status Service - owns the court list status state machine.

This is the only place that creates status records or moves their statuses.
Both dimensions (hub publish and PDF file) start at REQUESTED and only move
to SUCCESSFUL or FAILED; a new publish request for the same natural key
restarts the publish dimension while keeping the court list id.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import List, Optional, Union

from ...common.types import CourtListType, PublishStatus
from ...db.crud import CourtListStatusRepository
from ...db.schema import PublishStatusRecord
from ..errors import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)

DateLike = Union[str, date]


def normalize_date(value: Optional[DateLike], field: str) -> str:
    """Return an ISO yyyy-MM-dd string or raise BadRequestError."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise BadRequestError(f"{field} is required")
    if isinstance(value, date):
        return value.isoformat()
    try:
        return date.fromisoformat(value.strip()).isoformat()
    except ValueError:
        raise BadRequestError(f"{field} must be a date in yyyy-MM-dd format")


def normalize_court_list_type(value: Optional[Union[str, CourtListType]]) -> CourtListType:
    if value is None:
        raise BadRequestError("courtListType is required")
    try:
        return CourtListType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in CourtListType)
        raise BadRequestError(f"courtListType must be one of: {allowed}")


def normalize_court_list_id(value: Optional[Union[str, uuid.UUID]]) -> str:
    if value is None:
        raise BadRequestError("courtListId is required")
    try:
        return str(uuid.UUID(str(value)))
    except ValueError:
        raise BadRequestError(f"courtListId is not a valid UUID: {value}")


class PublishStatusService:
    """State machine over CourtListStatusRepository."""

    def __init__(self, repository: CourtListStatusRepository):
        self._repo = repository

    async def create_or_update(
        self,
        court_centre_id: Optional[str],
        court_list_type: Optional[Union[str, CourtListType]],
        start_date: Optional[DateLike],
        end_date: Optional[DateLike],
    ) -> PublishStatusRecord:
        """
        Idempotent publish request for (centre, date, type).

        Raises:
            BadRequestError: missing fields, or start date differs from end date
        """
        if court_centre_id is None or not str(court_centre_id).strip():
            raise BadRequestError("courtCentreId is required")
        list_type = normalize_court_list_type(court_list_type)
        start = normalize_date(start_date, "startDate")
        end = normalize_date(end_date, "endDate")
        if start != end:
            raise BadRequestError("startDate and endDate must be the same day")

        record, created = await self._repo.upsert_requested(
            str(court_centre_id).strip(), start, list_type
        )
        logger.info(
            "%s publish status %s for centre=%s date=%s type=%s",
            "Created" if created else "Restarted",
            record.court_list_id,
            record.court_centre_id,
            record.publish_date,
            record.court_list_type.value,
        )
        return record

    async def get_by_court_list_id(self, court_list_id) -> PublishStatusRecord:
        """
        Raises:
            BadRequestError: id is None or malformed
            NotFoundError: no record for the id
        """
        normalized = normalize_court_list_id(court_list_id)
        record = await self._repo.get(normalized)
        if record is None:
            raise NotFoundError(f"Court list publish status not found for id: {normalized}")
        return record

    async def find_publish_status(
        self,
        court_list_id=None,
        court_centre_id: Optional[str] = None,
        publish_date: Optional[DateLike] = None,
        court_list_type: Optional[Union[str, CourtListType]] = None,
    ) -> List[PublishStatusRecord]:
        """
        Look up by court_list_id, or by court_centre_id + publish_date
        (optionally narrowed by court_list_type).

        An id lookup that misses returns an empty list.
        """
        if court_list_id is not None:
            record = await self._repo.get(normalize_court_list_id(court_list_id))
            return [record] if record else []

        if court_centre_id and publish_date:
            list_type = (
                normalize_court_list_type(court_list_type)
                if court_list_type is not None
                else None
            )
            return await self._repo.find_by_centre_and_date(
                court_centre_id,
                normalize_date(publish_date, "publishDate"),
                list_type,
            )

        raise BadRequestError(
            "Either courtListId or both courtCentreId and publishDate must be provided"
        )

    # ==================== Pipeline milestones ====================

    async def mark_publish_successful(
        self, court_list_id: str, error_message: Optional[str] = None
    ) -> Optional[PublishStatusRecord]:
        """
        Mark the publish dimension SUCCESSFUL.

        error_message records a swallowed hub failure alongside the status.
        """
        return await self._repo.mark_publish(
            court_list_id, PublishStatus.SUCCESSFUL, error_message
        )

    async def record_publish_error(
        self, court_list_id: str, error_message: str
    ) -> Optional[PublishStatusRecord]:
        """
        Annotate a record with a publish error and leave publish_status alone.

        Not a pipeline milestone: operators use it to note a problem found
        after the hub call, for example a list the hub later rejected.
        """
        return await self._repo.record_publish_error(court_list_id, error_message)

    async def mark_file_successful(
        self, court_list_id: str, file_url: str
    ) -> Optional[PublishStatusRecord]:
        """The file id of an uploaded PDF is always the court list id."""
        return await self._repo.mark_file(
            court_list_id,
            PublishStatus.SUCCESSFUL,
            file_id=court_list_id,
            file_url=file_url,
        )

    async def mark_file_failed(
        self, court_list_id: str, error_message: str
    ) -> Optional[PublishStatusRecord]:
        return await self._repo.mark_file(
            court_list_id, PublishStatus.FAILED, error_message=error_message
        )

    async def record_file_error(
        self, court_list_id: str, error_message: str
    ) -> Optional[PublishStatusRecord]:
        """Keep file_status as is and only store the error."""
        return await self._repo.record_file_error(court_list_id, error_message)
