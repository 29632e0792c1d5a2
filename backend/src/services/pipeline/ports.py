"""
Pipeline ports - interfaces for the pipeline's collaborators.

The pipeline core depends only on these protocols; the web layer wires in
the httpx clients, the blob store and PublishStatusService.

Interfaces:
- PayloadSource: Fetches (and enriches) the raw court list payload
- DocumentPublisher: Sends a transformed document to the publication hub
- PdfRenderer: Renders a payload to PDF bytes
- PdfStore: Stores PDF bytes and returns a retrieval URL
- StatusMarker: Records pipeline milestones on the status record
- TaskExecutor: Non-blocking, one-shot job submission
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

from ...common.types import CourtListType
from ...db.schema import PublishStatusRecord
from ..clients.publication_hub import PublicationMeta
from ..courtlist.payload import CourtListPayload
from .contracts import PublishJob


class PayloadSource(Protocol):
    async def fetch(
        self,
        court_list_type: CourtListType,
        court_centre_id: str,
        publish_date: str,
        user_id: Optional[str] = None,
    ) -> CourtListPayload:
        ...


class DocumentPublisher(Protocol):
    async def publish(self, document: dict, meta: PublicationMeta) -> int:
        """Raises on any non-2xx hub response."""
        ...


class PdfRenderer(Protocol):
    async def render(self, payload: CourtListPayload, court_list_type: CourtListType) -> bytes:
        ...


class PdfStore(Protocol):
    async def upload_pdf(self, court_list_id: str, data: bytes) -> str:
        ...


class StatusMarker(Protocol):
    """Subset of PublishStatusService the pipeline writes through.

    Each method returns None when the court list id has no record.
    """

    async def mark_publish_successful(
        self, court_list_id: str, error_message: Optional[str] = None
    ) -> Optional[PublishStatusRecord]:
        ...

    async def mark_file_successful(
        self, court_list_id: str, file_url: str
    ) -> Optional[PublishStatusRecord]:
        ...

    async def mark_file_failed(
        self, court_list_id: str, error_message: str
    ) -> Optional[PublishStatusRecord]:
        ...

    async def record_file_error(
        self, court_list_id: str, error_message: str
    ) -> Optional[PublishStatusRecord]:
        ...


class TaskExecutor(Protocol):
    """Accepts a job and returns a handle immediately; no cancellation."""

    def submit(self, job: PublishJob) -> Any:
        ...
