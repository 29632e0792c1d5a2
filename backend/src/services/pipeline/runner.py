"""
Publish Pipeline - Runs one court list publish execution.

This module provides the PublishPipeline class that:
- Fetches the court list payload (external mode only)
- Transforms and schema-validates the document
- Publishes to the hub as a best-effort, fire-and-forget call
- Renders and uploads the PDF, or applies the offline file URL
- Records every milestone on the status record

Each stage returns a StageResult instead of raising; failures stay inside
their own branch and end up in the status record's error fields.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from ...common.types import DEFAULT_START_TIME
from ...common.utils import to_iso_datetime
from ..clients.publication_hub import PublicationMeta
from ..courtlist.payload import CourtListPayload
from ..courtlist.schema_validator import SchemaValidator
from ..courtlist.transformers import transform
from .contracts import (
    EventCallback,
    ExecutionStatus,
    PipelineOutcome,
    PublishJob,
    StageName,
    StageResult,
)
from .ports import DocumentPublisher, PayloadSource, PdfRenderer, PdfStore, StatusMarker

logger = logging.getLogger(__name__)


class PublishPipeline:
    """
    Orchestrates a publish execution.

    Usage:
        pipeline = PublishPipeline(
            status=publish_status_service,
            validator=SchemaValidator(),
            payload_source=fetcher,
            publisher=hub_client,
            renderer=pdf_renderer,
            store=blob_store,
            offline_file_url_template="offline://court-lists/{court_list_id}.pdf",
        )

        outcome = await pipeline.execute(job)
    """

    def __init__(
        self,
        status: StatusMarker,
        validator: SchemaValidator,
        payload_source: Optional[PayloadSource] = None,
        publisher: Optional[DocumentPublisher] = None,
        renderer: Optional[PdfRenderer] = None,
        store: Optional[PdfStore] = None,
        offline_file_url_template: str = "",
        pdf_failure_marks_failed: bool = False,
        on_event: Optional[EventCallback] = None,
    ) -> None:
        """
        Args:
            status: Where milestones are recorded
            validator: Schema gate for transformed documents
            payload_source: Payload fetcher (external mode)
            publisher: Publication hub client (external mode)
            renderer: PDF renderer (external mode)
            store: PDF blob store (external mode)
            offline_file_url_template: str.format template for the file URL
                recorded when external calls are disabled
            pdf_failure_marks_failed: Set fileStatus FAILED on a PDF branch
                failure instead of only recording the error
            on_event: Callback for progress events
        """
        self._status = status
        self._validator = validator
        self._payload_source = payload_source
        self._publisher = publisher
        self._renderer = renderer
        self._store = store
        self._offline_file_url_template = offline_file_url_template
        self._pdf_failure_marks_failed = pdf_failure_marks_failed
        self._on_event = on_event or (lambda e, d: None)

    def _emit(self, event: str, data: Dict[str, Any]) -> None:
        try:
            self._on_event(event, data)
        except Exception:
            logger.debug("Event callback failed for %s", event, exc_info=True)

    def _record(self, outcome: PipelineOutcome, result: StageResult) -> StageResult:
        outcome.stages.append(result)
        payload = {
            "court_list_id": outcome.court_list_id,
            "stage": result.stage.value,
        }
        if result.success:
            self._emit("stage_completed", payload)
            logger.info("Stage %s completed", result.stage.value, extra=payload)
        elif result.skipped:
            self._emit("stage_skipped", {**payload, "reason": result.error})
            logger.debug("Stage %s skipped: %s", result.stage.value, result.error, extra=payload)
        else:
            self._emit("stage_failed", {**payload, "error": result.error})
            logger.warning("Stage %s failed: %s", result.stage.value, result.error, extra=payload)
        return result

    async def execute(self, job: PublishJob) -> PipelineOutcome:
        """
        Run every stage for job.

        Returns:
            Outcome with status COMPLETED once stages were attempted. A missing
            or malformed court list id ends the execution with no stages.
        """
        outcome = PipelineOutcome(court_list_id=job.court_list_id)
        court_list_id = _valid_uuid(job.court_list_id)
        if court_list_id is None:
            logger.warning("Ignoring publish job with invalid court list id: %r", job.court_list_id)
            outcome.ended_at = datetime.now()
            return outcome

        outcome.court_list_id = court_list_id
        self._emit("pipeline_started", {"court_list_id": court_list_id})

        fetched = self._record(outcome, await self._fetch(job))
        payload: Optional[CourtListPayload] = fetched.value if fetched.success else None

        transformed = self._record(outcome, self._transform(job, payload))
        document: Optional[dict] = transformed.value if transformed.success else None

        published = self._record(outcome, await self._publish(job, document, payload))
        publish_error = next(
            (r.error for r in (fetched, transformed, published) if not r.success and not r.skipped),
            None,
        )
        self._record(outcome, await self._mark_publish(outcome, court_list_id, publish_error))

        if transformed.success or not job.make_external_calls:
            uploaded = self._record(outcome, await self._render_upload(job, court_list_id, payload))
        else:
            uploaded = self._record(
                outcome,
                StageResult.failed(
                    StageName.render_upload,
                    f"No valid document to render: {transformed.error or 'no payload'}",
                ),
            )
        self._record(outcome, await self._mark_file(outcome, court_list_id, uploaded))

        outcome.status = ExecutionStatus.COMPLETED
        outcome.ended_at = datetime.now()
        self._emit(
            "pipeline_completed",
            {
                "court_list_id": court_list_id,
                "failed_stages": [r.stage.value for r in outcome.failed_stages],
            },
        )
        return outcome

    # ==================== Stages ====================

    async def _fetch(self, job: PublishJob) -> StageResult:
        if not job.make_external_calls:
            return StageResult.skip(StageName.fetch, "external calls disabled")
        if self._payload_source is None:
            return StageResult.failed(StageName.fetch, "No payload source configured")
        if not job.court_centre_id or job.court_list_type is None or not job.publish_date:
            return StageResult.failed(StageName.fetch, "Missing court centre, list type or publish date")
        try:
            payload = await self._payload_source.fetch(
                job.court_list_type, job.court_centre_id, job.publish_date, job.user_id
            )
        except Exception as e:
            logger.exception("Failed to fetch court list payload for %s", job.court_list_id)
            return StageResult.failed(StageName.fetch, f"Fetch failed: {e}")
        return StageResult.ok(StageName.fetch, payload)

    def _transform(self, job: PublishJob, payload: Optional[CourtListPayload]) -> StageResult:
        if payload is None:
            return StageResult.skip(StageName.transform, "no payload")
        try:
            document = transform(payload, job.court_list_type)
            self._validator.validate(document, job.court_list_type)
        except Exception as e:
            logger.exception("Failed to transform %s court list", job.court_list_type)
            return StageResult.failed(StageName.transform, f"Transform failed: {e}")
        return StageResult.ok(StageName.transform, document.to_dict())

    async def _publish(
        self,
        job: PublishJob,
        document: Optional[dict],
        payload: Optional[CourtListPayload],
    ) -> StageResult:
        if document is None or not job.make_external_calls:
            return StageResult.skip(StageName.publish, "no document to publish")
        if self._publisher is None:
            return StageResult.failed(StageName.publish, "No publication hub configured")
        meta = PublicationMeta(
            court_list_type=job.court_list_type,
            content_date=to_iso_datetime(job.publish_date, DEFAULT_START_TIME) or job.publish_date,
            court_id_numeric=payload.court_id_numeric if payload else None,
        )
        try:
            status_code = await self._publisher.publish(document, meta)
        except Exception as e:
            logger.exception("Publication hub call failed for %s", job.court_list_id)
            return StageResult.failed(StageName.publish, f"Publication hub call failed: {e}")
        return StageResult.ok(StageName.publish, status_code)

    async def _mark_publish(
        self, outcome: PipelineOutcome, court_list_id: str, error_message: Optional[str]
    ) -> StageResult:
        # Attempted publish is terminal success for the publish dimension
        try:
            record = await self._status.mark_publish_successful(court_list_id, error_message)
        except Exception as e:
            logger.exception("Failed to mark publish status for %s", court_list_id)
            return StageResult.failed(StageName.mark_publish, str(e))
        if record is None:
            return StageResult.failed(StageName.mark_publish, f"No status record for {court_list_id}")
        outcome.publish_status = record.publish_status
        return StageResult.ok(StageName.mark_publish, record.publish_status)

    async def _render_upload(
        self, job: PublishJob, court_list_id: str, payload: Optional[CourtListPayload]
    ) -> StageResult:
        if not job.make_external_calls:
            return self._offline_file_url(job, court_list_id)
        if self._renderer is None or self._store is None:
            return StageResult.failed(StageName.render_upload, "No PDF renderer or blob store configured")
        try:
            pdf = await self._renderer.render(payload, job.court_list_type)
            url = await self._store.upload_pdf(court_list_id, pdf)
        except Exception as e:
            logger.exception("PDF generation/upload failed for %s", court_list_id)
            return StageResult.failed(StageName.render_upload, f"PDF generation failed: {e}")
        return StageResult.ok(StageName.render_upload, url)

    def _offline_file_url(self, job: PublishJob, court_list_id: str) -> StageResult:
        template = self._offline_file_url_template
        if not template:
            return StageResult.failed(StageName.render_upload, "No offline file URL configured")
        try:
            url = template.format(
                court_list_id=court_list_id,
                court_list_type=job.court_list_type.value if job.court_list_type else "",
                court_centre_id=job.court_centre_id or "",
                publish_date=job.publish_date or "",
            )
        except (KeyError, IndexError, ValueError) as e:
            return StageResult.failed(StageName.render_upload, f"Invalid offline file URL template: {e}")
        return StageResult.ok(StageName.render_upload, url)

    async def _mark_file(
        self, outcome: PipelineOutcome, court_list_id: str, uploaded: StageResult
    ) -> StageResult:
        try:
            if uploaded.success:
                record = await self._status.mark_file_successful(court_list_id, uploaded.value)
            elif self._pdf_failure_marks_failed:
                record = await self._status.mark_file_failed(court_list_id, uploaded.error)
            else:
                record = await self._status.record_file_error(court_list_id, uploaded.error)
        except Exception as e:
            logger.exception("Failed to mark file status for %s", court_list_id)
            return StageResult.failed(StageName.mark_file, str(e))
        if record is None:
            return StageResult.failed(StageName.mark_file, f"No status record for {court_list_id}")
        outcome.file_status = record.file_status
        return StageResult.ok(StageName.mark_file, record.file_status)


def _valid_uuid(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    try:
        return str(uuid.UUID(str(value)))
    except ValueError:
        return None

