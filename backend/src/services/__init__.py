"""
Services module - Business logic layer.

This module provides:
- status: Publish status state machine
- courtlist: Payload models, document transformers and schema validation
- clients: Downstream HTTP clients
- pdf / storage: PDF rendering and blob storage
- pipeline: Publish pipeline orchestration
- tasks: Background job triggering
"""

from .errors import (
    BadRequestError,
    NotFoundError,
    PdfGenerationError,
    SchemaValidationException,
    ServiceError,
)
from .pipeline import PipelineOutcome, PublishJob, PublishPipeline, StageName, StageResult
from .status import PublishStatusService
from .tasks import TaskTrigger

__all__ = [
    # Errors
    "ServiceError",
    "BadRequestError",
    "NotFoundError",
    "SchemaValidationException",
    "PdfGenerationError",
    # Pipeline
    "PublishPipeline",
    "PublishJob",
    "StageName",
    "StageResult",
    "PipelineOutcome",
    # Status
    "PublishStatusService",
    # Tasks
    "TaskTrigger",
]
