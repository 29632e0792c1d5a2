"""
Pipeline module - Publish pipeline for court lists.

This module provides the core pipeline infrastructure:
- contracts: Job descriptor, stage results and enums
- ports: Protocols for the pipeline's collaborators
- runner: Pipeline orchestration
"""

from .contracts import (
    EventCallback,
    ExecutionStatus,
    PipelineOutcome,
    PublishJob,
    StageName,
    StageResult,
)
from .ports import (
    DocumentPublisher,
    PayloadSource,
    PdfRenderer,
    PdfStore,
    StatusMarker,
    TaskExecutor,
)
from .runner import PublishPipeline

__all__ = [
    # Enums
    "StageName",
    "ExecutionStatus",
    # Models
    "PublishJob",
    "StageResult",
    "PipelineOutcome",
    # Types
    "EventCallback",
    # Ports
    "DocumentPublisher",
    "PayloadSource",
    "PdfRenderer",
    "PdfStore",
    "StatusMarker",
    "TaskExecutor",
    # Runner
    "PublishPipeline",
]
