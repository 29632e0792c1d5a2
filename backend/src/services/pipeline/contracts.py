"""
Pipeline contracts - Data models and enums for the publish pipeline.

This module defines the core abstractions used throughout the pipeline:
- StageName: Enum of all pipeline stages
- ExecutionStatus: The only externally observable execution states
- PublishJob: Job descriptor handed to the executor
- StageResult: Explicit per-stage result (success, skipped or error)
- PipelineOutcome: Aggregate of all stage results for one execution
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from ...common.types import CourtListType, PublishStatus


class StageName(str, Enum):
    """Names of all pipeline stages, in execution order."""

    fetch = "fetch"
    transform = "transform"
    publish = "publish"
    mark_publish = "mark_publish"
    render_upload = "render_upload"
    mark_file = "mark_file"


class ExecutionStatus(str, Enum):
    STARTED = "STARTED"
    COMPLETED = "COMPLETED"


# Type alias for event callback
EventCallback = Callable[[str, Dict[str, Any]], None]


class PublishJob(BaseModel):
    """
    Job descriptor consumed by the pipeline.

    court_list_id is kept as a raw string so a malformed id reaches the
    pipeline and ends it there instead of failing at submission.
    """

    court_list_id: Optional[str] = None
    court_centre_id: Optional[str] = None
    court_list_type: Optional[CourtListType] = None
    publish_date: Optional[str] = None
    make_external_calls: bool = False
    user_id: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class StageResult(BaseModel):
    """
    Result returned by one pipeline stage.

    Attributes:
        stage: Stage that produced this result
        success: Whether the stage did its work
        skipped: Stage was not attempted (its inputs were missing)
        error: Error message if the stage failed
        value: Output passed on to later stages (payload, document, url)
    """

    stage: StageName
    success: bool
    skipped: bool = False
    error: Optional[str] = None
    value: Any = None

    class Config:
        arbitrary_types_allowed = True

    @classmethod
    def ok(cls, stage: StageName, value: Any = None) -> "StageResult":
        return cls(stage=stage, success=True, value=value)

    @classmethod
    def failed(cls, stage: StageName, error: str) -> "StageResult":
        return cls(stage=stage, success=False, error=error)

    @classmethod
    def skip(cls, stage: StageName, reason: Optional[str] = None) -> "StageResult":
        return cls(stage=stage, success=False, skipped=True, error=reason)


class PipelineOutcome(BaseModel):
    """Everything one execution did; status is COMPLETED once stages were attempted."""

    court_list_id: Optional[str] = None
    status: ExecutionStatus = ExecutionStatus.STARTED
    stages: List[StageResult] = Field(default_factory=list)
    publish_status: Optional[PublishStatus] = None
    file_status: Optional[PublishStatus] = None
    started_at: datetime = Field(default_factory=datetime.now)
    ended_at: Optional[datetime] = None

    def stage(self, name: StageName) -> Optional[StageResult]:
        for result in self.stages:
            if result.stage == name:
                return result
        return None

    @property
    def failed_stages(self) -> List[StageResult]:
        return [r for r in self.stages if not r.success and not r.skipped]
