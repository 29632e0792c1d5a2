"""
Task Trigger - hands a publish job to the executor and returns at once.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ...db.schema import PublishStatusRecord
from ..pipeline.contracts import PublishJob
from ..pipeline.ports import TaskExecutor

logger = logging.getLogger(__name__)


class TaskTrigger:
    def __init__(self, executor: TaskExecutor):
        self._executor = executor

    def trigger(
        self,
        record: PublishStatusRecord,
        make_external_calls: bool = False,
        user_id: Optional[str] = None,
    ) -> Any:
        """Build a PublishJob for record and submit it; returns the executor handle."""
        job = PublishJob(
            court_list_id=record.court_list_id,
            court_centre_id=record.court_centre_id,
            court_list_type=record.court_list_type,
            publish_date=record.publish_date,
            make_external_calls=make_external_calls,
            user_id=user_id,
        )
        handle = self._executor.submit(job)
        logger.info(
            "Triggered publish job for %s (external calls: %s)",
            record.court_list_id,
            make_external_calls,
        )
        return handle
