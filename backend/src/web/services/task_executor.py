"""
Task Executor Service

Runs publish jobs in the background on the application's event loop:
- submit() schedules PublishPipeline.execute and returns the asyncio.Task
- In-flight handles are tracked per court list id until they finish
- Crashes are logged; nothing is retried and nothing can be cancelled
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional, Set

from ...services.pipeline import PipelineOutcome, PublishJob, PublishPipeline

logger = logging.getLogger(__name__)


class AsyncioTaskExecutor:
    """Executes publish jobs as asyncio tasks."""

    def __init__(self, pipeline: PublishPipeline) -> None:
        self._pipeline = pipeline
        self._background: Dict[str, Set[asyncio.Task[Any]]] = {}

    def submit(self, job: PublishJob) -> asyncio.Task[Any]:
        """Schedule job on the running loop; must be called from inside it."""
        loop = asyncio.get_running_loop()
        key = job.court_list_id or ""
        handle = loop.create_task(self._run(job), name=f"publish-{key}")
        self._background.setdefault(key, set()).add(handle)
        handle.add_done_callback(lambda t: self._forget(key, t))
        return handle

    def is_running(self, court_list_id: str) -> bool:
        """Check if a background job is active for the court list."""
        return any(not h.done() for h in self._background.get(court_list_id, ()))

    @property
    def in_flight(self) -> int:
        return sum(len(handles) for handles in self._background.values())

    async def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Wait until no jobs are running; returns False if timeout elapsed first."""
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout
        while True:
            pending = [h for handles in self._background.values() for h in handles]
            if not pending:
                return True
            remaining = None if deadline is None else deadline - loop.time()
            if remaining is not None and remaining <= 0:
                return False
            await asyncio.wait(pending, timeout=remaining)

    def _forget(self, key: str, handle: asyncio.Task[Any]) -> None:
        handles = self._background.get(key)
        if handles is not None:
            handles.discard(handle)
            if not handles:
                self._background.pop(key, None)

    async def _run(self, job: PublishJob) -> Optional[PipelineOutcome]:
        try:
            return await self._pipeline.execute(job)
        except Exception:
            logger.exception("Publish job crashed for %s", job.court_list_id)
            return None
