"""
Request dependencies - acting user and services from app.state.
"""

from typing import Optional

from fastapi import Header, Request

from ..services.status import PublishStatusService
from ..services.storage import BlobStore
from ..services.tasks import TaskTrigger


async def get_user_id(
    cjscppuid: Optional[str] = Header(None, alias="CJSCPPUID"),
) -> Optional[str]:
    """
    Identify the requesting user from the CJSCPPUID header.

    The header is optional; a blank value counts as absent.
    """
    if cjscppuid is None:
        return None
    user_id = cjscppuid.strip()
    return user_id or None


def get_status_service(request: Request) -> PublishStatusService:
    return request.app.state.status_service


def get_task_trigger(request: Request) -> TaskTrigger:
    return request.app.state.task_trigger


def get_blob_store(request: Request) -> BlobStore:
    return request.app.state.blob_store
