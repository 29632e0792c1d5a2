"""
Publish Router - request court list publishing and poll its status
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ...db.schema import PublishStatusRecord
from ...services.status import PublishStatusService
from ...services.tasks import TaskTrigger
from ..dependencies import get_status_service, get_task_trigger, get_user_id
from ..schemas import PublishRequest

router = APIRouter(tags=["publish"])


@router.post("/publish", response_model=PublishStatusRecord)
async def publish_court_list(
    body: PublishRequest,
    service: PublishStatusService = Depends(get_status_service),
    trigger: TaskTrigger = Depends(get_task_trigger),
    user_id: Optional[str] = Depends(get_user_id),
):
    """Create or restart the status record and start the pipeline in the background"""
    record = await service.create_or_update(
        body.court_centre_id,
        body.court_list_type,
        body.start_date,
        body.end_date,
    )
    trigger.trigger(record, make_external_calls=body.make_external_calls, user_id=user_id)
    return record


@router.get("/publish-status", response_model=List[PublishStatusRecord])
async def find_publish_status(
    court_list_id: Optional[str] = Query(None, alias="courtListId"),
    court_centre_id: Optional[str] = Query(None, alias="courtCentreId"),
    publish_date: Optional[str] = Query(None, alias="publishDate"),
    court_list_type: Optional[str] = Query(None, alias="courtListType"),
    service: PublishStatusService = Depends(get_status_service),
):
    """Look up status records by id, or by court centre and publish date"""
    records = await service.find_publish_status(
        court_list_id=court_list_id,
        court_centre_id=court_centre_id,
        publish_date=publish_date,
        court_list_type=court_list_type,
    )
    if court_list_id is not None and not records:
        raise HTTPException(status_code=404, detail=f"Court list not found: {court_list_id}")
    return records


@router.get("/publish-status/{court_list_id}", response_model=PublishStatusRecord)
async def get_publish_status(
    court_list_id: str,
    service: PublishStatusService = Depends(get_status_service),
):
    return await service.get_by_court_list_id(court_list_id)
