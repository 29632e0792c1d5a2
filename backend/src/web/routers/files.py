"""
Files Router - API endpoint for downloading rendered court list PDFs
"""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from ...common.types import PDF_MEDIA_TYPE, PublishStatus
from ...services.errors import BadRequestError, NotFoundError
from ...services.status import PublishStatusService
from ...services.storage import BlobNotFoundError, BlobStore
from ..dependencies import get_blob_store, get_status_service

router = APIRouter(prefix="/files", tags=["files"])


@router.get("/download/{court_list_id}")
async def download_court_list_pdf(
    court_list_id: str,
    service: PublishStatusService = Depends(get_status_service),
    store: BlobStore = Depends(get_blob_store),
):
    """Return the uploaded PDF as an attachment"""
    try:
        record = await service.get_by_court_list_id(court_list_id)
    except (BadRequestError, NotFoundError):
        raise HTTPException(status_code=404, detail="File not found")

    if record.file_status != PublishStatus.SUCCESSFUL:
        raise HTTPException(status_code=404, detail="File not uploaded")

    try:
        data = await store.download_pdf(record.court_list_id)
    except BlobNotFoundError:
        raise HTTPException(status_code=404, detail="File not found")

    return Response(
        content=data,
        media_type=PDF_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{record.court_list_id}.pdf"'},
    )
