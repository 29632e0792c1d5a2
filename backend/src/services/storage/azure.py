"""
Azure Blob Storage store - uploads PDFs and hands out read-only SAS URLs.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone

from azure.core.exceptions import ResourceNotFoundError
from azure.storage.blob import (
    BlobSasPermissions,
    BlobServiceClient,
    ContentSettings,
    generate_blob_sas,
)

from ...common.types import PDF_MEDIA_TYPE
from .base import BlobNotFoundError, BlobStore, blob_name_for

logger = logging.getLogger(__name__)

DEFAULT_SAS_EXPIRY_MINUTES = 120


class AzureBlobStore(BlobStore):
    """
    Blob store backed by one Azure container.

    The SDK is synchronous; calls run in a worker thread so the event loop
    stays free.
    """

    def __init__(
        self,
        connection_string: str,
        container_name: str,
        sas_expiry_minutes: int = DEFAULT_SAS_EXPIRY_MINUTES,
    ) -> None:
        if not connection_string:
            raise ValueError("Azure storage connection string is required")
        self._service = BlobServiceClient.from_connection_string(connection_string)
        self._container_name = container_name
        self._sas_expiry = timedelta(minutes=sas_expiry_minutes)

    def _blob_client(self, court_list_id: str):
        return self._service.get_container_client(self._container_name).get_blob_client(
            blob_name_for(court_list_id)
        )

    def _sas_url(self, court_list_id: str) -> str:
        blob_client = self._blob_client(court_list_id)
        start_time = datetime.now(timezone.utc)
        sas_token = generate_blob_sas(
            account_name=self._service.account_name,
            container_name=self._container_name,
            blob_name=blob_client.blob_name,
            account_key=self._service.credential.account_key,
            permission=BlobSasPermissions(read=True),
            expiry=start_time + self._sas_expiry,
            start=start_time,
        )
        return f"{blob_client.url}?{sas_token}"

    def _upload(self, court_list_id: str, data: bytes) -> str:
        blob_client = self._blob_client(court_list_id)
        blob_client.upload_blob(
            data,
            overwrite=True,
            content_settings=ContentSettings(content_type=PDF_MEDIA_TYPE),
        )
        logger.info("Uploaded %s (%d bytes) to %s", blob_client.blob_name, len(data), self._container_name)
        return self._sas_url(court_list_id)

    def _download(self, court_list_id: str) -> bytes:
        try:
            return self._blob_client(court_list_id).download_blob().readall()
        except ResourceNotFoundError as e:
            raise BlobNotFoundError(f"PDF not found: {court_list_id}") from e

    async def upload_pdf(self, court_list_id: str, data: bytes) -> str:
        return await asyncio.to_thread(self._upload, court_list_id, data)

    async def download_pdf(self, court_list_id: str) -> bytes:
        return await asyncio.to_thread(self._download, court_list_id)

    async def exists(self, court_list_id: str) -> bool:
        return await asyncio.to_thread(self._blob_client(court_list_id).exists)
