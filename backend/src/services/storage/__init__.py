"""
Storage module - where rendered court list PDFs live.

The Azure SDK is imported only when the azure backend is selected.
"""

from pathlib import Path

from .base import BlobNotFoundError, BlobStore, blob_name_for
from .local import LocalBlobStore, LocalBlobStoreConfig


def create_blob_store(
    backend: str,
    *,
    local_dir: Path,
    public_base_url: str | None = None,
    connection_string: str | None = None,
    container_name: str = "court-lists",
    sas_expiry_minutes: int = 120,
) -> BlobStore:
    """Build the configured store ("local" or "azure")."""
    if backend == "azure":
        from .azure import AzureBlobStore

        return AzureBlobStore(connection_string or "", container_name, sas_expiry_minutes)
    if backend == "local":
        return LocalBlobStore(LocalBlobStoreConfig(base_dir=local_dir, public_base_url=public_base_url))
    raise ValueError(f"Unknown blob backend: {backend}")


__all__ = [
    "BlobNotFoundError",
    "BlobStore",
    "LocalBlobStore",
    "LocalBlobStoreConfig",
    "blob_name_for",
    "create_blob_store",
]
