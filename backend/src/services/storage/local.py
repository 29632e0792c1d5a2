"""
Local filesystem blob store, used for development and tests.
"""

from __future__ import annotations

import asyncio
import os
import uuid
from dataclasses import dataclass
from pathlib import Path

from .base import BlobNotFoundError, BlobStore, blob_name_for


@dataclass(frozen=True)
class LocalBlobStoreConfig:
    """Configuration for LocalBlobStore."""

    base_dir: Path
    public_base_url: str | None = None


class LocalBlobStore(BlobStore):
    """
    Stores PDFs as files under base_dir.

    Writes are atomic (temp file then rename). Returned URLs use
    public_base_url when configured, otherwise a file:// URI.
    """

    def __init__(self, config: LocalBlobStoreConfig) -> None:
        self._base_dir = config.base_dir.resolve()
        self._public_base_url = config.public_base_url
        self._base_dir.mkdir(parents=True, exist_ok=True)

    def _path_for(self, court_list_id: str) -> Path:
        path = self._base_dir / blob_name_for(court_list_id)
        resolved = path.resolve()
        if self._base_dir not in resolved.parents:
            raise ValueError("Blob path resolved outside base_dir")
        return path

    def url_for(self, court_list_id: str) -> str:
        name = blob_name_for(court_list_id)
        if self._public_base_url:
            return f"{self._public_base_url.rstrip('/')}/{name}"
        return self._path_for(court_list_id).resolve().as_uri()

    def _write(self, path: Path, data: bytes) -> None:
        tmp_path = path.parent / f".tmp-{uuid.uuid4().hex}-{path.name}"
        try:
            with open(tmp_path, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except Exception:
            if tmp_path.exists():
                tmp_path.unlink()
            raise

    async def upload_pdf(self, court_list_id: str, data: bytes) -> str:
        path = self._path_for(court_list_id)
        await asyncio.to_thread(self._write, path, data)
        return self.url_for(court_list_id)

    async def download_pdf(self, court_list_id: str) -> bytes:
        path = self._path_for(court_list_id)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError as e:
            raise BlobNotFoundError(f"PDF not found: {court_list_id}") from e

    async def exists(self, court_list_id: str) -> bool:
        return self._path_for(court_list_id).is_file()
