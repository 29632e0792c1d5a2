"""
Blob storage for rendered court list PDFs.

One blob per court list, named ``{courtListId}.pdf``; uploads overwrite.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod

_SAFE_PATTERN = re.compile(r"[^a-zA-Z0-9._-]+")


def _safe_component(value: str) -> str:
    """Sanitize a string for use as a blob or file name."""
    value = value.strip() or "unnamed"
    return _SAFE_PATTERN.sub("_", value)[:64]


def blob_name_for(court_list_id: str) -> str:
    return f"{_safe_component(court_list_id)}.pdf"


class BlobNotFoundError(FileNotFoundError):
    """Raised when no PDF is stored for a court list."""

    pass


class BlobStore(ABC):
    """
    Base class for PDF blob stores.

    - upload_pdf(court_list_id, data) -> url
    - download_pdf(court_list_id) -> bytes
    - exists(court_list_id) -> bool
    """

    @abstractmethod
    async def upload_pdf(self, court_list_id: str, data: bytes) -> str:
        """Store data (overwriting) and return a URL to it."""
        ...

    @abstractmethod
    async def download_pdf(self, court_list_id: str) -> bytes:
        """Raises BlobNotFoundError when nothing is stored."""
        ...

    @abstractmethod
    async def exists(self, court_list_id: str) -> bool:
        ...
