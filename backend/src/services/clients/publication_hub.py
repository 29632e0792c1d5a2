"""Publication hub client - posts transformed documents with metadata headers."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import BaseModel

from ...common.types import HUB_LIST_TYPES, CourtListType
from ...common.utils import format_iso_millis
from .client import Client

logger = logging.getLogger(__name__)

PROVENANCE = "COMMON_PLATFORM"
DISPLAY_WINDOW = timedelta(days=7)


class PublicationMeta(BaseModel):
    """What the hub needs to know about a document besides its body."""

    court_list_type: CourtListType
    content_date: str
    court_id_numeric: Optional[str] = None
    language: str = "ENGLISH"
    sensitivity: str = "PUBLIC"


class PublicationHubClient(Client):
    """Posts court list documents to the external publication hub.

    base_url is the publication endpoint itself.

    Config keys (in addition to Client's):
        token: Optional static bearer token
    """

    def build_headers(self, meta: PublicationMeta, now: Optional[datetime] = None) -> dict[str, str]:
        now = now or datetime.now(timezone.utc)
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "x-provenance": PROVENANCE,
            "x-type": "LIST",
            "x-list-type": HUB_LIST_TYPES[meta.court_list_type],
            "x-court-id": meta.court_id_numeric or "0",
            "x-content-date": meta.content_date,
            "x-language": meta.language,
            "x-sensitivity": meta.sensitivity,
            "x-display-from": format_iso_millis(now),
            "x-display-to": format_iso_millis(now + DISPLAY_WINDOW),
        }
        token = self._config.get("token")
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def publish(self, document: dict, meta: PublicationMeta) -> int:
        """POST a document; returns the response status.

        Raises:
            APIError: If the hub returns a non-2xx response
            ConnectionError: If the hub is unreachable
        """
        headers = self.build_headers(meta)
        response = await self.post(self.base_url, json=document, headers=headers)
        logger.info(
            "Published %s list to hub (court id %s): HTTP %d",
            meta.court_list_type.value,
            headers["x-court-id"],
            response.status_code,
        )
        return response.status_code
