"""
Court list fetcher - raw payload plus reference data enrichment.
"""

from __future__ import annotations

import logging
from typing import Optional

from ...common.types import CourtListType
from ...common.utils import is_blank
from ..clients import CourtListDataClient, ReferenceDataClient
from .payload import CourtListPayload

logger = logging.getLogger(__name__)


class CourtListFetcher:
    """Fetches a court list payload and fills in hub identifiers.

    The reference data client is optional; without it (or when the lookup
    fails) ouCode, courtId and courtIdNumeric are left unset.
    """

    def __init__(
        self,
        court_list_data: CourtListDataClient,
        reference_data: Optional[ReferenceDataClient] = None,
    ):
        self._court_list_data = court_list_data
        self._reference_data = reference_data

    async def fetch(
        self,
        court_list_type: CourtListType,
        court_centre_id: str,
        publish_date: str,
        user_id: Optional[str] = None,
    ) -> CourtListPayload:
        raw = await self._court_list_data.fetch(
            court_list_type, court_centre_id, publish_date, publish_date, user_id
        )
        payload = CourtListPayload.model_validate(raw)
        await self.enrich(payload)
        return payload

    async def enrich(self, payload: CourtListPayload) -> CourtListPayload:
        if self._reference_data is None or is_blank(payload.court_centre_name):
            return payload

        reference = await self._reference_data.court_centre_by_name(payload.court_centre_name)
        if reference is None:
            logger.info("No reference data enrichment for %r", payload.court_centre_name)
            return payload

        payload.ou_code = reference.ou_code
        payload.court_id = reference.id
        payload.court_id_numeric = reference.court_id_numeric
        return payload
