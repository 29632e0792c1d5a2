"""Progression court list data query client."""

import logging
from typing import Optional

from ...common.types import CourtListType
from .client import Client, user_headers
from .exceptions import EmptyResponseError

logger = logging.getLogger(__name__)

COURT_LIST_DATA_PATH = "/progression-service/query/api/rest/progression/courtlistdata"
ACCEPT_COURT_LIST_DATA = "application/vnd.progression.search.court.list.data+json"


class CourtListDataClient(Client):
    """Fetches raw court list payloads from the progression query API."""

    async def fetch(
        self,
        court_list_type: CourtListType,
        court_centre_id: str,
        start_date: str,
        end_date: str,
        user_id: Optional[str] = None,
    ) -> dict:
        """GET /courtlistdata for one centre and date range.

        Raises:
            EmptyResponseError: If the service answers with no JSON body
            APIError: If the service returns a non-2xx response
        """
        logger.info(
            "Fetching court list data: listId=%s, courtCentreId=%s, startDate=%s, endDate=%s",
            court_list_type.value,
            court_centre_id,
            start_date,
            end_date,
        )
        params = {
            "listId": court_list_type.value,
            "courtCentreId": court_centre_id,
            "startDate": start_date,
            "endDate": end_date,
            "restricted": "false",
        }
        headers = {"Accept": ACCEPT_COURT_LIST_DATA, **user_headers(user_id)}

        response = await self.get(COURT_LIST_DATA_PATH, params=params, headers=headers)
        if not response.content:
            raise EmptyResponseError("Progression returned an empty court list body")
        data = response.json()
        if not isinstance(data, dict):
            raise EmptyResponseError("Progression returned a non-object court list body")
        return data
