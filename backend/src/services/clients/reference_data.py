"""Reference data client - court centre lookup by name."""

import logging
from typing import Optional

from pydantic import BaseModel

from ...common.types import SYSTEM_USER_ID
from .client import Client, user_headers
from .exceptions import ClientError

logger = logging.getLogger(__name__)

COURTROOMS_PATH = "/referencedata-query-api/query/api/rest/referencedata/courtrooms"
ACCEPT_OU_COURTROOM_NAME = "application/vnd.referencedata.ou.courtrooms.ou-courtroom-name+json"


class CourtCentreReference(BaseModel):
    """Identifiers the publication hub needs for a court centre."""

    id: Optional[str] = None
    ou_code: Optional[str] = None
    court_id_numeric: Optional[str] = None

    class Config:
        coerce_numbers_to_str = True


class ReferenceDataClient(Client):
    async def court_centre_by_name(self, court_centre_name: str) -> Optional[CourtCentreReference]:
        """Look up a court centre; any failure yields None so callers can continue."""
        if not court_centre_name or not court_centre_name.strip():
            return None

        headers = {"Accept": ACCEPT_OU_COURTROOM_NAME, **user_headers(SYSTEM_USER_ID)}
        try:
            response = await self.get(
                COURTROOMS_PATH,
                params={"ouCourtRoomName": court_centre_name},
                headers=headers,
            )
            data = response.json() if response.content else None
        except (ClientError, ValueError) as e:
            logger.warning("Reference data lookup failed for %r: %s", court_centre_name, e)
            return None

        if not isinstance(data, dict):
            logger.warning("No reference data for court centre %r", court_centre_name)
            return None

        return CourtCentreReference(
            id=data.get("id"),
            ou_code=data.get("oucode"),
            court_id_numeric=data.get("courtId"),
        )
