"""Pytest fixtures for court list publishing tests."""

import copy
import os
from contextlib import asynccontextmanager

# Tests poll the API far faster than the production rate limit allows
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")

import pytest

from backend.src.db.connection import DatabaseManager
from backend.src.db.crud import CourtListStatusRepository
from backend.src.services.courtlist.payload import CourtListPayload
from backend.src.services.status import PublishStatusService

COURT_CENTRE_ID = "f8254db1-1683-483e-afb3-b87fde5a0a23"
PUBLISH_DATE = "2026-01-05"

SAMPLE_PAYLOAD = {
    "listType": "STANDARD",
    "courtCentreName": "Lavender Hill Magistrates' Court",
    "courtCentreDefaultStartTime": "10:00:00",
    "address1": "176A Lavender Hill",
    "address2": "Battersea",
    "address3": "London",
    "postcode": "SW11 1JU",
    "hearingDates": [
        {
            "hearingDate": "2026-01-05",
            "courtRooms": [
                {
                    "courtRoomName": "Courtroom 01",
                    "judiciaryNames": "Jane Smith, John Brown; Ann Lee",
                    "timeslots": [
                        {
                            "hearings": [
                                {
                                    "id": "4d1f0b0e-9b6a-4bb4-b5b8-1f0c8a4f8e11",
                                    "sequence": 1,
                                    "startTime": "10:00",
                                    "hearingType": "First hearing",
                                    "caseNumber": "TFL1234567",
                                    "prosecutorType": "TFL",
                                    "reportingRestrictionReason": None,
                                    "defendants": [
                                        {
                                            "id": "9e4d3c2b-0a1f-4e5d-8c7b-6a5f4e3d2c1b",
                                            "firstName": "John",
                                            "surname": "Doe",
                                            "dateOfBirth": "5 Jan 1990",
                                            "age": 36,
                                            "address": {
                                                "address1": "1 High Street",
                                                "address2": "Clapham",
                                                "address3": "London",
                                                "postcode": "SW4 7AA",
                                            },
                                            "offences": [
                                                {
                                                    "offenceCode": "TH68001",
                                                    "offenceTitle": "Theft from a shop",
                                                    "welshOffenceTitle": "Dwyn o siop",
                                                    "offenceWording": "On 1 January 2026 stole goods to the value of 25 pounds.",
                                                    "maxPenalty": "6 months imprisonment",
                                                }
                                            ],
                                        }
                                    ],
                                }
                            ]
                        },
                        {
                            "hearings": [
                                {
                                    "startTime": "11:30",
                                    "hearingType": "Trial",
                                    "caseNumber": "ORG7654321",
                                    "reportingRestrictionReason": "Section 45 Youth Justice",
                                    "defendants": [
                                        {"organisationName": "Acme Haulage Ltd", "offences": []}
                                    ],
                                }
                            ]
                        },
                    ],
                }
            ],
        }
    ],
}


@pytest.fixture
def sample_payload_dict():
    """Raw payload as returned by the progression court list query."""
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture
def sample_payload(sample_payload_dict):
    return CourtListPayload.model_validate(sample_payload_dict)


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "court_list_publishing.db"


@pytest.fixture
def open_status_service(db_path):
    """Async context manager factory yielding a PublishStatusService on a fresh database.

    aiosqlite connections are bound to one event loop, so each test opens
    and closes the database inside its own asyncio.run().
    """

    @asynccontextmanager
    async def _open():
        db = DatabaseManager(db_path)
        await db.init()
        try:
            yield PublishStatusService(CourtListStatusRepository(db))
        finally:
            await db.close()

    return _open
