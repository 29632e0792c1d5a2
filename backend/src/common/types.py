"""
types.py - Shared enums and constants

Court list types, publish statuses and the fixed identifiers used when
talking to downstream services.
"""

from enum import Enum


class CourtListType(str, Enum):
    """Variant of court list being published."""

    STANDARD = "STANDARD"
    PUBLIC = "PUBLIC"
    ONLINE_PUBLIC = "ONLINE_PUBLIC"


class PublishStatus(str, Enum):
    """Status of one dimension (hub publish or PDF file) of a court list."""

    REQUESTED = "REQUESTED"
    SUCCESSFUL = "SUCCESSFUL"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (PublishStatus.SUCCESSFUL, PublishStatus.FAILED)


# System user used for reference data and document generator calls
SYSTEM_USER_ID = "7aee5dea-b0de-4604-b49b-86c7788cfc4b"

# ============ Field limits ============
ADDRESS_LINE_MAX_LENGTH = 35
POSTCODE_MAX_LENGTH = 8
OFFENCE_TITLE_MAX_LENGTH = 120
OFFENCE_WORDING_MAX_LENGTH = 4000

DEFAULT_ROOM_NUMBER = 1
DEFAULT_START_TIME = "00:00"
DEFAULT_DOCUMENT_START_TIME = "00:00:00"

# ============ Party roles ============
PARTY_ROLE_DEFENDANT = "DEFENDANT"
PARTY_ROLE_PROSECUTING_AUTHORITY = "PROSECUTING_AUTHORITY"

# ============ Publication hub list types ============
HUB_LIST_TYPES = {
    CourtListType.STANDARD: "MAGISTRATES_STANDARD_LIST",
    CourtListType.PUBLIC: "MAGISTRATES_PUBLIC_LIST",
    CourtListType.ONLINE_PUBLIC: "MAGISTRATES_PUBLIC_LIST",
}

PDF_MEDIA_TYPE = "application/pdf"
