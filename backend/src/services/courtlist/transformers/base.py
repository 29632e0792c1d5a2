"""
Transformer registry - selects the document transformer for a list type.

Each transformer is a pure function ``CourtListPayload -> document``; the
registry maps every CourtListType to exactly one of them.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from ....common.types import (
    ADDRESS_LINE_MAX_LENGTH,
    DEFAULT_DOCUMENT_START_TIME,
    POSTCODE_MAX_LENGTH,
    CourtListType,
)
from ....common.utils import is_blank, join_name, split_judiciary, truncate
from ..documents import CourtListDocument, DefendantAddress, DocumentInfo, Judiciary, Venue, VenueAddress
from ..payload import Address, CourtListPayload, CourtRoom, Defendant, Timeslot

Transformer = Callable[[CourtListPayload], CourtListDocument]


class TransformerRegistry:
    """Maps each court list type to its transformer function."""

    _transformers: Dict[CourtListType, Transformer] = {}

    @classmethod
    def register(cls, court_list_type: CourtListType) -> Callable[[Transformer], Transformer]:
        def decorator(func: Transformer) -> Transformer:
            cls._transformers[court_list_type] = func
            return func

        return decorator

    @classmethod
    def get(cls, court_list_type: CourtListType) -> Transformer:
        try:
            return cls._transformers[CourtListType(court_list_type)]
        except KeyError:
            raise ValueError(f"No transformer registered for court list type: {court_list_type}")

    @classmethod
    def registered_types(cls) -> List[CourtListType]:
        return list(cls._transformers)


def transform(payload: CourtListPayload, court_list_type: CourtListType) -> CourtListDocument:
    """Transform a payload with the variant selected by court_list_type."""
    return TransformerRegistry.get(court_list_type)(payload)


# ==================== Helpers shared by the variants ====================

def document_info(payload: CourtListPayload) -> DocumentInfo:
    start = payload.court_centre_default_start_time
    return DocumentInfo(start_time=DEFAULT_DOCUMENT_START_TIME if is_blank(start) else start)


def first_hearing_start(timeslot: Timeslot) -> Optional[str]:
    return timeslot.hearings[0].start_time if timeslot.hearings else None


def session_start(court_room: CourtRoom) -> Optional[str]:
    """Start time of the first hearing in the first timeslot, if any."""
    if court_room.timeslots:
        return first_hearing_start(court_room.timeslots[0])
    return None


def defendant_name(defendant: Defendant) -> str:
    """Return "First Surname", falling back to the organisation name."""
    name = join_name(defendant.first_name, defendant.surname)
    if not name and not is_blank(defendant.organisation_name):
        return defendant.organisation_name.strip()
    return name


def judiciary_list(judiciary_names: Optional[str]) -> List[Judiciary]:
    """First named member of the bench is the presiding one."""
    return [
        Judiciary(joh_known_as=name, is_presiding=(index == 0))
        for index, name in enumerate(split_judiciary(judiciary_names))
    ]


def venue_lines(payload: CourtListPayload) -> List[str]:
    lines = [payload.address1, payload.address2, payload.address3, payload.address4, payload.address5]
    if all(is_blank(line) for line in lines):
        lines = [payload.court_centre_address1, payload.court_centre_address2]
    return [line.strip() for line in lines if not is_blank(line)]


def venue(payload: CourtListPayload) -> Venue:
    lines = venue_lines(payload)
    town = lines[-2] if len(lines) >= 2 else None
    county = lines[-3] if len(lines) >= 3 else None
    return Venue(
        venue_address=VenueAddress(
            line=lines,
            town=town,
            county=county,
            post_code=truncate(payload.postcode, POSTCODE_MAX_LENGTH),
        )
    )


def defendant_address(address: Optional[Address]) -> Optional[DefendantAddress]:
    """Address lines limited to 35 characters, postcode to 8."""
    if address is None:
        return None
    return DefendantAddress(
        line1=truncate(address.address1, ADDRESS_LINE_MAX_LENGTH) or "",
        line2=truncate(address.address2, ADDRESS_LINE_MAX_LENGTH),
        line3=truncate(address.address3, ADDRESS_LINE_MAX_LENGTH),
        line4=truncate(address.address4, ADDRESS_LINE_MAX_LENGTH),
        line5=truncate(address.address5, ADDRESS_LINE_MAX_LENGTH),
        pcode=truncate(address.postcode, POSTCODE_MAX_LENGTH),
    )
