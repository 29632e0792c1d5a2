"""
Raw court list payload as returned by the progression court list query.

Models accept camelCase input, ignore unknown fields and coerce numbers to
strings, because upstream sends ages and times inconsistently.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class PayloadModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "ignore"
        coerce_numbers_to_str = True


class Address(PayloadModel):
    address1: Optional[str] = None
    address2: Optional[str] = None
    address3: Optional[str] = None
    address4: Optional[str] = None
    address5: Optional[str] = None
    postcode: Optional[str] = None

    def lines(self) -> List[Optional[str]]:
        return [self.address1, self.address2, self.address3, self.address4, self.address5]


class Offence(PayloadModel):
    id: Optional[str] = None
    offence_title: Optional[str] = None
    welsh_offence_title: Optional[str] = None
    offence_wording: Optional[str] = None
    offence_code: Optional[str] = None
    max_penalty: Optional[str] = None
    convicted_on: Optional[str] = None
    adjourned_date: Optional[str] = None


class Defendant(PayloadModel):
    id: Optional[str] = None
    organisation_name: Optional[str] = None
    first_name: Optional[str] = None
    surname: Optional[str] = None
    date_of_birth: Optional[str] = None  # "5 Jan 2006"
    age: Optional[str] = None
    nationality: Optional[str] = None
    address: Optional[Address] = None
    offences: List[Offence] = Field(default_factory=list)


class Hearing(PayloadModel):
    id: Optional[str] = None
    sequence: Optional[int] = None
    reporting_restriction_reason: Optional[str] = None
    start_time: Optional[str] = None  # "10:00" or "10:00:00"
    hearing_type: Optional[str] = None
    case_number: Optional[str] = None
    case_id: Optional[str] = None
    prosecutor_type: Optional[str] = None
    defendants: List[Defendant] = Field(default_factory=list)


class Timeslot(PayloadModel):
    hearings: List[Hearing] = Field(default_factory=list)


class CourtRoom(PayloadModel):
    court_room_name: Optional[str] = None
    judiciary_names: Optional[str] = None
    timeslots: List[Timeslot] = Field(default_factory=list)


class HearingDate(PayloadModel):
    hearing_date: Optional[str] = None  # yyyy-MM-dd
    court_rooms: List[CourtRoom] = Field(default_factory=list)


class CourtListPayload(PayloadModel):
    list_type: Optional[str] = None
    court_centre_name: Optional[str] = None
    court_centre_default_start_time: Optional[str] = None
    court_centre_address1: Optional[str] = None
    court_centre_address2: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    address3: Optional[str] = None
    address4: Optional[str] = None
    address5: Optional[str] = None
    postcode: Optional[str] = None
    welsh_court_centre_name: Optional[str] = None
    hearing_dates: List[HearingDate] = Field(default_factory=list)
    # Reference data enrichment
    ou_code: Optional[str] = None
    court_id: Optional[str] = None
    court_id_numeric: Optional[str] = None
    is_welsh: Optional[bool] = None

    def to_json_dict(self) -> dict:
        """camelCase dict for downstream services (document generator)."""
        return self.model_dump(by_alias=True, exclude_none=True)
