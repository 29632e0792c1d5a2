"""
Court list document models - the schema-shaped transformer outputs.

Three distinct result types, one per list variant:
- StandardCourtListDocument: session/block/case tree with full case detail
- PublicCourtListDocument: same tree, case number and defendant name only
- OnlinePublicCourtListDocument: venue/court-list/court-house/court-room/
  session/sitting/hearing/case tree

Field aliases carry the exact key names the downstream schemas expect.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    """Base for document nodes; keys are given explicitly via aliases."""

    class Config:
        populate_by_name = True

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class CamelDocumentModel(DocumentModel):
    class Config:
        populate_by_name = True
        alias_generator = to_camel


# ==================== Shared nodes ====================

class VenueAddress(CamelDocumentModel):
    line: List[str] = Field(default_factory=list)
    town: Optional[str] = None
    county: Optional[str] = None
    post_code: Optional[str] = None


class Venue(CamelDocumentModel):
    venue_address: VenueAddress


class Judiciary(CamelDocumentModel):
    joh_known_as: str
    is_presiding: bool


# ==================== Session/block/case tree ====================

class DocumentInfo(DocumentModel):
    start_time: str


class DefendantAddress(DocumentModel):
    line1: str = ""
    line2: Optional[str] = None
    line3: Optional[str] = None
    line4: Optional[str] = None
    line5: Optional[str] = None
    pcode: Optional[str] = None


class CaseOffence(DocumentModel):
    code: str = ""
    title: Optional[str] = None
    cy_title: Optional[str] = None
    sum: Optional[str] = None
    cy_sum: str = ""
    max_penalty: Optional[str] = Field(default=None, alias="maxPenalty")


class CaseOffences(DocumentModel):
    offence: List[CaseOffence] = Field(default_factory=list)


class IndividualDetails(CamelDocumentModel):
    individual_forenames: Optional[str] = None
    individual_surname: Optional[str] = None
    date_of_birth: Optional[str] = None
    age: Optional[int] = None


class OrganisationDetails(CamelDocumentModel):
    organisation_name: str


class Party(CamelDocumentModel):
    party_role: str
    individual_details: Optional[IndividualDetails] = None
    organisation_details: Optional[OrganisationDetails] = None


class StandardCase(DocumentModel):
    caseno: Optional[str] = None
    def_name: str = ""
    hearing_type: Optional[str] = Field(default=None, alias="hearingType")
    reporting_restriction: bool = Field(default=False, alias="reportingRestriction")
    def_dob: Optional[str] = None
    def_age: Optional[int] = None
    def_addr: Optional[DefendantAddress] = None
    inf: Optional[str] = None
    offences: CaseOffences = Field(default_factory=CaseOffences)
    party: List[Party] = Field(default_factory=list)


class PublicCase(DocumentModel):
    caseno: Optional[str] = None
    def_name: str = ""


class StandardCases(DocumentModel):
    cases: List[StandardCase] = Field(default_factory=list, alias="case")


class PublicCases(DocumentModel):
    cases: List[PublicCase] = Field(default_factory=list, alias="case")


class StandardBlock(DocumentModel):
    bstart: Optional[str] = None
    cases: StandardCases


class PublicBlock(DocumentModel):
    bstart: Optional[str] = None
    cases: PublicCases


class StandardBlocks(DocumentModel):
    block: List[StandardBlock] = Field(default_factory=list)


class PublicBlocks(DocumentModel):
    block: List[PublicBlock] = Field(default_factory=list)


class StandardSession(DocumentModel):
    lja: Optional[str] = None
    court: Optional[str] = None
    room: int
    sstart: str
    judiciary: List[Judiciary] = Field(default_factory=list)
    blocks: StandardBlocks


class PublicSession(DocumentModel):
    lja: Optional[str] = None
    court: Optional[str] = None
    room: int
    sstart: str
    blocks: PublicBlocks


class StandardSessions(DocumentModel):
    session: List[StandardSession] = Field(default_factory=list)


class PublicSessions(DocumentModel):
    session: List[PublicSession] = Field(default_factory=list)


class StandardJob(DocumentModel):
    printdate: str
    sessions: StandardSessions


class PublicJob(DocumentModel):
    printdate: str
    sessions: PublicSessions


class StandardData(DocumentModel):
    job: StandardJob


class PublicData(DocumentModel):
    job: PublicJob


class StandardDocumentBody(DocumentModel):
    info: DocumentInfo
    data: StandardData


class PublicDocumentBody(DocumentModel):
    info: DocumentInfo
    data: PublicData


class StandardCourtListDocument(DocumentModel):
    document: StandardDocumentBody
    venue: Venue
    ou_code: Optional[str] = Field(default=None, alias="ouCode")
    court_id: Optional[str] = Field(default=None, alias="courtId")
    court_id_numeric: Optional[str] = Field(default=None, alias="courtIdNumeric")

    def sessions(self) -> List[StandardSession]:
        return self.document.data.job.sessions.session


class PublicCourtListDocument(DocumentModel):
    document: PublicDocumentBody

    def sessions(self) -> List[PublicSession]:
        return self.document.data.job.sessions.session


# ==================== Online public tree ====================

class OnlinePublicIndividual(CamelDocumentModel):
    individual_forenames: Optional[str] = None
    individual_surname: Optional[str] = None


class OnlinePublicParty(CamelDocumentModel):
    party_role: str
    individual_details: Optional[OnlinePublicIndividual] = None


class OnlinePublicCase(CamelDocumentModel):
    case_urn: Optional[str] = None
    reporting_restriction: bool = False
    case_sequence_indicator: Optional[str] = None
    party: List[OnlinePublicParty] = Field(default_factory=list)


class OnlinePublicHearing(CamelDocumentModel):
    hearing_type: Optional[str] = None
    cases: List[OnlinePublicCase] = Field(default_factory=list, alias="case")
    channel: List[str] = Field(default_factory=list)
    application: List[Dict[str, Any]] = Field(default_factory=list)


class Sitting(CamelDocumentModel):
    sitting_start: Optional[str] = None
    hearing: List[OnlinePublicHearing] = Field(default_factory=list)


class OnlinePublicSession(CamelDocumentModel):
    judiciary: List[Judiciary] = Field(default_factory=list)
    sittings: List[Sitting] = Field(default_factory=list)


class OnlinePublicCourtRoom(CamelDocumentModel):
    court_room_name: Optional[str] = None
    session: List[OnlinePublicSession] = Field(default_factory=list)


class CourtHouse(CamelDocumentModel):
    court_house_name: Optional[str] = None
    lja: Optional[str] = None
    court_room: List[OnlinePublicCourtRoom] = Field(default_factory=list)


class CourtList(CamelDocumentModel):
    court_house: CourtHouse


class PublicationInfo(CamelDocumentModel):
    publication_date: str


class OnlinePublicCourtListDocument(CamelDocumentModel):
    document: PublicationInfo
    venue: Venue
    court_lists: List[CourtList] = Field(default_factory=list)
    ou_code: Optional[str] = None
    court_id: Optional[str] = None
    court_id_numeric: Optional[str] = None


CourtListDocument = Union[
    StandardCourtListDocument,
    PublicCourtListDocument,
    OnlinePublicCourtListDocument,
]
