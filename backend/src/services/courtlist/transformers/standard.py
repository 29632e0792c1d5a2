"""
Standard court list transformer - full case detail for court users.

Produces the session/block/case tree: one session per court room per
hearing date, one block per timeslot with hearings, one case per defendant.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ....common.types import (
    OFFENCE_TITLE_MAX_LENGTH,
    OFFENCE_WORDING_MAX_LENGTH,
    PARTY_ROLE_DEFENDANT,
    PARTY_ROLE_PROSECUTING_AUTHORITY,
    CourtListType,
)
from ....common.utils import (
    convert_age,
    convert_dob_to_iso,
    default_start_time,
    extract_room_number,
    is_blank,
    today_print_date,
    truncate,
)
from ..documents import (
    CaseOffence,
    CaseOffences,
    IndividualDetails,
    OrganisationDetails,
    Party,
    StandardBlock,
    StandardBlocks,
    StandardCase,
    StandardCases,
    StandardCourtListDocument,
    StandardData,
    StandardDocumentBody,
    StandardJob,
    StandardSession,
    StandardSessions,
)
from ..payload import CourtListPayload, CourtRoom, Defendant, Hearing, Offence, Timeslot
from .base import (
    TransformerRegistry,
    defendant_address,
    defendant_name,
    document_info,
    first_hearing_start,
    judiciary_list,
    session_start,
    venue,
)

logger = logging.getLogger(__name__)


@TransformerRegistry.register(CourtListType.STANDARD)
def transform_standard(payload: CourtListPayload) -> StandardCourtListDocument:
    logger.info("Transforming court list payload to standard document")

    sessions: List[StandardSession] = []
    for hearing_date in payload.hearing_dates:
        for court_room in hearing_date.court_rooms:
            session = _session(payload, court_room)
            if session is not None:
                sessions.append(session)

    return StandardCourtListDocument(
        document=StandardDocumentBody(
            info=document_info(payload),
            data=StandardData(
                job=StandardJob(
                    printdate=today_print_date(),
                    sessions=StandardSessions(session=sessions),
                )
            ),
        ),
        venue=venue(payload),
        ou_code=payload.ou_code,
        court_id=payload.court_id,
        court_id_numeric=payload.court_id_numeric,
    )


def _session(payload: CourtListPayload, court_room: CourtRoom) -> Optional[StandardSession]:
    blocks = [b for b in (_block(t) for t in court_room.timeslots) if b is not None]
    if not blocks:
        return None

    return StandardSession(
        lja=payload.court_centre_name,
        court=payload.court_centre_name,
        room=extract_room_number(court_room.court_room_name),
        sstart=default_start_time(session_start(court_room)),
        judiciary=judiciary_list(court_room.judiciary_names),
        blocks=StandardBlocks(block=blocks),
    )


def _block(timeslot: Timeslot) -> Optional[StandardBlock]:
    cases: List[StandardCase] = []
    for hearing in timeslot.hearings:
        cases.extend(_case(hearing, defendant) for defendant in hearing.defendants)
    if not cases:
        return None
    return StandardBlock(
        bstart=default_start_time(first_hearing_start(timeslot)),
        cases=StandardCases(cases=cases),
    )


def _case(hearing: Hearing, defendant: Defendant) -> StandardCase:
    return StandardCase(
        caseno=hearing.case_number,
        def_name=defendant_name(defendant),
        hearing_type=hearing.hearing_type,
        reporting_restriction=not is_blank(hearing.reporting_restriction_reason),
        def_dob=convert_dob_to_iso(defendant.date_of_birth),
        def_age=convert_age(defendant.age),
        def_addr=defendant_address(defendant.address),
        inf=hearing.prosecutor_type,
        offences=CaseOffences(offence=[_offence(o) for o in defendant.offences]),
        party=_parties(hearing, defendant),
    )


def _parties(hearing: Hearing, defendant: Defendant) -> List[Party]:
    individual = None
    if not is_blank(defendant.first_name) or not is_blank(defendant.surname):
        individual = IndividualDetails(
            individual_forenames=defendant.first_name,
            individual_surname=defendant.surname,
            date_of_birth=convert_dob_to_iso(defendant.date_of_birth),
            age=convert_age(defendant.age),
        )

    organisation = None
    if not is_blank(defendant.organisation_name):
        organisation = OrganisationDetails(organisation_name=defendant.organisation_name.strip())

    parties = [
        Party(
            party_role=PARTY_ROLE_DEFENDANT,
            individual_details=individual,
            organisation_details=organisation,
        )
    ]

    if not is_blank(hearing.prosecutor_type):
        parties.append(
            Party(
                party_role=PARTY_ROLE_PROSECUTING_AUTHORITY,
                organisation_details=OrganisationDetails(
                    organisation_name=hearing.prosecutor_type.strip()
                ),
            )
        )
    return parties


def _offence(offence: Offence) -> CaseOffence:
    return CaseOffence(
        code=offence.offence_code or "",
        title=truncate(offence.offence_title, OFFENCE_TITLE_MAX_LENGTH),
        cy_title=truncate(offence.welsh_offence_title, OFFENCE_TITLE_MAX_LENGTH),
        sum=truncate(offence.offence_wording, OFFENCE_WORDING_MAX_LENGTH),
        max_penalty=offence.max_penalty,
    )
