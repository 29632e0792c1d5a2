"""
Online public court list transformer.

Restructures the payload into the venue / court list / court house /
court room / session / sitting / hearing / case tree used for online
publication. Only forename and surname are published per defendant.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ....common.types import PARTY_ROLE_DEFENDANT, CourtListType
from ....common.utils import default_start_time, is_blank, now_iso_millis, to_iso_datetime
from ..documents import (
    CourtHouse,
    CourtList,
    OnlinePublicCase,
    OnlinePublicCourtListDocument,
    OnlinePublicCourtRoom,
    OnlinePublicHearing,
    OnlinePublicIndividual,
    OnlinePublicParty,
    OnlinePublicSession,
    PublicationInfo,
    Sitting,
)
from ..payload import CourtListPayload, CourtRoom, Defendant, Hearing, HearingDate, Timeslot
from .base import TransformerRegistry, first_hearing_start, judiciary_list, venue

logger = logging.getLogger(__name__)


@TransformerRegistry.register(CourtListType.ONLINE_PUBLIC)
def transform_online_public(payload: CourtListPayload) -> OnlinePublicCourtListDocument:
    logger.info("Transforming court list payload to online public document")

    return OnlinePublicCourtListDocument(
        document=PublicationInfo(publication_date=now_iso_millis()),
        venue=venue(payload),
        court_lists=_court_lists(payload),
        ou_code=payload.ou_code,
        court_id=payload.court_id,
        court_id_numeric=payload.court_id_numeric,
    )


def _court_lists(payload: CourtListPayload) -> List[CourtList]:
    court_rooms = [
        room
        for hearing_date in payload.hearing_dates
        for room in (_court_room(r, hearing_date) for r in hearing_date.court_rooms)
        if room is not None
    ]
    if not court_rooms:
        return []

    # Court centre name doubles as the local justice area
    return [
        CourtList(
            court_house=CourtHouse(
                court_house_name=payload.court_centre_name,
                lja=payload.court_centre_name,
                court_room=court_rooms,
            )
        )
    ]


def _court_room(court_room: CourtRoom, hearing_date: HearingDate) -> Optional[OnlinePublicCourtRoom]:
    sittings = [s for s in (_sitting(t, hearing_date) for t in court_room.timeslots) if s is not None]
    if not sittings:
        return None
    return OnlinePublicCourtRoom(
        court_room_name=court_room.court_room_name,
        session=[
            OnlinePublicSession(
                judiciary=judiciary_list(court_room.judiciary_names),
                sittings=sittings,
            )
        ],
    )


def _sitting(timeslot: Timeslot, hearing_date: HearingDate) -> Optional[Sitting]:
    hearings = [h for h in (_hearing(h) for h in timeslot.hearings) if h is not None]
    if not hearings:
        return None
    start = default_start_time(first_hearing_start(timeslot))
    return Sitting(
        sitting_start=to_iso_datetime(hearing_date.hearing_date, start),
        hearing=hearings,
    )


def _hearing(hearing: Hearing) -> Optional[OnlinePublicHearing]:
    if not hearing.defendants:
        return None
    restricted = not is_blank(hearing.reporting_restriction_reason)
    return OnlinePublicHearing(
        hearing_type=hearing.hearing_type,
        cases=[
            OnlinePublicCase(
                case_urn=hearing.case_number,
                reporting_restriction=restricted,
                case_sequence_indicator=None,
                party=[_party(defendant)],
            )
            for defendant in hearing.defendants
        ],
    )


def _party(defendant: Defendant) -> OnlinePublicParty:
    individual = None
    if not is_blank(defendant.first_name) or not is_blank(defendant.surname):
        individual = OnlinePublicIndividual(
            individual_forenames=defendant.first_name,
            individual_surname=defendant.surname,
        )
    return OnlinePublicParty(party_role=PARTY_ROLE_DEFENDANT, individual_details=individual)
