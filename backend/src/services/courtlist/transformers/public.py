"""
Public court list transformer.

Same session/block/case tree as the standard list, stripped to the case
number and defendant name: no address, date of birth, age or offences.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ....common.types import CourtListType
from ....common.utils import default_start_time, extract_room_number, today_print_date
from ..documents import (
    PublicBlock,
    PublicBlocks,
    PublicCase,
    PublicCases,
    PublicCourtListDocument,
    PublicData,
    PublicDocumentBody,
    PublicJob,
    PublicSession,
    PublicSessions,
)
from ..payload import CourtListPayload, CourtRoom, Timeslot
from .base import TransformerRegistry, defendant_name, document_info, first_hearing_start, session_start

logger = logging.getLogger(__name__)


@TransformerRegistry.register(CourtListType.PUBLIC)
def transform_public(payload: CourtListPayload) -> PublicCourtListDocument:
    logger.info("Transforming court list payload to public document")

    sessions = [
        session
        for hearing_date in payload.hearing_dates
        for session in (_session(payload, room) for room in hearing_date.court_rooms)
        if session is not None
    ]

    return PublicCourtListDocument(
        document=PublicDocumentBody(
            info=document_info(payload),
            data=PublicData(
                job=PublicJob(
                    printdate=today_print_date(),
                    sessions=PublicSessions(session=sessions),
                )
            ),
        )
    )


def _session(payload: CourtListPayload, court_room: CourtRoom) -> Optional[PublicSession]:
    blocks = [b for b in (_block(t) for t in court_room.timeslots) if b is not None]
    if not blocks:
        return None
    return PublicSession(
        lja=payload.court_centre_name,
        court=payload.court_centre_name,
        room=extract_room_number(court_room.court_room_name),
        sstart=default_start_time(session_start(court_room)),
        blocks=PublicBlocks(block=blocks),
    )


def _block(timeslot: Timeslot) -> Optional[PublicBlock]:
    cases: List[PublicCase] = [
        PublicCase(caseno=hearing.case_number, def_name=defendant_name(defendant))
        for hearing in timeslot.hearings
        for defendant in hearing.defendants
    ]
    if not cases:
        return None
    return PublicBlock(
        bstart=default_start_time(first_hearing_start(timeslot)),
        cases=PublicCases(cases=cases),
    )
