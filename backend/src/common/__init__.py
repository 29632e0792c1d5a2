"""
common module - shared enums, constants and parsing helpers

Usage:
    from backend.src.common import CourtListType, PublishStatus
    from backend.src.common.utils import extract_room_number
"""

from .types import (
    CourtListType,
    PublishStatus,
    SYSTEM_USER_ID,
    HUB_LIST_TYPES,
    PDF_MEDIA_TYPE,
)

from .utils import (
    extract_room_number,
    convert_dob_to_iso,
    convert_age,
    truncate,
    to_iso_datetime,
    now_iso_millis,
    split_judiciary,
)

__all__ = [
    # types
    "CourtListType",
    "PublishStatus",
    "SYSTEM_USER_ID",
    "HUB_LIST_TYPES",
    "PDF_MEDIA_TYPE",
    # utils
    "extract_room_number",
    "convert_dob_to_iso",
    "convert_age",
    "truncate",
    "to_iso_datetime",
    "now_iso_millis",
    "split_judiciary",
]
