"""
utils.py - Parsing helpers shared by the court list transformers

Every helper is best-effort: malformed leaf values degrade to ``None`` or a
default instead of raising, so one bad field never aborts a whole transform.
"""

import logging
import re
from datetime import date, datetime, timezone
from typing import List, Optional

from .types import DEFAULT_ROOM_NUMBER, DEFAULT_START_TIME

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")
MAX_ROOM_NUMBER = 2**31 - 1
_JUDICIARY_SEPARATORS = re.compile(r"[,;]")

DOB_INPUT_FORMAT = "%d %b %Y"
ISO_DATE_FORMAT = "%Y-%m-%d"
PRINT_DATE_FORMAT = "%d/%m/%Y"


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def extract_room_number(court_room_name: Optional[str]) -> int:
    """
    Extract the numeric room number from a court room name.

    "Courtroom 03" -> 3. Falls back to 1 when no digits remain or the
    number does not fit a signed 32-bit int.
    """
    if not court_room_name:
        return DEFAULT_ROOM_NUMBER
    digits = _NON_DIGITS.sub("", court_room_name)
    if not digits:
        return DEFAULT_ROOM_NUMBER
    number = int(digits)
    if number > MAX_ROOM_NUMBER:
        logger.warning("Room number out of range in %r", court_room_name)
        return DEFAULT_ROOM_NUMBER
    return number


def convert_dob_to_iso(dob: Optional[str]) -> Optional[str]:
    """Convert a "5 Jan 2006" style date of birth to "2006-01-05"."""
    if is_blank(dob):
        return None
    try:
        return datetime.strptime(dob.strip(), DOB_INPUT_FORMAT).strftime(ISO_DATE_FORMAT)
    except ValueError:
        logger.warning("Failed to parse date of birth: %s", dob)
        return None


def convert_age(age: Optional[str]) -> Optional[int]:
    if is_blank(age):
        return None
    try:
        return int(str(age).strip())
    except ValueError:
        logger.warning("Failed to parse age: %s", age)
        return None


def truncate(value: Optional[str], max_length: int) -> Optional[str]:
    if value is None:
        return None
    return value.strip()[:max_length]


def default_start_time(time_value: Optional[str]) -> str:
    return DEFAULT_START_TIME if is_blank(time_value) else time_value.strip()


def to_iso_datetime(date_value: Optional[str], time_value: Optional[str]) -> Optional[str]:
    """
    Combine "2026-01-05" and "10:00[:00]" into "2026-01-05T10:00:00.000Z".

    Returns None when either part is missing or unparsable.
    """
    if is_blank(date_value) or is_blank(time_value):
        return None
    try:
        day = date.fromisoformat(date_value.strip()[:10])
        parts = [int(p) for p in time_value.strip().split(":")]
        hour = parts[0] if len(parts) > 0 else 0
        minute = parts[1] if len(parts) > 1 else 0
        second = parts[2] if len(parts) > 2 else 0
        moment = datetime(day.year, day.month, day.day, hour, minute, second)
    except (ValueError, TypeError):
        logger.warning("Failed to convert date/time to ISO: date=%s time=%s", date_value, time_value)
        return None
    return format_iso_millis(moment)


def format_iso_millis(moment: datetime) -> str:
    """Format as yyyy-MM-ddTHH:mm:ss.SSSZ."""
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def now_iso_millis() -> str:
    return format_iso_millis(datetime.now(timezone.utc))


def today_print_date() -> str:
    return date.today().strftime(PRINT_DATE_FORMAT)


def split_judiciary(judiciary_names: Optional[str]) -> List[str]:
    """Split "A Smith, B Jones; C Brown" into trimmed, non-empty names."""
    if is_blank(judiciary_names):
        return []
    return [name.strip() for name in _JUDICIARY_SEPARATORS.split(judiciary_names) if name.strip()]


def join_name(*parts: Optional[str]) -> str:
    """Join name parts with single spaces, skipping blanks."""
    return " ".join(p.strip() for p in parts if not is_blank(p))
