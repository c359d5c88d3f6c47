"""
Request validation for holiday writes and query parameters.

Every failure raises InvalidInput with the message returned to the client.
"""
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple

from holiday_api.errors import InvalidInput
from holiday_api.models.holiday import Holiday, HolidayPayload, HolidayType
from holiday_api.utils.dates import ISO_DATE_RE, parse_iso_datetime, start_of_day

MIN_YEAR = 1900
MAX_YEAR = 2100

REQUIRED_FIELDS_MESSAGE = "Start date and name are required fields"
DATETIME_FORMAT_HINT = "Use ISO 8601 format (YYYY-MM-DDT00:00:00.000Z)"
YEAR_MESSAGE = f"Invalid year format or out of range ({MIN_YEAR}-{MAX_YEAR})"


def _require_name_and_start(payload: HolidayPayload) -> None:
    if not payload.name or not payload.name.strip() or not payload.start_date:
        raise InvalidInput(REQUIRED_FIELDS_MESSAGE)


def _parse_period(payload: HolidayPayload) -> Tuple[datetime, Optional[datetime]]:
    start = parse_iso_datetime(payload.start_date)
    if start is None:
        raise InvalidInput(f"Invalid start date format. {DATETIME_FORMAT_HINT}")

    end = None
    if payload.end_date:
        end = parse_iso_datetime(payload.end_date)
        if end is None:
            raise InvalidInput(f"Invalid end date format. {DATETIME_FORMAT_HINT}")
    return start, end


def _parse_type(raw: Optional[str]) -> Optional[HolidayType]:
    if raw is None:
        return None
    try:
        return HolidayType(raw)
    except ValueError:
        raise InvalidInput("Invalid holiday type. Use 'static' or 'dynamic'")


def validate_create(payload: HolidayPayload) -> Dict[str, Any]:
    """Fields for a new document, with defaults applied."""
    _require_name_and_start(payload)
    start, end = _parse_period(payload)
    holiday_type = _parse_type(payload.type) or HolidayType.DYNAMIC

    return {
        "name": payload.name,
        "description": payload.description or "",
        "start_date": start,
        "end_date": end,
        "is_recurring": payload.is_recurring if payload.is_recurring is not None else False,
        "type": holiday_type.value,
        "is_active": payload.is_active if payload.is_active is not None else True,
    }


def validate_update(payload: HolidayPayload, current: Holiday) -> Dict[str, Any]:
    """
    Fields to write for an update of ``current``.

    name and startDate are always required. Any other field left out of the
    request (or sent as null) keeps its stored value.
    """
    _require_name_and_start(payload)
    start, end = _parse_period(payload)
    holiday_type = _parse_type(payload.type) or current.type

    return {
        "name": payload.name,
        "description": payload.description if payload.description is not None else current.description,
        "start_date": start,
        "end_date": end if end is not None else current.end_date,
        "is_recurring": payload.is_recurring if payload.is_recurring is not None else current.is_recurring,
        "type": HolidayType(holiday_type).value,
        "is_active": payload.is_active if payload.is_active is not None else current.is_active,
    }


def parse_year(raw: Any) -> int:
    # int() also reads non-ASCII digits
    if isinstance(raw, str) and not raw.isascii():
        raise InvalidInput(YEAR_MESSAGE)
    try:
        year = int(raw)
    except (TypeError, ValueError):
        raise InvalidInput(YEAR_MESSAGE)
    if year < MIN_YEAR or year > MAX_YEAR:
        raise InvalidInput(YEAR_MESSAGE)
    return year


def _parse_range_day(raw: str) -> date:
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise InvalidInput("Invalid date values")


def parse_range(start: Optional[str], end: Optional[str]) -> Tuple[datetime, datetime]:
    """
    Parse the in-range query bounds (YYYY-MM-DD each).

    Both bounds are taken at 00:00:00 UTC of their day. A start after the
    end is not rejected.
    """
    if not start or not end:
        raise InvalidInput("Both start and end parameters are required")
    if not ISO_DATE_RE.match(start) or not ISO_DATE_RE.match(end):
        raise InvalidInput("Invalid date format. Use YYYY-MM-DD format")
    return start_of_day(_parse_range_day(start)), start_of_day(_parse_range_day(end))
