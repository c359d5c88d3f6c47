"""
Projection of holiday records onto concrete years and date ranges.

A recurring record keeps its month/day/time and takes the target year. A
non-recurring record is only ever seen at its own stored dates. Nothing in
here touches the store, and the input records are never mutated: every
resolution is a fresh copy.

Feb 29 templates land on Feb 28 in non-leap years (relativedelta clamps the
day to the end of the month).
"""
from datetime import datetime
from typing import Iterable, Optional, Tuple

from dateutil.relativedelta import relativedelta

from holiday_api.models.holiday import Holiday

DEFAULT_UPCOMING_HORIZON = relativedelta(months=3)


def project_to_year(moment: datetime, year: int) -> datetime:
    return moment + relativedelta(year=year)


def resolve_for_year(record: Holiday, year: int) -> Optional[Holiday]:
    """Occurrence of ``record`` in ``year``, or None if it has none."""
    if not record.is_recurring:
        if record.start_date.year != year:
            return None
        return record.model_copy()

    update = {"start_date": project_to_year(record.start_date, year)}
    if record.end_date is not None:
        update["end_date"] = project_to_year(record.end_date, year)
    return record.model_copy(update=update)


def effective_start(record: Holiday, reference: datetime) -> datetime:
    """
    The start date ``record`` is next judged by, seen from ``reference``.

    Recurring records are moved to the reference year, or the year after if
    this year's occurrence is already behind us. Non-recurring records keep
    their stored date, passed or not.
    """
    if not record.is_recurring:
        return record.start_date
    start = project_to_year(record.start_date, reference.year)
    if start < reference:
        start = project_to_year(record.start_date, reference.year + 1)
    return start


def is_upcoming(
    record: Holiday,
    reference: datetime,
    horizon: relativedelta = DEFAULT_UPCOMING_HORIZON,
) -> bool:
    if not record.is_active:
        return False
    start = effective_start(record, reference)
    return reference <= start <= reference + horizon


def _period_in_year(record: Holiday, year: int) -> Tuple[datetime, datetime]:
    start = project_to_year(record.start_date, year)
    end = project_to_year(record.end_date, year) if record.end_date else start
    return start, end


def _stored_period(record: Holiday) -> Tuple[datetime, datetime]:
    return record.start_date, record.end_date or record.start_date


def _candidate_periods(
    record: Holiday, range_start: datetime, range_end: datetime
) -> Iterable[Tuple[datetime, datetime]]:
    if not record.is_recurring:
        yield _stored_period(record)
        return
    # Only the two boundary years are looked at, even for longer ranges.
    yield _period_in_year(record, range_start.year)
    if range_start.year != range_end.year:
        yield _period_in_year(record, range_end.year)


def matching_start(
    record: Holiday, range_start: datetime, range_end: datetime
) -> Optional[datetime]:
    """Start of the first occurrence of ``record`` intersecting the range."""
    if not record.is_active:
        return None
    for start, end in _candidate_periods(record, range_start, range_end):
        if end >= range_start and start <= range_end:
            return start
    return None


def overlaps_range(record: Holiday, range_start: datetime, range_end: datetime) -> bool:
    return matching_start(record, range_start, range_end) is not None
