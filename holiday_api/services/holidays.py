from datetime import datetime
from typing import List, Optional, Sequence

from dateutil.relativedelta import relativedelta

from holiday_api.db import HolidayStore
from holiday_api.errors import NotFound
from holiday_api.models.holiday import Holiday, HolidayPayload, ImportSummary, StaticHolidaySeed
from holiday_api.services import recurrence
from holiday_api.services.seed import import_static_holidays
from holiday_api.services.validation import parse_year, validate_create, validate_update
from holiday_api.utils.dates import utc_now

HOLIDAY_NOT_FOUND = "Holiday not found"


class HolidayService:
    """Holiday queries and writes on top of a HolidayStore."""

    def __init__(self, store: HolidayStore):
        self.store = store

    # Queries. Every mode reads the whole collection: recurring records have
    # to be resolved against the query before they can be filtered.

    async def list_all(self) -> List[Holiday]:
        """All records as stored, ordered by their template start date."""
        holidays = await self.store.list_all()
        return sorted(holidays, key=lambda h: h.start_date)

    async def list_for_year(self, year: int) -> List[Holiday]:
        """
        Occurrences of every record in ``year``.

        Recurring records are moved onto ``year``; non-recurring records are
        kept only if they start in it. Inactive records are included.
        """
        year = parse_year(year)
        holidays = await self.store.list_all()
        resolved = [
            occurrence
            for occurrence in (recurrence.resolve_for_year(h, year) for h in holidays)
            if occurrence is not None
        ]
        return sorted(resolved, key=lambda h: h.start_date)

    async def list_upcoming(
        self,
        reference: datetime,
        horizon: relativedelta = recurrence.DEFAULT_UPCOMING_HORIZON,
    ) -> List[Holiday]:
        """
        Active records whose next start falls within ``horizon`` of ``reference``.

        Args:
            reference: The instant to look ahead from (normally now, UTC).
            horizon: How far ahead to look. Defaults to 3 months.

        Returns:
            Records as stored, ordered by the date they next start.
        """
        holidays = await self.store.list_all()
        upcoming = [h for h in holidays if recurrence.is_upcoming(h, reference, horizon)]
        return sorted(upcoming, key=lambda h: recurrence.effective_start(h, reference))

    async def list_in_range(self, range_start: datetime, range_end: datetime) -> List[Holiday]:
        """Active records with an occurrence overlapping the range, ordered by that occurrence."""
        holidays = await self.store.list_all()
        matches = []
        for holiday in holidays:
            start = recurrence.matching_start(holiday, range_start, range_end)
            if start is not None:
                matches.append((start, holiday))
        matches.sort(key=lambda pair: pair[0])
        return [holiday for _, holiday in matches]

    # Writes

    async def get(self, holiday_id: str) -> Holiday:
        holiday = await self.store.get_by_id(holiday_id)
        if holiday is None:
            raise NotFound(HOLIDAY_NOT_FOUND)
        return holiday

    async def create(self, payload: HolidayPayload) -> Holiday:
        fields = validate_create(payload)
        return await self.store.insert(fields)

    async def update(self, holiday_id: str, payload: HolidayPayload) -> Holiday:
        current = await self.get(holiday_id)
        fields = validate_update(payload, current)
        updated_at = await self.store.update(holiday_id, fields)
        if updated_at is None:
            # removed between the read and the write
            raise NotFound(HOLIDAY_NOT_FOUND)
        return await self.get(holiday_id)

    async def delete(self, holiday_id: str) -> None:
        if not await self.store.delete(holiday_id):
            raise NotFound(HOLIDAY_NOT_FOUND)

    async def import_static(
        self, seeds: Sequence[StaticHolidaySeed], year: Optional[int] = None
    ) -> ImportSummary:
        if year is None:
            year = utc_now().year
        return await import_static_holidays(self.store, seeds, year)
