"""
Import of the static (fixed-date, annually recurring) holiday set.

The seed set comes from configuration (a JSON file) and is handed to
import_static_holidays at call time. Each seed is checked on its own: an
existing static recurring record with the same name is reported as
already_exists instead of failing the batch.
"""
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Sequence

from dateutil.relativedelta import relativedelta

from holiday_api.db import HolidayStore
from holiday_api.models.holiday import HolidayType, ImportResult, ImportSummary, StaticHolidaySeed

logger = logging.getLogger(__name__)

STATUS_ADDED = "added"
STATUS_EXISTS = "already_exists"


def load_static_seeds(path: Path) -> List[StaticHolidaySeed]:
    with open(path, encoding="utf-8") as fh:
        raw = json.load(fh)
    return [StaticHolidaySeed(**item) for item in raw]


def seed_fields(seed: StaticHolidaySeed, year: int) -> dict:
    """Document fields for ``seed``, with its template date placed in ``year``."""
    return {
        "name": seed.name,
        "description": seed.description,
        # a Feb 29 seed falls on Feb 28 in non-leap years
        "start_date": datetime(year, 1, 1, tzinfo=timezone.utc) + relativedelta(month=seed.month, day=seed.day),
        "end_date": None,
        "is_recurring": True,
        "type": HolidayType.STATIC.value,
        "is_active": True,
    }


async def import_static_holidays(
    store: HolidayStore, seeds: Sequence[StaticHolidaySeed], year: int
) -> ImportSummary:
    results: List[ImportResult] = []

    for seed in seeds:
        existing = await store.find_where(
            name=seed.name, is_recurring=True, type=HolidayType.STATIC.value
        )
        if existing:
            results.append(ImportResult(id=existing[0].id, name=seed.name, status=STATUS_EXISTS))
            continue

        created = await store.insert(seed_fields(seed, year))
        logger.info("Imported static holiday %r as %s", seed.name, created.id)
        results.append(ImportResult(id=created.id, name=seed.name, status=STATUS_ADDED))

    added = sum(1 for r in results if r.status == STATUS_ADDED)
    return ImportSummary(
        results=results,
        total_added=added,
        total_skipped=len(results) - added,
    )
