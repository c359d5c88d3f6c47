import logging
from typing import List, Optional

from dateutil.relativedelta import relativedelta
from fastapi import APIRouter, Depends, Query
from pydantic import ValidationError

from holiday_api.config import STATIC_HOLIDAYS_FILE, UPCOMING_HORIZON_MONTHS
from holiday_api.db import HolidayStore, get_holiday_store
from holiday_api.errors import HolidayAPIError, StoreError
from holiday_api.models.holiday import (
    DeleteResponse,
    Holiday,
    HolidayPayload,
    ImportSummary,
    StaticHolidaySeed,
)
from holiday_api.services.holidays import HolidayService
from holiday_api.services.seed import load_static_seeds
from holiday_api.services.validation import parse_range, parse_year
from holiday_api.utils.action_log import log_holiday_action
from holiday_api.utils.dates import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/holidays", tags=["Holidays"])


def get_holiday_service(store: HolidayStore = Depends(get_holiday_store)) -> HolidayService:
    return HolidayService(store)


def get_static_seeds() -> List[StaticHolidaySeed]:
    try:
        return load_static_seeds(STATIC_HOLIDAYS_FILE)
    except ValidationError as e:
        logger.error("Static holiday seed file %s is invalid: %s", STATIC_HOLIDAYS_FILE, e)
        raise HolidayAPIError("Static holiday seed file is invalid") from e


@router.get("", response_model=List[Holiday])
async def list_holidays(
    year: Optional[str] = Query(None, description="Resolve holidays onto this year (1900-2100)"),
    service: HolidayService = Depends(get_holiday_service),
):
    """
    All holidays, or with ?year=YYYY the occurrences of every holiday in that year
    (recurring ones moved onto it).
    """
    year_value = parse_year(year) if year else None
    try:
        if year_value is None:
            return await service.list_all()
        return await service.list_for_year(year_value)
    except StoreError as e:
        raise StoreError("Failed to fetch holidays") from e


@router.get("/upcoming", response_model=List[Holiday])
async def list_upcoming_holidays(service: HolidayService = Depends(get_holiday_service)):
    """Active holidays starting within the next few months (3 by default)."""
    try:
        return await service.list_upcoming(
            utc_now(), relativedelta(months=UPCOMING_HORIZON_MONTHS)
        )
    except StoreError as e:
        raise StoreError("Failed to fetch upcoming holidays") from e


@router.get("/in-range", response_model=List[Holiday])
async def list_holidays_in_range(
    start: Optional[str] = Query(None, description="YYYY-MM-DD"),
    end: Optional[str] = Query(None, description="YYYY-MM-DD"),
    service: HolidayService = Depends(get_holiday_service),
):
    range_start, range_end = parse_range(start, end)
    try:
        return await service.list_in_range(range_start, range_end)
    except StoreError as e:
        raise StoreError("Failed to fetch holidays in range") from e


@router.post("", response_model=Holiday, status_code=201)
async def create_holiday(
    payload: HolidayPayload,
    service: HolidayService = Depends(get_holiday_service),
):
    try:
        holiday = await service.create(payload)
    except StoreError as e:
        raise StoreError("Failed to create holiday") from e
    log_holiday_action("CREATED", id=holiday.id, name=holiday.name)
    return holiday


@router.post("/import-static", response_model=ImportSummary)
async def import_static(
    service: HolidayService = Depends(get_holiday_service),
    seeds: List[StaticHolidaySeed] = Depends(get_static_seeds),
):
    """Add the fixed-date recurring holidays from the seed file, skipping ones already present."""
    try:
        summary = await service.import_static(seeds)
    except StoreError as e:
        raise StoreError("Failed to import static holidays") from e
    log_holiday_action(
        "IMPORTED_STATIC", added=summary.total_added, skipped=summary.total_skipped
    )
    return summary


@router.get("/{holiday_id}", response_model=Holiday)
async def get_holiday(holiday_id: str, service: HolidayService = Depends(get_holiday_service)):
    try:
        return await service.get(holiday_id)
    except StoreError as e:
        raise StoreError("Failed to fetch holiday") from e


@router.put("/{holiday_id}", response_model=Holiday)
async def update_holiday(
    holiday_id: str,
    payload: HolidayPayload,
    service: HolidayService = Depends(get_holiday_service),
):
    """Replace a holiday. Fields left out of the body keep their stored values."""
    try:
        holiday = await service.update(holiday_id, payload)
    except StoreError as e:
        raise StoreError("Failed to update holiday") from e
    log_holiday_action("UPDATED", id=holiday_id, name=holiday.name)
    return holiday


@router.delete("/{holiday_id}", response_model=DeleteResponse)
async def delete_holiday(holiday_id: str, service: HolidayService = Depends(get_holiday_service)):
    try:
        await service.delete(holiday_id)
    except StoreError as e:
        raise StoreError("Failed to delete holiday") from e
    log_holiday_action("DELETED", id=holiday_id)
    return DeleteResponse(id=holiday_id)
