from holiday_api.models.holiday import (
    Holiday,
    HolidayPayload,
    HolidayType,
    ImportResult,
    ImportSummary,
    DeleteResponse,
    StaticHolidaySeed,
)

__all__ = [
    "Holiday",
    "HolidayPayload",
    "HolidayType",
    "ImportResult",
    "ImportSummary",
    "DeleteResponse",
    "StaticHolidaySeed",
]
