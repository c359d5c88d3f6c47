"""
Holiday models.

Attributes are snake_case (and so are the stored MongoDB documents); the
JSON API uses the camelCase aliases.
"""
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_serializer, model_validator

from holiday_api.utils.dates import as_utc, format_iso_datetime


class HolidayType(str, Enum):
    STATIC = "static"  # fixed date every year (1/1, 30/4, ...)
    DYNAMIC = "dynamic"  # date depends on the year (lunar new year, make-up days)


class HolidayBase(BaseModel):
    name: str
    description: str = ""
    start_date: datetime = Field(..., alias="startDate")
    end_date: Optional[datetime] = Field(None, alias="endDate")
    is_recurring: bool = Field(False, alias="isRecurring")
    type: HolidayType = HolidayType.DYNAMIC
    is_active: bool = Field(True, alias="isActive")

    class Config:
        populate_by_name = True

    @field_serializer("start_date", "end_date")
    def _serialize_period(self, value: Optional[datetime]) -> Optional[str]:
        return format_iso_datetime(value) if value else None


class Holiday(HolidayBase):
    """A stored holiday record, or an occurrence resolved from one."""
    id: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    @field_serializer("created_at", "updated_at")
    def _serialize_timestamps(self, value: Optional[datetime]) -> Optional[str]:
        return format_iso_datetime(value) if value else None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Holiday":
        """Build from a raw store document, filling defaults for missing keys."""
        end_date = doc.get("end_date")
        created_at = doc.get("created_at")
        updated_at = doc.get("updated_at")
        return cls(
            id=str(doc["_id"]),
            name=doc["name"],
            description=doc.get("description") or "",
            start_date=as_utc(doc["start_date"]),
            end_date=as_utc(end_date) if end_date else None,
            is_recurring=doc.get("is_recurring") or False,
            type=doc.get("type") or HolidayType.DYNAMIC,
            is_active=True if doc.get("is_active") is None else doc["is_active"],
            created_at=as_utc(created_at) if created_at else None,
            updated_at=as_utc(updated_at) if updated_at else None,
        )


class HolidayPayload(BaseModel):
    """
    Request body for create/update.

    Everything is optional here so the validation layer can report
    missing fields and bad date strings with its own messages.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")
    is_recurring: Optional[bool] = Field(None, alias="isRecurring")
    type: Optional[str] = None
    is_active: Optional[bool] = Field(None, alias="isActive")

    class Config:
        populate_by_name = True


class StaticHolidaySeed(BaseModel):
    """One entry of the static holiday seed file (a fixed month/day)."""
    name: str
    description: str = ""
    month: int = Field(..., ge=1, le=12)
    day: int = Field(..., ge=1, le=31)

    @model_validator(mode="after")
    def _check_calendar_day(self) -> "StaticHolidaySeed":
        # 2000 is a leap year, so Feb 29 is accepted
        try:
            date(2000, self.month, self.day)
        except ValueError:
            raise ValueError(f"{self.month:02d}-{self.day:02d} is not a valid calendar day for {self.name!r}")
        return self


class ImportResult(BaseModel):
    id: str
    name: str
    status: str = Field(..., description="added or already_exists")


class ImportSummary(BaseModel):
    message: str = "Static holidays import completed"
    results: List[ImportResult] = []
    total_added: int = Field(0, alias="totalAdded")
    total_skipped: int = Field(0, alias="totalSkipped")

    class Config:
        populate_by_name = True


class DeleteResponse(BaseModel):
    message: str = "Holiday deleted successfully"
    id: str
