from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from holiday_api.db import get_holiday_store
from holiday_api.main import app
from holiday_api.models.holiday import Holiday
from holiday_api.errors import StoreError


class InMemoryHolidayStore:
    """Same async interface as HolidayStore, kept in a dict."""

    def __init__(self):
        self.docs: Dict[ObjectId, Dict[str, Any]] = {}

    @staticmethod
    def _oid(holiday_id: str) -> Optional[ObjectId]:
        return ObjectId(holiday_id) if ObjectId.is_valid(holiday_id) else None

    async def get_by_id(self, holiday_id: str) -> Optional[Holiday]:
        doc = self.docs.get(self._oid(holiday_id))
        return Holiday.from_document(doc) if doc else None

    async def list_all(self) -> List[Holiday]:
        return [Holiday.from_document(doc) for doc in self.docs.values()]

    async def find_where(self, **equalities: Any) -> List[Holiday]:
        return [
            Holiday.from_document(doc)
            for doc in self.docs.values()
            if all(doc.get(k) == v for k, v in equalities.items())
        ]

    async def insert(self, fields: Dict[str, Any]) -> Holiday:
        now = datetime.now(timezone.utc)
        oid = ObjectId()
        self.docs[oid] = dict(fields, _id=oid, created_at=now, updated_at=now)
        return Holiday.from_document(self.docs[oid])

    async def update(self, holiday_id: str, fields: Dict[str, Any]) -> Optional[datetime]:
        doc = self.docs.get(self._oid(holiday_id))
        if doc is None:
            return None
        updated_at = datetime.now(timezone.utc)
        doc.update(fields, updated_at=updated_at)
        return updated_at

    async def delete(self, holiday_id: str) -> bool:
        return self.docs.pop(self._oid(holiday_id), None) is not None

    async def create_indexes(self) -> None:
        pass


class FailingHolidayStore(InMemoryHolidayStore):
    """Every call fails the way HolidayStore does when MongoDB is unreachable."""

    async def list_all(self):
        raise StoreError("Store read failed: connection refused")

    async def insert(self, fields):
        raise StoreError("Store write failed: connection refused")


class BrokenHolidayStore(InMemoryHolidayStore):
    """Fails with an error the app has no handler of its own for."""

    async def list_all(self):
        raise RuntimeError("unexpected failure")


def utc(year, month, day, hour=0, minute=0, second=0) -> datetime:
    return datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)


def make_holiday(name="Holiday", start=None, end=None, recurring=False, active=True, **extra) -> Holiday:
    """Holiday model for resolver/service tests (no store involved)."""
    return Holiday(
        id=extra.pop("id", str(ObjectId())),
        name=name,
        start_date=start or utc(2025, 1, 1),
        end_date=end,
        is_recurring=recurring,
        is_active=active,
        **extra,
    )


@pytest.fixture()
def store():
    return InMemoryHolidayStore()


@pytest.fixture()
def client(store):
    app.dependency_overrides[get_holiday_store] = lambda: store
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def failing_client():
    failing = FailingHolidayStore()
    app.dependency_overrides[get_holiday_store] = lambda: failing
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def broken_client():
    broken = BrokenHolidayStore()
    app.dependency_overrides[get_holiday_store] = lambda: broken
    yield TestClient(app)
    app.dependency_overrides.clear()
