"""
MongoDB access for holiday documents.

HolidayStore is the only place that talks to the collection; everything
above it works with Holiday models. Store failures are re-raised as
StoreError.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from holiday_api.config import DB_NAME, HOLIDAYS_COLLECTION, MONGO_URL
from holiday_api.errors import StoreError
from holiday_api.models.holiday import Holiday
from holiday_api.utils.dates import utc_now

logger = logging.getLogger(__name__)

client = AsyncIOMotorClient(MONGO_URL, tz_aware=True)
db = client[DB_NAME]
holidays_collection = db[HOLIDAYS_COLLECTION]


def _object_id(holiday_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(holiday_id)
    except (InvalidId, TypeError):
        return None


class HolidayStore:
    """Async CRUD over the holidays collection."""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def get_by_id(self, holiday_id: str) -> Optional[Holiday]:
        oid = _object_id(holiday_id)
        if oid is None:
            return None
        try:
            doc = await self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            logger.error("Failed to read holiday %s: %s", holiday_id, e)
            raise StoreError(f"Store read failed: {e}") from e
        return Holiday.from_document(doc) if doc else None

    async def list_all(self) -> List[Holiday]:
        try:
            docs = await self.collection.find({}).to_list(length=None)
        except PyMongoError as e:
            logger.error("Failed to list holidays: %s", e)
            raise StoreError(f"Store read failed: {e}") from e
        return [Holiday.from_document(doc) for doc in docs]

    async def find_where(self, **equalities: Any) -> List[Holiday]:
        """Equality-only query, e.g. find_where(name="Tet", is_recurring=True)."""
        try:
            docs = await self.collection.find(equalities).to_list(length=None)
        except PyMongoError as e:
            logger.error("Failed to query holidays %s: %s", equalities, e)
            raise StoreError(f"Store query failed: {e}") from e
        return [Holiday.from_document(doc) for doc in docs]

    async def insert(self, fields: Dict[str, Any]) -> Holiday:
        """Insert a new document; the store assigns id, created_at and updated_at."""
        now = utc_now()
        doc = dict(fields, created_at=now, updated_at=now)
        try:
            res = await self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.error("Failed to insert holiday %r: %s", fields.get("name"), e)
            raise StoreError(f"Store write failed: {e}") from e
        doc["_id"] = res.inserted_id
        return Holiday.from_document(doc)

    async def update(self, holiday_id: str, fields: Dict[str, Any]) -> Optional[datetime]:
        """Set fields and refresh updated_at. Returns None if the id does not exist."""
        oid = _object_id(holiday_id)
        if oid is None:
            return None
        updated_at = utc_now()
        try:
            res = await self.collection.update_one(
                {"_id": oid},
                {"$set": dict(fields, updated_at=updated_at)},
            )
        except PyMongoError as e:
            logger.error("Failed to update holiday %s: %s", holiday_id, e)
            raise StoreError(f"Store write failed: {e}") from e
        if res.matched_count == 0:
            return None
        return updated_at

    async def delete(self, holiday_id: str) -> bool:
        oid = _object_id(holiday_id)
        if oid is None:
            return False
        try:
            res = await self.collection.delete_one({"_id": oid})
        except PyMongoError as e:
            logger.error("Failed to delete holiday %s: %s", holiday_id, e)
            raise StoreError(f"Store write failed: {e}") from e
        return res.deleted_count > 0

    async def create_indexes(self) -> None:
        # lookup used by the static-holiday import
        await self.collection.create_index(
            [("name", ASCENDING), ("is_recurring", ASCENDING), ("type", ASCENDING)]
        )


def get_holiday_store() -> HolidayStore:
    """FastAPI dependency; tests override it with an in-memory store."""
    return HolidayStore(holidays_collection)
