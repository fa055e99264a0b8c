from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from pymongo import ASCENDING, DESCENDING, AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import ConnectionFailure

from bizdir.exceptions.custom import NotFoundError, StoreUnavailableError
from bizdir.mappers.identifiers import new_storage_id
from bizdir.schemas.business import Business
from bizdir.schemas.queries import BusinessQuery, SubmissionQuery
from bizdir.schemas.submission import BusinessSubmission, SubmissionStatus

logger = logging.getLogger(__name__)

BUSINESS_COLLECTION = "businesses"
SUBMISSION_COLLECTION = "businesssubmissions"


@contextmanager
def _store_errors(operation: str):
    try:
        yield
    except ConnectionFailure as exc:
        raise StoreUnavailableError(f"{operation} failed: {exc}") from exc


def _contains(fragment: str) -> dict[str, str]:
    return {"$regex": re.escape(fragment), "$options": "i"}


def _business_filter(query: BusinessQuery) -> dict[str, Any]:
    mongo_filter: dict[str, Any] = {}
    if query.search:
        pattern = _contains(query.search)
        mongo_filter["$or"] = [
            {"businessName": pattern},
            {"shortDescription": pattern},
            {"mobile": pattern},
            {"businessId": pattern},
        ]
    if query.categories:
        mongo_filter["categories"] = {"$in": query.categories}
    if query.cities:
        mongo_filter["cities"] = {"$in": query.cities}
    if query.business_types:
        mongo_filter["businessType"] = {"$in": [str(t) for t in query.business_types]}
    if query.verified is not None:
        mongo_filter["verified"] = query.verified
    return mongo_filter


def _submission_filter(query: SubmissionQuery) -> dict[str, Any]:
    mongo_filter: dict[str, Any] = {}
    if query.status is not None:
        mongo_filter["status"] = str(query.status)
    if query.category:
        mongo_filter["categories"] = {"$in": [query.category]}
    if query.date_from or query.date_to:
        window: dict[str, datetime] = {}
        if query.date_from:
            window["$gte"] = query.date_from
        if query.date_to:
            window["$lte"] = query.date_to
        mongo_filter["submittedAt"] = window
    if query.search:
        pattern = _contains(query.search)
        mongo_filter["$or"] = [
            {"businessName": pattern},
            {"submitterName": pattern},
            {"submitterEmail": pattern},
        ]
    return mongo_filter


class MongoBusinessStore:
    def __init__(self, collection: AsyncCollection):
        self._collection = collection

    async def _find(self, mongo_filter: dict[str, Any], operation: str) -> list[Business]:
        with _store_errors(operation):
            docs = await self._collection.find(mongo_filter).to_list()
        return [Business.model_validate(doc) for doc in docs]

    async def insert(self, business: Business) -> Business:
        if business.id is None:
            business = business.model_copy(update={"id": new_storage_id()})
        with _store_errors("Business insert"):
            await self._collection.insert_one(business.model_dump(by_alias=True))
        return business

    async def get(self, identifier: str) -> Business | None:
        with _store_errors("Business lookup"):
            doc = await self._collection.find_one(
                {"$or": [{"_id": identifier}, {"businessId": identifier}]}
            )
        return Business.model_validate(doc) if doc else None

    async def update(self, business: Business) -> Business:
        with _store_errors("Business update"):
            result = await self._collection.replace_one(
                {"_id": business.id}, business.model_dump(by_alias=True)
            )
        if result.matched_count == 0:
            raise NotFoundError("Business", str(business.id))
        return business

    async def find_by_name(self, name: str) -> list[Business]:
        return await self._find(
            {"businessName": {"$regex": f"^{re.escape(name)}$", "$options": "i"}},
            "Business name lookup",
        )

    async def find_by_field(self, path: str, value: str) -> list[Business]:
        return await self._find({path: value}, f"Business {path} lookup")

    async def find_by_field_containing(self, path: str, fragment: str) -> list[Business]:
        return await self._find({path: _contains(fragment)}, f"Business {path} lookup")

    async def search(
        self, query: BusinessQuery, skip: int, limit: int
    ) -> tuple[list[Business], int]:
        mongo_filter = _business_filter(query)
        with _store_errors("Business search"):
            cursor = (
                self._collection.find(mongo_filter)
                .sort([("verified", DESCENDING), ("createdAt", DESCENDING)])
                .skip(skip)
                .limit(limit)
            )
            docs = await cursor.to_list()
            total = await self._collection.count_documents(mongo_filter)
        return [Business.model_validate(doc) for doc in docs], total

    async def ping(self) -> None:
        with _store_errors("Ping"):
            await self._collection.database.command("ping")

    async def ensure_indexes(self) -> None:
        await self._collection.create_index([("businessId", ASCENDING)], unique=True)
        await self._collection.create_index([("mobile", ASCENDING)])
        await self._collection.create_index(
            [
                ("categories", ASCENDING),
                ("cities", ASCENDING),
                ("businessType", ASCENDING),
                ("verified", DESCENDING),
                ("createdAt", DESCENDING),
            ],
            name="core_multiselect_compound",
        )


class MongoSubmissionStore:
    def __init__(self, collection: AsyncCollection):
        self._collection = collection

    async def insert(self, submission: BusinessSubmission) -> BusinessSubmission:
        if submission.id is None:
            submission = submission.model_copy(update={"id": new_storage_id()})
        with _store_errors("Submission insert"):
            await self._collection.insert_one(submission.model_dump(by_alias=True))
        return submission

    async def _find_one(self, mongo_filter: dict[str, Any]) -> BusinessSubmission | None:
        with _store_errors("Submission lookup"):
            doc = await self._collection.find_one(mongo_filter)
        return BusinessSubmission.model_validate(doc) if doc else None

    async def get(self, submission_id: str) -> BusinessSubmission | None:
        return await self._find_one({"_id": submission_id})

    async def get_by_tracking_id(self, tracking_id: str) -> BusinessSubmission | None:
        return await self._find_one({"submissionId": tracking_id})

    async def update(self, submission: BusinessSubmission) -> BusinessSubmission:
        with _store_errors("Submission update"):
            result = await self._collection.replace_one(
                {"_id": submission.id}, submission.model_dump(by_alias=True)
            )
        if result.matched_count == 0:
            raise NotFoundError("Submission", str(submission.id))
        return submission

    async def delete(self, submission_id: str) -> bool:
        with _store_errors("Submission delete"):
            result = await self._collection.delete_one({"_id": submission_id})
        return result.deleted_count > 0

    async def delete_many(self, submission_ids: list[str]) -> int:
        with _store_errors("Submission bulk delete"):
            result = await self._collection.delete_many({"_id": {"$in": submission_ids}})
        return result.deleted_count

    async def list(
        self, query: SubmissionQuery, skip: int, limit: int
    ) -> tuple[list[BusinessSubmission], int]:
        mongo_filter = _submission_filter(query)
        with _store_errors("Submission listing"):
            cursor = (
                self._collection.find(mongo_filter)
                .sort("submittedAt", DESCENDING)
                .skip(skip)
                .limit(limit)
            )
            docs = await cursor.to_list()
            total = await self._collection.count_documents(mongo_filter)
        return [BusinessSubmission.model_validate(doc) for doc in docs], total

    async def count(
        self, status: SubmissionStatus | None = None, since: datetime | None = None
    ) -> int:
        mongo_filter: dict[str, Any] = {}
        if status is not None:
            mongo_filter["status"] = str(status)
        if since is not None:
            mongo_filter["submittedAt"] = {"$gte": since}
        with _store_errors("Submission count"):
            return await self._collection.count_documents(mongo_filter)

    async def recent(self, since: datetime, limit: int) -> list[BusinessSubmission]:
        with _store_errors("Recent submissions lookup"):
            cursor = (
                self._collection.find({"submittedAt": {"$gte": since}})
                .sort("submittedAt", DESCENDING)
                .limit(limit)
            )
            docs = await cursor.to_list()
        return [BusinessSubmission.model_validate(doc) for doc in docs]

    async def ping(self) -> None:
        with _store_errors("Ping"):
            await self._collection.database.command("ping")

    async def ensure_indexes(self) -> None:
        await self._collection.create_index(
            [("status", ASCENDING), ("submittedAt", DESCENDING)]
        )
        await self._collection.create_index([("submissionId", ASCENDING)], unique=True)
        await self._collection.create_index([("submitterEmail", ASCENDING)])
        await self._collection.create_index([("categories", ASCENDING)])
        await self._collection.create_index([("cities", ASCENDING)])


class MongoStore:
    def __init__(self, uri: str, database: str, timeout_ms: int = 5000):
        self._client: AsyncMongoClient = AsyncMongoClient(
            uri, serverSelectionTimeoutMS=timeout_ms, tz_aware=True
        )
        db = self._client[database]
        self.businesses = MongoBusinessStore(db[BUSINESS_COLLECTION])
        self.submissions = MongoSubmissionStore(db[SUBMISSION_COLLECTION])

    async def ensure_indexes(self) -> None:
        with _store_errors("Index creation"):
            await self.businesses.ensure_indexes()
            await self.submissions.ensure_indexes()
        logger.info("Database indexes ensured")

    async def close(self) -> None:
        await self._client.close()
