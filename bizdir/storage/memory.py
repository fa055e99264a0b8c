"""Dict-backed stores with the same query semantics as the Mongo ones."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from bizdir.exceptions.custom import NotFoundError
from bizdir.mappers.identifiers import new_storage_id
from bizdir.schemas.business import Business
from bizdir.schemas.queries import BusinessQuery, SubmissionQuery
from bizdir.schemas.submission import BusinessSubmission, SubmissionStatus


def _resolve_path(document: dict[str, Any], path: str) -> Any:
    value: Any = document
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def _contains(haystack: str | None, needle: str) -> bool:
    return needle.lower() in (haystack or "").lower()


class InMemoryBusinessStore:
    def __init__(self) -> None:
        self._items: dict[str, Business] = {}

    async def insert(self, business: Business) -> Business:
        if business.id is None:
            business = business.model_copy(update={"id": new_storage_id()})
        self._items[business.id] = business.model_copy(deep=True)
        return business

    async def get(self, identifier: str) -> Business | None:
        if item := self._items.get(identifier):
            return item.model_copy(deep=True)
        for item in self._items.values():
            if item.business_id == identifier:
                return item.model_copy(deep=True)
        return None

    async def update(self, business: Business) -> Business:
        if business.id not in self._items:
            raise NotFoundError("Business", str(business.id))
        self._items[business.id] = business.model_copy(deep=True)
        return business

    def _where(self, predicate) -> list[Business]:
        return [
            item.model_copy(deep=True)
            for item in self._items.values()
            if predicate(item.model_dump(by_alias=True))
        ]

    async def find_by_name(self, name: str) -> list[Business]:
        target = name.lower()
        return self._where(lambda doc: (doc.get("businessName") or "").lower() == target)

    async def find_by_field(self, path: str, value: str) -> list[Business]:
        return self._where(lambda doc: _resolve_path(doc, path) == value)

    async def find_by_field_containing(self, path: str, fragment: str) -> list[Business]:
        return self._where(
            lambda doc: isinstance(_resolve_path(doc, path), str)
            and _contains(_resolve_path(doc, path), fragment)
        )

    @staticmethod
    def _matches(item: Business, query: BusinessQuery) -> bool:
        if query.search and not any(
            _contains(value, query.search)
            for value in (item.business_name, item.short_description, item.mobile, item.business_id)
        ):
            return False
        if query.categories and not set(query.categories) & set(item.categories):
            return False
        if query.cities and not set(query.cities) & set(item.cities):
            return False
        if query.business_types and item.business_type not in query.business_types:
            return False
        if query.verified is not None and item.verified != query.verified:
            return False
        return True

    async def search(
        self, query: BusinessQuery, skip: int, limit: int
    ) -> tuple[list[Business], int]:
        found = [item for item in self._items.values() if self._matches(item, query)]
        found.sort(key=lambda item: item.created_at, reverse=True)
        found.sort(key=lambda item: item.verified, reverse=True)
        page = [item.model_copy(deep=True) for item in found[skip:skip + limit]]
        return page, len(found)

    async def ping(self) -> None:
        return None


class InMemorySubmissionStore:
    def __init__(self) -> None:
        self._items: dict[str, BusinessSubmission] = {}

    async def insert(self, submission: BusinessSubmission) -> BusinessSubmission:
        if submission.id is None:
            submission = submission.model_copy(update={"id": new_storage_id()})
        self._items[submission.id] = submission.model_copy(deep=True)
        return submission

    async def get(self, submission_id: str) -> BusinessSubmission | None:
        item = self._items.get(submission_id)
        return item.model_copy(deep=True) if item else None

    async def get_by_tracking_id(self, tracking_id: str) -> BusinessSubmission | None:
        for item in self._items.values():
            if item.submission_id == tracking_id:
                return item.model_copy(deep=True)
        return None

    async def update(self, submission: BusinessSubmission) -> BusinessSubmission:
        if submission.id not in self._items:
            raise NotFoundError("Submission", str(submission.id))
        self._items[submission.id] = submission.model_copy(deep=True)
        return submission

    async def delete(self, submission_id: str) -> bool:
        return self._items.pop(submission_id, None) is not None

    async def delete_many(self, submission_ids: list[str]) -> int:
        return sum([await self.delete(sid) for sid in set(submission_ids)])

    @staticmethod
    def _matches(item: BusinessSubmission, query: SubmissionQuery) -> bool:
        if query.status is not None and item.status != query.status:
            return False
        if query.category and query.category not in item.categories:
            return False
        if query.date_from and item.submitted_at < query.date_from:
            return False
        if query.date_to and item.submitted_at > query.date_to:
            return False
        if query.search and not any(
            _contains(value, query.search)
            for value in (item.business_name, item.submitter_name, item.submitter_email)
        ):
            return False
        return True

    def _newest_first(self, items) -> list[BusinessSubmission]:
        return sorted(items, key=lambda item: item.submitted_at, reverse=True)

    async def list(
        self, query: SubmissionQuery, skip: int, limit: int
    ) -> tuple[list[BusinessSubmission], int]:
        found = self._newest_first(i for i in self._items.values() if self._matches(i, query))
        return [i.model_copy(deep=True) for i in found[skip:skip + limit]], len(found)

    async def count(
        self, status: SubmissionStatus | None = None, since: datetime | None = None
    ) -> int:
        return sum(
            1
            for item in self._items.values()
            if (status is None or item.status == status)
            and (since is None or item.submitted_at >= since)
        )

    async def recent(self, since: datetime, limit: int) -> list[BusinessSubmission]:
        found = self._newest_first(i for i in self._items.values() if i.submitted_at >= since)
        return [i.model_copy(deep=True) for i in found[:limit]]

    async def ping(self) -> None:
        return None


class InMemoryStore:
    def __init__(self) -> None:
        self.businesses = InMemoryBusinessStore()
        self.submissions = InMemorySubmissionStore()

    async def ensure_indexes(self) -> None:
        return None

    async def close(self) -> None:
        return None
