"""Store capabilities the services depend on.

Paths such as ``socialLinks.facebook`` use the stored (camelCase) document
field names.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from bizdir.schemas.business import Business
from bizdir.schemas.queries import BusinessQuery, SubmissionQuery
from bizdir.schemas.submission import BusinessSubmission, SubmissionStatus


class BusinessStore(Protocol):
    async def insert(self, business: Business) -> Business: ...

    async def get(self, identifier: str) -> Business | None:
        """Look up by storage key or public ``businessId``."""
        ...

    async def update(self, business: Business) -> Business: ...

    async def find_by_name(self, name: str) -> list[Business]:
        """Case-insensitive equality on the whole business name."""
        ...

    async def find_by_field(self, path: str, value: str) -> list[Business]: ...

    async def find_by_field_containing(self, path: str, fragment: str) -> list[Business]:
        """Case-insensitive substring match."""
        ...

    async def search(
        self, query: BusinessQuery, skip: int, limit: int
    ) -> tuple[list[Business], int]: ...

    async def ping(self) -> None: ...


class SubmissionStore(Protocol):
    async def insert(self, submission: BusinessSubmission) -> BusinessSubmission: ...

    async def get(self, submission_id: str) -> BusinessSubmission | None: ...

    async def get_by_tracking_id(self, tracking_id: str) -> BusinessSubmission | None: ...

    async def update(self, submission: BusinessSubmission) -> BusinessSubmission: ...

    async def delete(self, submission_id: str) -> bool: ...

    async def delete_many(self, submission_ids: list[str]) -> int: ...

    async def list(
        self, query: SubmissionQuery, skip: int, limit: int
    ) -> tuple[list[BusinessSubmission], int]: ...

    async def count(
        self, status: SubmissionStatus | None = None, since: datetime | None = None
    ) -> int: ...

    async def recent(self, since: datetime, limit: int) -> list[BusinessSubmission]: ...

    async def ping(self) -> None: ...
