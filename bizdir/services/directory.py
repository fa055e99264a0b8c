import math
from datetime import datetime, timedelta, timezone

from bizdir.exceptions.custom import NotFoundError
from bizdir.schemas.business import Business
from bizdir.schemas.queries import BusinessQuery
from bizdir.schemas.responses import (
    AppliedFilters,
    BusinessDetail,
    BusinessPage,
    BusinessPagination,
    RegistrationInfo,
)
from bizdir.storage.base import BusinessStore

NEW_BUSINESS_DAYS = 30


def build_registration_info(created_at: datetime, now: datetime | None = None) -> RegistrationInfo:
    now = now or datetime.now(timezone.utc)
    return RegistrationInfo(
        days_active=(now - created_at).days,
        member_since=f"Member since {created_at:%B %Y}",
        is_new_business=created_at >= now - timedelta(days=NEW_BUSINESS_DAYS),
    )


class DirectoryService:
    """Public, read-only view of published businesses."""

    def __init__(self, businesses: BusinessStore):
        self._businesses = businesses

    async def search(self, query: BusinessQuery, page: int = 1, limit: int = 12) -> BusinessPage:
        items, total = await self._businesses.search(query, skip=(page - 1) * limit, limit=limit)
        total_pages = math.ceil(total / limit)
        return BusinessPage(
            businesses=items,
            pagination=BusinessPagination(
                current_page=page,
                total_pages=total_pages,
                total_businesses=total,
                has_next=page < total_pages,
                has_prev=page > 1,
            ),
            applied_filters=AppliedFilters(
                search=query.search or None,
                categories=query.categories,
                cities=query.cities,
                business_types=[str(t) for t in query.business_types],
                verified=query.verified,
            ),
        )

    async def get_business(self, identifier: str) -> BusinessDetail:
        business: Business | None = await self._businesses.get(identifier)
        if business is None:
            raise NotFoundError("Business", identifier)
        return BusinessDetail(
            **business.model_dump(),
            registration_info=build_registration_info(business.created_at),
        )
