"""Tests for DirectoryService."""

from datetime import datetime, timedelta, timezone

import pytest

from bizdir.exceptions.custom import NotFoundError
from bizdir.schemas.queries import BusinessQuery
from bizdir.services.directory import DirectoryService, build_registration_info
from tests.factories import make_business


@pytest.fixture
def service(store):
    return DirectoryService(store.businesses)


def test_registration_info_for_new_business():
    now = datetime(2025, 3, 20, tzinfo=timezone.utc)

    info = build_registration_info(datetime(2025, 3, 1, tzinfo=timezone.utc), now=now)

    assert info.days_active == 19
    assert info.member_since == "Member since March 2025"
    assert info.is_new_business is True


def test_registration_info_for_established_business():
    now = datetime(2025, 3, 20, tzinfo=timezone.utc)

    info = build_registration_info(now - timedelta(days=31), now=now)

    assert info.is_new_business is False


async def test_search_pagination_flags(store, service):
    for i in range(13):
        await store.businesses.insert(make_business(f"b{i:09d}"))

    page = await service.search(BusinessQuery(), page=2, limit=12)

    assert len(page.businesses) == 1
    assert page.pagination.total_businesses == 13
    assert page.pagination.total_pages == 2
    assert page.pagination.has_next is False
    assert page.pagination.has_prev is True


async def test_search_echoes_filters(service):
    query = BusinessQuery(categories=["Food"], business_types=["company"], verified=True)

    page = await service.search(query)

    assert page.applied_filters.categories == ["Food"]
    assert page.applied_filters.business_types == ["company"]
    assert page.applied_filters.verified is True
    assert page.applied_filters.search is None


async def test_get_business_by_either_identifier(store, service):
    business = await store.businesses.insert(make_business("pub0000001"))

    by_key = await service.get_business(business.id)
    by_public_id = await service.get_business("pub0000001")

    assert by_key.id == by_public_id.id == business.id
    assert by_key.registration_info.days_active == 0


async def test_get_business_unknown(service):
    with pytest.raises(NotFoundError):
        await service.get_business("nope")
