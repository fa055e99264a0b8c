from __future__ import annotations

from datetime import datetime

from pydantic import Field

from bizdir.schemas.base import CamelModel
from bizdir.schemas.business import Business
from bizdir.schemas.duplicates import DuplicateReport, DuplicateStats
from bizdir.schemas.submission import BusinessType, SocialLinks, SubmissionStatus


class SubmissionReceipt(CamelModel):
    id: str
    business_name: str
    categories: list[str]
    cities: list[str]
    status: SubmissionStatus
    submitted_at: datetime
    has_image: bool


class SubmissionCreatedResponse(CamelModel):
    success: bool = True
    message: str
    submission: SubmissionReceipt


class SubmissionStatusView(CamelModel):
    id: str
    business_name: str
    status: SubmissionStatus
    submitted_at: datetime
    reviewed_at: datetime | None = None
    rejection_reason: str | None = None


class SubmissionStatusResponse(CamelModel):
    success: bool = True
    submission: SubmissionStatusView


class SubmissionListItem(CamelModel):
    """Admin listing row: everything but the submitter's address."""

    id: str | None = Field(default=None, alias="_id")
    submission_id: str
    business_name: str
    categories: list[str]
    business_type: BusinessType
    cities: list[str]
    mobile: str
    short_description: str = ""
    has_certificate: bool = False
    certificate_description: str = ""
    social_links: SocialLinks
    submitter_email: str
    submitter_name: str
    profile_image: str | None = None
    status: SubmissionStatus
    submitted_at: datetime
    reviewed_at: datetime | None = None
    rejection_reason: str | None = None
    promoted_business_id: str | None = None


class SubmissionPagination(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_more: bool


class SubmissionPage(CamelModel):
    success: bool = True
    submissions: list[SubmissionListItem]
    pagination: SubmissionPagination


class SubmissionStats(CamelModel):
    total: int
    pending: int
    approved: int
    rejected: int
    this_week: int
    this_month: int
    approval_rate: int


class SubmissionStatsResponse(CamelModel):
    success: bool = True
    stats: SubmissionStats


class StatusUpdateRequest(CamelModel):
    status: SubmissionStatus
    rejection_reason: str | None = None
    business_id: str | None = None


class StatusUpdateView(CamelModel):
    id: str
    submission_id: str
    status: SubmissionStatus
    reviewed_at: datetime | None = None
    rejection_reason: str | None = None
    promoted_business_id: str | None = None


class StatusUpdateResponse(CamelModel):
    success: bool = True
    message: str
    submission: StatusUpdateView


class SubmissionIdsRequest(CamelModel):
    submission_ids: list[str] = []


class DuplicateCheckResponse(CamelModel):
    success: bool = True
    duplicate_info: DuplicateReport


class BatchDuplicateResponse(CamelModel):
    success: bool = True
    duplicate_results: dict[str, DuplicateReport]


class DuplicateStatsResponse(CamelModel):
    success: bool = True
    stats: DuplicateStats


class BulkDeleteResponse(CamelModel):
    success: bool = True
    message: str
    deleted_count: int


class BusinessPagination(CamelModel):
    current_page: int
    total_pages: int
    total_businesses: int
    has_next: bool
    has_prev: bool


class AppliedFilters(CamelModel):
    search: str | None = None
    categories: list[str] = []
    cities: list[str] = []
    business_types: list[str] = []
    verified: bool | None = None


class BusinessPage(CamelModel):
    businesses: list[Business]
    pagination: BusinessPagination
    applied_filters: AppliedFilters


class RegistrationInfo(CamelModel):
    days_active: int
    member_since: str
    is_new_business: bool


class BusinessDetail(Business):
    registration_info: RegistrationInfo


class HealthResponse(CamelModel):
    status: str
    timestamp: datetime
    store: str
