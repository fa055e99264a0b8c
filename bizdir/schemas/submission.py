from __future__ import annotations

from datetime import datetime, timezone
from enum import StrEnum

from pydantic import Field

from bizdir.schemas.base import CamelModel

SOCIAL_PLATFORMS = ("facebook", "instagram", "tiktok", "youtube")


class BusinessType(StrEnum):
    individual = "individual"
    company = "company"


class SubmissionStatus(StrEnum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class SocialLinks(CamelModel):
    facebook: str = ""
    instagram: str = ""
    tiktok: str = ""
    youtube: str = ""


class BusinessSubmission(CamelModel):
    id: str | None = Field(default=None, alias="_id")
    submission_id: str
    business_name: str
    categories: list[str]
    business_type: BusinessType
    cities: list[str]
    mobile: str
    short_description: str = Field(default="", max_length=200)
    has_certificate: bool = False
    certificate_description: str = Field(default="", max_length=50)
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    submitter_email: str
    submitter_name: str
    submitter_ip: str | None = None

    original_image: str | None = None
    profile_image: str | None = None
    image_processed_at: datetime | None = None

    status: SubmissionStatus = SubmissionStatus.pending
    submitted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    reviewed_at: datetime | None = None
    rejection_reason: str | None = Field(default=None, max_length=500)
    promoted_business_id: str | None = None
