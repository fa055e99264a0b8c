from __future__ import annotations

from datetime import datetime, timezone

from pydantic import Field

from bizdir.schemas.base import CamelModel
from bizdir.schemas.submission import BusinessType, SocialLinks


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Business(CamelModel):
    id: str | None = Field(default=None, alias="_id")
    business_id: str
    business_name: str
    categories: list[str] = []
    business_type: BusinessType
    cities: list[str] = []
    mobile: str
    email: str = ""
    short_description: str = ""
    has_certificate: bool = False
    certificate_description: str = ""
    profile_image: str = ""
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    verified: bool = False
    source_submission_id: str | None = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)
