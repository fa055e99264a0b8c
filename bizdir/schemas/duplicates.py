from enum import StrEnum

from bizdir.schemas.base import CamelModel


class MatchType(StrEnum):
    exact = "exact"
    social_url = "social_url"


class DuplicateMatch(CamelModel):
    field: str
    matched_value: str
    business_id: str
    business_name: str
    match_type: MatchType


class CheckedFields(CamelModel):
    business_name: bool = False
    mobile: bool = False
    email: bool = False
    facebook: bool = False
    instagram: bool = False


class DuplicateReport(CamelModel):
    has_duplicates: bool
    match_count: int
    matches: list[DuplicateMatch] = []
    checked_fields: CheckedFields | None = None
    # Set when the check itself failed; the result is then unknown, not clean.
    error: str | None = None


class DuplicateStats(CamelModel):
    total_submissions_checked: int
    duplicates_found: int
    duplicate_rate: int
