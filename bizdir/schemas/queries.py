from datetime import datetime, timezone

from pydantic import BaseModel, field_validator

from bizdir.schemas.submission import BusinessType, SubmissionStatus


class BusinessQuery(BaseModel):
    search: str = ""
    categories: list[str] = []
    cities: list[str] = []
    business_types: list[BusinessType] = []
    verified: bool | None = None


class SubmissionQuery(BaseModel):
    status: SubmissionStatus | None = None
    category: str | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None
    search: str = ""

    @field_validator("date_from", "date_to")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
