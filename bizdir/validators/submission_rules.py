"""Field rules for a business submission payload.

The payload is the camelCase field map the submission form produces
(``businessName``, ``categories``, ``socialLinks`` ...). Every rule runs on
every call so the caller gets the complete error map at once.
"""

import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from bizdir.schemas.submission import SOCIAL_PLATFORMS, BusinessType

ALL_GEORGIA = "All Georgia"

MAX_DESCRIPTION_LENGTH = 200
MAX_CERTIFICATE_DESCRIPTION_LENGTH = 50

MOBILE_RE = re.compile(r"\+995[0-9]{9}")
EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
URL_RE = re.compile(r"https?://.+")

REQUIRED_SOCIAL_PLATFORMS = ("facebook", "instagram")
BUSINESS_TYPES = frozenset(t.value for t in BusinessType)


class ValidationResult(BaseModel):
    is_valid: bool
    errors: dict[str, str] = {}


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def is_flag_set(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value is True


def _selected(values: Any) -> list[str]:
    """Distinct non-blank entries of a multi-select value."""
    if not isinstance(values, (list, tuple, set)):
        return []
    cleaned = (v.strip() for v in values if isinstance(v, str))
    return list(dict.fromkeys(v for v in cleaned if v))


def _check_cities(values: Any) -> str | None:
    cities = _selected(values)
    if not cities:
        return "At least one city must be selected"
    if ALL_GEORGIA in cities and len(cities) > 1:
        return '"All Georgia" cannot be combined with specific cities'
    return None


def _check_mobile(mobile: str) -> str | None:
    if not mobile:
        return "Mobile number is required"
    if not MOBILE_RE.fullmatch(mobile):
        return (
            "Mobile number must be in Georgian format: +995XXXXXXXXX "
            "(example: +995599304009)"
        )
    return None


def _check_social_links(links: Any) -> dict[str, str]:
    if not isinstance(links, Mapping):
        links = {}

    errors: dict[str, str] = {}
    if not any(_text(links.get(p)) for p in REQUIRED_SOCIAL_PLATFORMS):
        errors["socialLinks"] = "At least one Facebook or Instagram link is required"

    for platform in SOCIAL_PLATFORMS:
        url = _text(links.get(platform))
        if url and not URL_RE.fullmatch(url):
            errors[f"socialLinks.{platform}"] = (
                f"{platform.capitalize()} URL must be a valid HTTP/HTTPS URL"
            )
    return errors


def validate_submission(data: Mapping[str, Any]) -> ValidationResult:
    """Check a submission payload against every field rule.

    Social link errors are keyed ``socialLinks`` (none of facebook/instagram
    given) and ``socialLinks.<platform>`` (malformed URL), so the two kinds can
    be reported side by side.
    """
    errors: dict[str, str] = {}

    if not _text(data.get("businessName")):
        errors["businessName"] = "Business name is required"

    if not _selected(data.get("categories")):
        errors["categories"] = "At least one business category must be selected"

    business_type = data.get("businessType")
    if not business_type:
        errors["businessType"] = "Business type is required"
    elif not isinstance(business_type, str) or business_type not in BUSINESS_TYPES:
        errors["businessType"] = 'Business type must be either "individual" or "company"'

    if city_error := _check_cities(data.get("cities")):
        errors["cities"] = city_error

    if mobile_error := _check_mobile(_text(data.get("mobile"))):
        errors["mobile"] = mobile_error

    email = _text(data.get("submitterEmail"))
    if not email:
        errors["submitterEmail"] = "Email is required"
    elif not EMAIL_RE.fullmatch(email):
        errors["submitterEmail"] = "Invalid email format"

    if not _text(data.get("submitterName")):
        errors["submitterName"] = "Your name is required"

    if not data.get("profileImage"):
        errors["profileImage"] = "Profile image is required"

    description = data.get("shortDescription")
    if isinstance(description, str) and len(description) > MAX_DESCRIPTION_LENGTH:
        errors["shortDescription"] = (
            f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters"
        )

    certificate = data.get("certificateDescription")
    if is_flag_set(data.get("hasCertificate")) and not _text(certificate):
        errors["certificateDescription"] = "Certificate description is required"
    if isinstance(certificate, str) and len(certificate) > MAX_CERTIFICATE_DESCRIPTION_LENGTH:
        errors["certificateDescription"] = (
            "Certificate description cannot exceed "
            f"{MAX_CERTIFICATE_DESCRIPTION_LENGTH} characters"
        )

    errors.update(_check_social_links(data.get("socialLinks")))

    return ValidationResult(is_valid=not errors, errors=errors)
