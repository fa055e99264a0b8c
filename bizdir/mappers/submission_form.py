import json
from collections.abc import Iterable, Mapping
from typing import Any

from bizdir.schemas.submission import SOCIAL_PLATFORMS, BusinessSubmission, SocialLinks
from bizdir.validators.submission_rules import is_flag_set

# Multipart fields that carry JSON-encoded arrays/objects.
_JSON_FIELDS: dict[str, tuple[type, str]] = {
    "categories": (list, "Categories must be a valid array"),
    "cities": (list, "Cities must be a valid array"),
    "socialLinks": (dict, "Social links must be valid JSON"),
}


def decode_submission_form(form: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, str]]:
    """Decode the JSON-string fields of a multipart submission.

    Returns (payload, decode_errors). Fields that fail to decode are replaced
    by an empty value of the expected type.
    """
    payload = dict(form)
    errors: dict[str, str] = {}

    for field, (kind, message) in _JSON_FIELDS.items():
        raw = form.get(field)
        if raw is None or raw == "":
            payload[field] = kind()
            continue
        if isinstance(raw, kind):
            continue
        try:
            decoded = json.loads(raw)
        except (TypeError, ValueError):
            decoded = None
        if not isinstance(decoded, kind):
            errors[field] = message
            decoded = kind()
        payload[field] = decoded

    return payload, errors


def _clean_list(values: Iterable[Any]) -> list[str]:
    cleaned = (v.strip() for v in values if isinstance(v, str))
    return list(dict.fromkeys(v for v in cleaned if v))


def _clean_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def build_submission(
    payload: Mapping[str, Any],
    *,
    submission_id: str,
    submitter_ip: str | None = None,
) -> BusinessSubmission:
    """Turn a validated payload into a pending submission document."""
    links = payload.get("socialLinks") or {}
    has_certificate = is_flag_set(payload.get("hasCertificate"))

    return BusinessSubmission(
        submission_id=submission_id,
        business_name=_clean_text(payload.get("businessName")),
        categories=_clean_list(payload.get("categories") or []),
        business_type=payload["businessType"],
        cities=_clean_list(payload.get("cities") or []),
        mobile=_clean_text(payload.get("mobile")),
        short_description=_clean_text(payload.get("shortDescription")),
        has_certificate=has_certificate,
        certificate_description=(
            _clean_text(payload.get("certificateDescription")) if has_certificate else ""
        ),
        social_links=SocialLinks(
            **{p: _clean_text(links.get(p)) for p in SOCIAL_PLATFORMS}
        ),
        submitter_email=_clean_text(payload.get("submitterEmail")).lower(),
        submitter_name=_clean_text(payload.get("submitterName")),
        submitter_ip=submitter_ip,
    )
