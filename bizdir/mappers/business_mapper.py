from datetime import datetime, timezone

from bizdir.schemas.business import Business
from bizdir.schemas.submission import BusinessSubmission


def _business_fields(submission: BusinessSubmission) -> dict:
    return {
        "business_name": submission.business_name,
        "categories": list(submission.categories),
        "business_type": submission.business_type,
        "cities": list(submission.cities),
        "mobile": submission.mobile,
        "email": submission.submitter_email,
        "short_description": submission.short_description,
        "has_certificate": submission.has_certificate,
        "certificate_description": submission.certificate_description,
        "profile_image": submission.profile_image or "",
        "social_links": submission.social_links.model_copy(),
        "source_submission_id": submission.id,
    }


def submission_to_business(submission: BusinessSubmission, business_id: str) -> Business:
    """Build a new, unverified public record from an approved submission."""
    return Business(business_id=business_id, **_business_fields(submission))


def apply_submission(business: Business, submission: BusinessSubmission) -> Business:
    """Overwrite an existing record's business fields from a submission.

    The public id, storage key, verification flag and creation date survive;
    an empty image on the submission keeps the current one.
    """
    fields = _business_fields(submission)
    if not fields["profile_image"]:
        fields["profile_image"] = business.profile_image
    fields["updated_at"] = datetime.now(timezone.utc)
    return business.model_copy(update=fields)
