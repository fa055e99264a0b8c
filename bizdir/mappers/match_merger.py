from collections.abc import Iterable

from bizdir.schemas.duplicates import DuplicateMatch

# Lower rank wins when one business matches on several fields.
FIELD_PRIORITY: dict[str, int] = {
    "businessName": 1,
    "mobile": 2,
    "email": 3,
    "socialLinks.facebook": 4,
    "socialLinks.instagram": 5,
}


def merge_matches(matches: Iterable[DuplicateMatch]) -> list[DuplicateMatch]:
    """Keep a single match per business: the one on the highest-priority field."""
    best: dict[str, DuplicateMatch] = {}
    for match in matches:
        current = best.get(match.business_id)
        if current is None or FIELD_PRIORITY[match.field] < FIELD_PRIORITY[current.field]:
            best[match.business_id] = match
    return list(best.values())
