from bizdir.mappers.match_merger import FIELD_PRIORITY, merge_matches
from bizdir.schemas.duplicates import DuplicateMatch


def _match(field, business_id="b1", match_type="exact"):
    return DuplicateMatch(
        field=field,
        matched_value="value",
        business_id=business_id,
        business_name=f"Business {business_id}",
        match_type=match_type,
    )


def test_priority_order():
    ordered = sorted(FIELD_PRIORITY, key=FIELD_PRIORITY.get)

    assert ordered == [
        "businessName",
        "mobile",
        "email",
        "socialLinks.facebook",
        "socialLinks.instagram",
    ]


def test_keeps_best_field_per_business_regardless_of_order():
    merged = merge_matches(
        [
            _match("socialLinks.instagram", match_type="social_url"),
            _match("mobile"),
            _match("businessName"),
            _match("email"),
        ]
    )

    assert len(merged) == 1
    assert merged[0].field == "businessName"


def test_distinct_businesses_all_survive():
    merged = merge_matches(
        [_match("mobile", "b1"), _match("email", "b2"), _match("email", "b1")]
    )

    assert {(m.business_id, m.field) for m in merged} == {("b1", "mobile"), ("b2", "email")}


def test_facebook_beats_instagram():
    merged = merge_matches(
        [
            _match("socialLinks.instagram", match_type="social_url"),
            _match("socialLinks.facebook", match_type="social_url"),
        ]
    )

    assert [m.field for m in merged] == ["socialLinks.facebook"]


def test_empty_input():
    assert merge_matches([]) == []
