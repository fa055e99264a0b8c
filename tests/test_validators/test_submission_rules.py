import pytest

from bizdir.validators.submission_rules import validate_submission
from tests.factories import valid_payload


def test_valid_payload_has_no_errors():
    result = validate_submission(valid_payload())

    assert result.is_valid is True
    assert result.errors == {}


@pytest.mark.parametrize(
    "field, empty",
    [
        ("businessName", "   "),
        ("categories", []),
        ("businessType", ""),
        ("cities", []),
        ("mobile", ""),
        ("submitterEmail", ""),
        ("submitterName", ""),
        ("profileImage", None),
    ],
)
def test_missing_required_field_reports_exactly_that_field(field, empty):
    result = validate_submission(valid_payload(**{field: empty}))

    assert result.is_valid is False
    assert list(result.errors) == [field]


def test_all_errors_are_collected_at_once():
    result = validate_submission({})

    assert result.is_valid is False
    assert {
        "businessName",
        "categories",
        "businessType",
        "cities",
        "mobile",
        "submitterEmail",
        "submitterName",
        "profileImage",
        "socialLinks",
    } <= set(result.errors)


@pytest.mark.parametrize(
    "mobile, ok",
    [
        ("+995599304009", True),
        ("  +995599304009 ", True),
        ("+99559930400", False),
        ("+995abc304009", False),
        ("+9955993040091", False),
        ("995599304009", False),
        ("+995 599 304 009", False),
    ],
)
def test_mobile_format(mobile, ok):
    result = validate_submission(valid_payload(mobile=mobile))

    assert ("mobile" not in result.errors) is ok


@pytest.mark.parametrize(
    "cities, ok",
    [
        (["All Georgia"], True),
        (["Tbilisi", "Batumi"], True),
        (["All Georgia", "Tbilisi"], False),
    ],
)
def test_all_georgia_is_exclusive(cities, ok):
    result = validate_submission(valid_payload(cities=cities))

    assert ("cities" not in result.errors) is ok


def test_all_georgia_combination_yields_single_cities_error():
    result = validate_submission(valid_payload(cities=["All Georgia", "Tbilisi", "Batumi"]))

    assert result.errors == {"cities": '"All Georgia" cannot be combined with specific cities'}


@pytest.mark.parametrize("email", ["not-an-email", "a@b", "a b@c.de", "@example.com"])
def test_invalid_email(email):
    result = validate_submission(valid_payload(submitterEmail=email))

    assert result.errors["submitterEmail"] == "Invalid email format"


def test_unknown_business_type():
    result = validate_submission(valid_payload(businessType="nonprofit"))

    assert "businessType" in result.errors


def test_description_length_bound():
    assert validate_submission(valid_payload(shortDescription="x" * 200)).is_valid
    result = validate_submission(valid_payload(shortDescription="x" * 201))
    assert list(result.errors) == ["shortDescription"]


def test_certificate_description_required_when_flag_set():
    result = validate_submission(valid_payload(hasCertificate="true", certificateDescription=" "))

    assert result.errors == {"certificateDescription": "Certificate description is required"}


def test_certificate_description_length_bound_even_without_flag():
    result = validate_submission(valid_payload(certificateDescription="c" * 51))

    assert list(result.errors) == ["certificateDescription"]


def test_certificate_flag_with_description_passes():
    result = validate_submission(
        valid_payload(hasCertificate=True, certificateDescription="ISO 9001")
    )

    assert result.is_valid


def test_facebook_or_instagram_required_even_with_other_platforms():
    result = validate_submission(
        valid_payload(
            socialLinks={
                "facebook": "",
                "instagram": "",
                "tiktok": "https://tiktok.com/@bakery",
                "youtube": "https://youtube.com/bakery",
            }
        )
    )

    assert result.errors == {
        "socialLinks": "At least one Facebook or Instagram link is required"
    }


def test_single_facebook_link_satisfies_requirement():
    result = validate_submission(valid_payload(socialLinks={"facebook": "https://facebook.com/x"}))

    assert "socialLinks" not in result.errors


def test_each_invalid_link_reported_per_platform():
    result = validate_submission(
        valid_payload(
            socialLinks={
                "facebook": "facebook.com/bakery",
                "instagram": "https://instagram.com/bakery",
                "youtube": "ftp://youtube.com/bakery",
            }
        )
    )

    assert result.errors == {
        "socialLinks.facebook": "Facebook URL must be a valid HTTP/HTTPS URL",
        "socialLinks.youtube": "Youtube URL must be a valid HTTP/HTTPS URL",
    }


def test_invalid_links_and_missing_required_are_independent():
    result = validate_submission(valid_payload(socialLinks={"tiktok": "tiktok"}))

    assert set(result.errors) == {"socialLinks", "socialLinks.tiktok"}


def test_blank_category_and_city_entries_do_not_count():
    result = validate_submission(valid_payload(categories=["  "], cities=[" ", ""]))

    assert result.errors == {
        "categories": "At least one business category must be selected",
        "cities": "At least one city must be selected",
    }


def test_repeated_all_georgia_is_not_a_combination():
    result = validate_submission(valid_payload(cities=["All Georgia", " All Georgia "]))

    assert "cities" not in result.errors


def test_non_string_business_type_is_rejected():
    result = validate_submission(valid_payload(businessType=["company"]))

    assert result.errors == {
        "businessType": 'Business type must be either "individual" or "company"'
    }
