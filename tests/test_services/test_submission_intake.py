"""Tests for SubmissionIntakeService."""

import logging
from unittest.mock import AsyncMock, patch

import pytest

from bizdir.exceptions.custom import (
    ImageProcessingError,
    NotFoundError,
    RateLimitError,
    StoreUnavailableError,
    SubmissionValidationError,
)
from bizdir.schemas.images import UploadedImage
from bizdir.services.duplicate_detection import DuplicateDetectionService
from bizdir.services.images import ImageProcessor
from bizdir.services.submission_intake import SubmissionIntakeService
from bizdir.storage.images import LocalImageStore
from bizdir.throttle import SubmissionThrottle
from tests.factories import form_fields, make_business, png_bytes


@pytest.fixture
def image_store(tmp_path):
    return LocalImageStore(base_path=str(tmp_path / "uploads"), base_url="/uploads/submissions")


@pytest.fixture
def throttle():
    return SubmissionThrottle(cooldown_seconds=30)


@pytest.fixture
def service(store, image_store, throttle):
    return SubmissionIntakeService(
        store.submissions,
        ImageProcessor(image_store, max_upload_mb=1),
        duplicates=DuplicateDetectionService(store.businesses, store.submissions),
        throttle=throttle,
    )


def _png(name="bakery.png"):
    return UploadedImage(filename=name, content_type="image/png", data=png_bytes())


async def test_create_stores_pending_submission_with_image(store, service, image_store):
    submission = await service.create_submission(form_fields(), _png(), client_ip="10.0.0.1")

    assert len(submission.submission_id) == 8
    assert submission.status == "pending"
    assert submission.submitter_ip == "10.0.0.1"
    assert submission.original_image == "bakery.png"
    assert submission.profile_image.startswith("/uploads/submissions/submission-")
    assert submission.profile_image.endswith(".webp")
    assert submission.image_processed_at is not None
    stored = await store.submissions.get_by_tracking_id(submission.submission_id)
    assert stored.profile_image == submission.profile_image
    assert len(list(image_store.base_path.iterdir())) == 1


async def test_create_normalises_payload(service):
    fields = form_fields(
        businessName="  Fresh Bakery  ",
        submitterEmail="Baker@Example.COM",
        cities='["Tbilisi", "Tbilisi"]',
    )

    submission = await service.create_submission(fields, _png())

    assert submission.business_name == "Fresh Bakery"
    assert submission.submitter_email == "baker@example.com"
    assert submission.cities == ["Tbilisi"]


async def test_validation_errors_are_collected(store, service):
    fields = form_fields(businessName="", mobile="555123456", cities='["All Georgia", "Batumi"]')

    with pytest.raises(SubmissionValidationError) as exc_info:
        await service.create_submission(fields, _png())

    assert set(exc_info.value.errors) == {"businessName", "mobile", "cities"}
    assert await store.submissions.count() == 0


async def test_missing_image_is_a_validation_error(service):
    with pytest.raises(SubmissionValidationError) as exc_info:
        await service.create_submission(form_fields(), None)

    assert exc_info.value.errors == {"profileImage": "Profile image is required"}


async def test_malformed_json_field_reports_decode_message(service):
    with pytest.raises(SubmissionValidationError) as exc_info:
        await service.create_submission(form_fields(categories="[not json"), _png())

    assert exc_info.value.errors["categories"] == "Categories must be a valid array"


async def test_wrong_mime_type_rejected_before_storing(store, service):
    upload = UploadedImage(filename="notes.pdf", content_type="application/pdf", data=b"%PDF")

    with pytest.raises(ImageProcessingError) as exc_info:
        await service.create_submission(form_fields(), upload)

    assert exc_info.value.status_code == 400
    assert await store.submissions.count() == 0


async def test_undecodable_image_removes_submission(store, service, image_store):
    upload = UploadedImage(filename="fake.png", content_type="image/png", data=b"not an image")

    with pytest.raises(ImageProcessingError):
        await service.create_submission(form_fields(), upload)

    assert await store.submissions.count() == 0
    assert list(image_store.base_path.iterdir()) == []


async def test_second_submission_from_same_client_is_throttled(service):
    await service.create_submission(form_fields(), _png(), client_ip="10.0.0.1")

    with pytest.raises(RateLimitError) as exc_info:
        await service.create_submission(form_fields(), _png(), client_ip="10.0.0.1")

    assert 0 < exc_info.value.retry_after <= 30
    await service.create_submission(form_fields(), _png(), client_ip="10.0.0.2")


async def test_rejected_submission_does_not_start_cooldown(service):
    with pytest.raises(SubmissionValidationError):
        await service.create_submission(form_fields(mobile="bad"), _png(), client_ip="10.0.0.1")

    await service.create_submission(form_fields(), _png(), client_ip="10.0.0.1")


async def test_duplicates_are_logged_not_blocking(store, service, caplog):
    await store.businesses.insert(make_business(name="Fresh Bakery"))

    with caplog.at_level(logging.WARNING, logger="bizdir.services.submission_intake"):
        submission = await service.create_submission(form_fields(), _png())

    assert submission.status == "pending"
    assert "resembles 1 existing businesses" in caplog.text


async def test_get_status_by_tracking_id(service):
    created = await service.create_submission(form_fields(), _png())

    found = await service.get_status(created.submission_id)

    assert found.id == created.id


async def test_get_status_unknown(service):
    with pytest.raises(NotFoundError):
        await service.get_status("nope0000")


async def test_duplicate_check_failure_does_not_block_intake(store, image_store, caplog):
    duplicates = AsyncMock()
    duplicates.find_duplicates.side_effect = StoreUnavailableError("store went away")
    service = SubmissionIntakeService(
        store.submissions, ImageProcessor(image_store), duplicates=duplicates
    )

    with caplog.at_level(logging.ERROR, logger="bizdir.services.submission_intake"):
        submission = await service.create_submission(form_fields(), _png())

    duplicates.find_duplicates.assert_awaited_once()
    assert await store.submissions.get(submission.id) is not None
    assert "Duplicate check failed" in caplog.text


async def test_blank_multi_select_entries_are_rejected(store, service):
    with pytest.raises(SubmissionValidationError) as exc_info:
        await service.create_submission(form_fields(categories=["  "], cities=[" "]), _png())

    assert set(exc_info.value.errors) == {"categories", "cities"}
    assert await store.submissions.count() == 0


async def test_repeated_all_georgia_is_stored_once(service):
    submission = await service.create_submission(
        form_fields(cities=["All Georgia", "All Georgia"]), _png()
    )

    assert submission.cities == ["All Georgia"]


async def test_failed_image_write_removes_submission(store, service, image_store):
    image_store.save = AsyncMock(side_effect=OSError("disk full"))

    with pytest.raises(OSError):
        await service.create_submission(form_fields(), _png(), client_ip="10.0.0.1")

    assert await store.submissions.count() == 0


async def test_failed_image_update_removes_submission(store, service):
    with patch.object(
        store.submissions, "update", AsyncMock(side_effect=StoreUnavailableError("gone"))
    ):
        with pytest.raises(StoreUnavailableError):
            await service.create_submission(form_fields(), _png())

    assert await store.submissions.count() == 0
