import logging
from collections.abc import Mapping
from typing import Any

from bizdir.exceptions.custom import (
    ImageProcessingError,
    NotFoundError,
    SubmissionValidationError,
)
from bizdir.mappers.identifiers import new_tracking_id
from bizdir.mappers.submission_form import build_submission, decode_submission_form
from bizdir.schemas.images import UploadedImage
from bizdir.schemas.submission import BusinessSubmission
from bizdir.services.duplicate_detection import DuplicateDetectionService
from bizdir.services.images import ImageProcessor
from bizdir.storage.base import SubmissionStore
from bizdir.throttle import SubmissionThrottle
from bizdir.validators.submission_rules import validate_submission

logger = logging.getLogger(__name__)


class SubmissionIntakeService:
    def __init__(
        self,
        submissions: SubmissionStore,
        images: ImageProcessor,
        duplicates: DuplicateDetectionService | None = None,
        throttle: SubmissionThrottle | None = None,
    ):
        self._submissions = submissions
        self._images = images
        self._duplicates = duplicates
        self._throttle = throttle

    async def create_submission(
        self,
        form: Mapping[str, Any],
        image: UploadedImage | None,
        client_ip: str | None = None,
    ) -> BusinessSubmission:
        """Validate, store and illustrate a new pending submission.

        The submission is stored before its image is processed so the image
        can be named after the tracking id; it is removed again if
        processing the image or recording it fails.
        """
        if self._throttle:
            self._throttle.check(client_ip)

        payload, decode_errors = decode_submission_form(form)
        payload["profileImage"] = image.filename if image else None

        result = validate_submission(payload)
        errors = {**result.errors, **decode_errors}
        if errors:
            raise SubmissionValidationError(errors)

        self._images.check_upload(image)

        submission = build_submission(
            payload, submission_id=new_tracking_id(), submitter_ip=client_ip
        )
        submission = await self._submissions.insert(submission)
        logger.info("Submission created with ID: %s", submission.submission_id)

        try:
            processed = await self._images.process_submission_image(
                image.data, submission.submission_id
            )
            submission = await self._submissions.update(
                submission.model_copy(
                    update={
                        "original_image": image.filename,
                        "profile_image": processed.url,
                        "image_processed_at": processed.processed_at,
                    }
                )
            )
        except ImageProcessingError as exc:
            logger.error(
                "Image processing failed for submission %s: %s",
                submission.submission_id,
                exc.message,
            )
            await self._submissions.delete(submission.id)
            raise
        except Exception:
            logger.exception(
                "Storing image for submission %s failed, discarding it",
                submission.submission_id,
            )
            await self._submissions.delete(submission.id)
            raise

        if self._throttle:
            self._throttle.record(client_ip)

        if self._duplicates:
            await self._report_duplicates(submission)

        return submission

    async def _report_duplicates(self, submission: BusinessSubmission) -> None:
        try:
            report = await self._duplicates.find_duplicates(submission)
        except Exception:
            logger.exception(
                "Duplicate check failed for new submission %s", submission.submission_id
            )
            return
        if report.has_duplicates:
            logger.warning(
                "New submission %s resembles %d existing businesses: %s",
                submission.submission_id,
                report.match_count,
                ", ".join(f"{m.business_name} ({m.field})" for m in report.matches),
            )

    async def get_status(self, tracking_id: str) -> BusinessSubmission:
        submission = await self._submissions.get_by_tracking_id(tracking_id)
        if submission is None:
            raise NotFoundError("Submission", tracking_id)
        return submission
