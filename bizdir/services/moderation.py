import logging
import math
from datetime import datetime, timedelta, timezone

from bizdir.exceptions.custom import NotFoundError, SubmissionValidationError
from bizdir.mappers.business_mapper import apply_submission, submission_to_business
from bizdir.mappers.identifiers import new_business_id
from bizdir.schemas.business import Business
from bizdir.schemas.queries import SubmissionQuery
from bizdir.schemas.responses import (
    SubmissionListItem,
    SubmissionPage,
    SubmissionPagination,
    SubmissionStats,
)
from bizdir.schemas.submission import BusinessSubmission, SubmissionStatus
from bizdir.storage.base import BusinessStore, SubmissionStore

logger = logging.getLogger(__name__)


class ModerationService:
    def __init__(self, submissions: SubmissionStore, businesses: BusinessStore):
        self._submissions = submissions
        self._businesses = businesses

    async def list_submissions(
        self, query: SubmissionQuery, page: int = 1, limit: int = 25
    ) -> SubmissionPage:
        items, total = await self._submissions.list(query, skip=(page - 1) * limit, limit=limit)
        total_pages = math.ceil(total / limit)
        return SubmissionPage(
            submissions=[
                SubmissionListItem.model_validate(item.model_dump()) for item in items
            ],
            pagination=SubmissionPagination(
                current_page=page,
                total_pages=total_pages,
                total_items=total,
                items_per_page=limit,
                has_more=page < total_pages,
            ),
        )

    async def get_submission(self, submission_id: str) -> BusinessSubmission:
        submission = await self._submissions.get(submission_id)
        if submission is None:
            raise NotFoundError("Submission", submission_id)
        return submission

    async def submission_stats(self) -> SubmissionStats:
        now = datetime.now(timezone.utc)
        total = await self._submissions.count()
        approved = await self._submissions.count(status=SubmissionStatus.approved)
        return SubmissionStats(
            total=total,
            pending=await self._submissions.count(status=SubmissionStatus.pending),
            approved=approved,
            rejected=await self._submissions.count(status=SubmissionStatus.rejected),
            this_week=await self._submissions.count(since=now - timedelta(days=7)),
            this_month=await self._submissions.count(
                since=now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
            ),
            approval_rate=int(approved * 100 / total + 0.5) if total else 0,
        )

    async def update_status(
        self,
        submission_id: str,
        status: SubmissionStatus,
        rejection_reason: str | None = None,
        business_id: str | None = None,
    ) -> BusinessSubmission:
        """Record a moderation decision.

        Approval publishes the submission, either as a new business or onto
        the existing ``business_id``. A submission is published only once.
        """
        reason = (rejection_reason or "").strip()
        if status == SubmissionStatus.rejected and not reason:
            raise SubmissionValidationError(
                {"rejectionReason": "Rejection reason is required when rejecting submission"}
            )

        submission = await self.get_submission(submission_id)
        changes = {
            "status": status,
            "reviewed_at": datetime.now(timezone.utc),
            "rejection_reason": reason if status == SubmissionStatus.rejected else None,
        }

        if status == SubmissionStatus.approved and submission.promoted_business_id is None:
            business = await self._publish(submission, business_id)
            changes["promoted_business_id"] = business.business_id

        updated = await self._submissions.update(submission.model_copy(update=changes))
        logger.info("Submission %s marked %s", updated.submission_id, status)
        return updated

    async def _publish(
        self, submission: BusinessSubmission, business_id: str | None
    ) -> Business:
        if business_id is None:
            business = await self._businesses.insert(
                submission_to_business(submission, business_id=new_business_id())
            )
            logger.info(
                "Published submission %s as business %s",
                submission.submission_id,
                business.business_id,
            )
            return business

        existing = await self._businesses.get(business_id)
        if existing is None:
            raise NotFoundError("Business", business_id)
        business = await self._businesses.update(apply_submission(existing, submission))
        logger.info(
            "Applied submission %s to business %s",
            submission.submission_id,
            business.business_id,
        )
        return business

    async def delete_submissions(self, submission_ids: list[str]) -> int:
        deleted = await self._submissions.delete_many(submission_ids)
        logger.info("Deleted %d of %d submissions", deleted, len(submission_ids))
        return deleted
