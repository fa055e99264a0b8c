"""Advisory duplicate detection for business submissions.

A submission is compared against the published businesses on four signals
(name, mobile, email, Facebook/Instagram URL), each queried separately. Hits
are then merged so every business appears at most once, represented by its
strongest signal. Results are a snapshot of the store at call time.
"""

import asyncio
import logging
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

from bizdir.exceptions.custom import NotFoundError
from bizdir.mappers.match_merger import merge_matches
from bizdir.mappers.social_url import normalize_social_url
from bizdir.schemas.business import Business
from bizdir.schemas.duplicates import (
    CheckedFields,
    DuplicateMatch,
    DuplicateReport,
    DuplicateStats,
    MatchType,
)
from bizdir.schemas.submission import BusinessSubmission
from bizdir.storage.base import BusinessStore, SubmissionStore

logger = logging.getLogger(__name__)

SOCIAL_SIGNALS = ("facebook", "instagram")

STATS_WINDOW_DAYS = 7
STATS_SAMPLE_SIZE = 100


def _to_match(
    field: str, value: str, business: Business, match_type: MatchType
) -> DuplicateMatch:
    return DuplicateMatch(
        field=field,
        matched_value=value,
        business_id=str(business.id),
        business_name=business.business_name,
        match_type=match_type,
    )


class DuplicateDetectionService:
    def __init__(
        self,
        businesses: BusinessStore,
        submissions: SubmissionStore,
        batch_size: int = 10,
    ):
        self._businesses = businesses
        self._submissions = submissions
        self._batch_size = batch_size

    async def _resolve(self, submission: BusinessSubmission | str) -> BusinessSubmission:
        if isinstance(submission, BusinessSubmission):
            return submission
        found = await self._submissions.get(submission)
        if found is None:
            raise NotFoundError("Submission", submission)
        return found

    async def find_duplicates(self, submission: BusinessSubmission | str) -> DuplicateReport:
        submission = await self._resolve(submission)
        matches: list[DuplicateMatch] = []

        if submission.business_name:
            for business in await self._businesses.find_by_name(submission.business_name):
                matches.append(
                    _to_match("businessName", submission.business_name, business, MatchType.exact)
                )

        if submission.mobile:
            for business in await self._businesses.find_by_field("mobile", submission.mobile):
                matches.append(
                    _to_match("mobile", submission.mobile, business, MatchType.exact)
                )

        if submission.submitter_email:
            for business in await self._businesses.find_by_field(
                "email", submission.submitter_email
            ):
                matches.append(
                    _to_match("email", submission.submitter_email, business, MatchType.exact)
                )

        for platform in SOCIAL_SIGNALS:
            url = getattr(submission.social_links, platform)
            normalized = normalize_social_url(url)
            if not normalized:
                continue
            path = f"socialLinks.{platform}"
            for business in await self._businesses.find_by_field_containing(path, normalized):
                matches.append(_to_match(path, url, business, MatchType.social_url))

        merged = merge_matches(matches)
        if merged:
            logger.info(
                "Submission %s matches %d existing businesses",
                submission.submission_id,
                len(merged),
            )

        return DuplicateReport(
            has_duplicates=bool(merged),
            match_count=len(merged),
            matches=merged,
            checked_fields=CheckedFields(
                business_name=bool(submission.business_name),
                mobile=bool(submission.mobile),
                email=bool(submission.submitter_email),
                facebook=bool(submission.social_links.facebook),
                instagram=bool(submission.social_links.instagram),
            ),
        )

    async def _check_isolated(self, submission_id: str) -> DuplicateReport:
        try:
            return await self.find_duplicates(submission_id)
        except Exception as exc:
            logger.exception("Duplicate check failed for submission %s", submission_id)
            return DuplicateReport(
                has_duplicates=False, match_count=0, matches=[], error=str(exc)
            )

    async def batch_check_duplicates(
        self, submission_ids: Sequence[str]
    ) -> dict[str, DuplicateReport]:
        """Check many submissions, one chunk of ``batch_size`` at a time.

        A failing id yields an empty report carrying ``error`` instead of
        aborting the batch.
        """
        results: dict[str, DuplicateReport] = {}
        for start in range(0, len(submission_ids), self._batch_size):
            chunk = submission_ids[start:start + self._batch_size]
            reports = await asyncio.gather(*(self._check_isolated(sid) for sid in chunk))
            results.update(zip(chunk, reports))
        return results

    async def get_duplicate_stats(self) -> DuplicateStats:
        since = datetime.now(timezone.utc) - timedelta(days=STATS_WINDOW_DAYS)
        sample = await self._submissions.recent(since, limit=STATS_SAMPLE_SIZE)

        duplicates_found = 0
        for submission in sample:
            report = await self.find_duplicates(submission)
            if report.has_duplicates:
                duplicates_found += 1

        rate = int(duplicates_found * 100 / len(sample) + 0.5) if sample else 0
        return DuplicateStats(
            total_submissions_checked=len(sample),
            duplicates_found=duplicates_found,
            duplicate_rate=rate,
        )
