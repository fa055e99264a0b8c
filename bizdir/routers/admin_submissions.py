import logging
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query

from bizdir.dependencies import DuplicatesDep, ModerationDep, SettingsDep
from bizdir.mappers.identifiers import is_storage_id
from bizdir.schemas.queries import SubmissionQuery
from bizdir.schemas.responses import (
    BatchDuplicateResponse,
    BulkDeleteResponse,
    DuplicateCheckResponse,
    DuplicateStatsResponse,
    StatusUpdateRequest,
    StatusUpdateResponse,
    StatusUpdateView,
    SubmissionIdsRequest,
    SubmissionPage,
    SubmissionStatsResponse,
)
from bizdir.schemas.submission import BusinessSubmission, SubmissionStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/submissions", tags=["admin"])


def _require_storage_id(submission_id: str) -> None:
    if not is_storage_id(submission_id):
        raise HTTPException(status_code=400, detail="Invalid submission ID format")


def _require_id_list(ids: list[str], max_ids: int | None = None) -> None:
    if not ids:
        raise HTTPException(status_code=400, detail="submissionIds array is required")
    if not all(is_storage_id(i) for i in ids):
        raise HTTPException(status_code=400, detail="Invalid submission ID format")
    if max_ids is not None and len(ids) > max_ids:
        raise HTTPException(status_code=400, detail=f"Maximum {max_ids} submissions per batch")


@router.get("", response_model=SubmissionPage)
async def list_submissions(
    service: ModerationDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 25,
    status: str = "all",
    category: str = "all",
    date_from: Annotated[datetime | None, Query(alias="dateFrom")] = None,
    date_to: Annotated[datetime | None, Query(alias="dateTo")] = None,
    search: str = "",
) -> SubmissionPage:
    if status != "all" and status not in set(SubmissionStatus):
        raise HTTPException(status_code=400, detail="Invalid status filter")
    query = SubmissionQuery(
        status=None if status == "all" else status,
        category=None if category == "all" else category,
        date_from=date_from,
        date_to=date_to,
        search=search.strip(),
    )
    return await service.list_submissions(query, page=page, limit=limit)


@router.get("/stats", response_model=SubmissionStatsResponse)
async def submission_stats(service: ModerationDep) -> SubmissionStatsResponse:
    return SubmissionStatsResponse(stats=await service.submission_stats())


@router.get("/duplicate-stats", response_model=DuplicateStatsResponse)
async def duplicate_stats(duplicates: DuplicatesDep) -> DuplicateStatsResponse:
    return DuplicateStatsResponse(stats=await duplicates.get_duplicate_stats())


@router.post("/batch-duplicates", response_model=BatchDuplicateResponse)
async def batch_duplicates(
    request: SubmissionIdsRequest,
    duplicates: DuplicatesDep,
    settings: SettingsDep,
) -> BatchDuplicateResponse:
    _require_id_list(request.submission_ids, settings.max_batch_ids)
    results = await duplicates.batch_check_duplicates(request.submission_ids)
    return BatchDuplicateResponse(duplicate_results=results)


@router.delete("", response_model=BulkDeleteResponse)
async def delete_submissions(
    request: SubmissionIdsRequest, service: ModerationDep
) -> BulkDeleteResponse:
    _require_id_list(request.submission_ids)
    deleted = await service.delete_submissions(request.submission_ids)
    return BulkDeleteResponse(
        message=f"{deleted} submissions deleted successfully",
        deleted_count=deleted,
    )


@router.get("/{submission_id}", response_model=BusinessSubmission)
async def get_submission(submission_id: str, service: ModerationDep) -> BusinessSubmission:
    _require_storage_id(submission_id)
    return await service.get_submission(submission_id)


@router.put("/{submission_id}/status", response_model=StatusUpdateResponse)
async def update_status(
    submission_id: str,
    request: StatusUpdateRequest,
    service: ModerationDep,
) -> StatusUpdateResponse:
    _require_storage_id(submission_id)
    submission = await service.update_status(
        submission_id,
        request.status,
        rejection_reason=request.rejection_reason,
        business_id=request.business_id,
    )
    return StatusUpdateResponse(
        message=f"Submission {submission.status} successfully",
        submission=StatusUpdateView(
            id=str(submission.id),
            submission_id=submission.submission_id,
            status=submission.status,
            reviewed_at=submission.reviewed_at,
            rejection_reason=submission.rejection_reason,
            promoted_business_id=submission.promoted_business_id,
        ),
    )


@router.get("/{submission_id}/duplicates", response_model=DuplicateCheckResponse)
async def submission_duplicates(
    submission_id: str, duplicates: DuplicatesDep
) -> DuplicateCheckResponse:
    _require_storage_id(submission_id)
    return DuplicateCheckResponse(duplicate_info=await duplicates.find_duplicates(submission_id))
