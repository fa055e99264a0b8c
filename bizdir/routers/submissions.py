import logging

from fastapi import APIRouter, Request
from starlette.datastructures import UploadFile

from bizdir.dependencies import IntakeDep
from bizdir.schemas.images import UploadedImage
from bizdir.schemas.responses import (
    SubmissionCreatedResponse,
    SubmissionReceipt,
    SubmissionStatusResponse,
    SubmissionStatusView,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/submissions", tags=["submissions"])


async def _read_image(upload: object) -> UploadedImage | None:
    if not isinstance(upload, UploadFile) or not upload.filename:
        return None
    return UploadedImage(
        filename=upload.filename,
        content_type=upload.content_type or "application/octet-stream",
        data=await upload.read(),
    )


@router.post("/create", response_model=SubmissionCreatedResponse, status_code=201)
async def create_submission(request: Request, service: IntakeDep) -> SubmissionCreatedResponse:
    form = await request.form()
    fields = {key: value for key, value in form.items() if isinstance(value, str)}
    image = await _read_image(form.get("profileImage"))
    client_ip = request.client.host if request.client else None

    submission = await service.create_submission(fields, image, client_ip=client_ip)

    return SubmissionCreatedResponse(
        message="Business submission received successfully",
        submission=SubmissionReceipt(
            id=submission.submission_id,
            business_name=submission.business_name,
            categories=submission.categories,
            cities=submission.cities,
            status=submission.status,
            submitted_at=submission.submitted_at,
            has_image=bool(submission.profile_image),
        ),
    )


@router.get("/status/{submission_id}", response_model=SubmissionStatusResponse)
async def submission_status(submission_id: str, service: IntakeDep) -> SubmissionStatusResponse:
    submission = await service.get_status(submission_id)
    return SubmissionStatusResponse(
        submission=SubmissionStatusView(
            id=submission.submission_id,
            business_name=submission.business_name,
            status=submission.status,
            submitted_at=submission.submitted_at,
            reviewed_at=submission.reviewed_at,
            rejection_reason=submission.rejection_reason,
        )
    )
