import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from .custom import (
    ImageProcessingError,
    NotFoundError,
    RateLimitError,
    StoreUnavailableError,
    SubmissionValidationError,
)

logger = logging.getLogger(__name__)


async def validation_error_handler(
    _request: Request, exc: SubmissionValidationError
) -> JSONResponse:
    logger.info("Rejected payload with %d field errors", len(exc.errors))
    return JSONResponse(
        status_code=400,
        content={"success": False, "detail": "Validation failed", "errors": exc.errors},
    )


async def not_found_error_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"success": False, "detail": exc.message},
    )


async def store_unavailable_error_handler(
    _request: Request, exc: StoreUnavailableError
) -> JSONResponse:
    logger.error("Store unavailable: %s", exc.message)
    return JSONResponse(
        status_code=503,
        content={"success": False, "detail": "Data store unavailable, please retry"},
    )


async def image_processing_error_handler(
    _request: Request, exc: ImageProcessingError
) -> JSONResponse:
    logger.error("Image processing error: %s (status=%s)", exc.message, exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "detail": f"Image processing failed: {exc.message}"},
    )


async def rate_limit_error_handler(_request: Request, exc: RateLimitError) -> JSONResponse:
    logger.warning("Submission throttled, retry in %ds", exc.retry_after)
    return JSONResponse(
        status_code=429,
        content={"success": False, "detail": str(exc)},
        headers={"Retry-After": str(exc.retry_after)},
    )
