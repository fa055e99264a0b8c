import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from bizdir.config import Settings
from bizdir.exceptions.custom import (
    ImageProcessingError,
    NotFoundError,
    RateLimitError,
    StoreUnavailableError,
    SubmissionValidationError,
)
from bizdir.exceptions.handlers import (
    image_processing_error_handler,
    not_found_error_handler,
    rate_limit_error_handler,
    store_unavailable_error_handler,
    validation_error_handler,
)
from bizdir.routers.admin_submissions import router as admin_submissions_router
from bizdir.routers.businesses import router as businesses_router
from bizdir.routers.health import router as health_router
from bizdir.routers.submissions import router as submissions_router
from bizdir.routers.uploads import router as uploads_router
from bizdir.services.directory import DirectoryService
from bizdir.services.duplicate_detection import DuplicateDetectionService
from bizdir.services.images import ImageProcessor
from bizdir.services.moderation import ModerationService
from bizdir.services.submission_intake import SubmissionIntakeService
from bizdir.storage.images import LocalImageStore
from bizdir.storage.memory import InMemoryStore
from bizdir.storage.mongo import MongoStore
from bizdir.throttle import SubmissionThrottle

logger = logging.getLogger(__name__)


def _open_store(settings: Settings) -> InMemoryStore | MongoStore:
    if settings.store_backend == "memory":
        return InMemoryStore()
    return MongoStore(
        settings.mongodb_uri,
        settings.mongodb_database,
        timeout_ms=settings.mongodb_timeout_ms,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)

    store = _open_store(settings)
    try:
        await store.ensure_indexes()
    except StoreUnavailableError as exc:
        logger.warning("Starting without indexes, store unreachable: %s", exc.message)

    image_store = LocalImageStore(settings.upload_dir, settings.upload_base_url)

    duplicates = DuplicateDetectionService(
        store.businesses, store.submissions, batch_size=settings.duplicate_batch_size
    )

    app.state.settings = settings
    app.state.store = store
    app.state.image_store = image_store
    app.state.duplicate_service = duplicates
    app.state.intake_service = SubmissionIntakeService(
        store.submissions,
        ImageProcessor(image_store, max_upload_mb=settings.max_upload_mb),
        duplicates=duplicates if settings.check_duplicates_on_intake else None,
        throttle=SubmissionThrottle(settings.submission_cooldown_seconds),
    )
    app.state.moderation_service = ModerationService(store.submissions, store.businesses)
    app.state.directory_service = DirectoryService(store.businesses)

    logger.info("Business directory started with %s store", settings.store_backend)
    try:
        yield
    finally:
        await store.close()


app = FastAPI(title="Business Directory", lifespan=lifespan)

app.add_exception_handler(SubmissionValidationError, validation_error_handler)
app.add_exception_handler(NotFoundError, not_found_error_handler)
app.add_exception_handler(StoreUnavailableError, store_unavailable_error_handler)
app.add_exception_handler(ImageProcessingError, image_processing_error_handler)
app.add_exception_handler(RateLimitError, rate_limit_error_handler)

app.include_router(submissions_router)
app.include_router(admin_submissions_router)
app.include_router(businesses_router)
app.include_router(health_router)
app.include_router(uploads_router)
