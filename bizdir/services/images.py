"""Validation and optimisation of submission profile images.

Uploads are checked for type and size before anything is stored, then
decoded with Pillow, cover-cropped to a fixed frame and re-encoded as WebP.
"""

import asyncio
import logging
import secrets
import time
from datetime import datetime, timezone
from io import BytesIO

from PIL import Image, ImageOps

from bizdir.exceptions.custom import ImageProcessingError
from bizdir.schemas.images import ProcessedImage, UploadedImage
from bizdir.storage.images import ImageStoreProtocol

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
    "image/avif",
    "image/tiff",
    "image/gif",
)
SUPPORTED_FORMATS = {"JPEG", "PNG", "WEBP", "AVIF", "TIFF", "GIF"}

MAX_DIMENSION = 10000
OUTPUT_SIZE = (800, 600)
WEBP_QUALITY = 85


class ImageProcessor:
    def __init__(self, image_store: ImageStoreProtocol, max_upload_mb: int = 10):
        self._store = image_store
        self._max_upload_mb = max_upload_mb

    def check_upload(self, image: UploadedImage) -> None:
        if image.content_type not in ALLOWED_MIME_TYPES:
            raise ImageProcessingError(
                f"Invalid file type. Allowed: {', '.join(ALLOWED_MIME_TYPES)}",
                status_code=400,
            )
        if len(image.data) > self._max_upload_mb * 1024 * 1024:
            raise ImageProcessingError(
                f"File too large. Maximum size: {self._max_upload_mb}MB",
                status_code=400,
            )

    @staticmethod
    def _render_webp(data: bytes) -> tuple[bytes, int, int]:
        try:
            with Image.open(BytesIO(data)) as image:
                if image.format not in SUPPORTED_FORMATS:
                    raise ImageProcessingError(
                        f"Unsupported format: {image.format}", status_code=400
                    )
                if image.width > MAX_DIMENSION or image.height > MAX_DIMENSION:
                    raise ImageProcessingError(
                        f"Image dimensions too large. Maximum: {MAX_DIMENSION}x{MAX_DIMENSION}px",
                        status_code=400,
                    )
                mode = "RGBA" if image.mode in ("RGBA", "LA", "P", "PA") else "RGB"
                fitted = ImageOps.fit(
                    image.convert(mode),
                    OUTPUT_SIZE,
                    method=Image.Resampling.LANCZOS,
                    centering=(0.5, 0.5),
                )
        except (OSError, Image.DecompressionBombError) as exc:
            raise ImageProcessingError(f"Invalid image file: {exc}", status_code=400) from exc

        buffer = BytesIO()
        fitted.save(buffer, format="WEBP", quality=WEBP_QUALITY, method=4)
        return buffer.getvalue(), fitted.width, fitted.height

    async def process_submission_image(
        self, data: bytes, submission_id: str
    ) -> ProcessedImage:
        webp, width, height = await asyncio.to_thread(self._render_webp, data)

        filename = (
            f"submission-{submission_id}-{int(time.time() * 1000)}-{secrets.token_hex(4)}.webp"
        )
        url = await self._store.save(filename, webp)
        logger.info(
            "Stored image %s for submission %s (%d bytes)", filename, submission_id, len(webp)
        )
        return ProcessedImage(
            filename=filename,
            url=url,
            width=width,
            height=height,
            processed_at=datetime.now(timezone.utc),
        )
