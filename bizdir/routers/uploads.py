from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from bizdir.dependencies import ImageStoreDep

router = APIRouter(prefix="/uploads/submissions", tags=["uploads"])


@router.get("/{filename}")
async def submission_image(filename: str, images: ImageStoreDep) -> FileResponse:
    path = images.path_for(filename)
    if path is None or not path.is_file():
        raise HTTPException(status_code=404, detail="Image not found")
    return FileResponse(path, media_type="image/webp")
