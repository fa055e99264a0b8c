from datetime import datetime

from pydantic import BaseModel


class UploadedImage(BaseModel):
    filename: str
    content_type: str
    data: bytes


class ProcessedImage(BaseModel):
    filename: str
    url: str
    width: int
    height: int
    processed_at: datetime
