"""Image storage for processed submission pictures."""

import asyncio
from pathlib import Path
from typing import Protocol


class ImageStoreProtocol(Protocol):
    async def save(self, filename: str, data: bytes) -> str:
        """Persist image bytes and return their public URL."""
        ...


class LocalImageStore:
    """Stores images on the local filesystem, served under ``base_url``."""

    def __init__(self, base_path: str = "uploads/submissions", base_url: str = "/uploads/submissions"):
        self.base_path = Path(base_path)
        self.base_url = base_url.rstrip("/")
        self.base_path.mkdir(parents=True, exist_ok=True)

    def path_for(self, filename: str) -> Path | None:
        """Location of a stored image, or None for names outside the store."""
        if not filename or Path(filename).name != filename:
            return None
        return self.base_path / filename

    async def save(self, filename: str, data: bytes) -> str:
        await asyncio.to_thread((self.base_path / filename).write_bytes, data)
        return f"{self.base_url}/{filename}"
