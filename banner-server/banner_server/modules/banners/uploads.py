"""Local buffering of incoming uploads."""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, BinaryIO, Optional, Protocol

DEFAULT_FILENAME = "banner.png"
DEFAULT_CONTENT_TYPE = "image/png"
CHUNK_SIZE = 1024 * 1024


class UploadSource(Protocol):
    """The subset of ``fastapi.UploadFile`` the pipeline relies on."""

    filename: Optional[str]
    content_type: Optional[str]

    async def read(self, size: int = -1) -> bytes:
        ...

    async def close(self) -> None:
        ...


@dataclass(slots=True)
class BufferedUpload:
    path: Path
    file_name: str
    content_type: str
    size_bytes: int

    def open(self) -> BinaryIO:
        return self.path.open("rb")


@asynccontextmanager
async def buffered_upload(upload: UploadSource, buffer_dir: Path) -> AsyncIterator[BufferedUpload]:
    """Spool ``upload`` into ``buffer_dir`` and remove the file on exit."""
    file_name = sanitize_filename(upload.filename) or DEFAULT_FILENAME
    content_type = upload.content_type or DEFAULT_CONTENT_TYPE
    buffer_dir.mkdir(parents=True, exist_ok=True)

    # Preserve extension if available
    suffix = Path(file_name).suffix
    target_path = buffer_dir / f"{os.urandom(16).hex()}{suffix}"

    try:
        total_size = 0
        try:
            with target_path.open("wb") as buffer:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    buffer.write(chunk)
                    total_size += len(chunk)
        finally:
            await upload.close()

        yield BufferedUpload(
            path=target_path,
            file_name=file_name,
            content_type=content_type,
            size_bytes=total_size,
        )
    finally:
        target_path.unlink(missing_ok=True)


def sanitize_filename(filename: str | None) -> str | None:
    if not filename:
        return None
    name = os.path.basename(filename)
    # strip dangerous characters
    return name.replace("\0", "").strip() or None
