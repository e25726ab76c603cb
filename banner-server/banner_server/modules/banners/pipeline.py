"""Staged ingestion of banner uploads into the object storage provider.

An ingestion walks a fixed sequence of phases::

    INSPECTING -> REQUESTING_TARGET -> UPLOADING -> FINALIZING -> PERSISTING -> DONE

Any failure before PERSISTING ends in :class:`IngestionFailed` carrying the
phase and the cause, and nothing is written to the metadata store. A failure
while PERSISTING means the remote object already exists, so it is reported as
:class:`IngestionInconsistent` with the orphaned URL. The locally buffered
upload is removed on every exit path.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, TypeVar

from .exceptions import (
    EmptyUploadError,
    IngestionFailed,
    IngestionInconsistent,
    IngestionTimeout,
)
from .lifecycle import ensure_valid_window
from .models import Banner, BannerDraft, BannerMetadata
from .repository import BannerRepository
from .staging import ObjectStagingClient
from .uploads import UploadSource, buffered_upload

logger = logging.getLogger(__name__)

T = TypeVar("T")


class IngestionPhase(str, enum.Enum):
    INSPECTING = "inspecting"
    REQUESTING_TARGET = "requesting_target"
    UPLOADING = "uploading"
    FINALIZING = "finalizing"
    PERSISTING = "persisting"
    DONE = "done"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def deadline_after(seconds: Optional[float]) -> Optional[float]:
    """Translate a relative timeout into an absolute event loop deadline."""
    if seconds is None:
        return None
    return asyncio.get_running_loop().time() + seconds


@dataclass(slots=True)
class IngestionPipeline:
    repository: BannerRepository
    staging_client: ObjectStagingClient
    buffer_dir: Path
    clock: Callable[[], datetime] = utcnow

    async def ingest(
        self,
        upload: UploadSource,
        metadata: BannerMetadata,
        *,
        deadline: Optional[float] = None,
    ) -> Banner:
        ensure_valid_window(metadata.start_date, metadata.end_date)

        phase = IngestionPhase.INSPECTING
        try:
            async with buffered_upload(upload, self.buffer_dir) as buffered:
                if buffered.size_bytes == 0:
                    raise EmptyUploadError("uploaded file is empty")

                phase = IngestionPhase.REQUESTING_TARGET
                target = await self._run_phase(
                    phase,
                    deadline,
                    self.staging_client.request_staging_target,
                    buffered.file_name,
                    buffered.content_type,
                    buffered.size_bytes,
                )

                phase = IngestionPhase.UPLOADING
                with buffered.open() as content:
                    await self._run_phase(
                        phase,
                        deadline,
                        self.staging_client.upload_binary,
                        target,
                        content,
                        filename=buffered.file_name,
                        mime_type=buffered.content_type,
                    )

                phase = IngestionPhase.FINALIZING
                remote_url = await self._run_phase(
                    phase,
                    deadline,
                    self.staging_client.finalize_object,
                    target,
                    metadata.alt_text or buffered.file_name,
                    mime_type=buffered.content_type,
                )

                phase = IngestionPhase.PERSISTING
                draft = BannerDraft(
                    title=metadata.title,
                    alt_text=metadata.alt_text,
                    start_date=metadata.start_date,
                    end_date=metadata.end_date,
                    remote_url=remote_url,
                    file_name=buffered.file_name,
                    content_type=buffered.content_type,
                    size_bytes=buffered.size_bytes,
                    created_at=self.clock(),
                )
                try:
                    banner = await self._run_phase(phase, deadline, self.repository.insert, draft)
                except Exception as exc:
                    logger.error(
                        "Remote object %s created but banner record was not written, reconcile manually: %s",
                        remote_url,
                        exc,
                    )
                    raise IngestionInconsistent(remote_url, exc) from exc
        except IngestionInconsistent:
            raise
        except Exception as exc:
            logger.warning("Banner ingestion failed during %s: %s", phase.value, exc)
            raise IngestionFailed(phase, exc) from exc

        logger.info("Banner %s ingested (%s, %d bytes)", banner.id, banner.remote_url, banner.size_bytes)
        return banner

    @staticmethod
    async def _run_phase(
        phase: IngestionPhase,
        deadline: Optional[float],
        func: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        logger.debug("Ingestion entering phase %s", phase.value)
        if deadline is None:
            return await func(*args, **kwargs)

        remaining = deadline - asyncio.get_running_loop().time()
        if remaining <= 0:
            raise IngestionTimeout(f"deadline expired before {phase.value}")
        try:
            return await asyncio.wait_for(func(*args, **kwargs), timeout=remaining)
        except asyncio.TimeoutError as exc:
            raise IngestionTimeout(f"deadline expired during {phase.value}") from exc
