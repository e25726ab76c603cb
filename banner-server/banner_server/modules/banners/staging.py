"""Contract for the external object staging provider."""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Protocol


@dataclass(frozen=True, slots=True)
class StagingParameter:
    name: str
    value: str


@dataclass(frozen=True, slots=True)
class StagingTarget:
    """A single-use upload slot reserved with the provider."""

    url: str
    resource_url: str
    parameters: tuple[StagingParameter, ...] = ()


class ObjectStagingClient(Protocol):
    async def request_staging_target(
        self,
        filename: str,
        mime_type: str,
        size_bytes: int,
    ) -> StagingTarget:
        ...

    async def upload_binary(
        self,
        target: StagingTarget,
        content: BinaryIO,
        *,
        filename: str,
        mime_type: str,
    ) -> None:
        ...

    async def finalize_object(
        self,
        target: StagingTarget,
        alt_text: str,
        *,
        mime_type: str,
    ) -> str:
        ...
