"""Repository protocol for banner metadata persistence."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import Banner, BannerDraft, BannerUpdate


class BannerRepository(Protocol):
    async def insert(self, draft: BannerDraft) -> Banner:
        ...

    async def find_all(self) -> Sequence[Banner]:
        """Return every banner, newest created first."""
        ...

    async def get_by_id(self, banner_id: str) -> Banner | None:
        ...

    async def delete_by_id(self, banner_id: str) -> bool:
        ...

    async def update_by_id(self, banner_id: str, update: BannerUpdate) -> Banner | None:
        ...
