"""Administrative point mutations on existing banners."""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import BannerNotFoundError
from .lifecycle import ensure_valid_window
from .models import UNSET, Banner, BannerUpdate
from .repository import BannerRepository


@dataclass(slots=True)
class BannerAdminService:
    repository: BannerRepository

    async def get_banner(self, banner_id: str) -> Banner:
        banner = await self.repository.get_by_id(banner_id)
        if banner is None:
            raise BannerNotFoundError(banner_id)
        return banner

    async def delete_banner(self, banner_id: str) -> None:
        deleted = await self.repository.delete_by_id(banner_id)
        if not deleted:
            raise BannerNotFoundError(banner_id)

    async def update_banner(self, banner_id: str, update: BannerUpdate) -> Banner:
        current = await self.get_banner(banner_id)

        start_date = update.start_date if update.start_date is not UNSET else current.start_date
        end_date = update.end_date if update.end_date is not UNSET else current.end_date
        ensure_valid_window(start_date, end_date)

        updated = await self.repository.update_by_id(banner_id, update)
        if updated is None:
            raise BannerNotFoundError(banner_id)
        return updated
