"""Read side composition: banners with their derived lifecycle status."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional, Union

from .lifecycle import classify
from .models import Banner, BannerListing, BannerStatus, ClassifiedBanner, StatusCounts
from .repository import BannerRepository


@dataclass(slots=True)
class BannerQueryService:
    repository: BannerRepository
    today: Callable[[], date] = date.today

    async def list_all(self, now: Optional[Union[date, datetime]] = None) -> BannerListing:
        now = now if now is not None else self.today()
        banners = await self.repository.find_all()
        items = [ClassifiedBanner(banner=banner, status=self._status(banner, now)) for banner in banners]
        return BannerListing(items=items, counts=self._count(items))

    async def list_active(self, now: Optional[Union[date, datetime]] = None) -> list[Banner]:
        listing = await self.list_all(now)
        return [item.banner for item in listing.items if item.status is BannerStatus.ACTIVE]

    @staticmethod
    def _status(banner: Banner, now: Union[date, datetime]) -> BannerStatus:
        return classify(banner.start_date, banner.end_date, now)

    @staticmethod
    def _count(items: list[ClassifiedBanner]) -> StatusCounts:
        counts = StatusCounts()
        for item in items:
            if item.status is BannerStatus.ACTIVE:
                counts.active += 1
            elif item.status is BannerStatus.SCHEDULED:
                counts.scheduled += 1
            else:
                counts.expired += 1
        return counts
