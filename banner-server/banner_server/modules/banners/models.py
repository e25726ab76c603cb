"""Domain models for banners."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


class BannerStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    ACTIVE = "active"
    EXPIRED = "expired"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(slots=True)
class Banner:
    id: str
    title: Optional[str]
    alt_text: Optional[str]
    start_date: Optional[date]
    end_date: Optional[date]
    remote_url: str
    file_name: str
    content_type: str
    size_bytes: int
    created_at: datetime


@dataclass(slots=True)
class BannerMetadata:
    """Operator supplied fields accompanying an upload."""

    title: Optional[str] = None
    alt_text: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass(slots=True)
class BannerDraft:
    """A fully ingested banner that has not been assigned an id yet."""

    title: Optional[str]
    alt_text: Optional[str]
    start_date: Optional[date]
    end_date: Optional[date]
    remote_url: str
    file_name: str
    content_type: str
    size_bytes: int
    created_at: datetime


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class BannerUpdate:
    title: Optional[str] | object = UNSET
    alt_text: Optional[str] | object = UNSET
    start_date: Optional[date] | object = UNSET
    end_date: Optional[date] | object = UNSET

    def provided(self) -> dict[str, object]:
        values = {
            "title": self.title,
            "alt_text": self.alt_text,
            "start_date": self.start_date,
            "end_date": self.end_date,
        }
        return {key: value for key, value in values.items() if value is not UNSET}


@dataclass(slots=True)
class ClassifiedBanner:
    banner: Banner
    status: BannerStatus


@dataclass(slots=True)
class StatusCounts:
    active: int = 0
    scheduled: int = 0
    expired: int = 0

    @property
    def total(self) -> int:
        return self.active + self.scheduled + self.expired


@dataclass(slots=True)
class BannerListing:
    items: list[ClassifiedBanner]
    counts: StatusCounts
