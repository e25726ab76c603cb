"""Lifecycle classification of banners by display window.

Status is never stored; it is recomputed from the configured dates on every
read. Comparisons happen at day granularity: a start date counts from the
beginning of its calendar day and an end date lasts until the end of its
calendar day, so both bounds are inclusive.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union
from zoneinfo import ZoneInfo

from .exceptions import InvalidBannerWindow
from .models import BannerStatus

DateLike = Union[date, datetime, str, None]


def _as_day(value: DateLike) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def classify(start_date: DateLike, end_date: DateLike, now: Union[date, datetime]) -> BannerStatus:
    today = _as_day(now)
    start = _as_day(start_date)
    end = _as_day(end_date)

    if start is not None and start <= today and (end is None or end >= today):
        return BannerStatus.ACTIVE
    if end is not None and end < today:
        return BannerStatus.EXPIRED
    return BannerStatus.SCHEDULED


def is_active(start_date: DateLike, end_date: DateLike, now: Union[date, datetime]) -> bool:
    return classify(start_date, end_date, now) is BannerStatus.ACTIVE


def today_in(timezone_name: str) -> date:
    """Current calendar date in the given IANA timezone."""
    return datetime.now(ZoneInfo(timezone_name)).date()


def ensure_valid_window(start_date: Optional[date], end_date: Optional[date]) -> None:
    if start_date is not None and end_date is not None and end_date < start_date:
        raise InvalidBannerWindow(
            f"end date {end_date.isoformat()} is before start date {start_date.isoformat()}"
        )
