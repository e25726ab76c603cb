"""SQLAlchemy-backed repository implementations."""

from .banner_repository import SqlBannerRepository

__all__ = [
    "SqlBannerRepository",
]
