"""Feature module aggregation and public exports."""

from . import banners

__all__ = [
    "banners",
]
