"""Object storage provider adapters."""

from .shopify import ShopifyStagingClient

__all__ = ["ShopifyStagingClient"]
