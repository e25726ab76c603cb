"""Process scoped dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

import httpx

from banner_server.core.config import Settings
from banner_server.infrastructure.storage import ShopifyStagingClient
from banner_server.modules.banners import ObjectStagingClient, today_in


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    http_client: httpx.AsyncClient
    staging_client: ObjectStagingClient

    @classmethod
    def build(cls, settings: Settings) -> "ApplicationContainer":
        http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.shopify.timeout),
            limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
        )
        staging_client = ShopifyStagingClient(
            http_client,
            graphql_url=settings.shopify.graphql_url,
            access_token=settings.shopify.access_token.get_secret_value(),
        )
        return cls(settings=settings, http_client=http_client, staging_client=staging_client)

    def today(self) -> date:
        return today_in(self.settings.display.timezone)

    async def aclose(self) -> None:
        await self.http_client.aclose()


__all__ = ["ApplicationContainer"]
