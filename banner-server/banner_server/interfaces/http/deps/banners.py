"""Banner related dependency providers."""

from datetime import date

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from banner_server.core.config import Settings
from banner_server.core.container import ApplicationContainer
from banner_server.infrastructure.database.repositories.banner_repository import SqlBannerRepository
from banner_server.modules.banners import (
    BannerAdminService,
    BannerQueryService,
    IngestionPipeline,
    ObjectStagingClient,
)

from .database import get_db_session


def get_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


def get_app_settings(container: ApplicationContainer = Depends(get_container)) -> Settings:
    return container.settings


def get_staging_client(container: ApplicationContainer = Depends(get_container)) -> ObjectStagingClient:
    return container.staging_client


def get_today(container: ApplicationContainer = Depends(get_container)) -> date:
    return container.today()


def get_banner_repository(db: AsyncSession = Depends(get_db_session)) -> SqlBannerRepository:
    return SqlBannerRepository(db)


def get_ingestion_pipeline(
    repository: SqlBannerRepository = Depends(get_banner_repository),
    staging_client: ObjectStagingClient = Depends(get_staging_client),
    settings: Settings = Depends(get_app_settings),
) -> IngestionPipeline:
    return IngestionPipeline(
        repository=repository,
        staging_client=staging_client,
        buffer_dir=settings.uploads.buffer_dir,
    )


def get_query_service(repository: SqlBannerRepository = Depends(get_banner_repository)) -> BannerQueryService:
    return BannerQueryService(repository)


def get_admin_service(repository: SqlBannerRepository = Depends(get_banner_repository)) -> BannerAdminService:
    return BannerAdminService(repository)


__all__ = [
    "get_admin_service",
    "get_app_settings",
    "get_banner_repository",
    "get_container",
    "get_ingestion_pipeline",
    "get_query_service",
    "get_staging_client",
    "get_today",
]
