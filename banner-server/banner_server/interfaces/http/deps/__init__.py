"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .banners import (
    get_admin_service,
    get_app_settings,
    get_banner_repository,
    get_container,
    get_ingestion_pipeline,
    get_query_service,
    get_staging_client,
    get_today,
)

__all__ = [
    "get_db_session",
    "get_admin_service",
    "get_app_settings",
    "get_banner_repository",
    "get_container",
    "get_ingestion_pipeline",
    "get_query_service",
    "get_staging_client",
    "get_today",
]
