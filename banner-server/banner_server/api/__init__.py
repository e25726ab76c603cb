from fastapi import APIRouter

from banner_server.interfaces.http.routers import banners, storefront


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter()
    router.include_router(banners.router, prefix=prefix, tags=["banners"])
    router.include_router(storefront.router, prefix="/apps", tags=["storefront"])
    return router


__all__ = [
    "create_api_router",
]
