"""Public feeds consumed by storefront theme extensions."""
from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from banner_server.interfaces.http.deps import get_query_service, get_today
from banner_server.modules.banners import Banner, BannerQueryService
from banner_server.schemas import ActiveBannerListResponse, BannerSummary

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_summary(banner: Banner) -> BannerSummary:
    return BannerSummary(
        id=banner.id,
        title=banner.title,
        alt=banner.alt_text,
        url=banner.remote_url,
        start_date=banner.start_date,
        end_date=banner.end_date,
    )


@router.get("/banner-api/active", response_model=ActiveBannerListResponse, summary="Currently active banners")
async def active_banners(
    query: BannerQueryService = Depends(get_query_service),
    today: date = Depends(get_today),
):
    try:
        banners = await query.list_active(now=today)
    except SQLAlchemyError:
        logger.exception("Active banners API error")
        failure = ActiveBannerListResponse(success=False)
        body = failure.model_dump(by_alias=True)
        body["error"] = "Error loading banners"
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)

    return ActiveBannerListResponse(
        banners=[_to_summary(banner) for banner in banners],
        count=len(banners),
    )


@router.get("/banner", response_class=HTMLResponse, summary="Legacy HTML banner fragment")
async def banner_fragment(
    request: Request,
    query: BannerQueryService = Depends(get_query_service),
    today: date = Depends(get_today),
):
    try:
        banners = await query.list_active(now=today)
    except SQLAlchemyError:
        logger.exception("Proxy banner error")
        return HTMLResponse("Error loading banners", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    templates = request.app.state.templates
    return templates.TemplateResponse(request, "banner_fragment.html", {"banners": banners})
