"""Operator endpoints for uploading and managing banners."""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from banner_server.core.config import Settings
from banner_server.core.security import get_current_operator
from banner_server.interfaces.http.deps import (
    get_admin_service,
    get_app_settings,
    get_db_session,
    get_ingestion_pipeline,
    get_query_service,
    get_today,
)
from banner_server.modules.banners import (
    Banner,
    BannerAdminService,
    BannerMetadata,
    BannerNotFoundError,
    BannerQueryService,
    BannerUpdate,
    EmptyUploadError,
    FinalizeFailed,
    IngestionFailed,
    IngestionInconsistent,
    IngestionPipeline,
    IngestionTimeout,
    InvalidBannerWindow,
    ProviderRejected,
    UNSET,
    deadline_after,
)
from banner_server.schemas import (
    AdminBannerListResponse,
    AdminBannerResponse,
    BannerResponse,
    BannerUpdateRequest,
    BannerUpdateResponse,
    BannerUploadResponse,
    IngestionErrorDetail,
    StatusCountsResponse,
    SuccessResponse,
    TokenData,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_schema(banner: Banner) -> BannerResponse:
    return BannerResponse(
        id=banner.id,
        title=banner.title,
        alt=banner.alt_text,
        url=banner.remote_url,
        start_date=banner.start_date,
        end_date=banner.end_date,
        file_name=banner.file_name,
        content_type=banner.content_type,
        size_bytes=banner.size_bytes,
        created_at=banner.created_at,
    )


def _parse_form_date(value: Optional[str], field: str) -> Optional[date]:
    text = (value or "").strip()
    if not text:
        return None
    try:
        # a full timestamp is accepted, only its calendar day is kept
        if "T" in text:
            return datetime.fromisoformat(text).date()
        return date.fromisoformat(text)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{field} must be an ISO date (YYYY-MM-DD)",
        ) from exc


def _inconsistent(exc: IngestionInconsistent) -> HTTPException:
    detail = IngestionErrorDetail(
        error="ingestion_inconsistent",
        message="Banner was uploaded to storage but could not be recorded",
        phase="persisting",
        url=exc.remote_url,
    )
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail.model_dump())


def _ingestion_failure(exc: IngestionFailed) -> HTTPException:
    cause = exc.cause
    if isinstance(cause, ProviderRejected):
        code, error, errors = status.HTTP_400_BAD_REQUEST, "provider_rejected", cause.errors
    elif isinstance(cause, FinalizeFailed) and cause.errors:
        code, error, errors = status.HTTP_400_BAD_REQUEST, "provider_rejected", cause.errors
    elif isinstance(cause, EmptyUploadError):
        code, error, errors = status.HTTP_400_BAD_REQUEST, "empty_upload", []
    elif isinstance(cause, IngestionTimeout):
        code, error, errors = status.HTTP_504_GATEWAY_TIMEOUT, "ingestion_timeout", []
    else:
        code, error, errors = status.HTTP_502_BAD_GATEWAY, "ingestion_failed", []
    detail = IngestionErrorDetail(error=error, message=str(cause), phase=exc.phase.value, errors=errors)
    return HTTPException(status_code=code, detail=detail.model_dump())


@router.post("/upload", response_model=BannerUploadResponse, summary="Upload a banner image")
async def upload_banner(
    banner: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    alt: Optional[str] = Form(None),
    start_date: Optional[str] = Form(None, alias="startDate"),
    end_date: Optional[str] = Form(None, alias="endDate"),
    operator: TokenData = Depends(get_current_operator),
    pipeline: IngestionPipeline = Depends(get_ingestion_pipeline),
    settings: Settings = Depends(get_app_settings),
    db: AsyncSession = Depends(get_db_session),
):
    if banner is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded (field 'banner')")

    metadata = BannerMetadata(
        title=title or None,
        alt_text=alt or None,
        start_date=_parse_form_date(start_date, "startDate"),
        end_date=_parse_form_date(end_date, "endDate"),
    )
    try:
        created = await pipeline.ingest(
            banner,
            metadata,
            deadline=deadline_after(settings.uploads.ingest_timeout),
        )
    except InvalidBannerWindow as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except IngestionInconsistent as exc:
        await db.rollback()
        raise _inconsistent(exc) from exc
    except IngestionFailed as exc:
        raise _ingestion_failure(exc) from exc

    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error(
            "Remote object %s created but banner record was not committed, reconcile manually: %s",
            created.remote_url,
            exc,
        )
        raise _inconsistent(IngestionInconsistent(created.remote_url, exc)) from exc

    logger.info("Operator %s uploaded banner %s", operator.subject, created.id)
    return BannerUploadResponse(url=created.remote_url, banner=_to_schema(created))


@router.get("/banners", response_model=AdminBannerListResponse, summary="List banners with status")
async def list_banners(
    operator: TokenData = Depends(get_current_operator),
    query: BannerQueryService = Depends(get_query_service),
    today: date = Depends(get_today),
):
    listing = await query.list_all(now=today)
    return AdminBannerListResponse(
        banners=[
            AdminBannerResponse(**_to_schema(item.banner).model_dump(), status=item.status.label)
            for item in listing.items
        ],
        counts=StatusCountsResponse(
            active=listing.counts.active,
            scheduled=listing.counts.scheduled,
            expired=listing.counts.expired,
        ),
    )


@router.delete("/banners/{banner_id}", response_model=SuccessResponse, summary="Delete a banner")
async def delete_banner(
    banner_id: str,
    operator: TokenData = Depends(get_current_operator),
    service: BannerAdminService = Depends(get_admin_service),
    db: AsyncSession = Depends(get_db_session),
):
    try:
        await service.delete_banner(banner_id)
    except BannerNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Banner not found") from exc
    await db.commit()
    logger.info("Operator %s deleted banner %s", operator.subject, banner_id)
    return SuccessResponse()


@router.put("/banners/{banner_id}", response_model=BannerUpdateResponse, summary="Edit banner metadata")
async def update_banner(
    banner_id: str,
    payload: BannerUpdateRequest,
    operator: TokenData = Depends(get_current_operator),
    service: BannerAdminService = Depends(get_admin_service),
    db: AsyncSession = Depends(get_db_session),
):
    provided = payload.model_fields_set
    update = BannerUpdate(
        title=payload.title if "title" in provided else UNSET,
        alt_text=payload.alt if "alt" in provided else UNSET,
        start_date=payload.start_date if "start_date" in provided else UNSET,
        end_date=payload.end_date if "end_date" in provided else UNSET,
    )
    try:
        banner = await service.update_banner(banner_id, update)
    except BannerNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Banner not found") from exc
    except InvalidBannerWindow as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    await db.commit()
    return BannerUpdateResponse(banner=_to_schema(banner))
