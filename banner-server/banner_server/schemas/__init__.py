"""Pydantic schemas used across the project."""
from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class TokenData(BaseModel):
    subject: str
    role: str


class SuccessResponse(BaseModel):
    success: bool = True


class BannerSummary(BaseModel):
    """Fields exposed to storefront display surfaces."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: Optional[str] = None
    alt: Optional[str] = None
    url: str
    start_date: Optional[date] = Field(default=None, alias="startDate")
    end_date: Optional[date] = Field(default=None, alias="endDate")


class BannerResponse(BannerSummary):
    file_name: str = Field(alias="fileName")
    content_type: str = Field(alias="contentType")
    size_bytes: int = Field(alias="sizeBytes")
    created_at: datetime = Field(alias="createdAt")


class AdminBannerResponse(BannerResponse):
    status: str


class StatusCountsResponse(BaseModel):
    active: int
    scheduled: int
    expired: int


class AdminBannerListResponse(BaseModel):
    banners: list[AdminBannerResponse]
    counts: StatusCountsResponse


class ActiveBannerListResponse(BaseModel):
    success: bool = True
    banners: list[BannerSummary] = Field(default_factory=list)
    count: int = 0


class BannerUploadResponse(BaseModel):
    success: bool = True
    url: str
    banner: BannerResponse


class BannerUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    alt: Optional[str] = None
    start_date: Optional[date] = Field(default=None, alias="startDate")
    end_date: Optional[date] = Field(default=None, alias="endDate")


class BannerUpdateResponse(SuccessResponse):
    banner: BannerResponse


class IngestionErrorDetail(BaseModel):
    error: str
    message: str
    phase: Optional[str] = None
    url: Optional[str] = None
    errors: list[dict[str, Any]] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
