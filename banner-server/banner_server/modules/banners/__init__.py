"""Banner domain exports."""

from .exceptions import (
    BannerError,
    BannerNotFoundError,
    EmptyUploadError,
    FinalizeFailed,
    IngestionFailed,
    IngestionInconsistent,
    IngestionTimeout,
    InvalidBannerWindow,
    ProviderRejected,
    ProviderUnavailable,
    StagingError,
    UploadFailed,
)
from .lifecycle import classify, ensure_valid_window, is_active, today_in
from .models import (
    UNSET,
    Banner,
    BannerDraft,
    BannerListing,
    BannerMetadata,
    BannerStatus,
    BannerUpdate,
    ClassifiedBanner,
    StatusCounts,
)
from .pipeline import IngestionPhase, IngestionPipeline, deadline_after
from .query import BannerQueryService
from .service import BannerAdminService
from .staging import ObjectStagingClient, StagingParameter, StagingTarget

__all__ = [
    "UNSET",
    "Banner",
    "BannerAdminService",
    "BannerDraft",
    "BannerError",
    "BannerListing",
    "BannerMetadata",
    "BannerNotFoundError",
    "BannerQueryService",
    "BannerStatus",
    "BannerUpdate",
    "ClassifiedBanner",
    "EmptyUploadError",
    "FinalizeFailed",
    "IngestionFailed",
    "IngestionInconsistent",
    "IngestionPhase",
    "IngestionPipeline",
    "IngestionTimeout",
    "InvalidBannerWindow",
    "ObjectStagingClient",
    "ProviderRejected",
    "ProviderUnavailable",
    "StagingError",
    "StagingParameter",
    "StagingTarget",
    "StatusCounts",
    "UploadFailed",
    "classify",
    "deadline_after",
    "ensure_valid_window",
    "is_active",
    "today_in",
]
