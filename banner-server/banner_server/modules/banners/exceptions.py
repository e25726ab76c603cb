"""Banner domain specific exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Sequence

if TYPE_CHECKING:
    from .pipeline import IngestionPhase


class BannerError(Exception):
    """Base class for banner domain errors."""


class BannerNotFoundError(BannerError):
    """Raised when the requested banner cannot be found."""


class InvalidBannerWindow(BannerError):
    """Raised when a banner's end date precedes its start date."""


class EmptyUploadError(BannerError):
    """Raised when the uploaded file carries no bytes."""


class StagingError(BannerError):
    """Base class for failures reported by the object staging provider."""


class ProviderRejected(StagingError):
    """The provider refused the staging request with field level errors."""

    def __init__(self, message: str, errors: Sequence[dict[str, Any]] = ()) -> None:
        super().__init__(message)
        self.errors = list(errors)


class ProviderUnavailable(StagingError):
    """The provider could not be reached or answered with a server error."""


class UploadFailed(StagingError):
    """The binary transfer to the staging target did not succeed."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FinalizeFailed(StagingError):
    """The provider could not turn the staged bytes into a servable object."""

    def __init__(self, message: str, errors: Sequence[dict[str, Any]] = ()) -> None:
        super().__init__(message)
        self.errors = list(errors)


class IngestionTimeout(BannerError):
    """The caller supplied deadline expired during ingestion."""


class IngestionFailed(BannerError):
    """Terminal failure of an ingestion before anything was persisted."""

    def __init__(self, phase: IngestionPhase, cause: BaseException) -> None:
        super().__init__(f"ingestion failed during {phase.value}: {cause}")
        self.phase = phase
        self.cause = cause


class IngestionInconsistent(BannerError):
    """The remote object exists but its metadata record could not be written."""

    def __init__(self, remote_url: str, cause: BaseException) -> None:
        super().__init__(f"remote object {remote_url} was created but not recorded: {cause}")
        self.remote_url = remote_url
        self.cause = cause
