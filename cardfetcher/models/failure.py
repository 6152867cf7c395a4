"""
Failure classification for the query pipeline.

Every failure the pipeline can hit is scoped to a single request. Errors
are raised as KnownError subclasses so callers can decide, per kind,
which fallback message the user sees.

Failure kinds:
- EXTERNAL_API_ERROR: Scryfall or the Graph upload API failed
- SERVICE_UNAVAILABLE: the Send API did not accept a message
- INVALID_RECORD: an upstream record cannot be displayed
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    INVALID_RECORD = "invalid_record"

    # Service failures
    SERVICE_UNAVAILABLE = "service_unavailable"
    EXTERNAL_API_ERROR = "external_api_error"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.status_code = status_code
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail."""
        return FailureDetail(kind=self.kind, message=self.message, detail=self.detail)


class SearchFetchError(KnownError):
    """Raised when any page of a Scryfall search cannot be fetched."""

    def __init__(self, query: str, detail: str | None = None):
        self.query = query
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=f"Failed to search Scryfall for {query!r}",
            detail=detail,
            status_code=502,
        )


class AttachmentUploadError(KnownError):
    """Raised when the platform refuses to turn an image URL into an attachment."""

    def __init__(self, url: str, detail: str | None = None):
        self.url = url
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message="Failed to contact the attachment upload API",
            detail=detail,
            status_code=502,
        )


class SendError(KnownError):
    """Raised when the Send API does not accept a message."""

    def __init__(self, recipient_id: str, detail: str | None = None):
        self.recipient_id = recipient_id
        super().__init__(
            kind=FailureKind.SERVICE_UNAVAILABLE,
            message=f"Failed calling Send API for recipient {recipient_id}",
            detail=detail,
            status_code=502,
        )


class MissingImageError(KnownError):
    """Raised when a search record has no image that can be displayed."""

    def __init__(self, card_id: str | None, name: str | None):
        self.card_id = card_id
        self.name = name
        super().__init__(
            kind=FailureKind.INVALID_RECORD,
            message=f"Card {name!r} has no displayable image",
            detail=f"id={card_id}",
        )
