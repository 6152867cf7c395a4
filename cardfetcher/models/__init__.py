from cardfetcher.models.card import CardSummary, SearchPage
from cardfetcher.models.failure import (
    AttachmentUploadError,
    FailureDetail,
    FailureKind,
    KnownError,
    MissingImageError,
    SearchFetchError,
    SendError,
)
from cardfetcher.models.message import (
    ListItem,
    ListMessage,
    MediaMessage,
    OutboundMessage,
    TextMessage,
)
from cardfetcher.models.outcome import Candidates, NotFound, ResolvedOutcome, SingleCard
from cardfetcher.models.query import Query

__all__ = [
    "AttachmentUploadError",
    "Candidates",
    "CardSummary",
    "FailureDetail",
    "FailureKind",
    "KnownError",
    "ListItem",
    "ListMessage",
    "MediaMessage",
    "MissingImageError",
    "NotFound",
    "OutboundMessage",
    "Query",
    "ResolvedOutcome",
    "SearchFetchError",
    "SearchPage",
    "SendError",
    "SingleCard",
    "TextMessage",
]
