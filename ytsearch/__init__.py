from .data_models import NormalizedResult, SearchResponse
from .errors import (
    DecodeError,
    FetchError,
    InvalidVideoLink,
    MissingRequiredSection,
    PayloadNotFound,
    YouTubeSearchError,
)
from .yt import YouTubeSearch, search_with_retries

__all__ = [
    "NormalizedResult",
    "SearchResponse",
    "YouTubeSearch",
    "search_with_retries",
    "YouTubeSearchError",
    "FetchError",
    "PayloadNotFound",
    "DecodeError",
    "MissingRequiredSection",
    "InvalidVideoLink",
]
