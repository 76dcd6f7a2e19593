class YouTubeSearchError(Exception):
    """Base class for every error surfaced by the search engine."""


class FetchError(YouTubeSearchError):
    """The page (or continuation) request failed before any text came back."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class PayloadNotFound(YouTubeSearchError):
    """The embedded JSON marker is missing from the fetched page."""

    def __init__(self, marker: str):
        self.marker = marker
        super().__init__(f"{marker} not found in page")


class DecodeError(YouTubeSearchError):
    """The sliced payload is not a JSON object."""


class MissingRequiredSection(YouTubeSearchError):
    """The decoded document has no results container."""


class InvalidVideoLink(YouTubeSearchError):
    """A YouTube link was given but no video id could be read from it."""
