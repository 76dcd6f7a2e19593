import logging
from typing import Any, Dict, List, Optional

from tenacity import Retrying, before_sleep_log, retry_if_exception, stop_after_attempt, wait_incrementing

from .data_models import NormalizedResult, SearchResponse, WalkStats
from .errors import DecodeError, FetchError, InvalidVideoLink, MissingRequiredSection, PayloadNotFound, YouTubeSearchError
from .fetcher import Fetcher, HttpFetcher
from .payload import decode_payload, locate_initial_data, locate_player_response
from .settings import (
    logger, DEBUG_LOGGING,
    YOUTUBE_BASE_URL, INNERTUBE_API_KEY, INNERTUBE_CLIENT_NAME, INNERTUBE_CLIENT_VERSION,
    SEARCH_LANGUAGE, SEARCH_REGION, SEARCH_MAX_ATTEMPTS, SEARCH_RETRY_DELAY,
)
from .tree import as_str, deep_get, iter_list
from .utils import (
    channel_url, clean_youtube_link, default_thumbnail, extract_video_id,
    is_youtube_url, search_url, seconds_to_hms, watch_url,
)
from .walker import find_continuation, walk_contents

PLACEHOLDER_TITLE = "(Fetching metadata...)"
RESULTS_PATH = ("contents", "twoColumnSearchResultsRenderer", "primaryContents", "sectionListRenderer", "contents")


def _placeholder(video_id: str) -> SearchResponse:
    return SearchResponse(results=[NormalizedResult(
        id=video_id,
        title=PLACEHOLDER_TITLE,
        url=watch_url(video_id),
        thumbnail=default_thumbnail(video_id),
    )])


def _continuation_blocks(data: Dict[str, Any]) -> Optional[List[Any]]:
    blocks: Optional[List[Any]] = None
    for command in iter_list(data, "onResponseReceivedCommands"):
        items = deep_get(command, "appendContinuationItemsAction", "continuationItems")
        if isinstance(items, list):
            blocks = (blocks or []) + items
    return blocks


class YouTubeSearch:
    def __init__(self, fetcher: Optional[Fetcher] = None):
        self.fetcher = fetcher or HttpFetcher()

    def search(self, query: str, continuation_token: str = "") -> SearchResponse:
        """
        Extract one page of results for a free-text query.

        With a continuation token the follow-up page is requested from the
        innertube search endpoint instead of the results page.
        """
        query = (query or "").strip()
        if continuation_token:
            logger.info(f"Fetching next page for '{query}'")
            data = self.fetcher.post_json(
                f"{YOUTUBE_BASE_URL}/youtubei/v1/search",
                self._continuation_payload(continuation_token),
                params={"key": INNERTUBE_API_KEY} if INNERTUBE_API_KEY else None,
            )
            blocks = _continuation_blocks(data)
            if blocks is None:
                logger.error("Continuation response has no continuationItems")
                raise MissingRequiredSection("continuation items missing")
            return self._extract(blocks)

        if not query:
            return SearchResponse()

        logger.info(f"Searching YouTube for: '{query}'")
        html = self.fetcher.fetch(search_url(query))
        data = decode_payload(locate_initial_data(html))

        blocks = deep_get(data, *RESULTS_PATH)
        if not isinstance(blocks, list):
            logger.error("ytInitialData has no search results section")
            raise MissingRequiredSection("search results missing")

        return self._extract(blocks)

    def _extract(self, blocks: List[Any]) -> SearchResponse:
        stats = WalkStats()
        results = walk_contents(blocks, stats)
        token = find_continuation(blocks)

        logger.info(f"Extracted {len(results)} results from {stats.blocks} blocks (more pages: {bool(token)})")
        if DEBUG_LOGGING:
            logger.debug(f"Walk stats: {stats.as_dict()}")
            for r in results[:3]:
                logger.debug(f"  {r.id} '{r.title}' ({r.duration or 'no duration'})")

        return SearchResponse(results=results, continuation_token=token)

    def _continuation_payload(self, token: str) -> Dict[str, Any]:
        return {
            "context": {
                "client": {
                    "clientName": INNERTUBE_CLIENT_NAME,
                    "clientVersion": INNERTUBE_CLIENT_VERSION,
                    "hl": SEARCH_LANGUAGE,
                    "gl": SEARCH_REGION,
                }
            },
            "continuation": token,
        }

    def resolve_direct_video(self, video_id: str) -> SearchResponse:
        """
        Return exactly one record for a known video id.

        Missing or broken metadata degrades to a placeholder record rather
        than an error.
        """
        url = watch_url(video_id)
        logger.info(f"Resolving video {video_id}")

        try:
            html = self.fetcher.fetch(url)
        except FetchError as e:
            logger.warning(f"Failed to fetch watch page, falling back to basic data: {str(e)}")
            return _placeholder(video_id)

        try:
            data = decode_payload(locate_player_response(html))
        except (PayloadNotFound, DecodeError) as e:
            logger.warning(f"Player response unusable for {video_id}, using fallback: {str(e)}")
            return _placeholder(video_id)

        details = deep_get(data, "videoDetails")
        video_id = as_str(deep_get(details, "videoId")) or video_id
        length_text = as_str(deep_get(details, "lengthSeconds"))
        length = int(length_text) if length_text.isdecimal() else 0
        channel_id = as_str(deep_get(details, "channelId"))
        is_live = deep_get(details, "isLiveContent") is True

        result = NormalizedResult(
            id=video_id,
            title=as_str(deep_get(details, "title")),
            url=watch_url(video_id),
            thumbnail=default_thumbnail(video_id),
            duration=seconds_to_hms(length) if length and not is_live else "",
            duration_sec=0 if is_live else length,
            channel_name=as_str(deep_get(details, "author")),
            channel_id=channel_id,
            channel_url=channel_url(channel_id),
            is_live=is_live,
            is_short=False,
        )
        logger.info(f"Resolved video {video_id}: '{result.title}' ({result.duration_sec}s)")
        return SearchResponse(results=[result])

    def lookup(self, text: str, continuation_token: str = "") -> SearchResponse:
        """Route user input: YouTube links resolve directly, anything else is searched."""
        text = (text or "").strip()
        if not text:
            return SearchResponse()

        if is_youtube_url(text):
            logger.debug(f"Detected YouTube URL: {text}")
            video_id = extract_video_id(clean_youtube_link(text))
            if not video_id:
                raise InvalidVideoLink(f"invalid YouTube link: {text}")
            return self.resolve_direct_video(video_id)

        return self.search(text, continuation_token)


def _is_retryable(e: BaseException) -> bool:
    return isinstance(e, YouTubeSearchError) and not isinstance(e, InvalidVideoLink)


def search_with_retries(
    client: YouTubeSearch,
    text: str,
    continuation_token: str = "",
    max_attempts: Optional[int] = None,
    delay: Optional[float] = None,
) -> SearchResponse:
    """lookup() with a fixed number of attempts and a linearly growing delay between them."""
    if delay is None:
        delay = SEARCH_RETRY_DELAY
    retrying = Retrying(
        stop=stop_after_attempt(max_attempts or SEARCH_MAX_ATTEMPTS),
        wait=wait_incrementing(start=delay, increment=delay),
        retry=retry_if_exception(_is_retryable),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    return retrying(client.lookup, text, continuation_token)
