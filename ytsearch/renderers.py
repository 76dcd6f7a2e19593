"""
One extractor per renderer variant found in search results.

Each extractor takes the renderer's own subtree (the value under
``videoRenderer``, ``reelItemRenderer``, ...) and returns a NormalizedResult,
or None when the card has no video id. Extractors never raise for a
malformed card.
"""
from typing import Any, List, Optional

from .data_models import NormalizedResult, WalkStats
from .tree import any_path, as_str, deep_get, first_text, iter_list
from .utils import (
    LIVE_SENTINEL,
    SHORT_SENTINEL,
    absolute_url,
    channel_url,
    default_thumbnail,
    parse_duration,
    shorts_url,
    watch_url,
)


def pick_thumbnail(renderer: Any, video_id: str) -> str:
    """Last (highest resolution) thumbnail, made absolute; hqdefault when none is offered."""
    thumbnails = iter_list(renderer, "thumbnail", "thumbnails")
    if thumbnails:
        url = as_str(deep_get(thumbnails[-1], "url"))
        if url:
            return absolute_url(url)
    return default_thumbnail(video_id)


def _browse_id(renderer: Any, byline_key: str) -> str:
    return as_str(deep_get(
        renderer, byline_key, "runs", "0", "navigationEndpoint", "browseEndpoint", "browseId"
    ))


def _is_live(renderer: Any) -> bool:
    if any_path(iter_list(renderer, "badges"), "liveBadgeRenderer"):
        return True
    if deep_get(renderer, "badges", "liveBadgeRenderer") is not None:
        return True
    for overlay in iter_list(renderer, "thumbnailOverlays"):
        style = deep_get(overlay, "thumbnailOverlayTimeStatusRenderer", "style")
        if style == LIVE_SENTINEL:
            return True
    return False


def parse_video_renderer(renderer: Any) -> Optional[NormalizedResult]:
    video_id = as_str(deep_get(renderer, "videoId"))
    if not video_id:
        return None

    title = first_text(renderer, ("title", "runs", "0", "text"), ("title", "simpleText"))
    channel = first_text(renderer, ("ownerText", "runs", "0", "text"), ("ownerText", "simpleText"))
    duration = first_text(renderer, ("lengthText", "simpleText"), ("lengthText", "runs", "0", "text"))
    channel_id = _browse_id(renderer, "ownerText")
    is_live = _is_live(renderer)

    if is_live:
        duration = ""

    return NormalizedResult(
        id=video_id,
        title=title,
        url=watch_url(video_id),
        thumbnail=pick_thumbnail(renderer, video_id),
        duration=duration,
        duration_sec=0 if is_live else parse_duration(duration),
        channel_name=channel,
        channel_id=channel_id,
        channel_url=channel_url(channel_id),
        is_live=is_live,
        is_short=False,
    )


def parse_short_renderer(renderer: Any) -> Optional[NormalizedResult]:
    video_id = as_str(deep_get(renderer, "videoId"))
    if not video_id:
        return None

    title = first_text(renderer, ("headline", "runs", "0", "text"), ("headline", "simpleText"))
    channel = first_text(
        renderer, ("shortBylineText", "runs", "0", "text"), ("shortBylineText", "simpleText")
    )
    channel_id = _browse_id(renderer, "shortBylineText")

    return NormalizedResult(
        id=video_id,
        title=title,
        url=shorts_url(video_id),
        thumbnail=pick_thumbnail(renderer, video_id),
        duration=SHORT_SENTINEL,
        duration_sec=0,
        channel_name=channel,
        channel_id=channel_id,
        channel_url=channel_url(channel_id),
        is_live=False,
        is_short=True,
    )


def parse_rich_item(rich: Any) -> Optional[NormalizedResult]:
    video = deep_get(rich, "content", "videoRenderer")
    if video is None:
        return None
    return parse_video_renderer(video)


def parse_shelf(shelf: Any, stats: Optional[WalkStats] = None) -> List[NormalizedResult]:
    results: List[NormalizedResult] = []
    for item in iter_list(shelf, "content", "verticalListRenderer", "items"):
        video = deep_get(item, "videoRenderer")
        if video is None:
            continue
        parsed = parse_video_renderer(video)
        if parsed:
            results.append(parsed)
        elif stats is not None:
            stats.drop("missing_id")
    return results


def parse_reel_shelf(shelf: Any, stats: Optional[WalkStats] = None) -> List[NormalizedResult]:
    results: List[NormalizedResult] = []
    for item in iter_list(shelf, "items"):
        reel = deep_get(item, "reelItemRenderer")
        if reel is None:
            continue
        parsed = parse_short_renderer(reel)
        if parsed:
            results.append(parsed)
        elif stats is not None:
            stats.drop("missing_id")
    return results
