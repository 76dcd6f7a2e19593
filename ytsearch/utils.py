import re
from typing import Optional
from urllib.parse import quote_plus, urlparse

from .settings import logger, YOUTUBE_BASE_URL, THUMBNAIL_BASE_URL

LIVE_SENTINEL = "LIVE"
SHORT_SENTINEL = "SHORT"

CLEAN_LINK_RE = re.compile(r"[^a-zA-Z0-9./?=&%_-]")
YOUTUBE_ID_PATTERNS = (
    re.compile(r"(?:v=|v/|embed/|youtu\.be/|shorts/|live/)([^&?#/]+)"),
    re.compile(r"^([a-zA-Z0-9_-]{11})$"),
)


def parse_duration(text: str) -> int:
    """
    Convert a display duration ("1:22", "1:02:03", "45") to seconds.

    Empty strings, the LIVE/SHORT sentinels and anything mentioning "live"
    are 0. Components that don't parse count as 0.
    """
    if not text or text in (LIVE_SENTINEL, SHORT_SENTINEL):
        return 0
    if LIVE_SENTINEL in text.upper():
        return 0

    def to_int(part: str) -> int:
        try:
            return int(part.strip())
        except ValueError:
            return 0

    parts = text.split(":")
    hours = minutes = seconds = 0
    if len(parts) == 3:
        hours, minutes, seconds = (to_int(p) for p in parts)
    elif len(parts) == 2:
        minutes, seconds = (to_int(p) for p in parts)
    elif len(parts) == 1:
        seconds = to_int(parts[0])

    return hours * 3600 + minutes * 60 + seconds


def seconds_to_hms(seconds: int) -> str:
    seconds = max(int(seconds or 0), 0)
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def watch_url(video_id: str) -> str:
    return f"{YOUTUBE_BASE_URL}/watch?v={video_id}"


def shorts_url(video_id: str) -> str:
    return f"{YOUTUBE_BASE_URL}/shorts/{video_id}"


def channel_url(channel_id: str) -> str:
    return f"{YOUTUBE_BASE_URL}/channel/{channel_id}" if channel_id else ""


def search_url(query: str) -> str:
    return f"{YOUTUBE_BASE_URL}/results?search_query={quote_plus(query)}"


def default_thumbnail(video_id: str) -> str:
    return f"{THUMBNAIL_BASE_URL}/vi/{video_id}/hqdefault.jpg"


def absolute_url(url: str) -> str:
    # Protocol-relative first, then site-relative
    if url.startswith("//"):
        return "https:" + url
    if url.startswith("/"):
        return YOUTUBE_BASE_URL + url
    return url


def is_youtube_url(text: str) -> bool:
    try:
        parsed = urlparse(text)
    except ValueError:
        return False
    if not parsed.scheme:
        return False
    host = parsed.netloc.lower()
    return "youtube.com" in host or "youtu.be" in host


def clean_youtube_link(link: str) -> str:
    return CLEAN_LINK_RE.sub("", link)


def extract_video_id(link: str) -> Optional[str]:
    logger.debug(f"Extracting video ID from: {link}")
    for pattern in YOUTUBE_ID_PATTERNS:
        m = pattern.search(link)
        if m:
            video_id = m.group(1)
            logger.debug(f"Successfully extracted video ID: {video_id}")
            return video_id

    logger.warning(f"Failed to extract video ID from: {link}")
    return None
