import json
import re
from typing import Any, Dict

from .errors import DecodeError, PayloadNotFound
from .settings import logger

INITIAL_DATA_RE = re.compile(r"var ytInitialData\s*=\s*(\{.*?\});\s*</script>", re.DOTALL)
PLAYER_RESPONSE_RE = re.compile(
    r"ytInitialPlayerResponse\s*=\s*(\{.*?\});\s*(?:</script>|var\s)", re.DOTALL
)


def _locate(pattern: re.Pattern, html: str, marker: str) -> str:
    match = pattern.search(html or "")
    if not match:
        logger.warning(f"{marker} not found in page ({len(html or '')} chars)")
        raise PayloadNotFound(marker)
    return match.group(1)


def locate_initial_data(html: str) -> str:
    """Return the ytInitialData object literal embedded in a results page."""
    return _locate(INITIAL_DATA_RE, html, "ytInitialData")


def locate_player_response(html: str) -> str:
    """Return the ytInitialPlayerResponse object literal embedded in a watch page."""
    return _locate(PLAYER_RESPONSE_RE, html, "ytInitialPlayerResponse")


def decode_payload(text: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.debug(f"Payload is not valid JSON: {str(e)}")
        raise DecodeError(f"Payload is not valid JSON: {e.msg} at position {e.pos}") from e

    if not isinstance(data, dict):
        raise DecodeError(f"Payload decoded to {type(data).__name__}, expected an object")

    return data
