from typing import Any, Dict, Optional, Protocol

import requests

from .errors import FetchError
from .settings import logger, DEBUG_LOGGING, USER_AGENT, REQUEST_TIMEOUT


class Fetcher(Protocol):
    def fetch(self, url: str) -> str:
        ...

    def post_json(self, url: str, payload: Dict[str, Any], params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        ...


class HttpFetcher:
    """requests-backed Fetcher. One attempt per call; callers own retries."""

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = REQUEST_TIMEOUT):
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": USER_AGENT,
            "Accept-Language": "en-US,en;q=0.9",
        })
        self.timeout = timeout

    def fetch(self, url: str) -> str:
        logger.debug(f"GET {url}")
        try:
            r = self.session.get(url, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Error fetching {url}: {str(e)}")
            raise FetchError(url, str(e)) from e

        if DEBUG_LOGGING:
            logger.debug(f"Fetched {len(r.text)} chars from {url} (status {r.status_code})")
        return r.text

    def post_json(self, url: str, payload: Dict[str, Any], params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        logger.debug(f"POST {url}")
        try:
            r = self.session.post(url, json=payload, params=params, timeout=self.timeout)
            r.raise_for_status()
            data = r.json()
        except requests.RequestException as e:
            logger.error(f"Error posting to {url}: {str(e)}")
            raise FetchError(url, str(e)) from e
        except ValueError as e:
            logger.error(f"Response from {url} is not JSON: {str(e)}")
            raise FetchError(url, "response is not JSON") from e

        if not isinstance(data, dict):
            raise FetchError(url, "response is not a JSON object")
        return data
