"""SofaScore API client (requests, one session per worker thread)."""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Optional, Union

import requests

from .config import Config
from .errors import ParseFailure
from ..utils.logger import get_logger

logger = get_logger(__name__)

HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "en-US,en;q=0.9",
    "Referer": "https://www.sofascore.com/",
    "Origin": "https://www.sofascore.com",
}

# Endpoints that live at the API root instead of under sport/football/
_NO_SPORT_PREFIX = (
    "event/", "team/", "player/", "manager/", "unique-tournament", "tournament/",
    "category/", "search", "season/", "coach/",
)

_CHALLENGE_MARKERS = ("Attention Required", "cf-browser-verification")


class SofaClient:
    def __init__(self, config: Config, session_factory: Callable[[], requests.Session] = requests.Session):
        self.api_base = config.api_base.rstrip("/")
        self.timeout = config.request_timeout
        self._session_factory = session_factory
        self._local = threading.local()
        self._sessions: list[requests.Session] = []
        self._lock = threading.Lock()

    def _session(self) -> requests.Session:
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._session_factory()
            session.headers.update(HEADERS)
            self._local.session = session
            with self._lock:
                self._sessions.append(session)
        return session

    def build_api_url(self, endpoint: str) -> str:
        if endpoint.startswith('http://') or endpoint.startswith('https://'):
            return endpoint
        ep = endpoint.lstrip('/')
        if any(ep.startswith(p) for p in _NO_SPORT_PREFIX):
            return f"{self.api_base}/{ep}"
        return f"{self.api_base}/sport/football/{ep}"

    def fetch_data(self, endpoint: str, key: Optional[Any] = None) -> Union[Dict[str, Any], list]:
        """GET one API endpoint and return the decoded JSON payload.

        A 404 means the source has nothing for the page and yields ``{}``.
        Any other failure (network, HTTP status, Cloudflare challenge,
        non-JSON body) raises ParseFailure tagged with ``key``.
        """
        key = endpoint if key is None else key
        url = self.build_api_url(endpoint)
        logger.debug(f"[fetch] {url}")
        try:
            resp = self._session().get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise ParseFailure(key, f"request to {url} failed: {e}") from e

        if resp.status_code == 404:
            logger.debug(f"[fetch] {url} -> 404, treating as empty page")
            return {}
        text = resp.text or ""
        if any(marker in text for marker in _CHALLENGE_MARKERS):
            raise ParseFailure(key, f"cloudflare challenge at {url}")
        if not resp.ok:
            raise ParseFailure(key, f"HTTP {resp.status_code} from {url}")
        try:
            return resp.json()
        except ValueError as e:
            raise ParseFailure(key, f"invalid JSON from {url}") from e

    def close(self):
        with self._lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
        self._local = threading.local()
