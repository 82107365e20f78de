# bettificator/scrapers/base_scraper.py
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

from ..core.client import SofaClient
from ..core.errors import ParseFailure
from ..utils.logger import get_logger

logger = get_logger(__name__)


class BaseScraper(ABC):
    """Base class for page parsers: fetch one page key, return records.

    Instances are shared by all worker threads, so subclasses keep per-call
    state local.
    """

    kind = "base"

    def __init__(self, client: SofaClient):
        self.client = client
        self.scraped_count = 0
        self.errors_count = 0
        self._stats_lock = threading.Lock()

    @abstractmethod
    def scrape(self, key: Any) -> List[Dict[str, Any]]:
        """Fetch and parse one page; raise ParseFailure when that is impossible."""
        raise NotImplementedError

    def __call__(self, key: Any) -> List[Dict[str, Any]]:
        try:
            records = self.scrape(key)
        except ParseFailure as e:
            with self._stats_lock:
                self.errors_count += 1
            logger.error(f"{self.kind} scraper error: {e}")
            raise
        with self._stats_lock:
            self.scraped_count += len(records)
        return records

    def get_stats(self) -> Dict[str, int]:
        return {"scraped": self.scraped_count, "errors": self.errors_count}

    def _fetch(self, path: str, key: Any) -> Union[Dict[str, Any], List[Any]]:
        if not self.client:
            raise ParseFailure(key, "client is not initialized on this scraper")
        return self.client.fetch_data(path, key=key)

    @staticmethod
    def _coerce_list(payload: Optional[Union[Dict[str, Any], List[Any]]], *keys: str) -> List[Dict[str, Any]]:
        """Return the list of dicts under the first matching key, or the payload itself if it is a list."""
        if not payload:
            return []
        if isinstance(payload, list):
            return [x for x in payload if isinstance(x, dict)]
        if isinstance(payload, dict):
            for key in keys:
                val = payload.get(key)
                if isinstance(val, list):
                    return [x for x in val if isinstance(x, dict)]
        return []
