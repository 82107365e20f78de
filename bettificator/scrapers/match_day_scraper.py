from datetime import date
from typing import Any, Dict, List

from .base_scraper import BaseScraper
from ..core.errors import ParseFailure
from ..processors.match_processor import event_date, match_processor
from ..utils.logger import get_logger

logger = get_logger(__name__)


class MatchDayScraper(BaseScraper):
    """One calendar day of scheduled football events -> match records."""

    kind = "matches"

    def endpoint(self, day: date) -> str:
        return f"scheduled-events/{day.isoformat()}"

    def scrape(self, day: date) -> List[Dict[str, Any]]:
        data = self._fetch(self.endpoint(day), key=day)
        if data and not isinstance(data, (dict, list)):
            raise ParseFailure(day, f"unexpected payload type {type(data).__name__}")
        if isinstance(data, dict) and data and not isinstance(data.get("events", []), list):
            raise ParseFailure(day, "'events' is not a list")
        events = self._coerce_list(data, "events")
        # The source groups days by its own timezone; keep only events starting on `day` in UTC.
        same_day = [ev for ev in events if event_date(ev) == day]
        if len(same_day) != len(events):
            logger.debug(f"[{day}] dropped {len(events) - len(same_day)} events outside the UTC day")
        return match_processor.process(same_day)
