from typing import Any, Dict, List

from .base_scraper import BaseScraper
from ..core.client import SofaClient
from ..core.config import Config
from ..processors.club_processor import catalog_key_for, club_processor
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ClubCatalogScraper(BaseScraper):
    """One catalog page (a letter, or '1' for non-alphabetic names) -> club records."""

    kind = "clubs"

    def __init__(self, client: SofaClient, config: Config):
        super().__init__(client)
        self.endpoint_template = config.club_catalog_endpoint

    def endpoint(self, key: str) -> str:
        return self.endpoint_template.format(key=key.lower())

    @staticmethod
    def _team_of(item: Dict[str, Any]) -> Dict[str, Any]:
        entity = item.get("entity")
        if isinstance(entity, dict):
            if item.get("type") not in (None, "team"):
                return {}
            return entity
        team = item.get("team")
        return team if isinstance(team, dict) else item

    @staticmethod
    def _is_football(team: Dict[str, Any]) -> bool:
        sport = team.get("sport")
        if isinstance(sport, dict):
            return (sport.get("slug") or sport.get("name") or "football").lower() == "football"
        return True

    def scrape(self, key: str) -> List[Dict[str, Any]]:
        data = self._fetch(self.endpoint(key), key=key)
        items = self._coerce_list(data, "results", "teams")
        teams = [self._team_of(it) for it in items]
        on_page = [
            t for t in teams
            if t and self._is_football(t) and catalog_key_for(t.get("name") or t.get("shortName") or "") == key
        ]
        records = club_processor.process(on_page)
        logger.info(f"[clubs] page {key}: {len(records)} clubs ({len(items)} results)")
        return records
