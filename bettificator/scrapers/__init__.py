# bettificator/scrapers/__init__.py
"""
Scrapers module - page parsers turning one page key into records
"""

from .base_scraper import BaseScraper
from .match_day_scraper import MatchDayScraper
from .club_catalog_scraper import ClubCatalogScraper

__all__ = [
    "BaseScraper",
    "MatchDayScraper",
    "ClubCatalogScraper",
]
