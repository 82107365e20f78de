"""Tests for the match-day and club-catalog page parsers."""

from datetime import date, datetime, timezone

import pytest

from bettificator.core.config import Config
from bettificator.core.errors import ParseFailure
from bettificator.scrapers import ClubCatalogScraper, MatchDayScraper


class StubClient:
    """Serves canned payloads per endpoint."""

    def __init__(self, pages=None, error=None):
        self.pages = pages or {}
        self.error = error
        self.requested = []

    def fetch_data(self, endpoint, key=None):
        self.requested.append(endpoint)
        if self.error is not None:
            raise self.error
        return self.pages.get(endpoint, {})


def _ts(y, m, d, h=15):
    return int(datetime(y, m, d, h, tzinfo=timezone.utc).timestamp())


def _event(ev_id, ts):
    return {
        "id": ev_id,
        "startTimestamp": ts,
        "homeTeam": {"id": 1, "name": "Home"},
        "awayTeam": {"id": 2, "name": "Away"},
        "status": {"type": "finished"},
    }


class TestMatchDayScraper:
    def test_endpoint(self):
        assert MatchDayScraper(StubClient()).endpoint(date(2020, 1, 5)) == "scheduled-events/2020-01-05"

    def test_keeps_only_events_of_that_day(self):
        day = date(2020, 1, 5)
        client = StubClient({
            "scheduled-events/2020-01-05": {
                "events": [
                    _event(1, _ts(2020, 1, 5)),
                    _event(2, _ts(2020, 1, 4, 23)),
                    _event(3, _ts(2020, 1, 5, 0)),
                ]
            }
        })
        scraper = MatchDayScraper(client)
        records = scraper(day)

        assert sorted(r["source_event_id"] for r in records) == [1, 3]
        assert scraper.get_stats() == {"scraped": 2, "errors": 0}

    def test_empty_page(self):
        assert MatchDayScraper(StubClient())(date(1990, 1, 1)) == []

    def test_malformed_events(self):
        client = StubClient({"scheduled-events/2020-01-05": {"events": "nope"}})
        scraper = MatchDayScraper(client)
        with pytest.raises(ParseFailure, match="events"):
            scraper(date(2020, 1, 5))
        assert scraper.get_stats()["errors"] == 1

    def test_fetch_failure_propagates(self):
        scraper = MatchDayScraper(StubClient(error=ParseFailure(date(2020, 1, 5), "HTTP 500")))
        with pytest.raises(ParseFailure, match="HTTP 500"):
            scraper(date(2020, 1, 5))


class TestClubCatalogScraper:
    def _scraper(self, pages):
        return ClubCatalogScraper(StubClient(pages), Config(dry_run=True))

    def test_endpoint_uses_lowercase_key(self):
        assert self._scraper({}).endpoint("A") == "search/teams?q=a&page=0"

    def test_filters_to_catalog_page(self):
        scraper = self._scraper({
            "search/teams?q=a&page=0": {
                "results": [
                    {"type": "team", "entity": {"id": 42, "name": "Arsenal", "sport": {"slug": "football"}}},
                    {"type": "team", "entity": {"id": 9, "name": "Real Madrid", "sport": {"slug": "football"}}},
                    {"type": "team", "entity": {"id": 5, "name": "Anaheim Ducks", "sport": {"slug": "ice-hockey"}}},
                    {"type": "player", "entity": {"id": 7, "name": "Alisson"}},
                ]
            }
        })
        records = scraper("A")
        assert [r["name"] for r in records] == ["Arsenal"]
        assert records[0]["catalog_key"] == "A"

    def test_non_alphabetic_page(self):
        scraper = self._scraper({
            "search/teams?q=1&page=0": {
                "teams": [{"id": 3, "name": "1. FC Köln"}, {"id": 4, "name": "Bayern"}]
            }
        })
        assert [r["sofascore_id"] for r in scraper("1")] == [3]

    def test_accented_names_fold(self):
        scraper = self._scraper({
            "search/teams?q=e&page=0": [{"team": {"id": 11, "name": "Étoile du Sahel"}}]
        })
        assert [r["sofascore_id"] for r in scraper("E")] == [11]
