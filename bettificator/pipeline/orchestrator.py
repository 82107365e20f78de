# pipeline wiring: default parser + sink for the two retrieve commands
from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from typing import Iterator, Optional

from ..core.client import SofaClient
from ..core.config import Config
from ..core.database import DatabaseClient
from ..scrapers import ClubCatalogScraper, MatchDayScraper
from ..utils.logger import get_logger
from .catalog import CatalogRetrieval
from .dispatcher import Dispatcher
from .work import RunOutcome
from .workers import Parser, Sink

logger = get_logger(__name__)


@contextmanager
def open_sink(config: Config, table: str) -> Iterator[Optional[DatabaseClient]]:
    """Database sink for one run (None under dry-run), health-checked before use."""
    if config.dry_run:
        yield None
        return
    with DatabaseClient(config) as db:
        db.health_check(config.db_name, table)
        yield db


@contextmanager
def _sofa_client(config: Config) -> Iterator[SofaClient]:
    client = SofaClient(config)
    try:
        yield client
    finally:
        client.close()


def retrieve_matches(
    config: Config,
    start: date,
    end: date,
    sink: Optional[Sink] = None,
    parser: Optional[Parser] = None,
    show_progress: bool = False,
) -> RunOutcome:
    """Fetch, parse and store every day from start to end; raises the first fatal error."""
    if parser is not None:
        outcome = Dispatcher(config, parser, sink, show_progress=show_progress).run(start, end)
        return outcome.raise_for_error()
    with _sofa_client(config) as client:
        scraper = MatchDayScraper(client)
        outcome = Dispatcher(config, scraper, sink, show_progress=show_progress).run(start, end)
        logger.info(f"[orchestrator] scraper stats: {scraper.get_stats()}")
    return outcome.raise_for_error()


def retrieve_clubs(
    config: Config,
    sink: Optional[Sink] = None,
    parser: Optional[Parser] = None,
) -> RunOutcome:
    """Walk the club catalog and store it in one insert; raises the first fatal error."""
    if parser is not None:
        return CatalogRetrieval(config, parser, sink).run().raise_for_error()
    with _sofa_client(config) as client:
        scraper = ClubCatalogScraper(client, config)
        outcome = CatalogRetrieval(config, scraper, sink).run()
        logger.info(f"[orchestrator] scraper stats: {scraper.get_stats()}")
    return outcome.raise_for_error()
