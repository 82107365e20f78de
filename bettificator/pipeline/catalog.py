from __future__ import annotations

import string
from enum import Enum
from typing import Dict, List, Optional, Sequence

from ..core.config import Config
from ..core.errors import BettificatorError, ConfigurationError
from ..processors.club_processor import NON_ALPHA_KEY
from ..utils.logger import get_logger
from .work import Record, RunOutcome, UnitOfWork
from .workers import Parser, Sink, fetch_unit, persist

logger = get_logger(__name__)

# A..Z plus one bucket for names that do not start with a letter
CATALOG_KEYS = tuple(string.ascii_uppercase) + (NON_ALPHA_KEY,)


class CatalogState(Enum):
    IDLE = "idle"
    WALKING = "walking"
    ACCUMULATED = "accumulated"
    PERSISTED = "persisted"
    SKIPPED = "skipped"
    ABORTED = "aborted"


TERMINAL_STATES = {CatalogState.PERSISTED, CatalogState.SKIPPED, CatalogState.ABORTED}


class CatalogRetrieval:
    """Sequential walk of the club catalog followed by a single insert.

    The key space is small, so there is no pool: one page after another,
    the first failure aborts the walk, and the accumulated clubs go to the
    sink in one call (none under dry-run).
    """

    def __init__(
        self,
        config: Config,
        parse: Parser,
        sink: Optional[Sink] = None,
        keys: Sequence[str] = CATALOG_KEYS,
    ):
        if not config.dry_run and sink is None:
            raise ConfigurationError("a persistence sink is required unless running with --dry-run")
        self.config = config
        self.parse = parse
        self.sink = sink
        self.keys = tuple(keys)
        self.state = CatalogState.IDLE
        self.key_index: Optional[int] = None
        self.records: List[Record] = []

    @property
    def done(self) -> bool:
        return self.state in TERMINAL_STATES

    def _abort(self, outcome: RunOutcome, error: BettificatorError) -> RunOutcome:
        self.state = CatalogState.ABORTED
        outcome.error = error
        logger.error(f"[catalog] aborted at key index {self.key_index}: {error}")
        return outcome

    def run(self) -> RunOutcome:
        if self.state is not CatalogState.IDLE:
            raise RuntimeError(f"catalog walk already ran (state={self.state.value})")

        outcome = RunOutcome(total=len(self.keys))
        by_id: Dict[str, Record] = {}
        self.state = CatalogState.WALKING

        for i, key in enumerate(self.keys):
            self.key_index = i
            result = fetch_unit(self.parse, UnitOfWork(key))
            if not result.ok:
                return self._abort(outcome, result.error)
            for rec in result.records:
                rid = rec.get("id")
                if rid is None:
                    self.records.append(rec)
                elif rid not in by_id:
                    by_id[rid] = rec
                    self.records.append(rec)
            outcome.completed += 1
            logger.debug(f"[catalog] {key}: {len(result.records)} clubs, {len(self.records)} so far")

        self.state = CatalogState.ACCUMULATED
        outcome.records = len(self.records)
        logger.info(f"[catalog] walked {outcome.completed} pages, {outcome.records} clubs")

        if self.config.dry_run:
            self.state = CatalogState.SKIPPED
            logger.info("[catalog] dry run, nothing inserted")
            return outcome

        try:
            persist(self.sink, self.config.db_name, self.config.club_table_name, self.records)
        except BettificatorError as e:
            return self._abort(outcome, e)
        self.state = CatalogState.PERSISTED
        outcome.persisted = 1
        logger.info(f"[catalog] ✅ inserted {len(self.records)} clubs into {self.config.db_name}.{self.config.club_table_name}")
        return outcome
