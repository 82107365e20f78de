from __future__ import annotations

import queue
import time
from datetime import date
from typing import Any, Iterable, Optional

from tqdm import tqdm

from ..core.config import Config
from ..core.errors import ConfigurationError
from ..utils.logger import get_logger
from .dates import date_range
from .work import Completion, RunOutcome, UnitOfWork, units_of
from .workers import Parser, Sink, WorkerPool

logger = get_logger(__name__)


class Dispatcher:
    """Feeds every unit of a run to a fixed worker pool and waits for one
    completion per unit, stopping at the first fatal one.

    Completions arrive in whatever order the workers finish; only their
    count is awaited.
    """

    def __init__(
        self,
        config: Config,
        parse: Parser,
        sink: Optional[Sink] = None,
        table: Optional[str] = None,
        show_progress: bool = False,
    ):
        if not config.dry_run and sink is None:
            raise ConfigurationError("a persistence sink is required unless running with --dry-run")
        self.config = config
        self.parse = parse
        self.sink = sink
        self.table = table or config.table_name
        self.show_progress = show_progress

    def run(self, start: date, end: date) -> RunOutcome:
        """Process every day from start to end inclusive."""
        if start > end:
            logger.warning(f"[dispatcher] start {start} is after end {end}: nothing to retrieve")
        return self.dispatch(units_of(date_range(start, end)))

    def dispatch(self, units: Iterable[UnitOfWork]) -> RunOutcome:
        units = list(units)
        total = len(units)
        outcome = RunOutcome(total=total)

        jobs: "queue.Queue[Any]" = queue.Queue(maxsize=total + self.config.concurrency)
        completions: "queue.Queue[Completion]" = queue.Queue(maxsize=total)
        pool = WorkerPool(
            self.config.concurrency,
            jobs,
            completions,
            self.parse,
            self.sink,
            self.config.db_name,
            self.table,
            dry_run=self.config.dry_run,
        )

        mode = "dry run" if self.config.dry_run else f"into {self.config.db_name}.{self.table}"
        logger.info(f"[dispatcher] {total} units, {len(pool)} workers ({mode})")
        t0 = time.time()

        pool.start()
        try:
            for unit in units:
                jobs.put(unit)
            pool.close()

            with tqdm(total=total, desc="Days", unit="day", disable=not self.show_progress) as bar:
                while outcome.completed < total:
                    completion = completions.get()
                    if completion.fatal:
                        outcome.error = completion.error
                        logger.error(
                            f"[dispatcher] fatal error from {completion.worker} on {completion.unit.label}, "
                            f"aborting after {outcome.completed}/{total}: {completion.error}"
                        )
                        pool.stop()
                        break
                    outcome.completed += 1
                    outcome.records += completion.records
                    outcome.persisted += int(completion.persisted)
                    bar.update(1)
        except BaseException:
            pool.stop()
            pool.close()
            raise
        finally:
            pool.join()

        if outcome.error is None:
            logger.info(
                f"[dispatcher] ✅ {outcome.completed}/{total} units, {outcome.records} records "
                f"in {time.time() - t0:.1f}s"
            )
        return outcome
