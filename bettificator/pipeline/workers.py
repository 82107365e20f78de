# bettificator/pipeline/workers.py
"""Fixed-size pool of worker threads draining a shared job queue.

Each worker loops: take the next UnitOfWork, run the page parser, hand the
records to the persistence sink (unless dry-run) and put one Completion on
the completion queue. A failure is reported as a fatal Completion and the
worker exits; it never raises out of its thread.
"""
from __future__ import annotations

import queue
import threading
from typing import Any, Callable, List, Optional, Protocol, Sequence

from ..core.errors import BettificatorError, ParseFailure, PersistFailure
from ..utils.logger import get_logger
from .work import Completion, FetchResult, PageKey, Record, UnitOfWork

logger = get_logger(__name__)

Parser = Callable[[PageKey], Sequence[Record]]

# Put once per worker after the last unit; a worker exits when it dequeues it.
CLOSED = object()


class Sink(Protocol):
    def insert(self, database: str, table: str, records: Sequence[Record]) -> int: ...


def fetch_unit(parse: Parser, unit: UnitOfWork) -> FetchResult:
    """Run the parser for one unit; any failure ends up in FetchResult.error."""
    try:
        records = list(parse(unit.key) or [])
    except BettificatorError as e:
        return FetchResult(unit, error=e)
    except Exception as e:
        return FetchResult(unit, error=_parse_failure(unit, e))
    return FetchResult(unit, records)


def _parse_failure(unit: UnitOfWork, exc: Exception) -> ParseFailure:
    failure = ParseFailure(unit.label, f"{type(exc).__name__}: {exc}")
    failure.__cause__ = exc
    return failure


def persist(sink: Sink, database: str, table: str, records: Sequence[Record]) -> int:
    """One insert call; non-typed sink errors become PersistFailure."""
    try:
        return int(sink.insert(database, table, records) or 0)
    except BettificatorError:
        raise
    except Exception as e:
        raise PersistFailure(f"{database}.{table}", f"{type(e).__name__}: {e}") from e


class Worker(threading.Thread):
    def __init__(
        self,
        name: str,
        jobs: "queue.Queue[Any]",
        completions: "queue.Queue[Completion]",
        parse: Parser,
        sink: Optional[Sink],
        database: str,
        table: str,
        dry_run: bool,
        stop_event: threading.Event,
    ):
        super().__init__(name=name, daemon=True)
        self.jobs = jobs
        self.completions = completions
        self.parse = parse
        self.sink = sink
        self.database = database
        self.table = table
        self.dry_run = dry_run
        self.stop_event = stop_event
        self.processed = 0

    def run(self) -> None:
        while not self.stop_event.is_set():
            unit = self.jobs.get()
            if unit is CLOSED or self.stop_event.is_set():
                break
            try:
                completion = self.process(unit)
            except Exception as e:
                logger.exception(f"[{self.name}] {unit.label}: unexpected error")
                completion = Completion(unit, self.name, error=_parse_failure(unit, e))
            if completion is None:
                break
            self.completions.put(completion)
            if completion.fatal:
                break
            self.processed += 1
        logger.debug(f"[{self.name}] exiting after {self.processed} units")

    def process(self, unit: UnitOfWork) -> Optional[Completion]:
        """Parse and persist one unit; None means it was abandoned after a stop."""
        result = fetch_unit(self.parse, unit)
        if not result.ok:
            logger.error(f"[{self.name}] {unit.label}: {result.error}")
            return Completion(unit, self.name, error=result.error)

        n = len(result.records)
        if self.dry_run:
            logger.info(f"[{self.name}] {unit.label}: {n} records (dry run, not inserted)")
            return Completion(unit, self.name, records=n)

        if self.stop_event.is_set():
            logger.info(f"[{self.name}] {unit.label}: run aborted, dropping {n} records")
            return None

        try:
            persist(self.sink, self.database, self.table, result.records)
        except BettificatorError as e:
            logger.error(f"[{self.name}] {unit.label}: {e}")
            return Completion(unit, self.name, records=n, error=e)
        logger.info(f"[{self.name}] {unit.label}: {n} records inserted into {self.table}")
        return Completion(unit, self.name, records=n, persisted=True)


class WorkerPool:
    """N workers bound to the same job and completion queues."""

    def __init__(
        self,
        size: int,
        jobs: "queue.Queue[Any]",
        completions: "queue.Queue[Completion]",
        parse: Parser,
        sink: Optional[Sink],
        database: str,
        table: str,
        dry_run: bool = False,
    ):
        if size < 1:
            raise ValueError(f"worker pool size must be >= 1, got {size}")
        self.jobs = jobs
        self.stop_event = threading.Event()
        self._closed = False
        self.workers: List[Worker] = [
            Worker(f"worker-{i + 1}", jobs, completions, parse, sink, database, table, dry_run, self.stop_event)
            for i in range(size)
        ]

    def __len__(self) -> int:
        return len(self.workers)

    def start(self) -> "WorkerPool":
        for w in self.workers:
            w.start()
        return self

    def close(self) -> None:
        """No more work: one CLOSED marker per worker. Idempotent."""
        if self._closed:
            return
        self._closed = True
        for _ in self.workers:
            self.jobs.put(CLOSED)

    def stop(self) -> None:
        self.stop_event.set()

    @property
    def stopped(self) -> bool:
        return self.stop_event.is_set()

    def join(self, timeout: Optional[float] = None) -> None:
        for w in self.workers:
            w.join(timeout)

    def alive(self) -> int:
        return sum(1 for w in self.workers if w.is_alive())
