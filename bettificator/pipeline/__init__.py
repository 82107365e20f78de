from .dates import parse_date, date_range, count_days
from .work import UnitOfWork, FetchResult, Completion, RunOutcome, units_of
from .workers import Worker, WorkerPool, fetch_unit, persist
from .dispatcher import Dispatcher
from .catalog import CatalogRetrieval, CatalogState, CATALOG_KEYS
from .orchestrator import retrieve_matches, retrieve_clubs, open_sink

__all__ = [
    "parse_date",
    "date_range",
    "count_days",
    "UnitOfWork",
    "FetchResult",
    "Completion",
    "RunOutcome",
    "units_of",
    "Worker",
    "WorkerPool",
    "fetch_unit",
    "persist",
    "Dispatcher",
    "CatalogRetrieval",
    "CatalogState",
    "CATALOG_KEYS",
    "retrieve_matches",
    "retrieve_clubs",
    "open_sink",
]
