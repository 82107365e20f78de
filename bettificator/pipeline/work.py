from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Union

from ..core.errors import BettificatorError

PageKey = Union[date, str]
Record = Dict[str, Any]


@dataclass(frozen=True)
class UnitOfWork:
    """One calendar day (match path) or one catalog-page key (club path)."""

    key: PageKey

    @property
    def label(self) -> str:
        return self.key.isoformat() if isinstance(self.key, date) else str(self.key)


def units_of(keys: Iterable[PageKey]) -> List[UnitOfWork]:
    return [UnitOfWork(k) for k in keys]


@dataclass
class FetchResult:
    """Records parsed from one unit, or the failure that prevented it."""

    unit: UnitOfWork
    records: List[Record] = field(default_factory=list)
    error: Optional[BettificatorError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class Completion:
    """Signal a worker sends to the dispatcher: one unit done, or a fatal error."""

    unit: UnitOfWork
    worker: str
    records: int = 0
    persisted: bool = False
    error: Optional[BettificatorError] = None

    @property
    def fatal(self) -> bool:
        return self.error is not None


@dataclass
class RunOutcome:
    """Aggregate of one run: units issued and completed, records parsed,
    persistence calls made, and the first fatal error if any."""

    total: int = 0
    completed: int = 0
    records: int = 0
    persisted: int = 0
    error: Optional[BettificatorError] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.completed == self.total

    def raise_for_error(self) -> "RunOutcome":
        if self.error is not None:
            self.error.outcome = self
            raise self.error
        return self

    def as_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "completed": self.completed,
            "records": self.records,
            "persisted": self.persisted,
            "error": str(self.error) if self.error else None,
        }
