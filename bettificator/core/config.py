# bettificator/core/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

from .errors import ConfigurationError

# Load environment variables
BASE_DIR = Path(__file__).resolve().parent.parent.parent
load_dotenv(dotenv_path=BASE_DIR / ".env.local")

# 🔧 STATUS MAPPING (raw SofaScore status type -> stored status)
STATUS_MAPPING = {
    # Live statuses
    'inprogress': 'live',
    'live': 'live',

    # Half-time
    'halftime': 'ht',
    'ht': 'ht',

    # Finished
    'finished': 'finished',
    'ended': 'finished',
    'ft': 'ft',
    'fulltime': 'ft',
    'afterextratime': 'finished',
    'afterpenalties': 'finished',

    # Upcoming/Scheduled
    'notstarted': 'upcoming',
    'upcoming': 'upcoming',
    'scheduled': 'upcoming',

    # Cancelled/Postponed
    'cancelled': 'canceled',
    'canceled': 'canceled',
    'postponed': 'postponed',
    'delayed': 'postponed',

    # Abandoned/Suspended
    'abandoned': 'abandoned',
    'suspended': 'suspended',
    'interrupted': 'suspended',

    # Default fallback
    'unknown': 'upcoming'
}

DEFAULT_CONCURRENCY = 8

_TRUE = {"1", "true", "yes", "on"}


def _first(env: Mapping[str, str], *names: str, default: Optional[str] = None) -> Optional[str]:
    for name in names:
        val = env.get(name)
        if val not in (None, ""):
            return val
    return default


def _as_int(name: str, raw: Any) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def _as_float(name: str, raw: Any) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Config:
    """Centralised settings for one retrieve run.

    Resolved once at startup from the environment (and `.env.local`), then
    passed explicitly to the dispatcher, the catalog walk and the database
    sink. Never mutated; CLI flags produce a modified copy via `with_overrides`.
    """

    # 🔧 DATABASE SETTINGS
    db_url: Optional[str] = None
    db_host: str = "localhost"
    db_port: int = 54321
    db_user: str = "admin"
    db_password: str = ""
    db_name: str = "public"
    table_name: str = "matches"
    club_table_name: str = "clubs"

    # 🔧 RUN SETTINGS
    concurrency: int = DEFAULT_CONCURRENCY
    dry_run: bool = False

    # 🔧 SOURCE SETTINGS
    request_timeout: float = 30.0
    api_base: str = "https://www.sofascore.com/api/v1"
    club_catalog_endpoint: str = "search/teams?q={key}&page=0"

    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None, **overrides: Any) -> "Config":
        """Build a config from environment variables, applying `overrides` last."""
        env = os.environ if env is None else env
        values: dict[str, Any] = {
            "db_url": _first(env, "DB_URL", "SUPABASE_URL"),
            "db_host": _first(env, "DB_HOST", default=cls.db_host),
            "db_port": _as_int("DB_PORT", _first(env, "DB_PORT", default=str(cls.db_port))),
            "db_user": _first(env, "DB_USER", default=cls.db_user),
            "db_password": _first(env, "DB_PASS", "SUPABASE_SERVICE_KEY", default=""),
            "db_name": _first(env, "DB_NAME", default=cls.db_name),
            "table_name": _first(env, "DB_TABLE", default=cls.table_name),
            "club_table_name": _first(env, "DB_CLUB_TABLE", default=cls.club_table_name),
            "concurrency": _as_int(
                "RETRIEVE_CONCURRENCY", _first(env, "RETRIEVE_CONCURRENCY", default=str(cls.concurrency))
            ),
            "dry_run": str(_first(env, "DRY_RUN", default="false")).strip().lower() in _TRUE,
            "request_timeout": _as_float(
                "REQUEST_TIMEOUT", _first(env, "REQUEST_TIMEOUT", default=str(cls.request_timeout))
            ),
            "api_base": _first(env, "SOFASCORE_API_BASE", default=cls.api_base),
            "club_catalog_endpoint": _first(env, "CLUB_CATALOG_ENDPOINT", default=cls.club_catalog_endpoint),
            "log_level": str(_first(env, "LOG_LEVEL", default=cls.log_level)).upper(),
        }
        return cls(**values).with_overrides(**overrides)

    def with_overrides(self, **overrides: Any) -> "Config":
        """Return a copy with the non-None overrides applied."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self

    @property
    def endpoint(self) -> str:
        """Database API endpoint (explicit URL wins over host/port)."""
        if self.db_url:
            return self.db_url.rstrip("/")
        return f"http://{self.db_host}:{self.db_port}"

    def validate(self) -> "Config":
        """Raise one ConfigurationError listing every problem."""
        errors = []

        if isinstance(self.concurrency, bool) or not isinstance(self.concurrency, int) or self.concurrency < 1:
            errors.append(f"concurrency must be a positive integer, got {self.concurrency!r}")

        if not self.request_timeout or self.request_timeout <= 0:
            errors.append(f"REQUEST_TIMEOUT must be positive, got {self.request_timeout!r}")

        parsed = urlparse(self.endpoint)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            errors.append(f"database endpoint is not an http(s) URL: {self.endpoint!r}")

        if not self.db_name:
            errors.append("DB_NAME not set")

        if not self.table_name:
            errors.append("DB_TABLE not set")

        if not self.club_table_name:
            errors.append("DB_CLUB_TABLE not set")

        if "{key}" not in self.club_catalog_endpoint:
            errors.append("CLUB_CATALOG_ENDPOINT must contain a {key} placeholder")

        if not self.dry_run and not self.db_password:
            errors.append("DB_PASS (or SUPABASE_SERVICE_KEY) not set")

        if errors:
            raise ConfigurationError(f"Configuration errors: {', '.join(errors)}")

        return self
