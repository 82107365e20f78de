# bettificator/core/database.py
from __future__ import annotations

import threading
import time
from typing import Any, Dict, List, Optional, Sequence

from supabase import create_client, Client

from .config import Config
from .errors import ConfigurationError, PersistFailure
from ..utils.logger import get_logger

logger = get_logger(__name__)


class DatabaseClient:
    """Persistence sink: one insert per call into ``<schema>.<table>``.

    The Supabase client is created lazily, so a dry run never opens a
    connection. Selecting a schema mutates the shared PostgREST session, so
    inserts are serialized here and callers may invoke ``insert`` from any
    number of worker threads.
    """

    def __init__(self, config: Config, client: Optional[Client] = None):
        self.config = config
        self.client: Optional[Client] = client
        self._lock = threading.Lock()

    def __enter__(self) -> "DatabaseClient":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def connect(self) -> Client:
        if self.client is None:
            logger.info(f"core.database | Initializing Supabase client at {self.config.endpoint} (user={self.config.db_user})…")
            try:
                self.client = create_client(self.config.endpoint, self.config.db_password)
            except Exception as e:
                raise ConfigurationError(f"cannot create database client for {self.config.endpoint}: {e}") from e
            logger.info("core.database | ✅ Supabase ready")
        return self.client

    def close(self) -> None:
        if self.client is not None:
            logger.info("core.database | Supabase client released")
        self.client = None

    # --- health/perf ---
    def health_check(self, database: str, table: str) -> bool:
        """Select one row from the target table; unreachable config raises ConfigurationError."""
        client = self.connect()
        t0 = time.time()
        try:
            with self._lock:
                client.schema(database).table(table).select("*").limit(1).execute()
        except Exception as e:
            raise ConfigurationError(f"database {database}.{table} at {self.config.endpoint} is unreachable: {e}") from e
        dt = time.time() - t0
        if dt > 2.0:
            logger.warning(f"core.database | ⚠️ Slow DB response ({dt:.2f}s)")
        else:
            logger.info(f"core.database | ✅ DB connection OK ({dt:.2f}s)")
        return True

    def insert(self, database: str, table: str, records: Sequence[Dict[str, Any]]) -> int:
        """Insert ``records`` in one request and return the number of stored rows."""
        rows: List[Dict[str, Any]] = list(records or [])
        if not rows:
            logger.debug(f"core.database | nothing to insert into {database}.{table}")
            return 0
        client = self.connect()
        try:
            with self._lock:
                resp = client.schema(database).table(table).insert(rows).execute()
        except Exception as e:
            logger.error(f"core.database | Insert into {database}.{table} failed: {e}")
            raise PersistFailure(f"{database}.{table}", str(e)) from e
        n = len(getattr(resp, "data", None) or [])
        logger.debug(f"core.database | inserted {n}/{len(rows)} rows into {database}.{table}")
        return n
