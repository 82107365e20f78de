"""Shared fakes: an in-memory page parser and persistence sink."""

import threading

import pytest

from bettificator.core.config import Config
from bettificator.core.errors import ParseFailure, PersistFailure


class FakeParser:
    """Returns one record per key; can fail on chosen keys."""

    def __init__(self, fail_on=(), records_per_key=1, error=None):
        self.fail_on = set(fail_on)
        self.records_per_key = records_per_key
        self.error = error
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, key):
        with self._lock:
            self.calls.append(key)
        if key in self.fail_on:
            if self.error is not None:
                raise self.error
            raise ParseFailure(key, "boom")
        return [{"id": f"{key}-{i}", "key": str(key)} for i in range(self.records_per_key)]


class FakeSink:
    """Records every insert call; can fail on a chosen call number (1-based)."""

    def __init__(self, fail_on_call=None, error=None):
        self.fail_on_call = fail_on_call
        self.error = error
        self.inserts = []
        self._lock = threading.Lock()

    def insert(self, database, table, records):
        with self._lock:
            self.inserts.append((database, table, list(records)))
            n = len(self.inserts)
        if self.fail_on_call is not None and n == self.fail_on_call:
            if self.error is not None:
                raise self.error
            raise PersistFailure(f"{database}.{table}", "write rejected")
        return len(records)


@pytest.fixture
def config():
    return Config(db_password="secret", concurrency=4)


@pytest.fixture
def dry_config():
    return Config(dry_run=True, concurrency=4)


@pytest.fixture
def parser():
    return FakeParser()


@pytest.fixture
def sink():
    return FakeSink()
