"""Shared fixtures: an in-memory stand-in for the Supabase table API."""
import os
import sys
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'backend'))


class FakeQuery:
    """Chainable query over one in-memory table, mimicking supabase-py's builder."""

    def __init__(self, db, name):
        self.db = db
        self.name = name
        self._filters = []
        self._orders = []
        self._limit = None
        self._insert = None

    def select(self, columns):
        return self

    def eq(self, column, value):
        self._filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self._orders.append((column, desc))
        return self

    def limit(self, n):
        self._limit = n
        return self

    def insert(self, row):
        self._insert = dict(row)
        return self

    def execute(self):
        if self.db.fail:
            raise RuntimeError("connection refused")
        rows = self.db.tables.setdefault(self.name, [])
        if self._insert is not None:
            self.db.clock += 1
            row = dict(self._insert)
            row.setdefault("id", self.db.clock)
            row.setdefault("created_at", (self.db.epoch + timedelta(seconds=self.db.clock)).isoformat())
            rows.append(row)
            return SimpleNamespace(data=[row])

        data = [r for r in rows if all(r.get(c) == v for c, v in self._filters)]
        # Stable sorts applied last key first give a multi-column ORDER BY
        for column, desc in reversed(self._orders):
            data = sorted(data, key=lambda r: r[column], reverse=desc)
        if self._limit is not None:
            data = data[:self._limit]
        return SimpleNamespace(data=data)


class FakeSupabase:
    """Minimal Supabase client: ``client.table(name)`` returns a FakeQuery."""

    def __init__(self):
        self.tables = {}
        self.fail = False
        self.clock = 0
        self.epoch = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def table(self, name):
        return FakeQuery(self, name)


@pytest.fixture
def fake_supabase():
    return FakeSupabase()
