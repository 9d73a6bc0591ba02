"""
Shared pytest fixtures for the settings API test suite.

Supabase is replaced by ``FakeSupabase``, an in-memory stand-in that supports
the small subset of the query builder the service layer uses
(select / eq / limit / upsert / execute).
"""

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from shapeguard import app as app_module
from shapeguard.services import settings_service


class FakeQuery:
    def __init__(self, rows):
        self._rows = rows
        self._filters = []
        self._limit = None
        self._upsert = None
        self._conflict = None

    def select(self, columns):
        return self

    def eq(self, column, value):
        self._filters.append((column, value))
        return self

    def limit(self, count):
        self._limit = count
        return self

    def upsert(self, row, on_conflict):
        self._upsert = row
        self._conflict = on_conflict
        return self

    def execute(self):
        if self._upsert is not None:
            for existing in self._rows:
                if existing.get(self._conflict) == self._upsert[self._conflict]:
                    existing.update(self._upsert)
                    return SimpleNamespace(data=[dict(existing)])
            self._rows.append(dict(self._upsert))
            return SimpleNamespace(data=[dict(self._upsert)])

        rows = [row for row in self._rows if all(row.get(c) == v for c, v in self._filters)]
        if self._limit is not None:
            rows = rows[: self._limit]
        return SimpleNamespace(data=[dict(row) for row in rows])


class FakeSupabase:
    def __init__(self):
        self.tables = {}

    def table(self, name):
        return FakeQuery(self.tables.setdefault(name, []))


@pytest.fixture
def fake_supabase(monkeypatch):
    fake = FakeSupabase()
    monkeypatch.setattr(settings_service, "get_client", lambda: fake)
    monkeypatch.setattr(app_module, "get_client", lambda: fake)
    return fake


@pytest.fixture
def client(fake_supabase):
    return TestClient(app_module.app)
