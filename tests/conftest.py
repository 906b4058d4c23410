"""Shared fixtures: sample holder records and an in-memory psycopg stand-in."""

import json

import psycopg
import pytest

from kyc_wallet import storage
from tests.factories import make_holder


@pytest.fixture
def holder():
    return make_holder()


class FakeCursor:
    def __init__(self, db):
        self.db = db
        self._result = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params=()):
        if self.db.fail:
            raise psycopg.OperationalError("database unavailable")
        sql = " ".join(sql.split())
        self.db.statements.append(sql)
        if sql.startswith("INSERT INTO holders"):
            record_id, created_at, data = params
            self.db.holders.append((record_id, created_at, json.loads(data)))
        elif sql.startswith("SELECT id, created_at, data FROM holders"):
            self._result = sorted(self.db.holders, key=lambda row: row[1])
        elif sql.startswith("INSERT INTO drafts"):
            key, data = params
            self.db.drafts[key] = json.loads(data)
        elif sql.startswith("SELECT data FROM drafts"):
            key = params[0]
            self._result = [(self.db.drafts[key],)] if key in self.db.drafts else []
        elif sql.startswith("DELETE FROM drafts"):
            self.db.drafts.pop(params[0], None)

    def fetchall(self):
        return list(self._result)

    def fetchone(self):
        return self._result[0] if self._result else None


class FakeConnection:
    def __init__(self, db):
        self.db = db

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def cursor(self):
        return FakeCursor(self.db)

    def commit(self):
        self.db.commits += 1


class FakeDatabase:
    def __init__(self):
        self.holders = []
        self.drafts = {}
        self.statements = []
        self.commits = 0
        self.fail = False

    def connect(self, url):
        return FakeConnection(self)


@pytest.fixture
def fake_db(monkeypatch):
    """Route storage's psycopg.connect calls to an in-memory database."""
    db = FakeDatabase()
    monkeypatch.setattr(storage.psycopg, "connect", db.connect)
    return db
