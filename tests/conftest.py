"""
Pytest configuration and shared fixtures.
"""

import itertools
import re
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from neurahub.core.dependencies import get_current_user_id
from neurahub.database.supabase_client import get_supabase
from neurahub.modules.assistant.client import AssistantClient, get_assistant_client
from neurahub.modules.teams.schemas import TeamCreate
from neurahub.modules.teams.service import TeamService


def like_to_regex(pattern):
    """Translate a LIKE pattern with backslash escapes into a regex."""
    parts = []
    chars = iter(pattern)
    for ch in chars:
        if ch == "\\":
            parts.append(re.escape(next(chars, "\\")))
        elif ch == "%":
            parts.append(".*")
        elif ch == "_":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return "".join(parts)


class FakeQuery:
    """Chainable stand-in for a PostgREST query on one table."""

    def __init__(self, db, name):
        self.db = db
        self.name = name
        self.action = None
        self.payload = None
        self.on_conflict = "id"
        self.filters = []
        self.sort = None
        self.max_rows = None
        self.skip = 0

    def select(self, *columns):
        self.action = self.action or "select"
        return self

    def insert(self, data):
        self.action, self.payload = "insert", data
        return self

    def update(self, data):
        self.action, self.payload = "update", data
        return self

    def upsert(self, data, on_conflict="id"):
        self.action, self.payload, self.on_conflict = "upsert", data, on_conflict
        return self

    def delete(self):
        self.action = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column, value):
        self.filters.append(lambda row: row.get(column) != value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def ilike(self, column, pattern):
        regex = re.compile("^" + like_to_regex(pattern) + "$", re.IGNORECASE | re.DOTALL)
        self.filters.append(lambda row: bool(regex.match(str(row.get(column) or ""))))
        return self

    def order(self, column, desc=False):
        self.sort = (column, desc)
        return self

    def limit(self, count):
        self.max_rows = count
        return self

    def offset(self, count):
        self.skip = count
        return self

    def _matches(self, row):
        return all(check(row) for check in self.filters)

    def execute(self):
        if self.db.fail_tables and self.name in self.db.fail_tables:
            raise RuntimeError(f"{self.name} is unavailable")
        rows = self.db.tables.setdefault(self.name, [])

        if self.action == "insert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            created = [self.db.new_row(self.name, item) for item in items]
            rows.extend(created)
            return SimpleNamespace(data=[dict(row) for row in created])

        if self.action == "upsert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            saved = []
            for item in items:
                current = next((r for r in rows if r.get(self.on_conflict) == item.get(self.on_conflict)), None)
                if current is not None:
                    current.update(item)
                else:
                    current = self.db.new_row(self.name, item)
                    rows.append(current)
                saved.append(dict(current))
            return SimpleNamespace(data=saved)

        matched = [row for row in rows if self._matches(row)]

        if self.action == "update":
            for row in matched:
                row.update(self.payload)
            return SimpleNamespace(data=[dict(row) for row in matched])

        if self.action == "delete":
            self.db.tables[self.name] = [row for row in rows if not self._matches(row)]
            return SimpleNamespace(data=[dict(row) for row in matched])

        if self.sort:
            column, desc = self.sort
            matched = sorted(matched, key=lambda row: (row.get(column) is None, row.get(column)), reverse=desc)
        matched = matched[self.skip:]
        if self.max_rows is not None:
            matched = matched[:self.max_rows]
        return SimpleNamespace(data=[dict(row) for row in matched])


class FakeSupabase:
    """In-memory tables behind the subset of the Supabase client the services use."""

    def __init__(self):
        self.tables = {}
        self.fail_tables = set()
        self._ids = itertools.count(1)
        self._clock = datetime(2026, 1, 1)

    def new_row(self, table, item):
        row = dict(item)
        n = next(self._ids)
        row.setdefault("id", f"{table}-{n}")
        row.setdefault("created_at", (self._clock + timedelta(seconds=n)).isoformat())
        return row

    def table(self, name):
        return FakeQuery(self, name)

    def rows(self, name):
        return self.tables.get(name, [])


def make_user(user_id, email, username=None):
    return {"id": user_id, "email": email, "user_metadata": {"username": username} if username else {}}


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def captain():
    return make_user("user-captain", "captain@example.com", "captain")


@pytest.fixture
def guest():
    return make_user("user-guest", "guest@example.com", "guest")


@pytest.fixture
def team(supabase, captain):
    """Team 24697 with the captain fixture as its captain."""
    return TeamService(supabase).create_team(
        TeamCreate(name="SANA Team", number="24697", city="Almaty", motto="Build it"),
        captain,
    )


@pytest.fixture
def current_user(captain):
    """Mutable holder for the identity the API client authenticates as."""
    return {"user": captain}


@pytest.fixture
def assistant():
    return AssistantClient(api_key="")


@pytest.fixture
def api(supabase, current_user, assistant):
    from neurahub.main import app

    app.dependency_overrides[get_supabase] = lambda: supabase
    app.dependency_overrides[get_current_user_id] = lambda: current_user["user"]
    app.dependency_overrides[get_assistant_client] = lambda: assistant
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
