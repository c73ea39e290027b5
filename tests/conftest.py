"""Shared fixtures: an in-memory stand-in for the Supabase client.

The fake implements the query-builder chain used by the data-access layer
(``table().select().eq().order().single().execute()``) plus the handful of
``auth`` calls the service makes, and records every call so tests can assert
on network traffic.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from types import SimpleNamespace
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError
from supabase import AuthInvalidCredentialsError, AuthSessionMissingError

from habit_backend import settings as backend_settings
from habit_backend.auth import ACCESS_COOKIE, REFRESH_COOKIE
from habit_backend.main import create_app

NO_ROWS_ERROR = {
    "code": "PGRST116",
    "message": "JSON object requested, multiple (or no) rows returned",
    "details": "The result contains 0 rows",
    "hint": None,
}


class FakeQuery:
    def __init__(self, backend, table, op, payload=None):
        self.backend = backend
        self.table = table
        self.op = op
        self.payload = payload
        self.filters = []
        self.order_by = None
        self.is_single = False

    def select(self, *columns):
        return self

    def eq(self, column, value):
        self.filters.append(("eq", column, value))
        return self

    def gte(self, column, value):
        self.filters.append(("gte", column, value))
        return self

    def lte(self, column, value):
        self.filters.append(("lte", column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def single(self):
        self.is_single = True
        return self

    def _matches(self, row):
        for op, column, value in self.filters:
            current = row.get(column)
            if op == "eq" and current != value:
                return False
            if op == "gte" and not current >= value:
                return False
            if op == "lte" and not current <= value:
                return False
        return True

    async def execute(self):
        self.backend.calls.append((self.table, self.op, list(self.filters)))
        if self.backend.next_error is not None:
            error, self.backend.next_error = self.backend.next_error, None
            raise error
        rows = self.backend.tables.setdefault(self.table, [])
        matched = [row for row in rows if self._matches(row)]

        if self.op == "select":
            if self.order_by:
                column, desc = self.order_by
                matched = sorted(matched, key=lambda row: row[column], reverse=desc)
            if self.is_single:
                if len(matched) != 1:
                    raise APIError(dict(NO_ROWS_ERROR))
                return SimpleNamespace(data=dict(matched[0]))
            return SimpleNamespace(data=[dict(row) for row in matched])

        if self.op == "insert":
            row = self.backend.new_row(self.table, self.payload)
            rows.append(row)
            return SimpleNamespace(data=[dict(row)])

        if self.op == "update":
            for row in matched:
                row.update(self.payload)
            return SimpleNamespace(data=[dict(row) for row in matched])

        if self.op == "delete":
            self.backend.tables[self.table] = [row for row in rows if row not in matched]
            return SimpleNamespace(data=[dict(row) for row in matched])

        raise AssertionError(f"unexpected op {self.op}")


class FakeTable:
    def __init__(self, backend, name):
        self.backend = backend
        self.name = name

    def select(self, *columns):
        return FakeQuery(self.backend, self.name, "select")

    def insert(self, payload):
        return FakeQuery(self.backend, self.name, "insert", dict(payload))

    def update(self, payload):
        return FakeQuery(self.backend, self.name, "update", dict(payload))

    def delete(self):
        return FakeQuery(self.backend, self.name, "delete")


class FakeAuth:
    def __init__(self, backend):
        self.backend = backend
        self.session = None
        self.closed = False

    async def get_user(self, jwt=None):
        self.backend.calls.append(("auth", "get_user", []))
        if self.session is None:
            return None
        return SimpleNamespace(user=self.session.user)

    async def set_session(self, access_token, refresh_token):
        self.backend.calls.append(("auth", "set_session", []))
        session = self.backend.sessions.get(access_token)
        if session is None:
            session = self.backend.refreshable.pop(refresh_token, None)
        if session is None:
            raise AuthSessionMissingError()
        self.session = session
        return SimpleNamespace(session=session, user=session.user)

    async def sign_in_with_password(self, credentials):
        user = self.backend.users.get(credentials["email"])
        if user is None or user["password"] != credentials["password"]:
            raise AuthInvalidCredentialsError("Invalid login credentials")
        self.session = self.backend.issue_session(user)
        return SimpleNamespace(session=self.session, user=self.session.user)

    async def sign_up(self, credentials):
        user = self.backend.add_user(credentials["email"], credentials["password"])
        self.session = self.backend.issue_session(user)
        return SimpleNamespace(session=self.session, user=self.session.user)

    async def sign_out(self):
        if self.session is not None:
            self.backend.sessions.pop(self.session.access_token, None)
        self.session = None

    async def close(self):
        self.closed = True


class FakePostgrest:
    def __init__(self):
        self.closed = False

    async def aclose(self):
        self.closed = True


class FakeClient:
    def __init__(self, backend):
        self.backend = backend
        self.auth = FakeAuth(backend)
        self.postgrest = FakePostgrest()

    @property
    def closed(self):
        return self.postgrest.closed and self.auth.closed

    def table(self, name):
        return FakeTable(self.backend, name)


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.calls = []
        self.users = {}
        self.sessions = {}
        self.refreshable = {}
        self.clients = []
        self.next_error = None
        self._clock = datetime(2024, 1, 1, 8, 0, 0)

    def next_timestamp(self):
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat() + "+00:00"

    def new_row(self, table, payload):
        row = {"id": uuid4().hex, **payload, "created_at": self.next_timestamp()}
        if table == "habits":
            row["updated_at"] = row["created_at"]
        if table == "habit_entries":
            for key in ("status", "value", "percentage"):
                row.setdefault(key, None)
        return row

    def add_user(self, email, password="secret123"):
        user = {"id": uuid4().hex, "email": email, "password": password}
        self.users[email] = user
        return user

    def issue_session(self, user):
        session = SimpleNamespace(
            access_token=f"access-{uuid4().hex}",
            refresh_token=f"refresh-{uuid4().hex}",
            user=SimpleNamespace(id=user["id"], email=user["email"]),
        )
        self.sessions[session.access_token] = session
        return session

    def expire(self, session):
        """Drop the access token but keep the refresh token usable once."""
        self.sessions.pop(session.access_token, None)
        refreshed = self.issue_session({"id": session.user.id, "email": session.user.email})
        self.refreshable[session.refresh_token] = refreshed
        return refreshed

    def client(self):
        fake = FakeClient(self)
        self.clients.append(fake)
        return fake

    def writes(self):
        return [call for call in self.calls if call[1] in {"insert", "update", "delete"}]


@pytest.fixture
def backend():
    return FakeSupabase()


@pytest.fixture
def client(backend):
    return backend.client()


@pytest.fixture
def user(backend):
    return backend.add_user("ana@example.com")


@pytest.fixture
def signed_in_client(backend, user):
    fake = backend.client()
    fake.auth.session = backend.issue_session(user)
    return fake


@pytest.fixture(autouse=True)
def _reset_backend_settings(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)
    backend_settings.reset_settings()
    yield
    backend_settings.reset_settings()


@pytest.fixture
def app(backend):
    async def factory():
        return backend.client()

    return create_app(client_factory=factory)


@pytest.fixture
def http(app):
    return TestClient(app, follow_redirects=False)


@pytest.fixture
def session_cookies(backend, user):
    session = backend.issue_session(user)
    return {ACCESS_COOKIE: session.access_token, REFRESH_COOKIE: session.refresh_token}


@pytest.fixture
def authed_http(http, session_cookies):
    for name, value in session_cookies.items():
        http.cookies.set(name, value)
    return http
