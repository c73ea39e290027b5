import pytest

from habit_backend import db
from habit_backend.db_init import policy_statements, schema_statements


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("postgres://u:p@db.example.com:5432/app", "postgresql+asyncpg://u:p@db.example.com:5432/app"),
        ("postgresql://u:p@host/app?sslmode=require", "postgresql+asyncpg://u:p@host/app?ssl=require"),
        ("postgresql://u:p@host/app?sslmode=disable&channel_binding=require", "postgresql+asyncpg://u:p@host/app"),
        ("", ""),
    ],
)
def test_database_url_uses_asyncpg(raw, expected):
    assert db._normalize_database_url(raw) == expected


def test_engine_requires_database_url(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setattr(db, "_engine", None)

    with pytest.raises(RuntimeError):
        db.get_engine()


def test_entries_unique_per_habit_and_day():
    ddl = "\n".join(schema_statements())

    assert "UNIQUE (habit_id, date)" in ddl
    assert "ON DELETE CASCADE" in ddl
    assert "CHECK (type IN ('boolean', 'unit'))" in ddl


def test_policies_scope_rows_to_owner():
    policies = "\n".join(policy_statements())

    assert "auth.uid() = user_id" in policies


def test_habits_updated_at_maintained_by_trigger():
    ddl = "\n".join(schema_statements())

    assert "NEW.updated_at = now()" in ddl
    assert "BEFORE UPDATE ON habits" in ddl
