from __future__ import annotations

import asyncio
import logging

from sqlalchemy import text as sql_text

from habit_backend.db import get_engine
from habit_backend.repositories import ENTRIES_TABLE, HABITS_TABLE
from habit_backend.schemas import HabitColor, HabitType

logger = logging.getLogger(__name__)


def _enum_check(column: str, enum_cls) -> str:
    values = ", ".join(f"'{member.value}'" for member in enum_cls)
    return f"CHECK ({column} IN ({values}))"


def schema_statements() -> list[str]:
    return [
        f"""
        CREATE TABLE IF NOT EXISTS {HABITS_TABLE} (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID NOT NULL REFERENCES auth.users (id) ON DELETE CASCADE,
            name TEXT NOT NULL CHECK (length(trim(name)) > 0),
            type TEXT NOT NULL {_enum_check("type", HabitType)},
            target_value NUMERIC CHECK (target_value IS NULL OR target_value >= 0),
            color TEXT NOT NULL DEFAULT 'blue' {_enum_check("color", HabitColor)},
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
        """,
        f"""
        CREATE TABLE IF NOT EXISTS {ENTRIES_TABLE} (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            habit_id UUID NOT NULL REFERENCES {HABITS_TABLE} (id) ON DELETE CASCADE,
            date DATE NOT NULL,
            status BOOLEAN,
            value NUMERIC,
            percentage NUMERIC,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            CONSTRAINT {ENTRIES_TABLE}_habit_date_key UNIQUE (habit_id, date)
        )
        """,
        """
        CREATE OR REPLACE FUNCTION set_updated_at() RETURNS trigger AS $$
        BEGIN
            NEW.updated_at = now();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
        """,
        f"DROP TRIGGER IF EXISTS {HABITS_TABLE}_set_updated_at ON {HABITS_TABLE}",
        f"""
        CREATE TRIGGER {HABITS_TABLE}_set_updated_at BEFORE UPDATE ON {HABITS_TABLE}
            FOR EACH ROW EXECUTE FUNCTION set_updated_at()
        """,
        f"CREATE INDEX IF NOT EXISTS idx_{HABITS_TABLE}_user_created ON {HABITS_TABLE} (user_id, created_at DESC)",
        f"CREATE INDEX IF NOT EXISTS idx_{ENTRIES_TABLE}_habit_date ON {ENTRIES_TABLE} (habit_id, date DESC)",
        f"ALTER TABLE {HABITS_TABLE} ENABLE ROW LEVEL SECURITY",
        f"ALTER TABLE {ENTRIES_TABLE} ENABLE ROW LEVEL SECURITY",
    ]


def policy_statements() -> list[str]:
    return [
        f"""
        CREATE POLICY {HABITS_TABLE}_owner ON {HABITS_TABLE}
            FOR ALL USING (auth.uid() = user_id) WITH CHECK (auth.uid() = user_id)
        """,
        f"""
        CREATE POLICY {ENTRIES_TABLE}_owner ON {ENTRIES_TABLE}
            FOR ALL USING (
                EXISTS (SELECT 1 FROM {HABITS_TABLE} h WHERE h.id = habit_id AND h.user_id = auth.uid())
            )
        """,
    ]


async def init_db():
    engine = get_engine()
    async with engine.begin() as conn:
        for statement in schema_statements():
            await conn.execute(sql_text(statement))

    async def ensure_policy(policy_sql: str) -> None:
        try:
            async with engine.begin() as conn:
                await conn.execute(sql_text(policy_sql))
        except Exception as exc:
            logger.info("Policy already present or not applicable: %s", exc)

    for statement in policy_statements():
        await ensure_policy(statement)
    await engine.dispose()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    asyncio.run(init_db())
    logger.info("Schema ready: %s, %s", HABITS_TABLE, ENTRIES_TABLE)


if __name__ == "__main__":
    main()
