from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum

from habit_backend.errors import AuthenticationRequiredError, RecordNotFoundError, is_no_rows_error

logger = logging.getLogger(__name__)

HABITS_TABLE = "habits"
ENTRIES_TABLE = "habit_entries"


def _normalize_value(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


def _clean_payload(payload: dict) -> dict:
    return {key: _normalize_value(value) for key, value in dict(payload or {}).items()}


def _first_row(response, table: str, record_id: str) -> dict:
    rows = response.data or []
    if not rows:
        raise RecordNotFoundError(table, record_id)
    return rows[0]


async def list_habits(client, habit_type=None) -> list[dict]:
    query = client.table(HABITS_TABLE).select("*")
    if habit_type is not None:
        query = query.eq("type", _normalize_value(habit_type))
    try:
        response = await query.order("created_at", desc=True).execute()
    except Exception as exc:
        label = f"{_normalize_value(habit_type)} habits" if habit_type is not None else "habits"
        logger.error("Error fetching %s: %s", label, exc)
        raise
    return list(response.data or [])


async def list_habits_by_type(client, habit_type) -> list[dict]:
    return await list_habits(client, habit_type)


async def get_habit(client, habit_id: str) -> dict | None:
    try:
        response = await client.table(HABITS_TABLE).select("*").eq("id", habit_id).single().execute()
    except Exception as exc:
        if is_no_rows_error(exc):
            return None
        logger.error("Error fetching habit %s: %s", habit_id, exc)
        raise
    return response.data


async def create_habit(client, habit_data: dict) -> dict:
    user_response = await client.auth.get_user()
    user = getattr(user_response, "user", None)
    if user is None:
        raise AuthenticationRequiredError("User must be authenticated to create a habit")

    payload = _clean_payload(habit_data)
    if payload.get("type") != "unit":
        payload["target_value"] = None
    payload["user_id"] = user.id
    try:
        response = await client.table(HABITS_TABLE).insert(payload).execute()
    except Exception as exc:
        logger.error("Error creating habit: %s", exc)
        raise
    return _first_row(response, HABITS_TABLE, "<new>")


async def update_habit(client, habit_id: str, patch: dict) -> dict:
    payload = _clean_payload(patch)
    payload["updated_at"] = datetime.now(timezone.utc).isoformat()
    try:
        response = await client.table(HABITS_TABLE).update(payload).eq("id", habit_id).execute()
    except Exception as exc:
        logger.error("Error updating habit %s: %s", habit_id, exc)
        raise
    return _first_row(response, HABITS_TABLE, habit_id)


async def delete_habit(client, habit_id: str) -> None:
    try:
        await client.table(HABITS_TABLE).delete().eq("id", habit_id).execute()
    except Exception as exc:
        logger.error("Error deleting habit %s: %s", habit_id, exc)
        raise


async def list_habit_entries(client, habit_id: str, start_date=None, end_date=None) -> list[dict]:
    query = client.table(ENTRIES_TABLE).select("*").eq("habit_id", habit_id)
    if start_date:
        query = query.gte("date", _normalize_value(start_date))
    if end_date:
        query = query.lte("date", _normalize_value(end_date))
    try:
        response = await query.order("date", desc=True).execute()
    except Exception as exc:
        logger.error("Error fetching entries for habit %s: %s", habit_id, exc)
        raise
    return list(response.data or [])


async def get_habit_entry(client, habit_id: str, day) -> dict | None:
    day_iso = _normalize_value(day)
    try:
        response = await (
            client.table(ENTRIES_TABLE)
            .select("*")
            .eq("habit_id", habit_id)
            .eq("date", day_iso)
            .single()
            .execute()
        )
    except Exception as exc:
        if is_no_rows_error(exc):
            return None
        logger.error("Error fetching entry for habit %s on %s: %s", habit_id, day_iso, exc)
        raise
    return response.data


async def create_habit_entry(client, entry_data: dict) -> dict:
    try:
        response = await client.table(ENTRIES_TABLE).insert(_clean_payload(entry_data)).execute()
    except Exception as exc:
        logger.error("Error creating habit entry: %s", exc)
        raise
    return _first_row(response, ENTRIES_TABLE, "<new>")


async def update_habit_entry(client, entry_id: str, patch: dict) -> dict:
    try:
        response = await client.table(ENTRIES_TABLE).update(_clean_payload(patch)).eq("id", entry_id).execute()
    except Exception as exc:
        logger.error("Error updating habit entry %s: %s", entry_id, exc)
        raise
    return _first_row(response, ENTRIES_TABLE, entry_id)


async def delete_habit_entry(client, entry_id: str) -> None:
    try:
        await client.table(ENTRIES_TABLE).delete().eq("id", entry_id).execute()
    except Exception as exc:
        logger.error("Error deleting habit entry %s: %s", entry_id, exc)
        raise
