from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from habit_backend import repositories
from habit_backend.auth import get_backend_client, require_session
from habit_backend.schemas import HabitCreate, HabitType, HabitUpdate

router = APIRouter(dependencies=[Depends(require_session)])


@router.get("/v1/habits")
async def list_habits(habit_type: HabitType | None = Query(None, alias="type"), client=Depends(get_backend_client)):
    return {"items": await repositories.list_habits(client, habit_type)}


@router.post("/v1/habits", status_code=201)
async def create_habit(payload: HabitCreate, client=Depends(get_backend_client)):
    return await repositories.create_habit(client, payload.model_dump())


@router.get("/v1/habits/{habit_id}")
async def get_habit(habit_id: str, client=Depends(get_backend_client)):
    habit = await repositories.get_habit(client, habit_id)
    if habit is None:
        raise HTTPException(status_code=404, detail="Habit not found")
    return habit


@router.patch("/v1/habits/{habit_id}")
async def update_habit(habit_id: str, payload: HabitUpdate, client=Depends(get_backend_client)):
    patch = payload.model_dump(exclude_unset=True)
    if not patch:
        raise HTTPException(status_code=400, detail="No changes provided")
    if patch.get("target_value") is not None:
        habit = await repositories.get_habit(client, habit_id)
        if habit is None:
            raise HTTPException(status_code=404, detail="Habit not found")
        if habit.get("type") != HabitType.UNIT.value:
            patch["target_value"] = None
    return await repositories.update_habit(client, habit_id, patch)


@router.delete("/v1/habits/{habit_id}")
async def delete_habit(habit_id: str, client=Depends(get_backend_client)):
    await repositories.delete_habit(client, habit_id)
    return {"ok": True}


@router.get("/v1/habits/{habit_id}/entries")
async def list_habit_entries(
    habit_id: str,
    start: date | None = Query(None),
    end: date | None = Query(None),
    client=Depends(get_backend_client),
):
    if start and end and end < start:
        raise HTTPException(status_code=400, detail="End date must be after start date")
    items = await repositories.list_habit_entries(client, habit_id, start, end)
    return {"items": items}


@router.get("/v1/habits/{habit_id}/entries/{day}")
async def get_habit_entry(habit_id: str, day: date, client=Depends(get_backend_client)):
    entry = await repositories.get_habit_entry(client, habit_id, day)
    if entry is None:
        raise HTTPException(status_code=404, detail="Entry not found")
    return entry
