from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from habit_backend import repositories
from habit_backend.auth import get_backend_client, require_session
from habit_backend.schemas import HabitEntryCreate, HabitEntryUpdate

router = APIRouter(dependencies=[Depends(require_session)])


@router.post("/v1/entries", status_code=201)
async def create_entry(payload: HabitEntryCreate, client=Depends(get_backend_client)):
    return await repositories.create_habit_entry(client, payload.model_dump(exclude_unset=True))


@router.patch("/v1/entries/{entry_id}")
async def update_entry(entry_id: str, payload: HabitEntryUpdate, client=Depends(get_backend_client)):
    patch = payload.model_dump(exclude_unset=True)
    if not patch:
        raise HTTPException(status_code=400, detail="No changes provided")
    return await repositories.update_habit_entry(client, entry_id, patch)


@router.delete("/v1/entries/{entry_id}")
async def delete_entry(entry_id: str, client=Depends(get_backend_client)):
    await repositories.delete_habit_entry(client, entry_id)
    return {"ok": True}
