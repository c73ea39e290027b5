from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from habit_backend import guard, repositories
from habit_backend.auth import get_backend_client, require_session, user_payload

router = APIRouter()


@router.get(guard.HOME_PATH)
async def home():
    return RedirectResponse(guard.DASHBOARD_PATH, status_code=302)


@router.get(guard.DASHBOARD_PATH)
async def dashboard(session=Depends(require_session), client=Depends(get_backend_client)):
    habits = await repositories.list_habits(client)
    return {
        "page": "dashboard",
        "user": user_payload(session.user),
        "habits": habits,
    }


@router.get(guard.LOGIN_PATH)
async def login_page(request: Request):
    return {"page": "login", "authenticated": request.state.session is not None}


@router.get(guard.REGISTER_PATH)
async def register_page(request: Request):
    return {"page": "register", "authenticated": request.state.session is not None}
