from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from supabase import AuthError

from habit_backend import auth
from habit_backend.auth import get_backend_client
from habit_backend.schemas import Credentials, SessionResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/v1/auth/register")
async def register(payload: Credentials, response: Response, client=Depends(get_backend_client)):
    try:
        result = await auth.sign_up(client, payload.email, payload.password)
    except AuthError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if result.session is not None:
        auth.write_session_cookies(response, result.session)
    return {
        "user": auth.user_payload(result.user),
        "authenticated": result.session is not None,
    }


@router.post("/v1/auth/login")
async def login(payload: Credentials, response: Response, client=Depends(get_backend_client)):
    try:
        result = await auth.sign_in(client, payload.email, payload.password)
    except AuthError as exc:
        logger.info("Sign in failed for %s: %s", payload.email, exc)
        raise HTTPException(status_code=401, detail="Invalid email or password") from exc
    auth.write_session_cookies(response, result.session)
    return {"user": auth.user_payload(result.user), "authenticated": True}


@router.post("/v1/auth/logout")
async def logout(request: Request, response: Response):
    if request.state.session is not None:
        client = await get_backend_client(request)
        try:
            await auth.sign_out(client)
        except AuthError as exc:
            logger.info("Sign out failed, clearing cookies anyway: %s", exc)
    auth.clear_session_cookies(response)
    return {"ok": True}


@router.get("/v1/auth/session", response_model=SessionResponse)
async def current_session(request: Request):
    session = request.state.session
    if session is None:
        return SessionResponse(authenticated=False)
    return SessionResponse(authenticated=True, user=auth.user_payload(session.user))
