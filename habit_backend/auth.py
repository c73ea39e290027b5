from __future__ import annotations

import logging

from fastapi import HTTPException, Request, Response
from supabase import AuthError

from habit_backend.settings import get_settings

logger = logging.getLogger(__name__)

ACCESS_COOKIE = "sb-access-token"
REFRESH_COOKIE = "sb-refresh-token"


def read_session_cookies(request: Request) -> tuple[str, str] | None:
    access_token = request.cookies.get(ACCESS_COOKIE)
    refresh_token = request.cookies.get(REFRESH_COOKIE)
    if not access_token or not refresh_token:
        return None
    return access_token, refresh_token


def write_session_cookies(response: Response, session) -> None:
    settings = get_settings()
    for name, value in ((ACCESS_COOKIE, session.access_token), (REFRESH_COOKIE, session.refresh_token)):
        response.set_cookie(
            name,
            value,
            max_age=settings.session_cookie_max_age,
            httponly=True,
            secure=settings.session_cookie_secure,
            samesite="lax",
        )


def clear_session_cookies(response: Response) -> None:
    response.delete_cookie(ACCESS_COOKIE)
    response.delete_cookie(REFRESH_COOKIE)


def response_sets_session(response: Response) -> bool:
    return any(
        header.startswith(f"{ACCESS_COOKIE}=")
        for header in response.headers.getlist("set-cookie")
    )


async def get_backend_client(request: Request):
    client = getattr(request.state, "backend_client", None)
    if client is None:
        client = await request.app.state.client_factory()
        request.state.backend_client = client
    return client


async def restore_session(client, access_token: str, refresh_token: str):
    try:
        response = await client.auth.set_session(access_token, refresh_token)
    except AuthError as exc:
        logger.info("Discarding stale session: %s", exc)
        return None
    return getattr(response, "session", None)


def user_payload(user) -> dict | None:
    if user is None:
        return None
    return {"id": user.id, "email": getattr(user, "email", None)}


async def require_session(request: Request):
    session = getattr(request.state, "session", None)
    if session is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return session


async def sign_up(client, email: str, password: str):
    return await client.auth.sign_up({"email": email, "password": password})


async def sign_in(client, email: str, password: str):
    return await client.auth.sign_in_with_password({"email": email, "password": password})


async def sign_out(client) -> None:
    await client.auth.sign_out()


async def current_user(client):
    response = await client.auth.get_user()
    return getattr(response, "user", None)
