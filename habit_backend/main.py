from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from postgrest.exceptions import APIError

from habit_backend import guard
from habit_backend.auth import (
    clear_session_cookies,
    get_backend_client,
    read_session_cookies,
    response_sets_session,
    restore_session,
    write_session_cookies,
)
from habit_backend.client import ClientFactory, close_backend_client, default_client_factory
from habit_backend.errors import AuthenticationRequiredError, BackendNotConfiguredError, RecordNotFoundError
from habit_backend.routes import entries, habits, pages, session

logger = logging.getLogger("habit_backend")


def create_app(client_factory: ClientFactory | None = None) -> FastAPI:
    logging.basicConfig(
        level=os.getenv("BACKEND_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    app = FastAPI(title="Habit Tracker API", version="0.1.0")
    app.state.client_factory = client_factory or default_client_factory()

    app.include_router(pages.router)
    app.include_router(session.router)
    app.include_router(habits.router)
    app.include_router(entries.router)

    @app.middleware("http")
    async def _session_guard(request: Request, call_next):
        tokens = read_session_cookies(request)
        live_session = None
        if tokens:
            try:
                client = await get_backend_client(request)
            except BackendNotConfiguredError:
                logger.warning("Session cookies present but the backend is not configured.")
            else:
                live_session = await restore_session(client, *tokens)
        request.state.session = live_session

        target = guard.resolve_redirect(request.url.path, live_session is not None)
        try:
            if target:
                response = RedirectResponse(target, status_code=302)
            else:
                response = await call_next(request)
        finally:
            client = getattr(request.state, "backend_client", None)
            if client is not None:
                await close_backend_client(client)

        if tokens and not response_sets_session(response):
            if live_session is None:
                clear_session_cookies(response)
            elif live_session.access_token != tokens[0]:
                write_session_cookies(response, live_session)
        return response

    @app.exception_handler(AuthenticationRequiredError)
    async def _auth_required_handler(request: Request, exc: AuthenticationRequiredError):
        return JSONResponse(status_code=401, content={"detail": str(exc)})

    @app.exception_handler(RecordNotFoundError)
    async def _not_found_handler(request: Request, exc: RecordNotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(BackendNotConfiguredError)
    async def _not_configured_handler(request: Request, exc: BackendNotConfiguredError):
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    @app.exception_handler(APIError)
    async def _backend_error_handler(request: Request, exc: APIError):
        return JSONResponse(
            status_code=502,
            content={"detail": exc.message or "Backend error", "code": exc.code},
        )

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        return JSONResponse(status_code=500, content={"detail": "Internal error"})

    @app.get("/health")
    async def health():
        return {"ok": True}

    return app


app = create_app()
