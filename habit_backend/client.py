from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from supabase import AsyncClient, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from habit_backend.errors import BackendNotConfiguredError
from habit_backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], Awaitable[Any]]


async def create_backend_client(settings: Settings | None = None) -> AsyncClient:
    settings = settings or get_settings()
    if not settings.backend_configured:
        raise BackendNotConfiguredError("SUPABASE_URL and SUPABASE_ANON_KEY are not configured")
    # Sessions live in request cookies, never in the client.
    options = AsyncClientOptions(persist_session=False, auto_refresh_token=False)
    return await acreate_client(settings.supabase_url, settings.supabase_anon_key, options=options)


def default_client_factory(settings: Settings | None = None) -> ClientFactory:
    async def _factory():
        return await create_backend_client(settings)

    return _factory


async def close_backend_client(client) -> None:
    try:
        await client.postgrest.aclose()
        await client.auth.close()
    except Exception as exc:
        logger.warning("Failed to close backend client: %s", exc)
