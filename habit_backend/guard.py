from __future__ import annotations

HOME_PATH = "/"
DASHBOARD_PATH = "/dashboard"
LOGIN_PATH = "/login"
REGISTER_PATH = "/register"

PROTECTED_PREFIXES = (DASHBOARD_PATH,)
AUTH_PREFIXES = (LOGIN_PATH, REGISTER_PATH)

PAGE_PATHS = (HOME_PATH, DASHBOARD_PATH, LOGIN_PATH, REGISTER_PATH)


def is_protected(path: str) -> bool:
    return path == HOME_PATH or path.startswith(PROTECTED_PREFIXES)


def is_auth_page(path: str) -> bool:
    return path.startswith(AUTH_PREFIXES)


def resolve_redirect(path: str, has_session: bool) -> str | None:
    if not has_session and is_protected(path):
        return LOGIN_PATH
    if has_session and is_auth_page(path):
        return DASHBOARD_PATH
    return None
