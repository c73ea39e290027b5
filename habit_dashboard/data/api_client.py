import os
from typing import Any
from urllib.parse import urlparse

import requests
from requests.adapters import HTTPAdapter

ACCESS_COOKIE = "sb-access-token"
REFRESH_COOKIE = "sb-refresh-token"

_SECRET_GETTER = None
_TOKENS_GETTER = None
_TOKENS_SETTER = None


class ApiError(RuntimeError):
    def __init__(self, status_code, reason, detail):
        super().__init__(f"API error {status_code} {reason}: {detail}")
        self.status_code = status_code
        self.reason = reason
        self.detail = detail


def _build_session():
    session = requests.Session()
    # One request per call; errors go straight back to the caller.
    adapter = HTTPAdapter(max_retries=0, pool_connections=10, pool_maxsize=10)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


_SESSION = _build_session()


def configure(secret_getter, tokens_getter, tokens_setter):
    global _SECRET_GETTER, _TOKENS_GETTER, _TOKENS_SETTER
    _SECRET_GETTER = secret_getter
    _TOKENS_GETTER = tokens_getter
    _TOKENS_SETTER = tokens_setter


def _get_secret(path, default=None):
    if _SECRET_GETTER is None:
        return default
    return _SECRET_GETTER(path, default)


def api_base_url():
    return (
        _get_secret(("app", "API_BASE_URL"))
        or _get_secret(("API_BASE_URL",))
        or os.getenv("API_BASE_URL")
        or ""
    )


def is_enabled():
    return bool(api_base_url())


def _session_cookies():
    tokens = _TOKENS_GETTER() if _TOKENS_GETTER else None
    if not tokens:
        return {}
    access_token, refresh_token = tokens
    return {ACCESS_COOKIE: access_token, REFRESH_COOKIE: refresh_token}


def _sync_tokens(response):
    access_token = response.cookies.get(ACCESS_COOKIE)
    refresh_token = response.cookies.get(REFRESH_COOKIE)
    if access_token and refresh_token and _TOKENS_SETTER:
        _TOKENS_SETTER((access_token, refresh_token))


def error_detail(response):
    try:
        payload = response.json()
    except ValueError:
        return response.text
    if isinstance(payload, dict) and "detail" in payload:
        return payload["detail"]
    return payload


def send(method: str, path: str, params: dict | None = None, json: dict | None = None, timeout: int = 10, allow_redirects: bool = True):
    base = api_base_url().rstrip("/")
    if not base:
        raise RuntimeError("API_BASE_URL not configured")
    url = f"{base}{path}"
    response = _SESSION.request(
        method,
        url,
        params=params,
        json=json,
        cookies=_session_cookies(),
        timeout=timeout,
        allow_redirects=allow_redirects,
    )
    _sync_tokens(response)
    if response.status_code == 401 and _TOKENS_SETTER:
        _TOKENS_SETTER(None)
    return response


def request(method: str, path: str, params: dict | None = None, json: dict | None = None, timeout: int = 10) -> Any:
    response = send(method, path, params=params, json=json, timeout=timeout)
    if not response.ok:
        raise ApiError(response.status_code, response.reason, error_detail(response))
    if response.status_code == 204:
        return None
    return response.json()


def redirect_target(response):
    if response.status_code not in (301, 302, 303, 307, 308):
        return None
    location = response.headers.get("location") or ""
    return urlparse(location).path or None
