from datetime import date

from habit_dashboard.data import api_client
from habit_dashboard.data.api_client import ApiError


def _iso(value):
    if isinstance(value, date):
        return value.isoformat()
    return value


def _get_or_none(path, params=None):
    try:
        return api_client.request("GET", path, params=params)
    except ApiError as exc:
        if exc.status_code == 404:
            return None
        raise


def api_enabled():
    return api_client.is_enabled()


def resolve_page(path):
    """Ask the service for a page; returns (redirect_path, payload)."""
    response = api_client.send("GET", path, allow_redirects=False)
    target = api_client.redirect_target(response)
    if target:
        return target, None
    if not response.ok:
        raise ApiError(response.status_code, response.reason, api_client.error_detail(response))
    return None, response.json()


def sign_in(email, password):
    return api_client.request("POST", "/v1/auth/login", json={"email": email, "password": password})


def sign_up(email, password):
    return api_client.request("POST", "/v1/auth/register", json={"email": email, "password": password})


def sign_out():
    return api_client.request("POST", "/v1/auth/logout")


def current_session():
    return api_client.request("GET", "/v1/auth/session")


def list_habits(habit_type=None):
    params = {"type": habit_type} if habit_type else None
    payload = api_client.request("GET", "/v1/habits", params=params)
    return payload.get("items", [])


def get_habit(habit_id):
    return _get_or_none(f"/v1/habits/{habit_id}")


def create_habit(habit_data):
    return api_client.request("POST", "/v1/habits", json=dict(habit_data))


def update_habit(habit_id, patch):
    return api_client.request("PATCH", f"/v1/habits/{habit_id}", json=dict(patch))


def delete_habit(habit_id):
    api_client.request("DELETE", f"/v1/habits/{habit_id}")


def list_habit_entries(habit_id, start_date=None, end_date=None):
    params = {}
    if start_date:
        params["start"] = _iso(start_date)
    if end_date:
        params["end"] = _iso(end_date)
    payload = api_client.request("GET", f"/v1/habits/{habit_id}/entries", params=params or None)
    return payload.get("items", [])


def get_habit_entry(habit_id, day):
    return _get_or_none(f"/v1/habits/{habit_id}/entries/{_iso(day)}")


def create_habit_entry(entry_data):
    payload = dict(entry_data)
    payload["date"] = _iso(payload.get("date"))
    return api_client.request("POST", "/v1/entries", json=payload)


def update_habit_entry(entry_id, patch):
    return api_client.request("PATCH", f"/v1/entries/{entry_id}", json=dict(patch))


def delete_habit_entry(entry_id):
    api_client.request("DELETE", f"/v1/entries/{entry_id}")
