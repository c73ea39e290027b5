"""HTTP-level tests for the FastAPI service and its route guard."""

from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from habit_backend.auth import ACCESS_COOKIE
from habit_backend.main import create_app


def test_health(http):
    assert http.get("/health").json() == {"ok": True}


def test_unauthenticated_dashboard_redirects_to_login(http):
    response = http.get("/dashboard")

    assert response.status_code == 302
    assert response.headers["location"] == "/login"


def test_unauthenticated_home_redirects_to_login(http):
    response = http.get("/")

    assert response.status_code == 302
    assert response.headers["location"] == "/login"


def test_authenticated_login_redirects_to_dashboard(authed_http):
    for path in ["/login", "/register"]:
        response = authed_http.get(path)
        assert response.status_code == 302
        assert response.headers["location"] == "/dashboard"


def test_authenticated_home_goes_to_dashboard(authed_http):
    response = authed_http.get("/")

    assert response.status_code == 302
    assert response.headers["location"] == "/dashboard"


def test_login_page_served_without_session(http):
    response = http.get("/login")

    assert response.status_code == 200
    assert response.json() == {"page": "login", "authenticated": False}


def test_dashboard_payload_includes_user_and_habits(authed_http, user):
    authed_http.post("/v1/habits", json={"name": "Read"})

    payload = authed_http.get("/dashboard").json()

    assert payload["page"] == "dashboard"
    assert payload["user"]["email"] == user["email"]
    assert [habit["name"] for habit in payload["habits"]] == ["Read"]


def test_stale_session_cookie_is_treated_as_no_session(http):
    http.cookies.set(ACCESS_COOKIE, "expired")
    http.cookies.set("sb-refresh-token", "unknown")

    response = http.get("/dashboard")

    assert response.status_code == 302
    assert response.headers["location"] == "/login"
    assert any(ACCESS_COOKIE in header for header in response.headers.get_list("set-cookie"))


def test_expired_access_token_is_refreshed(backend, user, http):
    session = backend.issue_session(user)
    refreshed = backend.expire(session)
    http.cookies.set(ACCESS_COOKIE, session.access_token)
    http.cookies.set("sb-refresh-token", session.refresh_token)

    response = http.get("/dashboard")

    assert response.status_code == 200
    assert response.cookies.get(ACCESS_COOKIE) == refreshed.access_token


def test_api_requires_session(http):
    assert http.get("/v1/habits").status_code == 401
    assert http.post("/v1/habits", json={"name": "Read"}).status_code == 401
    assert http.post("/v1/entries", json={"habit_id": "x", "date": "2024-01-01"}).status_code == 401


def test_create_then_list_returns_new_habit_first(authed_http):
    authed_http.post("/v1/habits", json={"name": "Read", "type": "boolean", "color": "red"})
    created = authed_http.post(
        "/v1/habits",
        json={"name": "Drink water", "type": "unit", "target_value": 8, "color": "blue"},
    )

    items = authed_http.get("/v1/habits").json()["items"]

    assert created.status_code == 201
    first = items[0]
    assert first["id"] == created.json()["id"]
    assert first["name"] == "Drink water"
    assert first["type"] == "unit"
    assert first["target_value"] == 8
    assert first["color"] == "blue"


def test_create_habit_validates_payload(authed_http, backend):
    assert authed_http.post("/v1/habits", json={"name": "   "}).status_code == 422
    assert authed_http.post("/v1/habits", json={"name": "Read", "color": "black"}).status_code == 422
    assert authed_http.post("/v1/habits", json={"name": "Read", "type": "unit", "target_value": -1}).status_code == 422
    assert backend.writes() == []


def test_boolean_habit_target_is_dropped(authed_http):
    created = authed_http.post("/v1/habits", json={"name": "Stretch", "type": "boolean", "target_value": 4}).json()

    fetched = authed_http.get(f"/v1/habits/{created['id']}").json()

    assert fetched["target_value"] is None


def test_list_filter_by_type(authed_http):
    authed_http.post("/v1/habits", json={"name": "Read"})
    authed_http.post("/v1/habits", json={"name": "Water", "type": "unit", "target_value": 8})

    items = authed_http.get("/v1/habits", params={"type": "boolean"}).json()["items"]

    assert [item["name"] for item in items] == ["Read"]


def test_get_missing_habit_is_404(authed_http):
    assert authed_http.get("/v1/habits/missing").status_code == 404


def test_update_habit(authed_http):
    created = authed_http.post("/v1/habits", json={"name": "Water", "type": "unit", "target_value": 8}).json()

    response = authed_http.patch(f"/v1/habits/{created['id']}", json={"target_value": 10, "name": "Hydrate"})

    assert response.status_code == 200
    assert response.json()["target_value"] == 10
    assert response.json()["name"] == "Hydrate"


def test_update_boolean_habit_ignores_target(authed_http):
    created = authed_http.post("/v1/habits", json={"name": "Read"}).json()

    response = authed_http.patch(f"/v1/habits/{created['id']}", json={"target_value": 10})

    assert response.json()["target_value"] is None


def test_update_rejects_empty_patch_and_missing_habit(authed_http):
    assert authed_http.patch("/v1/habits/missing", json={}).status_code == 400
    assert authed_http.patch("/v1/habits/missing", json={"name": "x"}).status_code == 404


def test_delete_missing_habit_succeeds(authed_http):
    response = authed_http.delete("/v1/habits/missing")

    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_entry_lifecycle(authed_http):
    habit = authed_http.post("/v1/habits", json={"name": "Water", "type": "unit", "target_value": 8}).json()

    created = authed_http.post(
        "/v1/entries",
        json={"habit_id": habit["id"], "date": "2024-05-02", "value": 4, "percentage": 50},
    )
    authed_http.post("/v1/entries", json={"habit_id": habit["id"], "date": "2024-05-01", "value": 8, "percentage": 100})
    entry_id = created.json()["id"]

    listed = authed_http.get(f"/v1/habits/{habit['id']}/entries", params={"start": "2024-05-01", "end": "2024-05-02"})
    by_day = authed_http.get(f"/v1/habits/{habit['id']}/entries/2024-05-02")
    patched = authed_http.patch(f"/v1/entries/{entry_id}", json={"value": 6, "percentage": 75})
    deleted = authed_http.delete(f"/v1/entries/{entry_id}")

    assert created.status_code == 201
    assert [item["date"] for item in listed.json()["items"]] == ["2024-05-02", "2024-05-01"]
    assert by_day.json()["id"] == entry_id
    assert patched.json()["value"] == 6
    assert deleted.json() == {"ok": True}
    assert authed_http.get(f"/v1/habits/{habit['id']}/entries/2024-05-02").status_code == 404


def test_entries_range_must_be_ordered(authed_http):
    response = authed_http.get("/v1/habits/any/entries", params={"start": "2024-05-02", "end": "2024-05-01"})

    assert response.status_code == 400


def test_backend_errors_map_to_bad_gateway(authed_http, backend):
    backend.next_error = APIError({"code": "42501", "message": "permission denied"})

    response = authed_http.get("/v1/habits")

    assert response.status_code == 502
    assert response.json()["code"] == "42501"


def test_register_login_logout_flow(http, backend):
    registered = http.post("/v1/auth/register", json={"email": "New@Example.com", "password": "secret123"})
    assert registered.status_code == 200
    assert registered.json()["user"]["email"] == "new@example.com"
    assert registered.cookies.get(ACCESS_COOKIE)

    http.cookies.clear()
    bad = http.post("/v1/auth/login", json={"email": "new@example.com", "password": "wrong-password"})
    assert bad.status_code == 401

    login = http.post("/v1/auth/login", json={"email": "new@example.com", "password": "secret123"})
    assert login.status_code == 200
    access_token = login.cookies.get(ACCESS_COOKIE)
    assert access_token in backend.sessions

    http.cookies.clear()
    http.cookies.set(ACCESS_COOKIE, access_token)
    http.cookies.set("sb-refresh-token", login.cookies.get("sb-refresh-token"))
    assert http.get("/v1/auth/session").json()["authenticated"] is True

    logout = http.post("/v1/auth/logout")
    assert logout.status_code == 200
    assert access_token not in backend.sessions


def test_session_endpoint_without_cookies(http):
    assert http.get("/v1/auth/session").json() == {"authenticated": False, "user": None}


def test_unconfigured_backend_starts_and_answers_503():
    http = TestClient(create_app(), follow_redirects=False)

    assert http.get("/health").status_code == 200
    assert http.get("/login").status_code == 200
    assert http.post("/v1/auth/login", json={"email": "a@b.co", "password": "secret123"}).status_code == 503


def test_backend_clients_closed_after_each_request(backend, user, http, authed_http):
    authed_http.get("/v1/habits")
    authed_http.post("/v1/habits", json={"name": "Read"})
    http.cookies.clear()
    http.post("/v1/auth/login", json={"email": user["email"], "password": "secret123"})

    assert len(backend.clients) == 3
    assert all(fake.closed for fake in backend.clients)


def test_backend_client_closed_when_request_fails(backend, authed_http):
    backend.next_error = APIError({"code": "42501", "message": "permission denied"})

    response = authed_http.get("/v1/habits")

    assert response.status_code == 502
    assert backend.clients and all(fake.closed for fake in backend.clients)
