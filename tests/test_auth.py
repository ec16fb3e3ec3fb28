"""Tests for login, role checks and user management."""
from rentaltrack_backend.config import settings
from rentaltrack_backend.modules.auth.models import RoleSlug, UserStatus

from conftest import PASSWORD


def _login(api, email, password=PASSWORD):
    return api.post("/api/auth/login", json={"email": email, "password": password})


def test_login_returns_token_for_active_user(api):
    api.create_user("reader@rentaltrack.io", RoleSlug.READ_ONLY)

    response = _login(api, "reader@rentaltrack.io")

    assert response.status_code == 200, response.text
    data = response.json()["data"]
    assert data["token_type"] == "bearer"
    assert data["expires_in"] == settings.access_token_expire_minutes * 60
    assert data["user"]["role"] == "read_only"

    api.token = data["access_token"]
    me = api.get("/api/auth/me").json()["data"]
    assert me["email"] == "reader@rentaltrack.io"
    assert me["last_login_at"] is not None


def test_login_rejects_wrong_password(api):
    api.create_user("reader@rentaltrack.io", RoleSlug.READ_ONLY)
    response = _login(api, "reader@rentaltrack.io", "wrong-password")
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid email or password"


def test_pending_account_cannot_log_in(api):
    api.create_user("new@rentaltrack.io", RoleSlug.STANDARD, UserStatus.PENDING)
    response = _login(api, "new@rentaltrack.io")
    assert response.status_code == 401
    assert response.json()["message"] == "Account is pending approval"


def test_requests_without_token_are_refused(api):
    assert api.get("/api/properties").status_code in (401, 403)


def test_invalid_token_is_unauthorized(api):
    api.token = "not-a-jwt"
    assert api.get("/api/properties").status_code == 401


def test_deactivated_user_token_stops_working(api):
    user_id = api.login_as(RoleSlug.STANDARD)
    assert api.get("/api/properties").status_code == 200

    standard_token = api.token
    api.login_as(RoleSlug.SUPER_ADMIN)
    assert api.post(f"/api/users/{user_id}/reject").status_code == 200

    api.token = standard_token
    assert api.get("/api/properties").status_code == 401


def test_super_admin_manages_users(api):
    admin_id = api.login_as(RoleSlug.SUPER_ADMIN)

    response = api.post(
        "/api/users",
        json={
            "email": "Clerk@RentalTrack.io",
            "first_name": "Casey",
            "password": "long-enough-password",
            "role": "standard",
            "status": "pending",
        },
    )
    assert response.status_code == 200, response.text
    user = response.json()["data"]
    assert user["email"] == "clerk@rentaltrack.io"
    assert user["created_by"] == admin_id

    assert api.post(f"/api/users/{user['id']}/approve").json()["data"]["status"] == "active"

    response = api.put(f"/api/users/{user['id']}/role", json={"role": "admin"})
    assert response.json()["data"]["role"] == "admin"

    assert api.put(f"/api/users/{admin_id}/role", json={"role": "standard"}).status_code == 400
    assert api.delete(f"/api/users/{admin_id}").status_code == 400

    duplicate = api.post(
        "/api/users",
        json={
            "email": "clerk@rentaltrack.io",
            "first_name": "Again",
            "password": "long-enough-password",
        },
    )
    assert duplicate.status_code == 409

    log = api.get("/api/audit-log", params={"user_id": user["id"]}).json()["data"]
    actions = [entry["action_type"] for entry in log["items"]]
    assert set(actions) == {"user_created", "user_approved", "role_changed"}

    assert api.delete(f"/api/users/{user['id']}").status_code == 200


def test_admin_cannot_create_users(api):
    api.login_as(RoleSlug.ADMIN)
    assert api.get("/api/users").status_code == 200
    response = api.post(
        "/api/users",
        json={
            "email": "someone@rentaltrack.io",
            "first_name": "Some",
            "password": "long-enough-password",
        },
    )
    assert response.status_code == 403


def test_change_password(api):
    api.login_as(RoleSlug.STANDARD)
    email = "standard@rentaltrack.io"

    response = api.post(
        "/api/auth/change-password",
        json={"current_password": "nope", "new_password": "brand-new-password"},
    )
    assert response.status_code == 400

    response = api.post(
        "/api/auth/change-password",
        json={"current_password": PASSWORD, "new_password": "brand-new-password"},
    )
    assert response.status_code == 200
    assert _login(api, email, "brand-new-password").status_code == 200
