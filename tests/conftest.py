"""Shared fixtures: an in-memory SQLite database and an authenticated API client."""

import os
from pathlib import Path

import pytest

_root = Path(__file__).resolve().parent.parent
os.environ.setdefault("CONFIG", str(_root / "resources" / "config" / "test.yaml"))

from fastapi.testclient import TestClient  # noqa: E402

from rentaltrack_backend.database import AsyncSessionLocal, Base, engine  # noqa: E402
from rentaltrack_backend.main import app  # noqa: E402
from rentaltrack_backend.modules.auth import crud as auth_crud  # noqa: E402
from rentaltrack_backend.modules.auth.jwt_service import create_access_token  # noqa: E402
from rentaltrack_backend.modules.auth.models import RoleSlug, UserStatus  # noqa: E402

PASSWORD = "correct-horse-battery"


async def _reset_schema() -> None:
    # The in-memory database lives as long as the pooled connection
    await engine.dispose()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def _create_user(
    email: str, role: RoleSlug, status: UserStatus = UserStatus.ACTIVE
) -> int:
    async with AsyncSessionLocal() as session:
        user = await auth_crud.create_user(
            session,
            email=email,
            password=PASSWORD,
            first_name=role.value.replace("_", " ").title(),
            role=role,
            status=status,
        )
        await session.commit()
        return user.id


@pytest.fixture
async def db():
    """A session on a freshly created schema."""
    await _reset_schema()
    async with AsyncSessionLocal() as session:
        yield session
    await engine.dispose()


class ApiClient:
    """TestClient wrapper that creates users and sends their bearer token."""

    def __init__(self, client: TestClient):
        self.client = client
        self.token: str | None = None

    def create_user(
        self, email: str, role: RoleSlug, status: UserStatus = UserStatus.ACTIVE
    ) -> int:
        return self.client.portal.call(_create_user, email, role, status)

    def login_as(self, role: RoleSlug) -> int:
        email = f"{role.value}@rentaltrack.io"
        user_id = self.create_user(email, role)
        self.token = create_access_token(user_id, email, role.value)
        return user_id

    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    def get(self, url: str, **kwargs):
        return self.client.get(url, headers=self._headers(), **kwargs)

    def post(self, url: str, **kwargs):
        return self.client.post(url, headers=self._headers(), **kwargs)

    def put(self, url: str, **kwargs):
        return self.client.put(url, headers=self._headers(), **kwargs)

    def delete(self, url: str, **kwargs):
        return self.client.delete(url, headers=self._headers(), **kwargs)


@pytest.fixture
def api():
    """API client on a fresh schema, not yet logged in."""
    with TestClient(app) as client:
        client.portal.call(_reset_schema)
        yield ApiClient(client)
        client.portal.call(engine.dispose)


@pytest.fixture
def writer(api):
    """API client logged in as a standard (read-write) user."""
    api.login_as(RoleSlug.STANDARD)
    return api
