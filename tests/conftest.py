import os

os.environ["ENVIRONMENT"] = "local"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["AUTO_CREATE_TABLES"] = "true"
os.environ["MOCK_EMAIL_DELIVERY"] = "true"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["LOG_LEVEL"] = "WARNING"

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from connectibles.core.database import engine
from connectibles.domains.auth import otp
from connectibles.main import app
from connectibles.shared.models.base import Base

TEST_CODE = "123456"


async def _reset_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture(scope="session")
def app_client():
    with TestClient(app) as client:
        yield client


@pytest.fixture
def client(app_client):
    app_client.portal.call(_reset_tables)
    return app_client


@pytest.fixture
def signup(client, monkeypatch):
    """Sign a student in through the OTP flow and fill in their profile."""
    monkeypatch.setattr(otp, "generate_code", lambda: TEST_CODE)

    def _signup(name, **profile):
        email = f"{name.lower()}@spsu.ac.in"
        r = client.post("/api/auth/otp/request", json={"email": email})
        assert r.status_code == 200, r.text
        r = client.post("/api/auth/otp/verify", json={"email": email, "code": TEST_CODE})
        assert r.status_code == 200, r.text
        token = r.json()
        headers = {"Authorization": f"Bearer {token['access_token']}"}
        r = client.patch("/api/profiles/me", json={"name": name, **profile}, headers=headers)
        assert r.status_code == 200, r.text
        return SimpleNamespace(id=token["user_id"], name=name, email=email, headers=headers)

    return _signup


@pytest.fixture
def connect(client):
    """Make two students connections via reciprocal requests."""

    def _connect(a, b):
        client.post("/api/connections/requests", json={"receiver_id": b.id}, headers=a.headers)
        r = client.post("/api/connections/requests", json={"receiver_id": a.id}, headers=b.headers)
        assert r.json()["status"] == "accepted", r.text

    return _connect
