"""Tests for Authentication."""
import pytest
from httpx import AsyncClient

from signorders.core.security import hash_password, verify_password
from signorders.db.enums import Role


@pytest.fixture
def password_user(make_user, office):
    return make_user(
        Role.AGENT,
        office,
        email="login@test.com",
        password_hash=hash_password("s3cret-pass"),
    )


def test_password_hashing():
    hashed = hash_password("hunter22")
    assert hashed.startswith("$2b$12$")
    assert verify_password("hunter22", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("hunter22", "not-a-hash")


@pytest.mark.asyncio
async def test_protected_endpoint_requires_token(client: AsyncClient):
    response = await client.get("/auth/me")
    assert response.status_code == 401
    assert response.json()["error"] == "NOT_AUTHENTICATED"


@pytest.mark.asyncio
async def test_garbage_token_is_rejected(client: AsyncClient):
    response = await client.get("/auth/me", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401
    assert response.json()["error"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_login_and_me(client: AsyncClient, password_user):
    response = await client.post(
        "/auth/login", json={"email": "LOGIN@test.com", "password": "s3cret-pass"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["email"] == "login@test.com"
    assert body["user"]["office"]["name"] == "Office A"

    me = await client.get("/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == str(password_user.id)
    assert me.json()["lastLoginAt"] is not None


@pytest.mark.asyncio
async def test_login_failures_look_alike(client: AsyncClient, password_user, make_user):
    make_user(Role.AGENT, email="off@test.com", password_hash=hash_password("pw123456"), is_active=False)

    attempts = [
        {"email": "login@test.com", "password": "wrong"},
        {"email": "nobody@test.com", "password": "s3cret-pass"},
        {"email": "off@test.com", "password": "pw123456"},
    ]
    for creds in attempts:
        response = await client.post("/auth/login", json=creds)
        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_logout_revokes_token(client: AsyncClient, agent, headers_for):
    headers = headers_for(agent)

    assert (await client.post("/auth/logout", headers=headers)).status_code == 200

    response = await client.get("/auth/me", headers=headers)
    assert response.status_code == 401
    assert response.json()["error"] == "SESSION_REVOKED"


@pytest.mark.asyncio
async def test_refresh_issues_working_token(client: AsyncClient, agent, headers_for):
    response = await client.post("/auth/refresh", headers=headers_for(agent))

    assert response.status_code == 200
    token = response.json()["token"]
    me = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200


@pytest.mark.asyncio
async def test_register_is_admin_only(client: AsyncClient, agent, office, headers_for):
    payload = {
        "email": "new@test.com",
        "password": "longenough",
        "firstName": "New",
        "lastName": "Agent",
        "officeId": str(office.id),
    }

    response = await client.post("/auth/register", json=payload, headers=headers_for(agent))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_register_creates_user(admin_client: AsyncClient, office):
    payload = {
        "email": "New@Test.com",
        "password": "longenough",
        "firstName": "New",
        "lastName": "Agent",
        "officeId": str(office.id),
    }

    response = await admin_client.post("/auth/register", json=payload)
    assert response.status_code == 201
    assert response.json()["user"]["email"] == "new@test.com"
    assert response.json()["user"]["role"] == "AGENT"

    again = await admin_client.post("/auth/register", json=payload)
    assert again.status_code == 409
    assert again.json()["error"] == "USER_EXISTS"


@pytest.mark.asyncio
async def test_disabled_account_token_is_rejected(client: AsyncClient, db, agent, headers_for):
    headers = headers_for(agent)
    agent.is_active = False
    db.commit()

    response = await client.get("/auth/me", headers=headers)

    assert response.status_code == 401
    assert response.json()["error"] == "ACCOUNT_DISABLED"


@pytest.mark.asyncio
async def test_register_rejects_malformed_email(admin_client: AsyncClient, office):
    payload = {
        "email": "someone@",
        "password": "longenough",
        "firstName": "New",
        "lastName": "Agent",
        "officeId": str(office.id),
    }

    response = await admin_client.post("/auth/register", json=payload)

    assert response.status_code == 400
    assert {d["field"] for d in response.json()["details"]} == {"email"}
