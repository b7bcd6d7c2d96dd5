"""Tests for CC email distribution entries."""
import pytest
from httpx import AsyncClient

from signorders.db.models import CCEmail


@pytest.mark.asyncio
async def test_duplicate_is_rejected_until_soft_deleted(admin_client: AsyncClient, db, office):
    payload = {"email": "Team@Example.com", "officeId": str(office.id)}

    first = await admin_client.post("/ccemails", json=payload)
    assert first.status_code == 201
    assert first.json()["email"] == "team@example.com"

    second = await admin_client.post("/ccemails", json=payload)
    assert second.status_code == 409
    assert second.json()["error"] == "DUPLICATE_CC_EMAIL"

    deleted = await admin_client.delete(f"/ccemails/{first.json()['id']}")
    assert deleted.status_code == 200

    third = await admin_client.post("/ccemails", json=payload)
    assert third.status_code == 201

    # The soft-deleted row is kept
    assert db.query(CCEmail).count() == 2


@pytest.mark.asyncio
async def test_same_email_for_different_agent_is_allowed(admin_client: AsyncClient, office, agent):
    base = {"email": "team@example.com", "officeId": str(office.id)}

    assert (await admin_client.post("/ccemails", json=base)).status_code == 201
    response = await admin_client.post("/ccemails", json={**base, "agentId": str(agent.id)})

    assert response.status_code == 201


@pytest.mark.asyncio
@pytest.mark.parametrize("email", ["not-an-email", "@", "not an@email", ""])
async def test_invalid_email_is_rejected(admin_client: AsyncClient, office, email):
    response = await admin_client.post(
        "/ccemails", json={"email": email, "officeId": str(office.id)}
    )
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_list_hides_inactive_and_paginates(
    admin_client: AsyncClient, db, office, sign_admin, make_cc_email
):
    for i in range(12):
        make_cc_email(office, sign_admin, email=f"cc{i}@example.com")
    hidden = make_cc_email(office, sign_admin, email="gone@example.com")
    hidden.is_active = False
    db.commit()

    response = await admin_client.get("/ccemails", params={"officeId": str(office.id)})

    body = response.json()
    assert body["pagination"] == {"page": 1, "limit": 10, "total": 12, "pages": 2}
    assert "gone@example.com" not in {row["email"] for row in body["ccEmails"]}


@pytest.mark.asyncio
async def test_agent_only_manages_own_entries(
    client: AsyncClient, office, agent, other_agent, headers_for
):
    mine = await client.post(
        "/ccemails",
        json={"email": "me@example.com", "officeId": str(office.id), "agentId": str(agent.id)},
        headers=headers_for(agent),
    )
    assert mine.status_code == 201
    assert mine.json()["enteredBy"]["id"] == str(agent.id)

    theirs = await client.post(
        "/ccemails",
        json={"email": "x@example.com", "officeId": str(office.id), "agentId": str(other_agent.id)},
        headers=headers_for(agent),
    )
    assert theirs.status_code == 403


@pytest.mark.asyncio
async def test_update_records_modifier_and_checks_duplicates(
    admin_client: AsyncClient, office, sign_admin, make_cc_email
):
    make_cc_email(office, sign_admin, email="a@example.com")
    other = make_cc_email(office, sign_admin, email="b@example.com")

    clash = await admin_client.put(f"/ccemails/{other.id}", json={"email": "a@example.com"})
    assert clash.status_code == 409

    ok = await admin_client.put(f"/ccemails/{other.id}", json={"email": "c@example.com"})
    assert ok.status_code == 200
    assert ok.json()["email"] == "c@example.com"
    assert ok.json()["modifiedBy"]["id"] == str(sign_admin.id)
