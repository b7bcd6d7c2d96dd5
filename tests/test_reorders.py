"""Tests for reorders."""
import re
import uuid

import pytest
from httpx import AsyncClient

from signorders.db.models import Reorder


def _payload(order, agent, **overrides) -> dict:
    payload = {
        "originalOrderId": str(order.id),
        "installationType": "REMOVAL",
        "zipCode": "62704",
        "additionalInfo": "Pull the post too",
        "listingAgentId": str(agent.id),
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_create_reorder_for_completed_order(admin_client: AsyncClient, office, agent, make_order):
    order = make_order(office, agent, order_id="SO-100", status="COMPLETED")

    response = await admin_client.post("/reorders", json=_payload(order, agent))

    assert response.status_code == 201
    body = response.json()
    assert re.fullmatch(r"RO-\d+", body["reorderId"])
    assert body["originalOrderNumber"] == "SO-100"
    assert body["status"] == "PENDING"
    assert body["listingAgent"]["id"] == str(agent.id)


@pytest.mark.asyncio
async def test_removal_orders_are_always_eligible(admin_client: AsyncClient, office, agent, make_order):
    order = make_order(office, agent, status="PENDING", installation_type="REMOVAL")

    response = await admin_client.post("/reorders", json=_payload(order, agent))

    assert response.status_code == 201


@pytest.mark.asyncio
async def test_ineligible_order_writes_nothing(admin_client: AsyncClient, db, office, agent, make_order):
    order = make_order(office, agent, status="PENDING", installation_type="INSTALLATION")

    response = await admin_client.post("/reorders", json=_payload(order, agent))

    assert response.status_code == 400
    assert response.json() == {
        "message": "Order is not eligible for reorder",
        "error": "NOT_ELIGIBLE_FOR_REORDER",
    }
    assert db.query(Reorder).count() == 0


@pytest.mark.asyncio
async def test_missing_original_is_404(admin_client: AsyncClient, agent):
    response = await admin_client.post(
        "/reorders",
        json={
            "originalOrderId": str(uuid.uuid4()),
            "installationType": "REMOVAL",
            "zipCode": "62704",
            "listingAgentId": str(agent.id),
        },
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_agent_cannot_reorder_someone_elses_order(
    client: AsyncClient, db, office, agent, other_agent, make_order, headers_for
):
    order = make_order(office, other_agent, status="COMPLETED")

    response = await client.post(
        "/reorders", json=_payload(order, agent), headers=headers_for(agent)
    )

    assert response.status_code == 403
    assert db.query(Reorder).count() == 0


@pytest.mark.asyncio
async def test_access_is_checked_before_eligibility(
    client: AsyncClient, office, agent, other_agent, make_order, headers_for
):
    order = make_order(office, other_agent, status="PENDING")

    response = await client.post(
        "/reorders", json=_payload(order, agent), headers=headers_for(agent)
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_unknown_listing_agent(admin_client: AsyncClient, office, agent, make_order):
    order = make_order(office, agent, status="COMPLETED")

    response = await admin_client.post(
        "/reorders", json=_payload(order, agent, listingAgentId=str(uuid.uuid4()))
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_update_delete(admin_client: AsyncClient, office, agent, make_order):
    order = make_order(office, agent, status="COMPLETED")
    created = (await admin_client.post("/reorders", json=_payload(order, agent))).json()

    listed = await admin_client.get(f"/reorders/order/{order.id}")
    assert [r["id"] for r in listed.json()] == [created["id"]]

    updated = await admin_client.put(
        f"/reorders/{created['id']}", json={"status": "COMPLETED", "additionalInfo": None}
    )
    assert updated.status_code == 200
    assert updated.json()["status"] == "COMPLETED"
    assert updated.json()["additionalInfo"] is None
    assert updated.json()["zipCode"] == "62704"

    deleted = await admin_client.delete(f"/reorders/{created['id']}")
    assert deleted.status_code == 200
    assert (await admin_client.get(f"/reorders/order/{order.id}")).json() == []
