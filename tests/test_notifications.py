"""Tests for order notification emails."""
import logging

import httpx
import pytest
from httpx import AsyncClient

from signorders.core.config import settings
from signorders.services import notification_service
from signorders.services.http_service import request_with_retries
from signorders.services.notification_service import (
    EmailDeliveryError,
    EmailMessage,
    build_order_message,
    build_reorder_message,
    send_email,
)
from signorders.db.models import Reorder


@pytest.fixture
def resend_configured(monkeypatch):
    monkeypatch.setattr(settings, "RESEND_API_KEY", "re_test")
    monkeypatch.setattr(settings, "EMAIL_FROM", "orders@signs.test")


# =============================================================================
# Message builders
# =============================================================================

def test_order_message_recipients(db, office, agent, sign_admin, make_order, make_vendor, make_cc_email):
    vendor = make_vendor("Alpha Signs", ["62704"])
    order = make_order(office, agent, order_id="SO-42", vendor_id=vendor.id, directions="<b>left</b>")
    make_cc_email(office, sign_admin, email="copy@example.com")

    message = build_order_message(db, order, is_update=False)

    assert message.subject == "New Sign Order - SO-42"
    assert message.to == [agent.email, office.manager_email, vendor.email]
    assert message.cc == ["copy@example.com"]
    assert "&lt;b&gt;left&lt;/b&gt;" in message.html


def test_order_message_without_vendor_goes_to_office(db, office, agent, make_order):
    order = make_order(office, agent, order_id="SO-43")

    message = build_order_message(db, order, is_update=True)

    assert message.subject == "Updated Sign Order - SO-43"
    assert office.email in message.to
    assert message.cc == []


def test_reorder_message(db, office, agent, other_agent, make_order):
    order = make_order(office, agent, order_id="SO-7", status="COMPLETED")
    reorder = Reorder(
        reorder_id="RO-9",
        original_order_id=order.id,
        installation_type="REMOVAL",
        zip_code="62704",
        listing_agent_id=other_agent.id,
    )
    db.add(reorder)
    db.commit()

    message = build_reorder_message(db, reorder)

    assert message.subject == "New Reorder - RO-9 (Original: SO-7)"
    assert message.to == [other_agent.email, agent.email, office.manager_email]


# =============================================================================
# Delivery
# =============================================================================

@pytest.mark.asyncio
async def test_send_skipped_when_not_configured():
    message = EmailMessage(to=["a@example.com"], subject="s", html="<p>x</p>")
    assert await send_email(message) is None


@pytest.mark.asyncio
async def test_send_raises_on_provider_error(resend_configured, monkeypatch):
    async def fake_request(request_fn, **kwargs):
        return httpx.Response(422, json={"message": "Invalid `to` field"})

    monkeypatch.setattr(notification_service, "request_with_retries", fake_request)
    message = EmailMessage(to=["a@example.com"], subject="s", html="<p>x</p>")

    with pytest.raises(EmailDeliveryError, match="422"):
        await send_email(message)


@pytest.mark.asyncio
async def test_send_returns_message_id(resend_configured, monkeypatch):
    sent = {}

    async def fake_request(request_fn, **kwargs):
        sent.update(kwargs)
        return httpx.Response(200, json={"id": "msg_123"})

    monkeypatch.setattr(notification_service, "request_with_retries", fake_request)
    message = EmailMessage(to=["a@example.com"], subject="s", html="<p>x</p>")

    assert await send_email(message) == "msg_123"
    assert sent["max_attempts"] == notification_service.RESEND_MAX_ATTEMPTS


@pytest.mark.asyncio
async def test_retries_on_retryable_status():
    responses = [httpx.Response(503), httpx.Response(429, headers={"Retry-After": "1"}), httpx.Response(200)]
    calls = []

    async def request_fn():
        calls.append(1)
        return responses[len(calls) - 1]

    response = await request_with_retries(request_fn, max_attempts=3, base_delay=0, max_delay=0)

    assert response.status_code == 200
    assert len(calls) == 3


@pytest.mark.asyncio
async def test_transport_error_reraised_on_last_attempt():
    async def request_fn():
        raise httpx.ConnectError("down")

    with pytest.raises(httpx.ConnectError):
        await request_with_retries(request_fn, max_attempts=2, base_delay=0, max_delay=0)


@pytest.mark.asyncio
async def test_zero_attempts_is_rejected():
    async def request_fn():
        return httpx.Response(200)

    with pytest.raises(ValueError, match="max_attempts"):
        await request_with_retries(request_fn, max_attempts=0)


# =============================================================================
# Post-commit dispatch
# =============================================================================

@pytest.mark.asyncio
async def test_notification_failure_does_not_fail_create(
    admin_client: AsyncClient, office, agent, monkeypatch, caplog
):
    async def broken_send(message):
        raise EmailDeliveryError("Resend API error: 500")

    monkeypatch.setattr(notification_service, "send_email", broken_send)

    with caplog.at_level(logging.ERROR, logger="signorders.services.order_events"):
        response = await admin_client.post(
            "/orders",
            json={
                "officeId": str(office.id),
                "agentId": str(agent.id),
                "installationType": "INSTALLATION",
                "propertyType": "Residential",
                "streetAddress": "1 Test Way",
                "city": "Springfield",
                "state": "IL",
                "zipCode": "62704",
            },
        )

    assert response.status_code == 201
    assert "Error sending order notification" in caplog.text


@pytest.mark.asyncio
async def test_notification_sent_after_reorder(
    admin_client: AsyncClient, office, agent, make_order, monkeypatch
):
    captured: list[EmailMessage] = []

    async def capture(message):
        captured.append(message)

    monkeypatch.setattr(notification_service, "send_email", capture)
    order = make_order(office, agent, order_id="SO-55", status="COMPLETED")

    response = await admin_client.post(
        "/reorders",
        json={
            "originalOrderId": str(order.id),
            "installationType": "REPAIR",
            "zipCode": "62704",
            "listingAgentId": str(agent.id),
        },
    )

    assert response.status_code == 201
    assert [m.subject for m in captured] == [
        f"New Reorder - {response.json()['reorderId']} (Original: SO-55)"
    ]
