"""
Order notification emails.

Builds recipient lists and HTML bodies for order / reorder notifications and
delivers them through the Resend HTTP API. Callers (order_events) decide when
to send; this module raises on delivery failure.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from datetime import datetime

import httpx
from sqlalchemy.orm import Session

from signorders.core.config import settings
from signorders.db.models import CCEmail, Order, Reorder
from signorders.services.http_service import DEFAULT_RETRY_STATUSES, request_with_retries

logger = logging.getLogger(__name__)

RESEND_SEND_URL = "https://api.resend.com/emails"
RESEND_TIMEOUT_SECONDS = 10.0
RESEND_MAX_ATTEMPTS = 3
RESEND_RETRY_BASE_DELAY = 0.5
RESEND_RETRY_MAX_DELAY = 4.0

FOOTER = "This is an automated message from the Sign Order Management System."


class EmailDeliveryError(Exception):
    """Resend rejected the message or could not be reached."""


@dataclass
class EmailMessage:
    to: list[str]
    subject: str
    html: str
    cc: list[str] = field(default_factory=list)


def sender_configured() -> bool:
    return settings.email_sender_configured


def _from_header() -> str:
    if settings.EMAIL_FROM_NAME:
        return f"{settings.EMAIL_FROM_NAME} <{settings.EMAIL_FROM}>"
    return settings.EMAIL_FROM


def _dedupe(addresses) -> list[str]:
    seen: list[str] = []
    for address in addresses:
        if address and address.lower() not in (s.lower() for s in seen):
            seen.append(address)
    return seen


def office_cc_list(db: Session, office_id) -> list[str]:
    """Active CC addresses registered for an office."""
    rows = (
        db.query(CCEmail.email)
        .filter(CCEmail.office_id == office_id, CCEmail.is_active.is_(True))
        .order_by(CCEmail.email)
        .all()
    )
    return _dedupe(row.email for row in rows)


# =============================================================================
# Message builders
# =============================================================================

def _fmt_date(value: datetime | None) -> str:
    return value.strftime("%m/%d/%Y") if value else "N/A"


def _row(label: str, value) -> str:
    return (
        f"<tr><td><strong>{html.escape(label)}:</strong></td>"
        f"<td>{html.escape(str(value))}</td></tr>"
    )


def _table(rows: list[str]) -> str:
    return (
        '<table border="1" cellpadding="10" cellspacing="0" style="border-collapse: collapse;">'
        + "".join(rows)
        + "</table>"
    )


def _paragraph(label: str, text: str | None) -> str:
    if not text:
        return ""
    return f"<p><strong>{html.escape(label)}:</strong><br>{html.escape(text)}</p>"


def _address(order: Order) -> str:
    return f"{order.street_address}, {order.city}, {order.state} {order.zip_code}"


def build_order_message(db: Session, order: Order, *, is_update: bool = False) -> EmailMessage:
    """
    Notification for a new or updated order.

    To: agent, office manager, vendor (or the office inbox when no vendor).
    Cc: the office's active CC list.
    """
    verb = "Updated" if is_update else "New"
    agent = order.agent
    office = order.office
    vendor = order.vendor

    recipients = [agent.email if agent else None, office.manager_email if office else None]
    if vendor is not None:
        recipients.append(vendor.email)
    elif office is not None:
        recipients.append(office.email)

    body = (
        '<html><body style="font-family: Arial, sans-serif;">'
        f"<h2>{verb} Sign Order</h2>"
        + _table([
            _row("Order ID", order.order_id),
            _row("Installation Type", order.installation_type),
            _row("Property Type", order.property_type),
            _row("Address", _address(order)),
            _row("Agent", agent.full_name if agent else "N/A"),
            _row("Office", office.name if office else "N/A"),
            _row("Contact", order.contact_name or "N/A"),
            _row("Phone", order.contact_phone or "N/A"),
            _row("Listing Date", _fmt_date(order.listing_date)),
            _row("Installation Date", _fmt_date(order.installation_date)),
        ])
        + _paragraph("Directions", order.directions)
        + _paragraph("Additional Info", order.additional_info)
        + "<h3>Special Features:</h3><ul>"
        f"<li>Underwater Sprinkler: {'Yes' if order.underwater_sprinkler else 'No'}</li>"
        f"<li>Invisible Dog Fence: {'Yes' if order.invisible_dog_fence else 'No'}</li>"
        f"</ul><p>{FOOTER}</p></body></html>"
    )

    return EmailMessage(
        to=_dedupe(recipients),
        cc=office_cc_list(db, order.office_id),
        subject=f"{verb} Sign Order - {order.order_id}",
        html=body,
    )


def build_reorder_message(db: Session, reorder: Reorder) -> EmailMessage:
    """Notification for a new reorder: listing agent, original agent, office manager."""
    original = reorder.original_order
    listing_agent = reorder.listing_agent
    original_agent = original.agent
    office = original.office

    recipients = [
        listing_agent.email if listing_agent else None,
        original_agent.email if original_agent else None,
        office.manager_email if office else None,
    ]

    body = (
        '<html><body style="font-family: Arial, sans-serif;">'
        "<h2>New Reorder</h2><h3>Reorder Details:</h3>"
        + _table([
            _row("Reorder ID", reorder.reorder_id),
            _row("Installation Type", reorder.installation_type),
            _row("Zip Code", reorder.zip_code),
            _row("Listing Agent", listing_agent.full_name if listing_agent else "N/A"),
        ])
        + _paragraph("Additional Info", reorder.additional_info)
        + "<h3>Original Order:</h3>"
        + _table([
            _row("Order ID", original.order_id),
            _row("Address", _address(original)),
            _row("Original Agent", original_agent.full_name if original_agent else "N/A"),
        ])
        + f"<p>{FOOTER}</p></body></html>"
    )

    return EmailMessage(
        to=_dedupe(recipients),
        cc=office_cc_list(db, original.office_id),
        subject=f"New Reorder - {reorder.reorder_id} (Original: {original.order_id})",
        html=body,
    )


# =============================================================================
# Delivery
# =============================================================================

async def send_email(message: EmailMessage) -> str | None:
    """
    Deliver a message through Resend.

    Returns the provider message id, or None when sending is not configured
    or there is nobody to send to.

    Raises:
        EmailDeliveryError: Resend returned a non-2xx response
        httpx.RequestError: network failure after retries
    """
    if not sender_configured():
        logger.info("Email sender not configured; skipping '%s'", message.subject)
        return None
    if not message.to:
        logger.info("No recipients for '%s'; skipping", message.subject)
        return None

    payload: dict = {
        "from": _from_header(),
        "to": message.to,
        "subject": message.subject,
        "html": message.html,
    }
    if message.cc:
        payload["cc"] = message.cc

    headers = {
        "Authorization": f"Bearer {settings.RESEND_API_KEY}",
        "Content-Type": "application/json",
    }

    async with httpx.AsyncClient(timeout=RESEND_TIMEOUT_SECONDS) as client:

        async def request_fn() -> httpx.Response:
            return await client.post(RESEND_SEND_URL, headers=headers, json=payload)

        response = await request_with_retries(
            request_fn,
            max_attempts=RESEND_MAX_ATTEMPTS,
            base_delay=RESEND_RETRY_BASE_DELAY,
            max_delay=RESEND_RETRY_MAX_DELAY,
            retry_statuses=DEFAULT_RETRY_STATUSES,
        )

    if 200 <= response.status_code < 300:
        message_id = response.json().get("id")
        logger.info("Email sent: %s", message.subject)
        return message_id if isinstance(message_id, str) else None

    detail = None
    try:
        data = response.json()
        if isinstance(data, dict):
            detail = data.get("message") or data.get("error")
    except ValueError:
        detail = None

    if detail:
        raise EmailDeliveryError(f"Resend API error: {response.status_code} ({detail})")
    raise EmailDeliveryError(f"Resend API error: {response.status_code}")
