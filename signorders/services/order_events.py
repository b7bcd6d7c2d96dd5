"""Order domain events (post-commit side-effect dispatch).

Routers schedule these on FastAPI BackgroundTasks after the write has
committed. Each handler opens its own session, and every failure is logged
and swallowed so a notification can never change a request's outcome.
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import BackgroundTasks
from sqlalchemy.orm import selectinload

from signorders.db import session as db_session
from signorders.db.models import Order, Reorder
from signorders.services import notification_service

logger = logging.getLogger(__name__)


async def notify_order_saved(order_pk: UUID, *, is_update: bool = False) -> None:
    """Email agent/office/vendor about a new or updated order."""
    try:
        with db_session.SessionLocal() as db:
            order = (
                db.query(Order)
                .options(
                    selectinload(Order.agent),
                    selectinload(Order.office),
                    selectinload(Order.vendor),
                )
                .filter(Order.id == order_pk)
                .first()
            )
            if order is None:
                logger.warning("Order %s vanished before notification", order_pk)
                return
            message = notification_service.build_order_message(db, order, is_update=is_update)
        await notification_service.send_email(message)
    except Exception:
        logger.exception("Error sending order notification for %s", order_pk)


async def notify_reorder_created(reorder_pk: UUID) -> None:
    """Email the listing agent, original agent and office manager about a reorder."""
    try:
        with db_session.SessionLocal() as db:
            reorder = (
                db.query(Reorder)
                .options(
                    selectinload(Reorder.listing_agent),
                    selectinload(Reorder.original_order).selectinload(Order.agent),
                    selectinload(Reorder.original_order).selectinload(Order.office),
                )
                .filter(Reorder.id == reorder_pk)
                .first()
            )
            if reorder is None:
                logger.warning("Reorder %s vanished before notification", reorder_pk)
                return
            message = notification_service.build_reorder_message(db, reorder)
        await notification_service.send_email(message)
    except Exception:
        logger.exception("Error sending reorder notification for %s", reorder_pk)


def order_created(background_tasks: BackgroundTasks, order_pk: UUID) -> None:
    background_tasks.add_task(notify_order_saved, order_pk, is_update=False)


def order_updated(background_tasks: BackgroundTasks, order_pk: UUID) -> None:
    background_tasks.add_task(notify_order_saved, order_pk, is_update=True)


def reorder_created(background_tasks: BackgroundTasks, reorder_pk: UUID) -> None:
    background_tasks.add_task(notify_reorder_created, reorder_pk)
