"""Payments settling orders (one payment per order)."""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from fooddelivery.core.errors import ConstraintViolation, NotFound
from fooddelivery.db.unit_of_work import UnitOfWork
from fooddelivery.models import PAYMENT_METHODS, PAYMENT_STATUSES, Order, Payment
from fooddelivery.services.validation import require_choice, require_positive_amount

logger = logging.getLogger(__name__)


def record_payment(
    db: Session,
    order_id: int,
    *,
    method: str,
    amount: Decimal | int | str | None = None,
    status: str = "Paid",
) -> Payment:
    """Record the order's payment; ``amount`` defaults to the order total."""
    with UnitOfWork(db) as uow:
        uow.lock_order(order_id)
        order = db.get(Order, order_id, populate_existing=True)
        if order is None:
            raise NotFound(f"Order {order_id} not found.")
        existing = db.scalar(select(Payment.id).where(Payment.order_id == order.id).limit(1))
        if existing is not None:
            raise ConstraintViolation(f"Order {order_id} already has a payment.")

        payment = Payment(
            order_id=order.id,
            amount=require_positive_amount(order.total_amount if amount is None else amount, "Payment amount"),
            method=require_choice(method, PAYMENT_METHODS, "Payment method"),
            status=require_choice(status, PAYMENT_STATUSES, "Payment status"),
        )
        db.add(payment)
        db.flush()

    logger.info("[PAYMENT] Order %s paid via %s", order_id, method)
    return payment
