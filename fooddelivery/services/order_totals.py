"""Incremental maintenance of the cached ``Order.total_amount``.

The write path only ever applies deltas: ``+q*p`` for a new line, ``-q*p`` for
a removed line and the difference for a changed line. The functions here are
registered as before-commit hooks by :mod:`fooddelivery.services.order_service`
and must run with the order lock held.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from fooddelivery.core.errors import ConstraintViolation
from fooddelivery.models.order import Order, OrderItem
from fooddelivery.services.validation import CENT

logger = logging.getLogger(__name__)


def line_amount(quantity: int, unit_price: Decimal) -> Decimal:
    return (Decimal(quantity) * unit_price).quantize(CENT)


def apply_delta(order: Order, delta: Decimal) -> None:
    """Shift the cached total by ``delta``."""
    current = order.total_amount if order.total_amount is not None else Decimal("0.00")
    new_total = (current + delta).quantize(CENT)
    if new_total < 0:
        raise ConstraintViolation(f"Order {order.id} total would drop below zero ({new_total}).")
    order.total_amount = new_total
    logger.debug("[TOTAL] Order %s total %s -> %s", order.id, current, new_total)


def item_added(order: Order, quantity: int, unit_price: Decimal) -> None:
    apply_delta(order, line_amount(quantity, unit_price))


def item_removed(order: Order, quantity: int, unit_price: Decimal) -> None:
    apply_delta(order, -line_amount(quantity, unit_price))


def item_changed(
    order: Order,
    old_quantity: int,
    old_unit_price: Decimal,
    new_quantity: int,
    new_unit_price: Decimal,
) -> None:
    apply_delta(order, line_amount(new_quantity, new_unit_price) - line_amount(old_quantity, old_unit_price))


def computed_order_total(db: Session, order_id: int) -> Decimal:
    """Sum the order's lines directly. Audit helper, not used on the write path."""
    total = db.scalar(
        select(func.coalesce(func.sum(OrderItem.quantity * OrderItem.unit_price), 0)).where(
            OrderItem.order_id == order_id
        )
    )
    return Decimal(str(total)).quantize(CENT)


def verify_order_total(db: Session, order: Order) -> bool:
    """Return True when the cached total matches the sum of the lines."""
    cached = Decimal(order.total_amount).quantize(CENT)
    computed = computed_order_total(db, order.id)
    if cached != computed:
        logger.error("[TOTAL] Order %s cached total %s != computed %s", order.id, cached, computed)
        return False
    return True
