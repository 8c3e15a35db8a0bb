"""Order operations: creation, line item edits, status changes and rider assignment.

Every operation runs as one :class:`~fooddelivery.db.unit_of_work.UnitOfWork`.
The order (and, where involved, the rider) is locked before it is read, checks
run before anything is written, and derived updates are registered as
before-commit hooks so they commit together with the primary write.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from functools import partial

from sqlalchemy.orm import Session

from fooddelivery.core.config import settings
from fooddelivery.core.errors import ConstraintViolation, NotFound, ReferentialViolation
from fooddelivery.db.unit_of_work import UnitOfWork
from fooddelivery.models import Address, Customer, MenuItem, Order, OrderItem, Restaurant, Rider
from fooddelivery.services import order_status, order_totals
from fooddelivery.services.rider_availability import propagate_order_change
from fooddelivery.services.validation import require_positive_amount, require_positive_quantity

logger = logging.getLogger(__name__)


def _lock_and_load_order(uow: UnitOfWork, order_id: int) -> Order:
    uow.lock_order(order_id)
    order = uow.db.get(Order, order_id, populate_existing=True, with_for_update=True)
    if order is None:
        raise NotFound(f"Order {order_id} not found.")
    return order


def _ensure_items_editable(order: Order) -> None:
    if settings.lock_items_on_terminal_orders and order_status.is_terminal(order.status):
        raise ConstraintViolation(f"Order {order.id} is {order.status}; its items can no longer change.")


def _find_order_item(db: Session, order_item_id: int) -> OrderItem:
    item = db.get(OrderItem, order_item_id, populate_existing=True)
    if item is None:
        raise NotFound(f"Order item {order_item_id} not found.")
    return item


def get_order(db: Session, order_id: int) -> Order:
    order = db.get(Order, order_id)
    if order is None:
        raise NotFound(f"Order {order_id} not found.")
    return order


def create_order(db: Session, customer_id: int, restaurant_id: int, address_id: int) -> Order:
    """Open a new ``Pending`` order with a zero total."""
    with UnitOfWork(db):
        customer = db.get(Customer, customer_id)
        if customer is None:
            raise ReferentialViolation(f"Customer {customer_id} does not exist.")
        restaurant = db.get(Restaurant, restaurant_id)
        if restaurant is None:
            raise ReferentialViolation(f"Restaurant {restaurant_id} does not exist.")
        if not restaurant.is_active:
            raise ConstraintViolation(f"Restaurant {restaurant_id} is not accepting orders.")
        address = db.get(Address, address_id)
        if address is None:
            raise ReferentialViolation(f"Address {address_id} does not exist.")
        if address.customer_id != customer.id:
            raise ReferentialViolation(f"Address {address_id} does not belong to customer {customer_id}.")

        order = Order(
            customer_id=customer.id,
            restaurant_id=restaurant.id,
            address_id=address.id,
            status="Pending",
            total_amount=Decimal("0.00"),
        )
        db.add(order)
        db.flush()

    logger.info("[ORDER] Created order %s for customer %s at restaurant %s", order.id, customer_id, restaurant_id)
    return order


def add_order_item(db: Session, order_id: int, menu_item_id: int, quantity: int) -> OrderItem:
    """Add a line priced at the menu item's current price."""
    require_positive_quantity(quantity)
    with UnitOfWork(db) as uow:
        order = _lock_and_load_order(uow, order_id)
        _ensure_items_editable(order)

        menu_item = db.get(MenuItem, menu_item_id)
        if menu_item is None:
            raise ReferentialViolation(f"Menu item {menu_item_id} does not exist.")
        if menu_item.category.restaurant_id != order.restaurant_id:
            raise ReferentialViolation(
                f"Menu item {menu_item_id} is not offered by restaurant {order.restaurant_id}."
            )
        if not menu_item.is_available:
            raise ConstraintViolation(f"Menu item {menu_item_id} is not available.")
        unit_price = require_positive_amount(menu_item.price, "Menu item price")

        item = OrderItem(order_id=order.id, menu_item_id=menu_item.id, quantity=quantity, unit_price=unit_price)
        db.add(item)
        uow.before_commit(partial(order_totals.item_added, order, quantity, unit_price))

    logger.info("[ORDER] Order %s: added item %s x%s at %s", order_id, menu_item_id, quantity, unit_price)
    return item


def remove_order_item(db: Session, order_item_id: int) -> None:
    """Delete a line; removing it twice raises NotFound and leaves the total alone."""
    with UnitOfWork(db) as uow:
        order_id = _find_order_item(db, order_item_id).order_id
        order = _lock_and_load_order(uow, order_id)
        item = _find_order_item(db, order_item_id)
        _ensure_items_editable(order)

        quantity, unit_price = item.quantity, item.unit_price
        db.delete(item)
        uow.before_commit(partial(order_totals.item_removed, order, quantity, unit_price))

    logger.info("[ORDER] Order %s: removed line %s", order_id, order_item_id)


def update_order_item(db: Session, order_item_id: int, quantity: int) -> OrderItem:
    """Change a line's quantity; the captured unit price stays as it was."""
    require_positive_quantity(quantity)
    with UnitOfWork(db) as uow:
        order_id = _find_order_item(db, order_item_id).order_id
        order = _lock_and_load_order(uow, order_id)
        item = _find_order_item(db, order_item_id)
        _ensure_items_editable(order)

        old_quantity = item.quantity
        item.quantity = quantity
        uow.before_commit(
            partial(order_totals.item_changed, order, old_quantity, item.unit_price, quantity, item.unit_price)
        )

    logger.info("[ORDER] Order %s: line %s quantity %s -> %s", order_id, order_item_id, old_quantity, quantity)
    return item


def update_order_status(db: Session, order_id: int, new_status: str) -> Order:
    """Move the order to ``new_status``; terminal orders reject any change."""
    with UnitOfWork(db) as uow:
        order = _lock_and_load_order(uow, order_id)
        previous_status = order.status
        order_status.set_status(order, new_status)
        if order.rider_id is not None:
            uow.lock_rider(order.rider_id)

        uow.before_commit(
            partial(
                propagate_order_change,
                db,
                order,
                previous_rider_id=order.rider_id,
                previous_status=previous_status,
            )
        )

    logger.info("[ORDER] Order %s status %s -> %s", order_id, previous_status, new_status)
    return order


def assign_rider(db: Session, order_id: int, rider_id: int) -> Order:
    """Attach an available rider to an order without one."""
    with UnitOfWork(db) as uow:
        order = _lock_and_load_order(uow, order_id)
        uow.lock_rider(rider_id)
        rider = db.get(Rider, rider_id, populate_existing=True, with_for_update=True)
        if rider is None:
            raise ReferentialViolation(f"Rider {rider_id} does not exist.")
        if order.rider_id is not None:
            raise ConstraintViolation(f"Order {order_id} already has rider {order.rider_id}.")
        if order_status.is_terminal(order.status):
            raise ConstraintViolation(f"Order {order_id} is {order.status}; it cannot take a rider.")
        if not rider.is_available:
            raise ConstraintViolation(f"Rider {rider_id} is not available.")

        order.rider_id = rider.id
        uow.before_commit(
            partial(propagate_order_change, db, order, previous_rider_id=None, previous_status=order.status)
        )

    logger.info("[ORDER] Order %s assigned to rider %s", order_id, rider_id)
    return order
