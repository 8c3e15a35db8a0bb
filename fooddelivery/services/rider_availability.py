"""Rider availability driven by order assignment and completion events.

Availability is never set directly. It flips only on two events of an order:

* assignment: the rider reference goes from empty to set -> rider busy;
* completion: an order with a rider enters a terminal status from a
  non-terminal one -> rider available again.

Only the order being changed is considered; there is no scan over the
rider's other orders.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from fooddelivery.core.errors import ReferentialViolation
from fooddelivery.models.order import Order
from fooddelivery.models.rider import Rider
from fooddelivery.services.order_status import is_terminal

logger = logging.getLogger(__name__)


def _load_rider(db: Session, rider_id: int) -> Rider:
    rider = db.get(Rider, rider_id)
    if rider is None:
        raise ReferentialViolation(f"Rider {rider_id} does not exist.")
    return rider


def propagate_order_change(
    db: Session,
    order: Order,
    *,
    previous_rider_id: int | None,
    previous_status: str,
) -> None:
    """Apply the availability effects of one committed order change.

    The caller must hold the rider lock for every rider touched here.
    """
    if previous_rider_id is None and order.rider_id is not None:
        rider = _load_rider(db, order.rider_id)
        rider.is_available = False
        logger.info("[RIDER] Rider %s assigned to order %s; marked unavailable", rider.id, order.id)

    if previous_rider_id is not None and is_terminal(order.status) and not is_terminal(previous_status):
        rider = _load_rider(db, previous_rider_id)
        rider.is_available = True
        logger.info("[RIDER] Order %s finished as %s; rider %s available", order.id, order.status, rider.id)
