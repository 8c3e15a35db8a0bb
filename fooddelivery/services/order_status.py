"""Order status transition helpers."""

from __future__ import annotations

import logging

from fooddelivery.core.config import settings
from fooddelivery.core.errors import ConstraintViolation, InvalidTransition
from fooddelivery.models.order import ORDER_STATUSES, Order

logger = logging.getLogger(__name__)

TERMINAL_STATUSES: frozenset[str] = frozenset({"Delivered", "Cancelled"})
ACTIVE_STATUSES: tuple[str, ...] = tuple(status for status in ORDER_STATUSES if status not in TERMINAL_STATUSES)

# Only used when STRICT_STATUS_TRANSITIONS is enabled.
STRICT_TRANSITIONS: dict[str, set[str]] = {
    "Pending": {"Preparing", "Cancelled"},
    "Preparing": {"Out for Delivery", "Cancelled"},
    "Out for Delivery": {"Delivered", "Cancelled"},
    "Delivered": set(),
    "Cancelled": set(),
}

TERMINAL_MESSAGES: dict[str, str] = {
    "Delivered": "Cannot change status of a Delivered order.",
    "Cancelled": "Cannot reopen a Cancelled order.",
}


def is_terminal(status: str) -> bool:
    return status in TERMINAL_STATUSES


def can_transition(current: str, new: str, *, strict: bool | None = None) -> bool:
    """Return whether order can move from current to new status.

    Terminal states are locked. Any other move is allowed unless the strict
    forward-only graph is switched on.
    """
    if current == new:
        return True
    if is_terminal(current):
        return False
    if strict is None:
        strict = settings.strict_status_transitions
    if strict:
        return new in STRICT_TRANSITIONS.get(current, set())
    return True


def ensure_transition(current: str, new: str) -> None:
    """Raise unless ``current -> new`` is an accepted status change."""
    if new not in ORDER_STATUSES:
        raise ConstraintViolation(f"Unknown order status {new!r}.")
    if can_transition(current, new):
        return
    logger.info("[ORDER] Rejected status change %s -> %s", current, new)
    raise InvalidTransition(current, new, TERMINAL_MESSAGES.get(current))


def set_status(order: Order, new_status: str) -> None:
    """Validate and write the new status on ``order``."""
    ensure_transition(order.status, new_status)
    order.status = new_status
