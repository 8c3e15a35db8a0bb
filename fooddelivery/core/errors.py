"""Domain errors raised by the order consistency core.

All errors derive from :class:`DeliveryError` so callers can catch the whole
family. None of them is retried inside the core; :class:`ConcurrentConflict` is
the only one a caller is expected to retry.
"""

from __future__ import annotations


class DeliveryError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ReferentialViolation(DeliveryError):
    """A reference points to a missing or mismatched entity."""


class ConstraintViolation(DeliveryError):
    """A domain rule was broken (range, uniqueness, enumerated value)."""


class InvalidTransition(DeliveryError):
    """Order status change rejected by the lifecycle guard."""

    def __init__(self, current: str, requested: str, message: str | None = None) -> None:
        super().__init__(message or f"Cannot change order status from {current!r} to {requested!r}.")
        self.current = current
        self.requested = requested


class ConcurrentConflict(DeliveryError):
    """Another operation on the same order or rider won the race; retry."""

    retriable: bool = True


class NotFound(DeliveryError):
    """The targeted entity does not exist or was already removed."""
