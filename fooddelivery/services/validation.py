"""Domain checks applied before an entity write is accepted."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal, InvalidOperation
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from fooddelivery.core.errors import ConstraintViolation

MIN_PHONE_LENGTH: int = 10
MAX_PHONE_LENGTH: int = 15
MIN_RATING: int = 1
MAX_RATING: int = 5
CENT = Decimal("0.01")


def to_money(value: Decimal | int | str, field: str = "Amount") -> Decimal:
    """Convert to a two-place Decimal; floats are rejected to avoid rounding surprises."""
    if isinstance(value, (float, bool)):
        raise ConstraintViolation(f"{field} must be a decimal value, got {value!r}.")
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ConstraintViolation(f"{field} is not a valid amount: {value!r}.") from exc
    if not amount.is_finite():
        raise ConstraintViolation(f"{field} is not a valid amount: {value!r}.")
    return amount.quantize(CENT)


def require_positive_amount(value: Decimal | int | str, field: str = "Amount") -> Decimal:
    amount = to_money(value, field)
    if amount <= 0:
        raise ConstraintViolation(f"{field} must be greater than zero.")
    return amount


def require_positive_quantity(quantity: int) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ConstraintViolation(f"Quantity must be an integer, got {quantity!r}.")
    if quantity <= 0:
        raise ConstraintViolation("Quantity must be greater than zero.")
    return quantity


def require_phone(phone: str) -> str:
    cleaned = phone.strip()
    if not MIN_PHONE_LENGTH <= len(cleaned) <= MAX_PHONE_LENGTH:
        raise ConstraintViolation(
            f"Phone number must be {MIN_PHONE_LENGTH}-{MAX_PHONE_LENGTH} characters long."
        )
    return cleaned


def require_email(email: str) -> str:
    cleaned = email.strip().lower()
    local, _, domain = cleaned.partition("@")
    if not local or "." not in domain:
        raise ConstraintViolation(f"Invalid email address: {email!r}.")
    return cleaned


def require_text(value: str, field: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise ConstraintViolation(f"{field} must not be empty.")
    return cleaned


def require_rating(rating: int) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
        raise ConstraintViolation(f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}.")
    return rating


def require_choice(value: str, choices: Iterable[str], field: str) -> str:
    allowed = tuple(choices)
    if value not in allowed:
        raise ConstraintViolation(f"{field} must be one of {', '.join(allowed)}; got {value!r}.")
    return value


def ensure_unique(db: Session, column: Any, value: Any, label: str) -> None:
    """Reject a value already stored in a unique column."""
    existing = db.scalar(select(column).where(column == value).limit(1))
    if existing is not None:
        raise ConstraintViolation(f"{label} {value!r} is already registered.")


def require_password(password: str) -> str:
    if not password or not password.strip():
        raise ConstraintViolation("Password must not be empty.")
    return password
