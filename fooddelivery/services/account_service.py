"""Customer accounts and delivery addresses."""

from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from fooddelivery.core.config import settings
from fooddelivery.core.errors import ReferentialViolation
from fooddelivery.core.security import get_password_hash
from fooddelivery.db.unit_of_work import UnitOfWork
from fooddelivery.models import Address, Customer
from fooddelivery.services.validation import (
    ensure_unique,
    require_email,
    require_password,
    require_phone,
    require_text,
)

logger = logging.getLogger(__name__)


def get_customer_by_email(db: Session, email: str) -> Customer | None:
    return db.scalar(select(Customer).where(Customer.email == email.strip().lower()).limit(1))


def register_customer(db: Session, *, name: str, email: str, phone: str, password: str) -> Customer:
    """Create a customer; the password is stored only as a hash."""
    with UnitOfWork(db):
        normalized_email = require_email(email)
        ensure_unique(db, Customer.email, normalized_email, "Customer email")
        customer = Customer(
            name=require_text(name, "Customer name"),
            email=normalized_email,
            phone=require_phone(phone),
            password_hash=get_password_hash(require_password(password)),
        )
        db.add(customer)
        db.flush()

    logger.info("[ACCOUNT] Registered customer %s", customer.id)
    return customer


def add_address(
    db: Session,
    customer_id: int,
    *,
    street: str,
    city: str,
    postal_code: str,
    country: str | None = None,
    is_default: bool = False,
) -> Address:
    """Attach a delivery address; a new default clears the previous one."""
    with UnitOfWork(db):
        customer = db.get(Customer, customer_id)
        if customer is None:
            raise ReferentialViolation(f"Customer {customer_id} does not exist.")
        if is_default:
            db.execute(update(Address).where(Address.customer_id == customer.id).values(is_default=False))

        address = Address(
            customer_id=customer.id,
            street=require_text(street, "Street"),
            city=require_text(city, "City"),
            postal_code=require_text(postal_code, "Postal code"),
            country=country or settings.default_country,
            is_default=is_default,
        )
        db.add(address)
        db.flush()
    return address


def get_default_address(db: Session, customer_id: int) -> Address | None:
    return db.scalar(
        select(Address)
        .where(Address.customer_id == customer_id)
        .order_by(Address.is_default.desc(), Address.id.asc())
        .limit(1)
    )
