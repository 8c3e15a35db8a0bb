"""Rider registration and lookups.

``Rider.is_available`` has no setter here; it is written only by
:mod:`fooddelivery.services.rider_availability`.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from fooddelivery.core.errors import NotFound
from fooddelivery.db.unit_of_work import UnitOfWork
from fooddelivery.models import VEHICLE_TYPES, Rider
from fooddelivery.services.validation import (
    ensure_unique,
    require_choice,
    require_email,
    require_phone,
    require_text,
)


def register_rider(db: Session, *, name: str, email: str, phone: str, vehicle_type: str) -> Rider:
    """Create a rider; new riders start available."""
    with UnitOfWork(db):
        normalized_email = require_email(email)
        ensure_unique(db, Rider.email, normalized_email, "Rider email")
        rider = Rider(
            name=require_text(name, "Rider name"),
            email=normalized_email,
            phone=require_phone(phone),
            vehicle_type=require_choice(vehicle_type, VEHICLE_TYPES, "Vehicle type"),
            is_available=True,
        )
        db.add(rider)
        db.flush()
    return rider


def get_rider(db: Session, rider_id: int) -> Rider:
    rider = db.get(Rider, rider_id)
    if rider is None:
        raise NotFound(f"Rider {rider_id} not found.")
    return rider


def list_available_riders(db: Session) -> list[Rider]:
    return list(db.scalars(select(Rider).where(Rider.is_available.is_(True)).order_by(Rider.id.asc())).all())
