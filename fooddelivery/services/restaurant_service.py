"""Restaurant registration and lookups."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from fooddelivery.core.errors import ConstraintViolation, NotFound
from fooddelivery.db.unit_of_work import UnitOfWork
from fooddelivery.models import Restaurant
from fooddelivery.services.validation import ensure_unique, require_email, require_phone, require_text


def register_restaurant(
    db: Session,
    *,
    name: str,
    location: str,
    email: str,
    phone: str | None = None,
    is_active: bool = True,
) -> Restaurant:
    """Create and persist a restaurant."""
    with UnitOfWork(db):
        normalized_email = require_email(email)
        ensure_unique(db, Restaurant.email, normalized_email, "Restaurant email")
        restaurant = Restaurant(
            name=require_text(name, "Restaurant name"),
            location=require_text(location, "Location"),
            email=normalized_email,
            phone=require_phone(phone) if phone else None,
            is_active=is_active,
        )
        db.add(restaurant)
        db.flush()
    return restaurant


def get_restaurant(db: Session, restaurant_id: int) -> Restaurant:
    restaurant = db.get(Restaurant, restaurant_id)
    if restaurant is None:
        raise NotFound(f"Restaurant {restaurant_id} not found.")
    return restaurant


def list_active_restaurants(db: Session) -> list[Restaurant]:
    """Return restaurants currently accepting orders."""
    return list(
        db.scalars(select(Restaurant).where(Restaurant.is_active.is_(True)).order_by(Restaurant.name.asc())).all()
    )


def set_restaurant_active(db: Session, restaurant_id: int, is_active: bool) -> Restaurant:
    """Open or close a restaurant for new orders; existing orders are untouched."""
    with UnitOfWork(db):
        restaurant = get_restaurant(db, restaurant_id)
        if not isinstance(is_active, bool):
            raise ConstraintViolation("is_active must be a boolean.")
        restaurant.is_active = is_active
    return restaurant
