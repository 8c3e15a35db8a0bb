"""Database seeding helpers."""

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from fooddelivery.core.config import settings
from fooddelivery.models import Restaurant
from fooddelivery.services.menu_service import add_category, add_menu_item
from fooddelivery.services.restaurant_service import register_restaurant
from fooddelivery.services.rider_service import register_rider

logger = logging.getLogger(__name__)

DEMO_MENU: dict[str, list[tuple[str, Decimal]]] = {
    "Karahi": [("Chicken Karahi", Decimal("1450.00")), ("Mutton Karahi", Decimal("2100.00"))],
    "Bread": [("Naan", Decimal("60.00")), ("Roghni Naan", Decimal("90.00"))],
    "Drinks": [("Mint Lemonade", Decimal("250.00"))],
}


def ensure_seed_data(session: Session) -> bool:
    """Create a demo restaurant, menu and rider in development only.

    Returns:
        bool: True when demo rows were inserted by this call.
    """
    if settings.app_env != "dev" or not settings.seed_demo_data:
        return False

    existing = session.scalar(select(Restaurant.id).limit(1))
    if existing is not None:
        logger.info("[BOOTSTRAP] Restaurants present; skipping demo seed")
        return False

    restaurant = register_restaurant(
        session,
        name="Demo Kitchen",
        location="Lahore",
        email="kitchen@demo.local",
        phone="03001234567",
    )
    for category_name, items in DEMO_MENU.items():
        category = add_category(session, restaurant.id, category_name)
        for item_name, price in items:
            add_menu_item(session, category.id, name=item_name, price=price)
    register_rider(session, name="Demo Rider", email="rider@demo.local", phone="03007654321", vehicle_type="Bike")
    logger.warning("[BOOTSTRAP] Demo data seeded into %s", settings.database_url)
    return True
