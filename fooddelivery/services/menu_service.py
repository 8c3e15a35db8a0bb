"""Menu categories and items shared by API routes and seeding."""

from decimal import Decimal

from sqlalchemy.orm import Session

from fooddelivery.core.errors import NotFound, ReferentialViolation
from fooddelivery.db.unit_of_work import UnitOfWork
from fooddelivery.models import Category, MenuItem, Restaurant
from fooddelivery.services.validation import require_positive_amount, require_text


def add_category(db: Session, restaurant_id: int, name: str) -> Category:
    """Create a menu category for one restaurant."""
    with UnitOfWork(db):
        if db.get(Restaurant, restaurant_id) is None:
            raise ReferentialViolation(f"Restaurant {restaurant_id} does not exist.")
        category = Category(restaurant_id=restaurant_id, name=require_text(name, "Category name"))
        db.add(category)
        db.flush()
    return category


def add_menu_item(
    db: Session,
    category_id: int,
    *,
    name: str,
    price: Decimal | int | str,
    description: str | None = None,
    is_available: bool = True,
) -> MenuItem:
    """Create and persist a menu item."""
    with UnitOfWork(db):
        if db.get(Category, category_id) is None:
            raise ReferentialViolation(f"Category {category_id} does not exist.")
        item = MenuItem(
            category_id=category_id,
            name=require_text(name, "Menu item name"),
            description=description,
            price=require_positive_amount(price, "Price"),
            is_available=is_available,
        )
        db.add(item)
        db.flush()
    return item


def get_menu_item(db: Session, menu_item_id: int) -> MenuItem:
    item = db.get(MenuItem, menu_item_id)
    if item is None:
        raise NotFound(f"Menu item {menu_item_id} not found.")
    return item


def set_menu_item_price(db: Session, menu_item_id: int, price: Decimal | int | str) -> MenuItem:
    """Change the list price; lines already on orders keep their captured price."""
    with UnitOfWork(db):
        item = get_menu_item(db, menu_item_id)
        item.price = require_positive_amount(price, "Price")
    return item


def set_menu_item_availability(db: Session, menu_item_id: int, is_available: bool) -> MenuItem:
    with UnitOfWork(db):
        item = get_menu_item(db, menu_item_id)
        item.is_available = is_available
    return item
