"""Read-only reports computed directly from committed order state.

Nothing here writes or caches. Each query filters on an indexed column
(customer, category, restaurant, rider, status).
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Select, case, func, select
from sqlalchemy.engine import RowMapping
from sqlalchemy.orm import Session

from fooddelivery.core.errors import NotFound
from fooddelivery.models import Address, Category, Customer, MenuItem, Order, OrderItem, Restaurant, Review, Rider
from fooddelivery.schemas.report import OrderSummary, PopularItem, RestaurantRating, RestaurantRevenue
from fooddelivery.services.order_status import ACTIVE_STATUSES
from fooddelivery.services.validation import CENT
from fooddelivery.utils.time import as_utc


def _money(value: object) -> Decimal | None:
    if value is None:
        return None
    return Decimal(str(value)).quantize(CENT)


def list_customer_orders(db: Session, customer_id: int) -> list[Order]:
    """Return a customer's order history, newest first."""
    return list(
        db.scalars(
            select(Order)
            .where(Order.customer_id == customer_id)
            .order_by(Order.order_date.desc(), Order.id.desc())
        ).all()
    )


def list_available_items(db: Session, category_id: int) -> list[MenuItem]:
    """Return orderable items of one category, cheapest first."""
    return list(
        db.scalars(
            select(MenuItem)
            .where(MenuItem.category_id == category_id, MenuItem.is_available.is_(True))
            .order_by(MenuItem.price.asc(), MenuItem.id.asc())
        ).all()
    )


def list_rider_active_orders(db: Session, rider_id: int) -> list[Order]:
    """Return the rider's orders that are not delivered or cancelled yet."""
    return list(
        db.scalars(
            select(Order)
            .where(Order.rider_id == rider_id, Order.status.in_(ACTIVE_STATUSES))
            .order_by(Order.order_date.desc(), Order.id.desc())
        ).all()
    )


def _ratings_statement() -> Select:
    return (
        select(
            Restaurant.id.label("restaurant_id"),
            Restaurant.name.label("restaurant_name"),
            Restaurant.location.label("location"),
            func.count(Review.id).label("review_count"),
            func.avg(Review.rating).label("average_rating"),
            func.coalesce(func.sum(case((Review.rating == 5, 1), else_=0)), 0).label("five_star_count"),
            func.coalesce(func.sum(case((Review.rating <= 2, 1), else_=0)), 0).label("low_rating_count"),
        )
        .select_from(Restaurant)
        .outerjoin(Review, Review.restaurant_id == Restaurant.id)
        .group_by(Restaurant.id, Restaurant.name, Restaurant.location)
    )


def _to_rating(row: RowMapping) -> RestaurantRating:
    values = dict(row)
    values["average_rating"] = _money(values["average_rating"])
    return RestaurantRating(**values)


def restaurant_ratings(db: Session) -> list[RestaurantRating]:
    """Return review aggregates per restaurant, best rated first, unrated last."""
    rows = [_to_rating(row) for row in db.execute(_ratings_statement()).mappings().all()]
    return sorted(
        rows,
        key=lambda item: (item.average_rating is None, -(item.average_rating or 0), item.restaurant_id),
    )


def restaurant_rating(db: Session, restaurant_id: int) -> RestaurantRating:
    row = db.execute(_ratings_statement().where(Restaurant.id == restaurant_id)).mappings().first()
    if row is None:
        raise NotFound(f"Restaurant {restaurant_id} not found.")
    return _to_rating(row)


def restaurant_revenue(db: Session, start: datetime, end: datetime) -> list[RestaurantRevenue]:
    """Return order totals per restaurant for orders placed in ``[start, end)``.

    Naive bounds are taken as UTC; bounds with an offset are shifted to UTC.
    """
    start, end = as_utc(start), as_utc(end)
    statement = (
        select(
            Restaurant.id.label("restaurant_id"),
            Restaurant.name.label("restaurant_name"),
            Restaurant.location.label("location"),
            func.count(Order.id).label("total_orders"),
            func.coalesce(func.sum(Order.total_amount), 0).label("gross_revenue"),
            func.count(func.distinct(Order.customer_id)).label("unique_customers"),
            func.avg(Order.total_amount).label("avg_order_value"),
            func.coalesce(func.sum(case((Order.status == "Cancelled", 1), else_=0)), 0).label("cancelled_orders"),
        )
        .select_from(Restaurant)
        .outerjoin(
            Order,
            (Order.restaurant_id == Restaurant.id) & (Order.order_date >= start) & (Order.order_date < end),
        )
        .group_by(Restaurant.id, Restaurant.name, Restaurant.location)
    )
    rows: list[RestaurantRevenue] = []
    for row in db.execute(statement).mappings().all():
        values = dict(row)
        values["gross_revenue"] = _money(values["gross_revenue"])
        values["avg_order_value"] = _money(values["avg_order_value"])
        rows.append(RestaurantRevenue(**values))
    return sorted(rows, key=lambda item: (-item.gross_revenue, item.restaurant_id))


def order_summary(db: Session, order_id: int) -> OrderSummary:
    statement = (
        select(
            Order.id.label("order_id"),
            Order.order_date,
            Order.status,
            Order.total_amount,
            Customer.name.label("customer_name"),
            Customer.email.label("customer_email"),
            Restaurant.name.label("restaurant_name"),
            Restaurant.location.label("restaurant_location"),
            Rider.name.label("rider_name"),
            Rider.vehicle_type.label("rider_vehicle"),
            Address.city.label("delivery_city"),
            Address.street.label("delivery_street"),
        )
        .join(Customer, Order.customer_id == Customer.id)
        .join(Restaurant, Order.restaurant_id == Restaurant.id)
        .join(Address, Order.address_id == Address.id)
        .outerjoin(Rider, Order.rider_id == Rider.id)
        .where(Order.id == order_id)
    )
    row = db.execute(statement).mappings().first()
    if row is None:
        raise NotFound(f"Order {order_id} not found.")
    return OrderSummary(**row)


def popular_items(db: Session, limit: int = 10) -> list[PopularItem]:
    """Return the most ordered menu items by units sold."""
    units = func.sum(OrderItem.quantity).label("total_units_sold")
    statement = (
        select(
            MenuItem.id.label("item_id"),
            MenuItem.name.label("item_name"),
            Category.name.label("category"),
            Restaurant.name.label("restaurant"),
            units,
            func.count(func.distinct(OrderItem.order_id)).label("times_ordered"),
            func.avg(OrderItem.unit_price).label("avg_price"),
        )
        .join(OrderItem, OrderItem.menu_item_id == MenuItem.id)
        .join(Category, MenuItem.category_id == Category.id)
        .join(Restaurant, Category.restaurant_id == Restaurant.id)
        .group_by(MenuItem.id, MenuItem.name, Category.name, Restaurant.name)
        .order_by(units.desc(), MenuItem.id.asc())
        .limit(limit)
    )
    items: list[PopularItem] = []
    for row in db.execute(statement).mappings().all():
        values = dict(row)
        values["avg_price"] = _money(values["avg_price"])
        items.append(PopularItem(**values))
    return items
