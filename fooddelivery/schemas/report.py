"""Read-only report rows built by :mod:`fooddelivery.services.reporting`."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, field_validator

from fooddelivery.utils.time import as_utc


class RestaurantRating(BaseModel):
    """Review aggregate for one restaurant."""

    restaurant_id: int
    restaurant_name: str
    location: str
    review_count: int
    average_rating: Decimal | None
    five_star_count: int
    low_rating_count: int


class RestaurantRevenue(BaseModel):
    """Order aggregate for one restaurant over a date range."""

    restaurant_id: int
    restaurant_name: str
    location: str
    total_orders: int
    gross_revenue: Decimal
    unique_customers: int
    avg_order_value: Decimal | None
    cancelled_orders: int


class OrderSummary(BaseModel):
    """Order joined with its customer, restaurant, address and rider."""

    order_id: int
    order_date: datetime
    status: str
    total_amount: Decimal
    customer_name: str
    customer_email: str
    restaurant_name: str
    restaurant_location: str
    rider_name: str | None
    rider_vehicle: str | None
    delivery_city: str
    delivery_street: str

    @field_validator("order_date")
    @classmethod
    def _order_date_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class PopularItem(BaseModel):
    item_id: int
    item_name: str
    category: str
    restaurant: str
    total_units_sold: int
    times_ordered: int
    avg_price: Decimal
