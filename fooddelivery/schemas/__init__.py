"""Schema exports."""

from fooddelivery.schemas.menu import MenuItemRead
from fooddelivery.schemas.order import (
    OrderCreate,
    OrderItemCreate,
    OrderItemRead,
    OrderItemUpdate,
    OrderRead,
    OrderStatusUpdate,
    RiderAssignment,
)
from fooddelivery.schemas.report import OrderSummary, PopularItem, RestaurantRating, RestaurantRevenue
from fooddelivery.schemas.rider import RiderRead

__all__ = [
    "MenuItemRead",
    "OrderCreate",
    "OrderItemCreate",
    "OrderItemRead",
    "OrderItemUpdate",
    "OrderRead",
    "OrderStatusUpdate",
    "RiderAssignment",
    "OrderSummary",
    "PopularItem",
    "RestaurantRating",
    "RestaurantRevenue",
    "RiderRead",
]
