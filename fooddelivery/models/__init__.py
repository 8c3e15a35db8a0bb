"""Application models package."""

from fooddelivery.models.customer import Address, Customer
from fooddelivery.models.menu import Category, MenuItem
from fooddelivery.models.order import ORDER_STATUSES, Order, OrderItem
from fooddelivery.models.payment import PAYMENT_METHODS, PAYMENT_STATUSES, Payment
from fooddelivery.models.restaurant import Restaurant
from fooddelivery.models.review import Review
from fooddelivery.models.rider import VEHICLE_TYPES, Rider

__all__ = [
    "Customer", "Address", "Restaurant", "Category", "MenuItem", "Rider", "Order", "OrderItem", "Payment", "Review",
    "ORDER_STATUSES", "PAYMENT_METHODS", "PAYMENT_STATUSES", "VEHICLE_TYPES",
]
