"""Order API schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fooddelivery.utils.time import as_utc


class OrderCreate(BaseModel):
    """Open a new order."""

    customer_id: int
    restaurant_id: int
    address_id: int


class OrderItemCreate(BaseModel):
    """Add a line to an order."""

    menu_item_id: int
    quantity: int = Field(default=1, ge=1)


class OrderItemUpdate(BaseModel):
    """Change a line's quantity."""

    quantity: int = Field(ge=1)


class OrderStatusUpdate(BaseModel):
    status: str


class RiderAssignment(BaseModel):
    rider_id: int


class OrderItemRead(BaseModel):
    """Serialized order line."""

    id: int
    order_id: int
    menu_item_id: int
    quantity: int
    unit_price: Decimal
    line_total: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderRead(BaseModel):
    """Serialized order with its lines."""

    id: int
    customer_id: int
    restaurant_id: int
    address_id: int
    rider_id: int | None
    order_date: datetime
    status: str
    total_amount: Decimal
    items: list[OrderItemRead] = []

    model_config = ConfigDict(from_attributes=True)

    @field_validator("order_date")
    @classmethod
    def _order_date_utc(cls, value: datetime) -> datetime:
        return as_utc(value)
