"""Menu API schemas."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class MenuItemRead(BaseModel):
    """Serialized menu item."""

    id: int
    category_id: int
    name: str
    description: str | None
    price: Decimal
    is_available: bool

    model_config = ConfigDict(from_attributes=True)
