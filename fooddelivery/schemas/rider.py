"""Rider API schemas."""

from pydantic import BaseModel, ConfigDict


class RiderRead(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    vehicle_type: str
    is_available: bool

    model_config = ConfigDict(from_attributes=True)
