"""Delivery rider ORM model."""

from sqlalchemy import Boolean, CheckConstraint, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fooddelivery.db.base import Base

VEHICLE_TYPES = ("Bike", "Car", "Scooter")


class Rider(Base):
    """Courier delivering orders.

    ``is_available`` is a projection of the rider's assignments and is written
    only by :mod:`fooddelivery.services.rider_availability`.
    """

    __tablename__ = "riders"
    __table_args__ = (CheckConstraint("length(phone) >= 10", name="chk_rider_phone"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    phone: Mapped[str] = mapped_column(String(15), nullable=False)
    vehicle_type: Mapped[str] = mapped_column(Enum(*VEHICLE_TYPES, name="vehicle_type"), nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    orders: Mapped[list["Order"]] = relationship(back_populates="rider")

    __mapper_args__ = {"version_id_col": version}
