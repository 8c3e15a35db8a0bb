"""Order models: the order header and its captured line items."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Index, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fooddelivery.db.base import Base

ORDER_STATUSES = ("Pending", "Preparing", "Out for Delivery", "Delivered", "Cancelled")


class Order(Base):
    """Customer order; ``total_amount`` is a cached sum of its line items."""

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(primary_key=True)
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id"), nullable=False)
    restaurant_id: Mapped[int] = mapped_column(ForeignKey("restaurants.id"), nullable=False)
    address_id: Mapped[int] = mapped_column(ForeignKey("addresses.id"), nullable=False)
    rider_id: Mapped[int | None] = mapped_column(ForeignKey("riders.id"), nullable=True)
    order_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    status: Mapped[str] = mapped_column(Enum(*ORDER_STATUSES, name="order_status"), nullable=False, default="Pending")
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    customer: Mapped["Customer"] = relationship(back_populates="orders")
    restaurant: Mapped["Restaurant"] = relationship(back_populates="orders")
    address: Mapped["Address"] = relationship()
    rider: Mapped["Rider | None"] = relationship(back_populates="orders")
    items: Mapped[list["OrderItem"]] = relationship(back_populates="order", cascade="all, delete-orphan")
    payment: Mapped["Payment | None"] = relationship(back_populates="order", uselist=False, cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="chk_order_total"),
        Index("idx_order_customer", "customer_id"),
        Index("idx_order_restaurant", "restaurant_id"),
        Index("idx_order_status", "status"),
        Index("idx_order_rider", "rider_id"),
    )
    __mapper_args__ = {"version_id_col": version}


class OrderItem(Base):
    """Line item with the menu price captured when it was added."""

    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(primary_key=True)
    order_id: Mapped[int] = mapped_column(ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    menu_item_id: Mapped[int] = mapped_column(ForeignKey("menu_items.id"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    order: Mapped[Order] = relationship(back_populates="items")
    menu_item: Mapped["MenuItem"] = relationship(back_populates="order_items")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="chk_orderitem_qty"),
        CheckConstraint("unit_price > 0", name="chk_orderitem_price"),
        Index("idx_orderitem_order", "order_id"),
    )

    @property
    def line_total(self) -> Decimal:
        return self.quantity * self.unit_price
