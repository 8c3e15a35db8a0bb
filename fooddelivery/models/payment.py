"""Payment ORM model."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fooddelivery.db.base import Base

PAYMENT_METHODS = ("Credit Card", "Cash on Delivery", "PayPal", "JazzCash", "EasyPaisa")
PAYMENT_STATUSES = ("Paid", "Failed", "Refunded")


class Payment(Base):
    """Single payment settling one order."""

    __tablename__ = "payments"
    __table_args__ = (CheckConstraint("amount > 0", name="chk_payment_amount"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    order_id: Mapped[int] = mapped_column(ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, unique=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    payment_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    method: Mapped[str] = mapped_column(Enum(*PAYMENT_METHODS, name="payment_method"), nullable=False)
    status: Mapped[str] = mapped_column(Enum(*PAYMENT_STATUSES, name="payment_status"), nullable=False, default="Paid")

    order: Mapped["Order"] = relationship(back_populates="payment")
