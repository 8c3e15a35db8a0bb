"""initial order core schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

ORDER_STATUSES = ("Pending", "Preparing", "Out for Delivery", "Delivered", "Cancelled")
PAYMENT_METHODS = ("Credit Card", "Cash on Delivery", "PayPal", "JazzCash", "EasyPaisa")
PAYMENT_STATUSES = ("Paid", "Failed", "Refunded")
VEHICLE_TYPES = ("Bike", "Car", "Scooter")


def upgrade() -> None:
    op.create_table(
        "customers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=100), nullable=False),
        sa.Column("phone", sa.String(length=15), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("length(phone) >= 10", name="chk_customer_phone"),
    )
    op.create_index("ix_customers_email", "customers", ["email"], unique=True)
    op.create_table(
        "addresses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("customer_id", sa.Integer(), sa.ForeignKey("customers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("street", sa.String(length=255), nullable=False),
        sa.Column("city", sa.String(length=100), nullable=False),
        sa.Column("postal_code", sa.String(length=10), nullable=False),
        sa.Column("country", sa.String(length=50), nullable=False),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.text("0")),
    )
    op.create_table(
        "restaurants",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=15), nullable=True),
        sa.Column("email", sa.String(length=100), nullable=False, unique=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("1")),
    )
    op.create_table(
        "riders",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=100), nullable=False, unique=True),
        sa.Column("phone", sa.String(length=15), nullable=False),
        sa.Column("vehicle_type", sa.Enum(*VEHICLE_TYPES, name="vehicle_type"), nullable=False),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.text("1")),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.CheckConstraint("length(phone) >= 10", name="chk_rider_phone"),
    )
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("restaurant_id", sa.Integer(), sa.ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
    )
    op.create_index("ix_categories_restaurant_id", "categories", ["restaurant_id"])
    op.create_table(
        "menu_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.text("1")),
        sa.CheckConstraint("price > 0", name="chk_menuitem_price"),
    )
    op.create_index("ix_menu_items_category_id", "menu_items", ["category_id"])
    op.create_table(
        "orders",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("customer_id", sa.Integer(), sa.ForeignKey("customers.id"), nullable=False),
        sa.Column("restaurant_id", sa.Integer(), sa.ForeignKey("restaurants.id"), nullable=False),
        sa.Column("address_id", sa.Integer(), sa.ForeignKey("addresses.id"), nullable=False),
        sa.Column("rider_id", sa.Integer(), sa.ForeignKey("riders.id"), nullable=True),
        sa.Column("order_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "status",
            sa.Enum(*ORDER_STATUSES, name="order_status"),
            nullable=False,
            server_default="Pending",
        ),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=False, server_default=sa.text("0.00")),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.CheckConstraint("total_amount >= 0", name="chk_order_total"),
    )
    op.create_index("idx_order_customer", "orders", ["customer_id"])
    op.create_index("idx_order_restaurant", "orders", ["restaurant_id"])
    op.create_index("idx_order_status", "orders", ["status"])
    op.create_index("idx_order_rider", "orders", ["rider_id"])
    op.create_table(
        "order_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
        sa.Column("menu_item_id", sa.Integer(), sa.ForeignKey("menu_items.id"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_price", sa.Numeric(10, 2), nullable=False),
        sa.CheckConstraint("quantity > 0", name="chk_orderitem_qty"),
        sa.CheckConstraint("unit_price > 0", name="chk_orderitem_price"),
    )
    op.create_index("idx_orderitem_order", "order_items", ["order_id"])
    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "order_id",
            sa.Integer(),
            sa.ForeignKey("orders.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("payment_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("method", sa.Enum(*PAYMENT_METHODS, name="payment_method"), nullable=False),
        sa.Column(
            "status",
            sa.Enum(*PAYMENT_STATUSES, name="payment_status"),
            nullable=False,
            server_default="Paid",
        ),
        sa.CheckConstraint("amount > 0", name="chk_payment_amount"),
    )
    op.create_table(
        "reviews",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("customer_id", sa.Integer(), sa.ForeignKey("customers.id"), nullable=False),
        sa.Column("restaurant_id", sa.Integer(), sa.ForeignKey("restaurants.id"), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("review_date", sa.Date(), nullable=False),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="chk_review_rating"),
    )
    op.create_index("idx_review_restaurant", "reviews", ["restaurant_id"])
    op.create_index("idx_review_customer", "reviews", ["customer_id"])


def downgrade() -> None:
    op.drop_index("idx_review_customer", table_name="reviews")
    op.drop_index("idx_review_restaurant", table_name="reviews")
    op.drop_table("reviews")
    op.drop_table("payments")
    op.drop_index("idx_orderitem_order", table_name="order_items")
    op.drop_table("order_items")
    op.drop_index("idx_order_rider", table_name="orders")
    op.drop_index("idx_order_status", table_name="orders")
    op.drop_index("idx_order_restaurant", table_name="orders")
    op.drop_index("idx_order_customer", table_name="orders")
    op.drop_table("orders")
    op.drop_index("ix_menu_items_category_id", table_name="menu_items")
    op.drop_table("menu_items")
    op.drop_index("ix_categories_restaurant_id", table_name="categories")
    op.drop_table("categories")
    op.drop_table("riders")
    op.drop_table("restaurants")
    op.drop_table("addresses")
    op.drop_index("ix_customers_email", table_name="customers")
    op.drop_table("customers")
