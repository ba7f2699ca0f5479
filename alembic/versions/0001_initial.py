"""initial tables

Revision ID: 0001_initial
Revises:
Create Date: 2024-01-01 00:00:00

"""
from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "products",
        sa.Column("id", sa.String(50), primary_key=True),
        sa.Column("owner_id", sa.String(100), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100)),
        sa.Column("price", sa.Float, nullable=False, server_default="0"),
        sa.Column("cost_price", sa.Float, nullable=False, server_default="0"),
        sa.Column("stock", sa.Integer, nullable=False, server_default="0"),
        sa.Column("min_stock", sa.Integer, nullable=False, server_default="0"),
        sa.Column("unit", sa.String(30), nullable=False, server_default="pcs"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("owner_id", "name", name="uq_products_owner_name"),
    )
    op.create_index("ix_products_owner_id", "products", ["owner_id"])
    op.create_index("ix_products_owner_category", "products", ["owner_id", "category"])

    op.create_table(
        "sales",
        sa.Column("id", sa.String(50), primary_key=True),
        sa.Column("owner_id", sa.String(100), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("product_id", sa.String(50), nullable=False),
        sa.Column("product_name", sa.String(255), nullable=False),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.Column("unit_price", sa.Float, nullable=False),
        sa.Column("total", sa.Float, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_sales_owner_date", "sales", ["owner_id", "date"])
    op.create_index("ix_sales_owner_product", "sales", ["owner_id", "product_id"])

    op.create_table(
        "business_settings",
        sa.Column("id", sa.String(50), primary_key=True),
        sa.Column("owner_id", sa.String(100), nullable=False, unique=True),
        sa.Column("business_name", sa.String(255), nullable=False),
        sa.Column("store_address", sa.String(500), nullable=False),
        sa.Column("business_type", sa.String(20), nullable=False),
        sa.Column("currency", sa.String(10), nullable=False),
        sa.Column("timezone", sa.String(64), nullable=False),
        sa.Column("low_stock_threshold", sa.Integer, nullable=False),
        sa.Column("enable_notifications", sa.Boolean, nullable=False),
        sa.Column("enable_auto_reports", sa.Boolean, nullable=False),
        sa.Column("report_frequency", sa.String(10), nullable=False),
        sa.Column("notification_email", sa.String(255), nullable=False),
        sa.Column("categories", sa.JSON, nullable=False),
        sa.Column("units", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "activity_logs",
        sa.Column("id", sa.String(50), primary_key=True),
        sa.Column("owner_id", sa.String(100), nullable=False),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("details", sa.String(1000), nullable=False),
        sa.Column("created_at", sa.DateTime, nullable=False),
    )
    op.create_index("ix_activity_logs_owner_created", "activity_logs", ["owner_id", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_activity_logs_owner_created", table_name="activity_logs")
    op.drop_table("activity_logs")
    op.drop_table("business_settings")
    op.drop_index("ix_sales_owner_product", table_name="sales")
    op.drop_index("ix_sales_owner_date", table_name="sales")
    op.drop_table("sales")
    op.drop_index("ix_products_owner_category", table_name="products")
    op.drop_index("ix_products_owner_id", table_name="products")
    op.drop_table("products")
