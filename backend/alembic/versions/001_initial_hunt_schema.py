"""Create offers, locations, transactions and wallets

Revision ID: 001
Revises:
Create Date: 2026-10-18

Also normalizes legacy status values: locations with no status (or the
old default 'pending') become 'approved', offers with no status become
'active'.
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "offers",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Float(), nullable=False, server_default="0"),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=True, server_default="active"),
        sa.Column("lat", sa.Float(), nullable=False),
        sa.Column("lng", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_offers_category", "offers", ["category"])
    op.create_index("ix_offers_lat_lng", "offers", ["lat", "lng"])

    op.create_table(
        "locations",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("vehicle_type", sa.String(), nullable=True),
        sa.Column("shop_name", sa.String(), nullable=False, server_default=""),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("photo_url", sa.String(), nullable=False, server_default=""),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("status", sa.String(), nullable=True, server_default="pending"),
        sa.Column("is_shadow", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("activation_status", sa.String(), nullable=True),
        sa.Column("asset_type", sa.String(), nullable=True),
        sa.Column("geom_lat", sa.Float(), nullable=True),
        sa.Column("geom_lng", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_locations_user_id", "locations", ["user_id"])
    op.create_index("ix_locations_category_geom", "locations", ["category", "geom_lat", "geom_lng"])

    op.create_table(
        "transactions",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("vehicle_type", sa.String(), nullable=True),
        sa.Column("type", sa.String(), nullable=False, server_default="earning"),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_transactions_user_id", "transactions", ["user_id"])

    op.create_table(
        "wallets",
        sa.Column("user_id", sa.String(), primary_key=True),
        sa.Column("balance_moto", sa.Float(), nullable=False, server_default="0"),
        sa.Column("balance_car", sa.Float(), nullable=False, server_default="0"),
        sa.Column("lifetime_points", sa.Float(), nullable=False, server_default="0"),
        sa.Column("goal", sa.Float(), nullable=False, server_default="500"),
        sa.Column("status", sa.String(), nullable=False, server_default="active"),
        sa.Column("level_name", sa.String(), nullable=False, server_default="Novato"),
    )

    conn = op.get_bind()
    conn.execute(sa.text("UPDATE locations SET status = 'approved' WHERE status IS NULL OR status = 'pending'"))
    conn.execute(sa.text("UPDATE offers SET status = 'active' WHERE status IS NULL"))


def downgrade():
    op.drop_table("wallets")
    op.drop_index("ix_transactions_user_id", table_name="transactions")
    op.drop_table("transactions")
    op.drop_index("ix_locations_category_geom", table_name="locations")
    op.drop_index("ix_locations_user_id", table_name="locations")
    op.drop_table("locations")
    op.drop_index("ix_offers_lat_lng", table_name="offers")
    op.drop_index("ix_offers_category", table_name="offers")
    op.drop_table("offers")
