"""Create storefront tables

Revision ID: 4f1c2a9d0b7e
Revises: 
Create Date: 2026-10-16 10:02:41.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# Revision identifiers used by Alembic
revision: str = '4f1c2a9d0b7e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('customer_name', sa.String(), nullable=False),
        sa.Column('customer_email', sa.String(), nullable=True),
        sa.Column('customer_phone', sa.String(), nullable=False),
        sa.Column('order_description', sa.String(), nullable=False),
        sa.Column('delivery_location', sa.String(), nullable=False),
        sa.Column('orderplace', sa.Boolean(), nullable=False),
        sa.Column('coupon_code', sa.String(), nullable=True),
        sa.Column('order_date', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('order_status', sa.String(), nullable=False),
        sa.Column('is_preorder', sa.Boolean(), nullable=False),
        sa.Column('product_ids', sa.JSON(), nullable=False),
        sa.Column('product_names', sa.JSON(), nullable=False),
        sa.Column('product_sizes', sa.JSON(), nullable=False),
        sa.Column('quantities', sa.JSON(), nullable=False),
        sa.Column('unit_prices', sa.JSON(), nullable=False),
        sa.Column('total_prices', sa.JSON(), nullable=False),
    )
    op.create_index('ix_orders_id', 'orders', ['id'])
    op.create_index('ix_orders_customer_phone', 'orders', ['customer_phone'])
    op.create_index('ix_orders_order_date', 'orders', ['order_date'])

    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('item_number', sa.Integer(), sa.CheckConstraint('item_number >= 0'), nullable=False),
        sa.Column('real_price', sa.Float(), sa.CheckConstraint('real_price >= 0'), nullable=False),
        sa.Column('fake_price', sa.Float(), nullable=True),
        sa.Column('discount', sa.Boolean(), nullable=False),
        sa.Column('discount_title', sa.String(), nullable=True),
        sa.Column('discount_price', sa.Float(), nullable=True),
        sa.Column('image_urls', sa.JSON(), nullable=False),
        sa.Column('sizes_available', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_products_id', 'products', ['id'])
    op.create_index('ix_products_name', 'products', ['name'])
    op.create_index('ix_products_is_active', 'products', ['is_active'])

    op.create_table(
        'sales',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('product_name', sa.String(), nullable=True),
        sa.Column('quantity_sold', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_sales_id', 'sales', ['id'])
    op.create_index('ix_sales_product_id', 'sales', ['product_id'], unique=True)

    op.create_table(
        'customers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=False),
        sa.Column('total_items_purchased', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_customers_id', 'customers', ['id'])
    op.create_index('ix_customers_phone', 'customers', ['phone'], unique=True)

    op.create_table(
        'auth_users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('user_metadata', sa.JSON(), nullable=False),
        sa.Column('email_confirmed', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_auth_users_id', 'auth_users', ['id'])
    op.create_index('ix_auth_users_email', 'auth_users', ['email'], unique=True)

    op.create_table(
        'admins',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
    )
    op.create_index('ix_admins_id', 'admins', ['id'])
    op.create_index('ix_admins_role', 'admins', ['role'])

    op.create_table(
        'company_info',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('phone_number', sa.String(), nullable=True),
        sa.Column('instagram', sa.String(), nullable=True),
        sa.Column('whatsapp', sa.String(), nullable=True),
        sa.Column('telegram', sa.String(), nullable=True),
        sa.Column('ad_img', sa.JSON(), nullable=False),
    )
    op.create_index('ix_company_info_id', 'company_info', ['id'])

    op.create_table(
        'kv_store',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('namespace', sa.String(), nullable=False),
        sa.Column('key', sa.String(), nullable=False),
        sa.Column('value', sa.Text(), nullable=True),
        sa.UniqueConstraint('namespace', 'key', name='uq_kv_namespace_key'),
    )
    op.create_index('ix_kv_store_id', 'kv_store', ['id'])
    op.create_index('ix_kv_store_namespace', 'kv_store', ['namespace'])

    op.create_table(
        'logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('ts', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('user_id', sa.String(), nullable=True),
        sa.Column('action', sa.String(50)),
        sa.Column('resource', sa.String(50)),
        sa.Column('status', sa.String(20)),
        sa.Column('ip', sa.String(64), nullable=True),
        sa.Column('meta', sa.JSON(), nullable=True),
    )
    for col in ('id', 'ts', 'user_id', 'action', 'resource', 'status'):
        op.create_index(f'ix_logs_{col}', 'logs', [col])


def downgrade() -> None:
    """Downgrade schema."""
    for table in ('logs', 'kv_store', 'company_info', 'admins', 'auth_users',
                  'customers', 'sales', 'products', 'orders'):
        op.drop_table(table)
