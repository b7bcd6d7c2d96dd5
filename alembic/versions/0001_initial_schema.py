"""Initial schema - offices, users, vendors, orders, reorders, cc_emails

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Create all tables."""

    # ==========================================================================
    # Offices
    # ==========================================================================
    op.create_table(
        'offices',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('address', sa.String(500), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('manager_email', sa.String(255), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        *_timestamps(),
    )

    # ==========================================================================
    # Users
    # ==========================================================================
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('role', sa.String(50), nullable=False),
        sa.Column('office_id', sa.Uuid(), sa.ForeignKey('offices.id', ondelete='SET NULL'), nullable=True),
        sa.Column('token_version', sa.Integer(), server_default=sa.text('1'), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('idx_users_office_id', 'users', ['office_id'])

    # ==========================================================================
    # Vendors
    # ==========================================================================
    op.create_table(
        'vendors',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('contact_person', sa.String(255), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('address', sa.String(500), nullable=True),
        sa.Column('service_areas', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        *_timestamps(),
    )

    # ==========================================================================
    # Orders
    # ==========================================================================
    op.create_table(
        'orders',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('order_id', sa.String(50), nullable=False, unique=True),
        sa.Column('office_id', sa.Uuid(), sa.ForeignKey('offices.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('agent_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('installation_type', sa.String(20), nullable=False),
        sa.Column('property_type', sa.String(100), nullable=False),
        sa.Column('street_address', sa.String(255), nullable=False),
        sa.Column('city', sa.String(100), nullable=False),
        sa.Column('state', sa.String(2), nullable=False),
        sa.Column('zip_code', sa.String(10), nullable=False),
        sa.Column('contact_name', sa.String(255), nullable=True),
        sa.Column('contact_phone', sa.String(50), nullable=True),
        sa.Column('contact_email', sa.String(255), nullable=True),
        sa.Column('listing_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('expiration_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('installation_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completion_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('directions', sa.Text(), nullable=True),
        sa.Column('additional_info', sa.Text(), nullable=True),
        sa.Column('underwater_sprinkler', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('invisible_dog_fence', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('vendor_id', sa.Uuid(), sa.ForeignKey('vendors.id', ondelete='SET NULL'), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        *_timestamps(),
    )
    op.create_index('idx_orders_office_created', 'orders', ['office_id', 'created_at'])
    op.create_index('idx_orders_agent_id', 'orders', ['agent_id'])
    op.create_index('idx_orders_installation_date', 'orders', ['installation_date'])

    # ==========================================================================
    # Reorders
    # ==========================================================================
    op.create_table(
        'reorders',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('reorder_id', sa.String(50), nullable=False, unique=True),
        sa.Column('original_order_id', sa.Uuid(), sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('installation_type', sa.String(20), nullable=False),
        sa.Column('zip_code', sa.String(10), nullable=False),
        sa.Column('additional_info', sa.Text(), nullable=True),
        sa.Column('listing_agent_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        *_timestamps(),
    )
    op.create_index('idx_reorders_original_order_id', 'reorders', ['original_order_id'])

    # ==========================================================================
    # CC Emails
    # ==========================================================================
    op.create_table(
        'cc_emails',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('office_id', sa.Uuid(), sa.ForeignKey('offices.id', ondelete='CASCADE'), nullable=False),
        sa.Column('agent_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=True),
        sa.Column('entered_by_user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('modified_by_user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        *_timestamps(),
    )
    op.create_index('idx_cc_emails_office_active', 'cc_emails', ['office_id', 'is_active'])
    op.create_index('idx_cc_emails_lookup', 'cc_emails', ['email', 'office_id', 'agent_id'])


def downgrade() -> None:
    op.drop_table('cc_emails')
    op.drop_table('reorders')
    op.drop_table('orders')
    op.drop_table('vendors')
    op.drop_table('users')
    op.drop_table('offices')
