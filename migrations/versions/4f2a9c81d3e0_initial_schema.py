"""Initial schema

Revision ID: 4f2a9c81d3e0
Revises: 
Create Date: 2026-10-17 09:12:44.118203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f2a9c81d3e0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])

    op.create_table(
        'service_requests',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('assigned_provider_id', sa.Integer(), nullable=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('preferred_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('preferred_timezone', sa.String(length=64), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['customer_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['assigned_provider_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_service_requests_customer_id', 'service_requests', ['customer_id'])
    op.create_index('ix_service_requests_assigned_provider_id', 'service_requests', ['assigned_provider_id'])
    op.create_index('ix_service_requests_category', 'service_requests', ['category'])
    op.create_index('ix_service_requests_status', 'service_requests', ['status'])
    op.create_index('idx_service_request_status_updated', 'service_requests', ['status', 'updated_at'])

    op.create_table(
        'job_updates',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('request_id', sa.Integer(), nullable=False),
        sa.Column('provider_id', sa.Integer(), nullable=False),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(length=1024), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['request_id'], ['service_requests.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['provider_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_job_updates_request_id', 'job_updates', ['request_id'])
    op.create_index('ix_job_updates_provider_id', 'job_updates', ['provider_id'])

    op.create_table(
        'invoices',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('request_id', sa.Integer(), nullable=False),
        sa.Column('provider_id', sa.Integer(), nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('paid', sa.Boolean(), nullable=False),
        sa.Column('paid_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('paid_via', sa.String(length=20), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['request_id'], ['service_requests.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['provider_id'], ['users.id']),
        sa.ForeignKeyConstraint(['customer_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_invoices_request_id', 'invoices', ['request_id'])
    op.create_index('ix_invoices_provider_id', 'invoices', ['provider_id'])
    op.create_index('ix_invoices_customer_id', 'invoices', ['customer_id'])
    op.create_index('ix_invoices_paid', 'invoices', ['paid'])
    op.create_index('idx_invoice_customer_paid', 'invoices', ['customer_id', 'paid'])
    op.create_index('idx_invoice_provider_paid', 'invoices', ['provider_id', 'paid'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('payload', sa.JSON(), nullable=False),
        sa.Column('read', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_notification_user_created', 'notifications', ['user_id', 'created_at'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_notification_user_created', table_name='notifications')
    op.drop_table('notifications')

    op.drop_index('idx_invoice_provider_paid', table_name='invoices')
    op.drop_index('idx_invoice_customer_paid', table_name='invoices')
    op.drop_index('ix_invoices_paid', table_name='invoices')
    op.drop_index('ix_invoices_customer_id', table_name='invoices')
    op.drop_index('ix_invoices_provider_id', table_name='invoices')
    op.drop_index('ix_invoices_request_id', table_name='invoices')
    op.drop_table('invoices')

    op.drop_index('ix_job_updates_provider_id', table_name='job_updates')
    op.drop_index('ix_job_updates_request_id', table_name='job_updates')
    op.drop_table('job_updates')

    op.drop_index('idx_service_request_status_updated', table_name='service_requests')
    op.drop_index('ix_service_requests_status', table_name='service_requests')
    op.drop_index('ix_service_requests_category', table_name='service_requests')
    op.drop_index('ix_service_requests_assigned_provider_id', table_name='service_requests')
    op.drop_index('ix_service_requests_customer_id', table_name='service_requests')
    op.drop_table('service_requests')

    op.drop_index('ix_users_role', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
