"""Initial quoting schema

Revision ID: 1f3a9c0d2b7e
Revises:
Create Date: 2026-10-19 10:12:31.482113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# Revision identifiers used by Alembic
revision: str = '1f3a9c0d2b7e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

app_role = sa.Enum('importer', 'exporter', name='approle')
product_status = sa.Enum('draft', 'sent_for_quote', 'quoted', name='productstatus')
request_status = sa.Enum('pending', 'in_progress', 'completed', name='quoterequeststatus')
quote_status = sa.Enum('draft', 'submitted', 'accepted', 'rejected', name='quotestatus')
incoterm = sa.Enum('EXW', 'FOB', 'CIF', 'DDP', name='incoterm')


def _timestamps(with_updated=True):
    cols = [sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True)]
    if with_updated:
        cols.append(sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True))
    return cols


def upgrade() -> None:
    """Upgrade schema."""
    # Accounts and profiles
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        *_timestamps(with_updated=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('role', app_role, nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )
    op.create_index(op.f('ix_profiles_id'), 'profiles', ['id'], unique=False)
    op.create_index(op.f('ix_profiles_role'), 'profiles', ['role'], unique=False)

    # Products and their images
    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('internal_code', sa.String(), nullable=True),
        sa.Column('reference_link', sa.String(), nullable=True),
        sa.Column('target_price_usd', sa.Float(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('usage_notes', sa.Text(), nullable=True),
        sa.Column('status', product_status, nullable=False),
        *_timestamps(),
        sa.CheckConstraint('target_price_usd >= 0'),
        sa.ForeignKeyConstraint(['owner_id'], ['profiles.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_products_id'), 'products', ['id'], unique=False)
    op.create_index(op.f('ix_products_owner_id'), 'products', ['owner_id'], unique=False)
    op.create_index(op.f('ix_products_name'), 'products', ['name'], unique=False)
    op.create_index(op.f('ix_products_created_at'), 'products', ['created_at'], unique=False)

    op.create_table(
        'product_images',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('url', sa.String(), nullable=False),
        sa.Column('is_main', sa.Boolean(), nullable=False),
        *_timestamps(with_updated=False),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_product_images_id'), 'product_images', ['id'], unique=False)
    op.create_index(op.f('ix_product_images_product_id'), 'product_images', ['product_id'], unique=False)

    # Quote requests, quotes and cost simulations
    op.create_table(
        'quote_requests',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('requested_by_id', sa.Integer(), nullable=False),
        sa.Column('assigned_to_id', sa.Integer(), nullable=True),
        sa.Column('status', request_status, nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.ForeignKeyConstraint(['requested_by_id'], ['profiles.id']),
        sa.ForeignKeyConstraint(['assigned_to_id'], ['profiles.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_quote_requests_id'), 'quote_requests', ['id'], unique=False)
    op.create_index(op.f('ix_quote_requests_product_id'), 'quote_requests', ['product_id'], unique=False)
    op.create_index(op.f('ix_quote_requests_requested_by_id'), 'quote_requests', ['requested_by_id'], unique=False)
    op.create_index(op.f('ix_quote_requests_assigned_to_id'), 'quote_requests', ['assigned_to_id'], unique=False)
    op.create_index(op.f('ix_quote_requests_created_at'), 'quote_requests', ['created_at'], unique=False)

    op.create_table(
        'quotes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('quote_request_id', sa.Integer(), nullable=False),
        sa.Column('created_by_id', sa.Integer(), nullable=False),
        sa.Column('factory_name', sa.String(), nullable=False),
        sa.Column('factory_location', sa.String(), nullable=True),
        sa.Column('incoterm', incoterm, nullable=True),
        sa.Column('price_per_unit_usd', sa.Float(), nullable=False),
        sa.Column('moq', sa.Integer(), nullable=False),
        sa.Column('available_stock', sa.Integer(), nullable=True),
        sa.Column('lead_time_days', sa.Integer(), nullable=True),
        sa.Column('competitor_links', sa.Text(), nullable=True),
        sa.Column('certifications', sa.Text(), nullable=True),
        sa.Column('remarks', sa.Text(), nullable=True),
        sa.Column('status', quote_status, nullable=False),
        *_timestamps(),
        sa.CheckConstraint('price_per_unit_usd > 0'),
        sa.CheckConstraint('moq >= 1'),
        sa.ForeignKeyConstraint(['quote_request_id'], ['quote_requests.id']),
        sa.ForeignKeyConstraint(['created_by_id'], ['profiles.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_quotes_id'), 'quotes', ['id'], unique=False)
    op.create_index(op.f('ix_quotes_quote_request_id'), 'quotes', ['quote_request_id'], unique=False)
    op.create_index(op.f('ix_quotes_created_by_id'), 'quotes', ['created_by_id'], unique=False)
    op.create_index(op.f('ix_quotes_created_at'), 'quotes', ['created_at'], unique=False)

    op.create_table(
        'quote_cost_simulations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('quote_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('freight_usd', sa.Float(), nullable=False),
        sa.Column('insurance_usd', sa.Float(), nullable=False),
        sa.Column('other_costs_usd', sa.Float(), nullable=False),
        sa.Column('tax_rate_percent', sa.Float(), nullable=False),
        sa.Column('exchange_rate', sa.Float(), nullable=False),
        sa.Column('estimated_total_cost_usd', sa.Float(), nullable=False),
        sa.Column('estimated_total_cost_brl', sa.Float(), nullable=False),
        sa.Column('estimated_unit_cost_usd', sa.Float(), nullable=False),
        sa.Column('estimated_unit_cost_brl', sa.Float(), nullable=False),
        *_timestamps(with_updated=False),
        sa.ForeignKeyConstraint(['quote_id'], ['quotes.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_quote_cost_simulations_id'), 'quote_cost_simulations', ['id'], unique=False)
    op.create_index(op.f('ix_quote_cost_simulations_quote_id'), 'quote_cost_simulations', ['quote_id'], unique=False)
    op.create_index(op.f('ix_quote_cost_simulations_created_at'), 'quote_cost_simulations', ['created_at'], unique=False)

    # Audit trail
    op.create_table(
        'logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('ts', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('profile_id', sa.Integer(), nullable=True),
        sa.Column('action', sa.String(length=50), nullable=True),
        sa.Column('resource', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.Column('ip', sa.String(length=64), nullable=True),
        sa.Column('meta', sa.JSON(), nullable=True),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_logs_id'), 'logs', ['id'], unique=False)
    op.create_index(op.f('ix_logs_ts'), 'logs', ['ts'], unique=False)
    op.create_index(op.f('ix_logs_action'), 'logs', ['action'], unique=False)
    op.create_index(op.f('ix_logs_resource'), 'logs', ['resource'], unique=False)
    op.create_index(op.f('ix_logs_status'), 'logs', ['status'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('logs')
    op.drop_table('quote_cost_simulations')
    op.drop_table('quotes')
    op.drop_table('quote_requests')
    op.drop_table('product_images')
    op.drop_table('products')
    op.drop_table('profiles')
    op.drop_table('users')

    bind = op.get_bind()
    for enum_type in (incoterm, quote_status, request_status, product_status, app_role):
        enum_type.drop(bind, checkfirst=True)
