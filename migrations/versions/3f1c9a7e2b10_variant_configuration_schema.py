"""stores, products, options, option values, variants, notifications, audit log

Revision ID: 3f1c9a7e2b10
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f1c9a7e2b10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'stores',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('owner_id', sa.BigInteger(), nullable=False),
        sa.Column('api_key', sa.String(length=64), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_stores_owner_id', 'stores', ['owner_id'])
    op.create_index('ix_stores_api_key', 'stores', ['api_key'], unique=True)

    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('store_id', sa.Integer(), sa.ForeignKey('stores.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('body_html', sa.Text()),
        sa.Column('image_storage_key', sa.String(length=512)),
        sa.Column('created_at', sa.DateTime(timezone=True)),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
        sa.Column('deleted_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_products_store_id', 'products', ['store_id'])

    op.create_table(
        'options',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('option_type', sa.String(length=100), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_options_product_id', 'options', ['product_id'])

    op.create_table(
        'product_variants',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=255)),
        sa.Column('images', sa.JSON()),
        sa.Column('price', sa.Numeric(10, 2)),
        sa.Column('ocean_shipping_cost', sa.Numeric(10, 2)),
        sa.Column('air_shipping_cost', sa.Numeric(10, 2)),
        sa.Column('drop_custom_price', sa.Numeric(10, 2)),
        sa.Column('drop_description', sa.Text()),
        sa.Column('drop_public', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('drop_approved', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_product_variants_product_id', 'product_variants', ['product_id'])

    op.create_table(
        'option_values',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('option_id', sa.Integer(), sa.ForeignKey('options.id', ondelete='CASCADE'), nullable=False),
        sa.Column('variant_id', sa.Integer(), sa.ForeignKey('product_variants.id', ondelete='CASCADE'), nullable=True),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('value', sa.String(length=255), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
    )
    op.create_index('ix_option_values_option_id', 'option_values', ['option_id'])
    op.create_index('ix_option_values_variant_id', 'option_values', ['variant_id'])
    op.create_index('ix_option_values_product_id', 'option_values', ['product_id'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('recipient_id', sa.BigInteger(), nullable=False),
        sa.Column('sender_id', sa.BigInteger()),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('redirect_url', sa.String(length=512)),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_notifications_recipient_id', 'notifications', ['recipient_id'])
    op.create_index('ix_notifications_created_at', 'notifications', ['created_at'])

    op.create_table(
        'audit_log',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('actor_id', sa.BigInteger(), nullable=False),
        sa.Column('action', sa.String(length=50), nullable=False),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id', ondelete='SET NULL'), nullable=True),
        sa.Column('payload', sa.JSON()),
        sa.Column('created_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_audit_log_actor_id', 'audit_log', ['actor_id'])
    op.create_index('ix_audit_log_product_id', 'audit_log', ['product_id'])
    op.create_index('ix_audit_log_created_at', 'audit_log', ['created_at'])


def downgrade():
    op.drop_table('audit_log')
    op.drop_table('notifications')
    op.drop_table('option_values')
    op.drop_table('product_variants')
    op.drop_table('options')
    op.drop_table('products')
    op.drop_table('stores')
