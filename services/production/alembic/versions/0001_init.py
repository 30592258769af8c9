"""products and production batches

Revision ID: 0001_init
Revises:
Create Date: 2026-02-15 09:00:00

"""
from alembic import op
import sqlalchemy as sa

revision = '0001_init'
down_revision = None
branch_labels = None
depends_on = None

PRODUCT_TYPES = ('AIR_FILTER', 'OIL_FILTER', 'AIR_OIL_SEPARATOR')

def upgrade():
    op.create_table(
        'products',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('part_number', sa.String, nullable=False),
        sa.Column('product_type', sa.Enum(*PRODUCT_TYPES, name='producttype', native_enum=False, length=32), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_products_part_number', 'products', ['part_number'], unique=True)

    op.create_table(
        'production_batches',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('batch_code', sa.String, nullable=False),
        sa.Column('product_id', sa.Integer, sa.ForeignKey('products.id'), nullable=False),
        sa.Column('quantity', sa.Integer, nullable=False),
        sa.Column('produced_by', sa.String, nullable=True),
        sa.Column('production_line', sa.String, nullable=True),
        sa.Column('remarks', sa.Text, nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=True),
    )
    op.create_index('ix_production_batches_batch_code', 'production_batches', ['batch_code'], unique=True)
    op.create_index('ix_production_batches_created_at', 'production_batches', ['created_at'])

def downgrade():
    op.drop_index('ix_production_batches_created_at', table_name='production_batches')
    op.drop_index('ix_production_batches_batch_code', table_name='production_batches')
    op.drop_table('production_batches')
    op.drop_index('ix_products_part_number', table_name='products')
    op.drop_table('products')
