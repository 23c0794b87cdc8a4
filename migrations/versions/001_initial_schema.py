"""Initial schema with all tables

Revision ID: 001
Revises: 
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create artists table
    op.create_table(
        'artists',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('display_name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_artists_slug'), 'artists', ['slug'], unique=True)

    # Create artworks table
    op.create_table(
        'artworks',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('artist_id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=True),
        sa.Column('slug', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('medium', sa.String(length=255), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('pricing_mode', sa.String(length=20), nullable=False, server_default='on_request'),
        sa.Column('price', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('min_price', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('max_price', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('currency', sa.String(length=3), nullable=False, server_default='USD'),
        sa.Column('width', sa.Float(), nullable=True),
        sa.Column('height', sa.Float(), nullable=True),
        sa.Column('depth', sa.Float(), nullable=True),
        sa.Column('dimension_unit', sa.String(length=5), nullable=True, server_default='cm'),
        sa.Column('is_edition', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('edition_numeric_size', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('edition_ap_size', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('sold_editions', sa.JSON(), nullable=False, server_default='[]'),
        sa.Column('keywords', sa.JSON(), nullable=False, server_default='[]'),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.CheckConstraint('edition_numeric_size >= 0 AND edition_ap_size >= 0', name='ck_artworks_edition_sizes'),
        sa.ForeignKeyConstraint(['artist_id'], ['artists.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_artworks_artist_id'), 'artworks', ['artist_id'], unique=False)
    op.create_index(op.f('ix_artworks_slug'), 'artworks', ['slug'], unique=True)
    op.create_index(op.f('ix_artworks_status'), 'artworks', ['status'], unique=False)
    op.create_index(op.f('ix_artworks_created_at'), 'artworks', ['created_at'], unique=False)

    # Create artwork_images table
    op.create_table(
        'artwork_images',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('artwork_id', sa.String(length=36), nullable=False),
        sa.Column('image_url', sa.String(length=1000), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_primary', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('watermarked_image_url', sa.String(length=1000), nullable=True),
        sa.Column('visualization_image_url', sa.String(length=1000), nullable=True),
        sa.Column('watermark_status', sa.String(length=20), nullable=False, server_default='missing'),
        sa.Column('visualization_status', sa.String(length=20), nullable=False, server_default='missing'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.ForeignKeyConstraint(['artwork_id'], ['artworks.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_artwork_images_artwork_id'), 'artwork_images', ['artwork_id'], unique=False)

    # Create catalogues table
    op.create_table(
        'catalogues',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('artist_id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_system_catalogue', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('is_published', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.ForeignKeyConstraint(['artist_id'], ['artists.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_catalogues_artist_id'), 'catalogues', ['artist_id'], unique=False)
    op.create_index(op.f('ix_catalogues_slug'), 'catalogues', ['slug'], unique=True)
    # At most one system catalogue per artist
    op.create_index(
        'uq_catalogues_system_per_artist',
        'catalogues',
        ['artist_id'],
        unique=True,
        postgresql_where=sa.text('is_system_catalogue = true'),
    )

    # Create artwork_catalogues table
    op.create_table(
        'artwork_catalogues',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('artwork_id', sa.String(length=36), nullable=False),
        sa.Column('catalogue_id', sa.String(length=36), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.ForeignKeyConstraint(['artwork_id'], ['artworks.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['catalogue_id'], ['catalogues.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('artwork_id', 'catalogue_id', name='uq_artwork_catalogues_pair')
    )
    op.create_index(op.f('ix_artwork_catalogues_id'), 'artwork_catalogues', ['id'], unique=False)
    op.create_index(op.f('ix_artwork_catalogues_artwork_id'), 'artwork_catalogues', ['artwork_id'], unique=False)
    op.create_index(op.f('ix_artwork_catalogues_catalogue_id'), 'artwork_catalogues', ['catalogue_id'], unique=False)

    # Create derivative_tasks table
    op.create_table(
        'derivative_tasks',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('artwork_id', sa.String(length=36), nullable=False),
        sa.Column('source_image_id', sa.String(length=36), nullable=True),
        sa.Column('force_watermark', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('force_visualization', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('attempts', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('max_attempts', sa.Integer(), nullable=False, server_default='5'),
        sa.Column('last_error', sa.Text(), nullable=True),
        sa.Column('next_attempt_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['artwork_id'], ['artworks.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_derivative_tasks_id'), 'derivative_tasks', ['id'], unique=False)
    op.create_index(op.f('ix_derivative_tasks_artwork_id'), 'derivative_tasks', ['artwork_id'], unique=False)
    op.create_index(op.f('ix_derivative_tasks_status'), 'derivative_tasks', ['status'], unique=False)
    op.create_index(op.f('ix_derivative_tasks_next_attempt_at'), 'derivative_tasks', ['next_attempt_at'], unique=False)


def downgrade() -> None:
    op.drop_table('derivative_tasks')
    op.drop_table('artwork_catalogues')
    op.drop_index('uq_catalogues_system_per_artist', table_name='catalogues')
    op.drop_table('catalogues')
    op.drop_table('artwork_images')
    op.drop_table('artworks')
    op.drop_table('artists')
