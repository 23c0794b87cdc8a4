"""Add descriptive metadata to artworks

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 14:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '002'
down_revision: Union[str, None] = '001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column('artworks', sa.Column('orientation', sa.String(length=20), nullable=True))
    op.add_column('artworks', sa.Column('dominant_colors', sa.JSON(), nullable=True))
    op.add_column('artworks', sa.Column('genre', sa.String(length=100), nullable=True))
    op.add_column('artworks', sa.Column('subject', sa.String(length=100), nullable=True))
    op.create_index(op.f('ix_artworks_genre'), 'artworks', ['genre'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_artworks_genre'), table_name='artworks')
    op.drop_column('artworks', 'subject')
    op.drop_column('artworks', 'genre')
    op.drop_column('artworks', 'dominant_colors')
    op.drop_column('artworks', 'orientation')
