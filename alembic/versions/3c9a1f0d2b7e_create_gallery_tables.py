"""create_gallery_tables

Revision ID: 3c9a1f0d2b7e
Revises:
Create Date: 2026-10-19 09:12:41.520113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c9a1f0d2b7e'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # photos.album_id has no foreign key to albums
    op.create_table(
        'photos',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('url', sa.Text(), nullable=False, server_default=''),
        sa.Column('thumbnail', sa.Text(), nullable=False, server_default=''),
        sa.Column('title', sa.Text(), nullable=False, server_default=''),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('concept', sa.Text(), nullable=False, server_default=''),
        sa.Column('album_id', sa.String(length=36), nullable=False, server_default=''),
        sa.Column('tags', sa.Text(), nullable=False, server_default='[]'),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('media_type', sa.String(length=16), nullable=False, server_default='image'),
        sa.Column('youtube_url', sa.Text(), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_photos_album_id'), 'photos', ['album_id'], unique=False)
    op.create_index(op.f('ix_photos_order'), 'photos', ['order'], unique=False)

    op.create_table(
        'albums',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('cover_url', sa.Text(), nullable=False, server_default=''),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_public', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_albums_order'), 'albums', ['order'], unique=False)

    op.create_table(
        'site_content',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('content', sa.Text(), nullable=False, server_default='{}'),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade() -> None:
    op.drop_table('site_content')

    op.drop_index(op.f('ix_albums_order'), table_name='albums')
    op.drop_table('albums')

    op.drop_index(op.f('ix_photos_order'), table_name='photos')
    op.drop_index(op.f('ix_photos_album_id'), table_name='photos')
    op.drop_table('photos')
