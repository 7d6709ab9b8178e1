"""create profiles, user_books and reading_sessions

Revision ID: 5b1e2c7d9a30
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from shelfsync.models.types import StringList, Timestamp, UUIDString


# revision identifiers, used by Alembic.
revision: str = '5b1e2c7d9a30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'profiles',
        sa.Column('id', UUIDString, nullable=False),
        sa.Column('user_id', UUIDString, nullable=False),
        sa.Column('username', sa.Text(), nullable=True),
        sa.Column('email', sa.Text(), nullable=True),
        sa.Column('favorite_genres', StringList, nullable=True),
        sa.Column('reading_goal', sa.Integer(), nullable=True),
        sa.Column('preferred_reading_time', sa.String(50), nullable=True),
        sa.Column('created_at', Timestamp, nullable=True),
        sa.Column('updated_at', Timestamp, nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_profiles_user_id', 'profiles', ['user_id'], unique=True)

    op.create_table(
        'user_books',
        sa.Column('id', UUIDString, nullable=False),
        sa.Column('user_id', UUIDString, nullable=False),
        sa.Column('book_id', sa.Text(), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('authors', StringList, nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('published_date', sa.Text(), nullable=True),
        sa.Column('publisher', sa.Text(), nullable=True),
        sa.Column('categories', StringList, nullable=True),
        sa.Column('thumbnail_url', sa.Text(), nullable=True),
        sa.Column('page_count', sa.Integer(), nullable=True),
        sa.Column('average_rating', sa.Float(), nullable=True),
        sa.Column('ratings_count', sa.Integer(), nullable=True),
        sa.Column('preview_link', sa.Text(), nullable=True),
        sa.Column('info_link', sa.Text(), nullable=True),
        sa.Column('language', sa.String(20), nullable=True),
        sa.Column('reading_status', sa.String(20), nullable=True),
        sa.Column('personal_rating', sa.Integer(), nullable=True),
        sa.Column('reading_progress', sa.Integer(), nullable=True),
        sa.Column('current_page', sa.Integer(), nullable=True),
        sa.Column('time_spent_reading', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('my_thoughts', sa.Text(), nullable=True),
        sa.Column('tags', StringList, nullable=True),
        sa.Column('date_added', Timestamp, nullable=True),
        sa.Column('date_started', Timestamp, nullable=True),
        sa.Column('date_finished', Timestamp, nullable=True),
        sa.Column('created_at', Timestamp, nullable=True),
        sa.Column('updated_at', Timestamp, nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'book_id'),
    )
    op.create_index('ix_user_books_user_id', 'user_books', ['user_id'])

    op.create_table(
        'reading_sessions',
        sa.Column('id', UUIDString, nullable=False),
        sa.Column('user_id', UUIDString, nullable=False),
        sa.Column('book_id', sa.Text(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('pages_read', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('session_date', Timestamp, nullable=True),
        sa.Column('created_at', Timestamp, nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_reading_sessions_user_id', 'reading_sessions', ['user_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_reading_sessions_user_id', 'reading_sessions')
    op.drop_table('reading_sessions')
    op.drop_index('ix_user_books_user_id', 'user_books')
    op.drop_table('user_books')
    op.drop_index('ix_profiles_user_id', 'profiles')
    op.drop_table('profiles')
