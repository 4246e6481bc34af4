"""Create users and notes tables

Revision ID: 4f1c2a9e7b3d
Revises:
Create Date: 2026-10-19 09:12:31.402117

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f1c2a9e7b3d'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('length(username) <= 50', name='ck_users_username_len'),
        sa.CheckConstraint("role IN ('USER', 'ADMIN')", name='ck_users_role'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
    )
    op.create_index('idx_users_role', 'users', ['role'], unique=False)

    op.create_table(
        'notes',
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('expiration_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('share_token', sa.String(length=64), nullable=True),
        sa.Column('share_expiration_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            '(share_token IS NULL) = (share_expiration_time IS NULL)',
            name='ck_notes_share_pair',
        ),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('share_token'),
    )
    op.create_index('idx_notes_owner_created', 'notes', ['owner_id', 'created_at'], unique=False)
    op.create_index('idx_notes_expiration_time', 'notes', ['expiration_time'], unique=False)
    op.create_index(
        'idx_notes_share_expiration_time', 'notes', ['share_expiration_time'], unique=False
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_notes_share_expiration_time', table_name='notes')
    op.drop_index('idx_notes_expiration_time', table_name='notes')
    op.drop_index('idx_notes_owner_created', table_name='notes')
    op.drop_table('notes')
    op.drop_index('idx_users_role', table_name='users')
    op.drop_table('users')
