"""initial_share_schema

Revision ID: 3c5e1f0b7a21
Revises:
Create Date: 2026-10-16 09:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c5e1f0b7a21'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('share',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('share_type', sa.SmallInteger(), nullable=False),
        sa.Column('share_with', sa.String(length=255), nullable=True),
        sa.Column('parent', sa.Integer(), nullable=True),
        sa.Column('item_type', sa.String(length=64), nullable=False),
        sa.Column('item_source', sa.String(length=255), nullable=True),
        sa.Column('file_source', sa.Integer(), nullable=True),
        sa.Column('file_target', sa.String(length=512), nullable=True),
        sa.Column('permissions', sa.SmallInteger(), nullable=False),
        sa.Column('uid_owner', sa.String(length=64), nullable=False),
        sa.Column('uid_initiator', sa.String(length=64), nullable=True),
        sa.Column('token', sa.String(length=32), nullable=True),
        sa.Column('stime', sa.DateTime(), nullable=False),
        sa.Column('expiration', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_share_item_source'), 'share', ['item_source'], unique=False)
    op.create_index(op.f('ix_share_parent'), 'share', ['parent'], unique=False)
    op.create_index(op.f('ix_share_token'), 'share', ['token'], unique=False)

    op.create_table('users',
        sa.Column('uid', sa.String(length=64), nullable=False),
        sa.Column('display_name', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('uid')
    )
    op.create_table('groups',
        sa.Column('gid', sa.String(length=64), nullable=False),
        sa.Column('display_name', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('gid')
    )
    op.create_table('group_user',
        sa.Column('gid', sa.String(length=64), nullable=False),
        sa.Column('uid', sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(['gid'], ['groups.gid'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['uid'], ['users.uid'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('gid', 'uid')
    )

    op.create_table('notifications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('app', sa.String(length=32), nullable=False),
        sa.Column('user', sa.String(length=64), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.Column('object_type', sa.String(length=64), nullable=False),
        sa.Column('object_id', sa.String(length=64), nullable=False),
        sa.Column('subject', sa.String(length=64), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_notifications_user'), 'notifications', ['user'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_notifications_user'), table_name='notifications')
    op.drop_table('notifications')
    op.drop_table('group_user')
    op.drop_table('groups')
    op.drop_table('users')
    op.drop_index(op.f('ix_share_token'), table_name='share')
    op.drop_index(op.f('ix_share_parent'), table_name='share')
    op.drop_index(op.f('ix_share_item_source'), table_name='share')
    op.drop_table('share')
