"""create users and workouts tables

Revision ID: 3e1f0a9c2b7d
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3e1f0a9c2b7d'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    tables = inspector.get_table_names()

    if 'users' not in tables:
        op.create_table(
            'users',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('password_hash', sa.String(), nullable=False),
            sa.Column('first_name', sa.String(), nullable=False),
            sa.Column('last_name', sa.String(), nullable=False),
            sa.Column('age', sa.Integer(), nullable=True),
            sa.Column('height', sa.Float(), nullable=True),
            sa.Column('weight', sa.Float(), nullable=True),
            sa.Column('weekly_workout_goal', sa.Integer(), nullable=False, server_default='4'),
            sa.Column('target_weight', sa.Float(), nullable=True),
            sa.Column('primary_goal', sa.String(length=30), nullable=False, server_default='general'),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
            sqlite_autoincrement=True,
        )
        op.create_index('ix_users_id', 'users', ['id'])
        op.create_index('ix_users_email', 'users', ['email'], unique=True)

    if 'workouts' not in tables:
        op.create_table(
            'workouts',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
            sa.Column('type', sa.String(length=20), nullable=False, server_default='other'),
            sa.Column('name', sa.String(), nullable=True),
            sa.Column('date', sa.String(length=10), nullable=False),
            sa.Column('time', sa.String(length=5), nullable=False),
            sa.Column('duration', sa.Integer(), nullable=False),
            sa.Column('distance', sa.Float(), nullable=True),
            sa.Column('calories', sa.Integer(), nullable=True),
            sa.Column('notes', sa.String(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
            sqlite_autoincrement=True,
        )
        op.create_index('ix_workouts_id', 'workouts', ['id'])
        op.create_index('ix_workouts_user_id', 'workouts', ['user_id'])
        op.create_index('ix_workouts_date', 'workouts', ['date'])


def downgrade() -> None:
    # Safe drop if exists
    op.execute('DROP TABLE IF EXISTS workouts')
    op.execute('DROP TABLE IF EXISTS users')
