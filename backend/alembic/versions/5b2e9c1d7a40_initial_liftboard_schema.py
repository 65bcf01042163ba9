"""initial liftboard schema + global exercise catalog

Revision ID: 5b2e9c1d7a40
Revises:
Create Date: 2026-10-18 10:12:03.418260

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from liftboard.services.catalog import BUILTIN_EXERCISES

# define the enum types once so we can create/drop them explicitly
user_role = postgresql.ENUM('coach', 'athlete', 'trainer', name='user_role', create_type=False)
exercise_category = postgresql.ENUM(
    'upper_body', 'lower_body', 'core', 'cardio', 'olympic', 'accessory',
    name='exercise_category', create_type=False,
)


# revision identifiers, used by Alembic.
revision: str = '5b2e9c1d7a40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 1) enum types
    user_role.create(op.get_bind(), checkfirst=True)
    exercise_category.create(op.get_bind(), checkfirst=True)

    # 2) teams (coach_id is a plain column; users references teams)
    op.create_table(
        'teams',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('team_name', sa.String(length=100), nullable=False),
        sa.Column('sport', sa.String(length=40), nullable=True),
        sa.Column('coach_id', sa.Integer(), nullable=False, index=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )

    # 3) users
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('email', sa.String(length=255), nullable=False, unique=True, index=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('role', user_role, nullable=False, server_default='athlete'),
        sa.Column('team_id', sa.Integer(), sa.ForeignKey('teams.id', ondelete='SET NULL'), nullable=True, index=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )

    # 4) exercises
    exercises = op.create_table(
        'exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False, index=True),
        sa.Column('category', exercise_category, nullable=False),
        sa.Column('demo_url', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True, index=True),
        sa.Column('is_global', sa.Boolean(), nullable=False, server_default=sa.false(), index=True),
        sa.Column('applicable_sports', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )

    # 5) programs (days/prescriptions/set configs embedded as JSON)
    op.create_table(
        'workout_programs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('program_name', sa.String(length=100), nullable=False),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('assigned_teams', sa.JSON(), nullable=False),
        sa.Column('workouts', sa.JSON(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('is_published', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_draft', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )

    # 6) athlete maxes + raw stat entries
    op.create_table(
        'athlete_maxes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('athlete_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('exercise_id', sa.Integer(), nullable=True),
        sa.Column('exercise_name', sa.String(length=100), nullable=False),
        sa.Column('one_rep_max', sa.Float(), nullable=False),
        sa.Column('last_updated', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )
    op.create_table(
        'athlete_stats',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('athlete_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('visible_name', sa.String(length=100), nullable=False),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('exercise_id', sa.Integer(), nullable=True),
    )

    # 7) workout logs, one per athlete per calendar day
    op.create_table(
        'workout_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('athlete_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('workout_program_id', sa.Integer(), nullable=True),
        sa.Column('exercises', sa.JSON(), nullable=False),
        sa.Column('is_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.UniqueConstraint('athlete_id', 'date', name='uq_workout_logs_athlete_date'),
    )

    # 8) seed the built-in catalog as global exercises
    op.bulk_insert(exercises, [
        {
            'name': e.name,
            'category': e.category.value,
            'is_global': True,
            'owner_id': None,
            'applicable_sports': list(e.applicable_sports),
        }
        for e in BUILTIN_EXERCISES
    ])


def downgrade() -> None:
    # drop child tables in reverse order
    op.drop_table('workout_logs')
    op.drop_table('athlete_stats')
    op.drop_table('athlete_maxes')
    op.drop_table('workout_programs')
    op.drop_table('exercises')
    op.drop_table('users')
    op.drop_table('teams')

    # finally drop enum types
    exercise_category.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
