"""players, lifts, exercises, workouts/sets, stat entries

Revision ID: 4b1d7c2e9a10
Revises:
Create Date: 2025-11-03 19:12:44.318207

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b1d7c2e9a10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True) -> list[sa.Column]:
    cols = [sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False)]
    if updated:
        cols.append(sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False))
    return cols


def upgrade() -> None:
    op.create_table(
        'players',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=50), nullable=False),
        sa.Column('last_name', sa.String(length=50), nullable=False),
        sa.Column('position', sa.String(length=20), nullable=False),
        sa.Column('photo_url', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_players_id', 'players', ['id'])
    op.create_index('ix_players_email', 'players', ['email'], unique=True)

    op.create_table(
        'exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_exercises_name', 'exercises', ['name'])

    op.create_table(
        'lifts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('player_id', sa.Integer(), sa.ForeignKey('players.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('exercise_name', sa.String(length=50), nullable=False),
        sa.Column('weight', sa.Numeric(10, 2), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=False),
        sa.Column('sets', sa.Integer(), nullable=False),
        sa.Column('notes', sa.String(length=500), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'lift_histories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('player_id', sa.Integer(), sa.ForeignKey('players.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('exercise_name', sa.String(length=50), nullable=False),
        sa.Column('weight', sa.Numeric(10, 2), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=False),
        sa.Column('sets', sa.Integer(), nullable=False),
        sa.Column('notes', sa.String(length=500), nullable=True),
        sa.Column('workout_date', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        *_timestamps(updated=False),
    )
    op.create_index(
        'ix_lift_histories_player_exercise_date', 'lift_histories',
        ['player_id', 'exercise_name', 'workout_date'],
    )

    op.create_table(
        'workouts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('player_id', sa.Integer(), sa.ForeignKey('players.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('date', sa.Date(), nullable=False, index=True),
        sa.Column('notes', sa.String(length=200), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'workout_sets',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('workout_id', sa.Integer(), sa.ForeignKey('workouts.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercises.id', ondelete='RESTRICT'), nullable=False, index=True),
        sa.Column('set_number', sa.Integer(), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=False),
        sa.Column('weight', sa.Numeric(10, 2), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'stat_entries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('player_id', sa.Integer(), sa.ForeignKey('players.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('date', sa.Date(), nullable=False, index=True),
        sa.Column('game_type', sa.String(length=20), nullable=False, server_default='practice'),
        sa.Column('three_point_makes', sa.Integer(), nullable=False),
        sa.Column('three_point_attempts', sa.Integer(), nullable=False),
        sa.Column('two_point_makes', sa.Integer(), nullable=False),
        sa.Column('two_point_attempts', sa.Integer(), nullable=False),
        sa.Column('free_throw_makes', sa.Integer(), nullable=False),
        sa.Column('free_throw_attempts', sa.Integer(), nullable=False),
        sa.Column('assists', sa.Integer(), nullable=False),
        sa.Column('rebounds', sa.Integer(), nullable=False),
        *_timestamps(updated=False),
    )


def downgrade() -> None:
    op.drop_table('stat_entries')
    op.drop_table('workout_sets')
    op.drop_table('workouts')
    op.drop_index('ix_lift_histories_player_exercise_date', table_name='lift_histories')
    op.drop_table('lift_histories')
    op.drop_table('lifts')
    op.drop_index('ix_exercises_name', table_name='exercises')
    op.drop_table('exercises')
    op.drop_index('ix_players_email', table_name='players')
    op.drop_index('ix_players_id', table_name='players')
    op.drop_table('players')
