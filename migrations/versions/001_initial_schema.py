"""Initial schema - players, teams and games collections

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

snapshot = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        'players',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('api_player_id', sa.String(), nullable=True),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('display_name', sa.String(), nullable=True),
        sa.Column('short_name', sa.String(), nullable=True),
        sa.Column('team', sa.String(), nullable=True),
        sa.Column('team_id', sa.String(), nullable=True),
        sa.Column('position', sa.String(), nullable=True),
        sa.Column('jersey', sa.String(), nullable=True),
        sa.Column('image', sa.String(), nullable=True),
        sa.Column('image_url', sa.String(), nullable=True),
        sa.Column('points', sa.Float(), nullable=True),
        sa.Column('assists', sa.Float(), nullable=True),
        sa.Column('rebounds', sa.Float(), nullable=True),
        sa.Column('last_updated', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_players_name', 'players', ['name'])
    op.create_index('ix_players_points', 'players', ['points'])

    op.create_table(
        'teams',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('api_team_id', sa.String(), nullable=True),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('short_name', sa.String(), nullable=True),
        sa.Column('abbrev', sa.String(), nullable=True),
        sa.Column('logo', sa.String(), nullable=True),
        sa.Column('logo_dark', sa.String(), nullable=True),
        sa.Column('href', sa.String(), nullable=True),
        sa.Column('conference', sa.String(), nullable=True),
        sa.Column('division', sa.String(), nullable=True),
        sa.Column('wins', sa.Integer(), nullable=True),
        sa.Column('losses', sa.Integer(), nullable=True),
        sa.Column('last_updated', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_teams_name', 'teams', ['name'])

    op.create_table(
        'games',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('api_game_id', sa.String(), nullable=True),
        sa.Column('date', sa.DateTime(), nullable=True),
        sa.Column('date_formatted', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=True),
        sa.Column('home_team', snapshot, nullable=True),
        sa.Column('away_team', snapshot, nullable=True),
        sa.Column('venue', sa.String(), nullable=True),
        sa.Column('last_updated', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_games_date', 'games', ['date'])
    op.create_index('ix_games_date_formatted', 'games', ['date_formatted'])


def downgrade() -> None:
    op.drop_index('ix_games_date_formatted', table_name='games')
    op.drop_index('ix_games_date', table_name='games')
    op.drop_table('games')

    op.drop_index('ix_teams_name', table_name='teams')
    op.drop_table('teams')

    op.drop_index('ix_players_points', table_name='players')
    op.drop_index('ix_players_name', table_name='players')
    op.drop_table('players')
