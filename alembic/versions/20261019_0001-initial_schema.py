"""Initial schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create initial tables."""
    op.create_table(
        'leagues',
        sa.Column('league_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('orga_league', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('league_id')
    )

    op.create_table(
        'teams',
        sa.Column('team_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('abbreviation', sa.String(), nullable=True),
        sa.Column('kind', sa.String(), nullable=False),
        sa.Column('prm_id', sa.Integer(), nullable=True),
        sa.Column('league', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['league'], ['leagues.league_id']),
        sa.PrimaryKeyConstraint('team_id'),
        sa.UniqueConstraint('prm_id')
    )

    op.create_table(
        'discord_users',
        sa.Column('discord_user_id', sa.Integer(), nullable=False),
        sa.Column('discord_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('discord_user_id')
    )
    op.create_index('ix_discord_users_discord_id', 'discord_users', ['discord_id'], unique=True)

    op.create_table(
        'players',
        sa.Column('player_id', sa.Integer(), nullable=False),
        sa.Column('lol_puuid', sa.String(), nullable=True),
        sa.Column('lol_summoner', sa.String(), nullable=True),
        sa.Column('lol_name', sa.String(), nullable=True),
        sa.Column('lol_tag', sa.String(), nullable=True),
        sa.Column('discord_user', sa.Integer(), nullable=True),
        sa.Column('team', sa.Integer(), nullable=True),
        sa.Column('updated', sa.DateTime(), nullable=False),
        sa.Column('played', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['discord_user'], ['discord_users.discord_user_id']),
        sa.ForeignKeyConstraint(['team'], ['teams.team_id']),
        sa.PrimaryKeyConstraint('player_id')
    )
    op.create_index('ix_players_lol_puuid', 'players', ['lol_puuid'], unique=True)
    op.create_index('ix_players_lol_name', 'players', ['lol_name'])
    op.create_index('ix_players_team', 'players', ['team'])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index('ix_players_team', 'players')
    op.drop_index('ix_players_lol_name', 'players')
    op.drop_index('ix_players_lol_puuid', 'players')
    op.drop_table('players')
    op.drop_index('ix_discord_users_discord_id', 'discord_users')
    op.drop_table('discord_users')
    op.drop_table('teams')
    op.drop_table('leagues')
