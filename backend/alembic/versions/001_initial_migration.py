"""Initial migration: create team, gamesession, sessionplayer, fixture tables

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Team catalog (read-only to the app)
    op.create_table(
        "team",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("short_name", sa.String(), nullable=True),
        sa.Column("icon_url", sa.String(), nullable=True),
        sa.Column("country", sa.String(), nullable=True),
        sa.Column("stars", sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_team_country", "team", ["country"])

    op.create_table(
        "gamesession",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("code", sa.String(), nullable=False),
        sa.Column("owner_id", sa.String(), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("icon_url", sa.String(), nullable=True),
        sa.Column("team_filter", sa.JSON(), nullable=False),
        sa.Column("t_format", sa.String(), nullable=True),
        sa.Column("min_players", sa.Integer(), nullable=False),
        sa.Column("max_players", sa.Integer(), nullable=False),
        sa.Column("join_token", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("started_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_gamesession_code", "gamesession", ["code"], unique=True)
    op.create_index("ix_gamesession_owner_id", "gamesession", ["owner_id"])

    op.create_table(
        "sessionplayer",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("session_id", sa.Integer(), nullable=False),
        sa.Column("display_name", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=True),
        sa.Column("team_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["session_id"], ["gamesession.id"]),
        sa.ForeignKeyConstraint(["team_id"], ["team.id"]),
        sa.UniqueConstraint("session_id", "display_name", name="uq_session_display_name"),
    )
    op.create_index("ix_sessionplayer_session_id", "sessionplayer", ["session_id"])

    op.create_table(
        "fixture",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("session_id", sa.Integer(), nullable=False),
        sa.Column("round_name", sa.String(), nullable=False),
        sa.Column("leg", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("home_player_id", sa.Integer(), nullable=False),
        sa.Column("away_player_id", sa.Integer(), nullable=False),
        sa.Column("home_team_id", sa.Integer(), nullable=True),
        sa.Column("away_team_id", sa.Integer(), nullable=True),
        sa.Column("home_goals", sa.Integer(), nullable=False),
        sa.Column("away_goals", sa.Integer(), nullable=False),
        sa.Column("went_penalties", sa.Boolean(), nullable=False),
        sa.Column("home_pen", sa.Integer(), nullable=False),
        sa.Column("away_pen", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["session_id"], ["gamesession.id"]),
        sa.ForeignKeyConstraint(["home_player_id"], ["sessionplayer.id"]),
        sa.ForeignKeyConstraint(["away_player_id"], ["sessionplayer.id"]),
        sa.ForeignKeyConstraint(["home_team_id"], ["team.id"]),
        sa.ForeignKeyConstraint(["away_team_id"], ["team.id"]),
    )
    op.create_index("ix_fixture_session_id", "fixture", ["session_id"])


def downgrade() -> None:
    op.drop_index("ix_fixture_session_id", table_name="fixture")
    op.drop_table("fixture")
    op.drop_index("ix_sessionplayer_session_id", table_name="sessionplayer")
    op.drop_table("sessionplayer")
    op.drop_index("ix_gamesession_owner_id", table_name="gamesession")
    op.drop_index("ix_gamesession_code", table_name="gamesession")
    op.drop_table("gamesession")
    op.drop_index("ix_team_country", table_name="team")
    op.drop_table("team")
