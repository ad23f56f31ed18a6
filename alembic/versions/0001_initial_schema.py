"""initial schema: six record tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "articles",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(300), nullable=True),
        sa.Column("url", sa.String(2048), nullable=True),
        sa.Column("explanation", sa.Text(), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("date_added", sa.DateTime(), nullable=True),
    )
    op.create_table(
        "helprequests",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("requester_email", sa.String(255), nullable=True),
        sa.Column("team_id", sa.String(100), nullable=True),
        sa.Column("table_or_breakout_room", sa.String(100), nullable=True),
        sa.Column("request_time", sa.DateTime(), nullable=True),
        sa.Column("explanation", sa.Text(), nullable=True),
        sa.Column("solved", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_table(
        "menuitemreview",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("item_id", sa.BigInteger(), nullable=True),
        sa.Column("reviewer_email", sa.String(255), nullable=True),
        sa.Column("stars", sa.Integer(), nullable=True),
        sa.Column("date_reviewed", sa.DateTime(), nullable=True),
        sa.Column("comments", sa.Text(), nullable=True),
    )
    op.create_table(
        "recommendationrequests",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("requester_email", sa.String(255), nullable=True),
        sa.Column("professor_email", sa.String(255), nullable=True),
        sa.Column("explanation", sa.Text(), nullable=True),
        sa.Column("date_requested", sa.DateTime(), nullable=True),
        sa.Column("date_needed", sa.DateTime(), nullable=True),
        sa.Column("done", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_table(
        "ucsbdiningcommonsmenuitem",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("dining_commons_code", sa.String(50), nullable=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("station", sa.String(255), nullable=True),
    )
    op.create_table(
        "ucsborganization",
        sa.Column("org_code", sa.String(50), primary_key=True),
        sa.Column("org_translation_short", sa.String(255), nullable=True),
        sa.Column("org_translation", sa.String(500), nullable=True),
        sa.Column("inactive", sa.Boolean(), nullable=False, server_default=sa.false()),
    )


def downgrade() -> None:
    op.drop_table("ucsborganization")
    op.drop_table("ucsbdiningcommonsmenuitem")
    op.drop_table("recommendationrequests")
    op.drop_table("menuitemreview")
    op.drop_table("helprequests")
    op.drop_table("articles")
