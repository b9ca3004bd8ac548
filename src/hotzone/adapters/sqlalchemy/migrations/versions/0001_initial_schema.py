"""Initial inventory schema: users, zones, containers, cards and comics.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-16
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column[object]]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def _common_item_columns() -> list[sa.Column[object]]:
    return [
        sa.Column("grade", sa.Float(), nullable=True),
        sa.Column("condition", sa.String(), nullable=True),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("price", sa.Float(), nullable=True),
        sa.Column("cost", sa.Float(), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("display_name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_user"),
    )

    op.create_table(
        "zone",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["user_id"], ["user.id"], name="fk_zone_zone_user_id_user", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_zone"),
        sa.UniqueConstraint("user_id", "name", name="uq_zone_zone_user_id"),
    )
    op.create_index("ix_zone_user_id", "zone", ["user_id"])

    op.create_table(
        "container",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("zone_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["user_id"], ["user.id"], name="fk_container_container_user_id_user", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["zone_id"], ["zone.id"], name="fk_container_container_zone_id_zone", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_container"),
        sa.UniqueConstraint("zone_id", "name", name="uq_container_container_zone_id"),
    )
    op.create_index("ix_container_user_id", "container", ["user_id"])

    op.create_table(
        "card",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("container_id", sa.Integer(), nullable=False),
        sa.Column("player", sa.String(), nullable=False),
        sa.Column("team", sa.String(), nullable=True),
        sa.Column("manufacturer", sa.String(), nullable=False),
        sa.Column("sport", sa.String(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("number", sa.String(), nullable=False),
        sa.Column("number_out_of", sa.Integer(), nullable=True),
        sa.Column("is_rookie", sa.Boolean(), nullable=False),
        *_common_item_columns(),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["user_id"], ["user.id"], name="fk_card_card_user_id_user", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["container_id"], ["container.id"], name="fk_card_card_container_id_container"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_card"),
        sa.UniqueConstraint(
            "user_id",
            "container_id",
            "player",
            "manufacturer",
            "sport",
            "year",
            "number",
            name="uq_card_card_user_id",
        ),
    )
    op.create_index("ix_card_user_id", "card", ["user_id"])

    op.create_table(
        "comic",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("container_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("publisher", sa.String(), nullable=False),
        sa.Column("issue", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        *_common_item_columns(),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["user_id"], ["user.id"], name="fk_comic_comic_user_id_user", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["container_id"], ["container.id"], name="fk_comic_comic_container_id_container"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_comic"),
        sa.UniqueConstraint(
            "user_id",
            "container_id",
            "title",
            "publisher",
            "issue",
            "year",
            name="uq_comic_comic_user_id",
        ),
    )
    op.create_index("ix_comic_user_id", "comic", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_comic_user_id", table_name="comic")
    op.drop_table("comic")
    op.drop_index("ix_card_user_id", table_name="card")
    op.drop_table("card")
    op.drop_index("ix_container_user_id", table_name="container")
    op.drop_table("container")
    op.drop_index("ix_zone_user_id", table_name="zone")
    op.drop_table("zone")
    op.drop_table("user")
