"""Initial schema for the EduCenter directory

Revision ID: 20250301_000000
Revises: None
Create Date: 2025-03-01 00:00:00.000000

Creates every table of the directory:
- Reference data (regions, categories, fans, sohas)
- Accounts and device sessions
- Resources, education centers, branches and their link tables
- Course registrations, comments and likes

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import List, Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20250301_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns() -> List[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def _fk(column: str, target: str, ondelete: Union[str, None] = "CASCADE", nullable: bool = False) -> sa.Column:
    return sa.Column(column, sa.Integer(), sa.ForeignKey(target, ondelete=ondelete), nullable=nullable)


def upgrade() -> None:
    """Create all tables."""

    op.create_table(
        "regions",
        *_base_columns(),
        sa.Column("name", sa.String(55), nullable=False),
    )
    op.create_index("ix_regions_name", "regions", ["name"], unique=True)

    op.create_table(
        "categories",
        *_base_columns(),
        sa.Column("name", sa.String(55), nullable=False),
        sa.Column("image", sa.String(255), nullable=False),
    )
    op.create_index("ix_categories_name", "categories", ["name"], unique=True)

    for table in ("fans", "sohas"):
        op.create_table(
            table,
            *_base_columns(),
            sa.Column("name", sa.String(100), nullable=False),
            sa.Column("image", sa.String(255), nullable=False),
        )
        op.create_index(f"ix_{table}_name", table, ["name"])

    op.create_table(
        "users",
        *_base_columns(),
        sa.Column("full_name", sa.String(55), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        _fk("region_id", "regions.id", ondelete="SET NULL", nullable=True),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_phone", "users", ["phone"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])

    op.create_table(
        "sessions",
        *_base_columns(),
        _fk("user_id", "users.id"),
        sa.Column("ip", sa.String(64), nullable=False),
        sa.Column("data", sa.JSON(), nullable=False),
    )
    op.create_index("ix_sessions_user_id", "sessions", ["user_id"])

    op.create_table(
        "resources",
        *_base_columns(),
        sa.Column("name", sa.String(55), nullable=False),
        sa.Column("media", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        _fk("user_id", "users.id"),
        _fk("category_id", "categories.id"),
    )
    op.create_index("ix_resources_name", "resources", ["name"])
    op.create_index("ix_resources_user_id", "resources", ["user_id"])
    op.create_index("ix_resources_category_id", "resources", ["category_id"])

    op.create_table(
        "edu_centers",
        *_base_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("image", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("license", sa.String(255), nullable=False),
        sa.Column("address", sa.String(255), nullable=True),
        _fk("region_id", "regions.id", ondelete=None),
        _fk("user_id", "users.id"),
    )
    op.create_index("ix_edu_centers_name", "edu_centers", ["name"])
    op.create_index("ix_edu_centers_region_id", "edu_centers", ["region_id"])
    op.create_index("ix_edu_centers_user_id", "edu_centers", ["user_id"])

    op.create_table(
        "edu_fans",
        *_base_columns(),
        _fk("edu_id", "edu_centers.id"),
        _fk("fan_id", "fans.id"),
        sa.UniqueConstraint("edu_id", "fan_id", name="uq_edu_fans_pair"),
    )
    op.create_table(
        "edu_sohas",
        *_base_columns(),
        _fk("edu_id", "edu_centers.id"),
        _fk("soha_id", "sohas.id"),
        sa.UniqueConstraint("edu_id", "soha_id", name="uq_edu_sohas_pair"),
    )

    op.create_table(
        "fillials",
        *_base_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("image", sa.String(255), nullable=False),
        _fk("region_id", "regions.id", ondelete=None),
        _fk("edu_id", "edu_centers.id"),
    )
    op.create_index("ix_fillials_name", "fillials", ["name"])
    op.create_index("ix_fillials_edu_id", "fillials", ["edu_id"])

    op.create_table(
        "fillial_fans",
        *_base_columns(),
        _fk("fillial_id", "fillials.id"),
        _fk("fan_id", "fans.id"),
        sa.UniqueConstraint("fillial_id", "fan_id", name="uq_fillial_fans_pair"),
    )
    op.create_table(
        "fillial_sohas",
        *_base_columns(),
        _fk("fillial_id", "fillials.id"),
        _fk("soha_id", "sohas.id"),
        sa.UniqueConstraint("fillial_id", "soha_id", name="uq_fillial_sohas_pair"),
    )

    op.create_table(
        "course_registers",
        *_base_columns(),
        _fk("edu_id", "edu_centers.id"),
        _fk("soha_id", "sohas.id"),
        _fk("fan_id", "fans.id"),
        _fk("fillial_id", "fillials.id"),
        _fk("user_id", "users.id"),
    )
    op.create_index("ix_course_registers_user_id", "course_registers", ["user_id"])

    op.create_table(
        "comments",
        *_base_columns(),
        _fk("user_id", "users.id"),
        _fk("edu_id", "edu_centers.id"),
        sa.Column("comment", sa.String(250), nullable=False),
        sa.Column("star", sa.Integer(), nullable=False),
        sa.CheckConstraint("star >= 0 AND star <= 5", name="ck_comments_star_range"),
    )
    op.create_index("ix_comments_edu_id", "comments", ["edu_id"])

    op.create_table(
        "likes",
        *_base_columns(),
        _fk("user_id", "users.id"),
        _fk("edu_id", "edu_centers.id"),
        sa.UniqueConstraint("user_id", "edu_id", name="uq_likes_user_edu"),
    )
    op.create_index("ix_likes_edu_id", "likes", ["edu_id"])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    for table in (
        "likes",
        "comments",
        "course_registers",
        "fillial_sohas",
        "fillial_fans",
        "fillials",
        "edu_sohas",
        "edu_fans",
        "edu_centers",
        "resources",
        "sessions",
        "users",
        "sohas",
        "fans",
        "categories",
        "regions",
    ):
        op.drop_table(table)
