"""
Initial schema: Create users and posts tables.

Revision ID: 0001
Revises:
Create Date: 2026-10-19

- users: Accounts that sign in with email and password
- posts: Blog posts with author relationship, tags and soft-delete marker
"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# Revision identifiers, used by Alembic
revision: str = "0001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

ALIVE = sa.text("deleted_at IS NULL")
SEARCH_DOCUMENT = "to_tsvector('english', concat_ws(' ', title, content))"


def upgrade() -> None:
    """Apply schema changes for this revision."""
    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # Create posts table
    op.create_table(
        "posts",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("slug", sa.String(length=300), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column(
            "tags",
            sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), "postgresql"),
            nullable=False,
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["author_id"],
            ["users.id"],
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_posts_author_id", "posts", ["author_id"], unique=False)
    op.create_index("ix_posts_slug", "posts", ["slug"], unique=False)
    op.create_index("ix_posts_status", "posts", ["status"], unique=False)
    op.create_index("ix_posts_deleted_at", "posts", ["deleted_at"], unique=False)
    op.create_index("ix_posts_created_at", "posts", ["created_at"], unique=False)
    # Slugs are unique among alive posts only
    op.create_index(
        "uq_posts_slug_alive",
        "posts",
        ["slug"],
        unique=True,
        postgresql_where=ALIVE,
        sqlite_where=ALIVE,
    )
    # Composite indexes for the listing queries
    op.create_index(
        "ix_posts_status_deleted_created",
        "posts",
        ["status", "deleted_at", "created_at"],
        unique=False,
    )
    op.create_index(
        "ix_posts_author_status_deleted",
        "posts",
        ["author_id", "status", "deleted_at"],
        unique=False,
    )

    if op.get_context().dialect.name == "postgresql":
        # GIN indexes for tag containment and full-text search
        op.create_index(
            "ix_posts_tags_gin",
            "posts",
            ["tags"],
            unique=False,
            postgresql_using="gin",
        )
        op.create_index(
            "ix_posts_search_gin",
            "posts",
            [sa.text(SEARCH_DOCUMENT)],
            unique=False,
            postgresql_using="gin",
        )


def downgrade() -> None:
    """Revert schema changes for this revision."""
    if op.get_context().dialect.name == "postgresql":
        op.drop_index("ix_posts_search_gin", table_name="posts")
        op.drop_index("ix_posts_tags_gin", table_name="posts")

    op.drop_index("ix_posts_author_status_deleted", table_name="posts")
    op.drop_index("ix_posts_status_deleted_created", table_name="posts")
    op.drop_index("uq_posts_slug_alive", table_name="posts")
    op.drop_index("ix_posts_created_at", table_name="posts")
    op.drop_index("ix_posts_deleted_at", table_name="posts")
    op.drop_index("ix_posts_status", table_name="posts")
    op.drop_index("ix_posts_slug", table_name="posts")
    op.drop_index("ix_posts_author_id", table_name="posts")
    op.drop_table("posts")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
