"""Post database model using SQLModel."""

from datetime import datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import JSON, DateTime, Index, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, Relationship, SQLModel, String, Text

from app.models.user import UserDB
from app.utils.helpers import utc_now

ALIVE = text("deleted_at IS NULL")

TagsType = JSON().with_variant(JSONB(), "postgresql")


class PostDB(SQLModel, table=True):
    """
    Post database model.

    Posts are never physically removed: ``deleted_at`` is the soft-delete
    marker. Slugs are unique among alive posts only, which the partial index
    ``uq_posts_slug_alive`` enforces at write time.
    """

    __tablename__ = cast("declared_attr[str]", "posts")

    __table_args__ = (
        Index(
            "uq_posts_slug_alive",
            "slug",
            unique=True,
            postgresql_where=ALIVE,
            sqlite_where=ALIVE,
        ),
        Index("ix_posts_status_deleted_created", "status", "deleted_at", "created_at"),
        Index("ix_posts_author_status_deleted", "author_id", "status", "deleted_at"),
        Index("ix_posts_tags_gin", "tags", postgresql_using="gin"),
    )

    # Primary key
    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Post ID",
    )

    # Set once at creation
    author_id: UUID = Field(
        sa_column=Column(
            "author_id",
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Author ID (foreign key to users.id)",
    )

    title: str = Field(
        sa_column=Column(String(200), nullable=False),
        description="Post title",
    )
    slug: str = Field(
        sa_column=Column(String(300), nullable=False, index=True),
        description="URL-friendly slug (unique among alive posts)",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Post content",
    )
    status: str = Field(
        default="draft",
        sa_column=Column(String(20), nullable=False, index=True),
        description="Post status (draft, published)",
    )
    tags: list[str] = Field(
        default_factory=list,
        sa_column=Column(TagsType, nullable=False),
        description="Post tags",
    )

    # Soft-delete marker and timestamps (timezone-aware)
    deleted_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True, index=True),
        description="Soft-delete timestamp (null while alive)",
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last update timestamp",
    )

    author: UserDB | None = Relationship(
        sa_relationship_kwargs={"lazy": "joined", "innerjoin": True},
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "author_id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "My First Post",
                "slug": "my-first-post",
                "content": "Hello from the very first post.",
                "status": "draft",
                "tags": ["intro"],
            },
        },
    )
