"""
Post schemas.

Request payloads for creating and updating posts, the listing filters as
received from the query string, the resolved query handed to the
repository, and the response models.
"""

from dataclasses import dataclass
from math import ceil
from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from app.configs.settings import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    MAX_TAG_LENGTH,
    MAX_TITLE_LENGTH,
    MIN_CONTENT_LENGTH,
    MIN_TITLE_LENGTH,
)
from app.models import PostDB
from app.schemas.common import SuccessResponse
from app.utils.helpers import iso_datetime

PostStatus = Literal["draft", "published"]

Title = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=MIN_TITLE_LENGTH,
        max_length=MAX_TITLE_LENGTH,
    ),
]
Content = Annotated[str, StringConstraints(strip_whitespace=True, min_length=MIN_CONTENT_LENGTH)]
Tag = Annotated[str, StringConstraints(max_length=MAX_TAG_LENGTH)]
FilterText = Annotated[str, StringConstraints(strip_whitespace=True)]


class PostCreate(BaseModel):
    """Post creation payload (the author comes from the bearer token)."""

    title: Title = Field(..., description="Post title", examples=["My First Post"])
    content: Content = Field(
        ...,
        description="Post content",
        examples=["Hello world, this is my very first post."],
    )
    status: PostStatus = Field(default="draft", description="Post status")
    tags: list[Tag] = Field(default_factory=list, description="Post tags", examples=[["intro"]])


class PostUpdate(BaseModel):
    """Post update payload (all fields optional, author cannot be changed)."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "My First Post, Revised",
                "status": "published",
                "tags": ["intro", "meta"],
            },
        },
    )

    title: Title | None = None
    content: Content | None = None
    status: PostStatus | None = None
    tags: list[Tag] | None = None

    def changes(self) -> dict[str, object]:
        """Return only the fields the caller actually sent with a value."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class PostFilters(BaseModel):
    """Listing filters as requested by the caller."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=DEFAULT_PAGE, ge=1, description="Page number (1-based)")
    limit: int = Field(
        default=DEFAULT_PAGE_SIZE,
        ge=1,
        le=MAX_PAGE_SIZE,
        description="Page size",
    )
    search: FilterText | None = Field(default=None, description="Full-text search over title and content")
    tag: FilterText | None = Field(default=None, description="Only posts carrying this tag")
    author: UUID | None = Field(default=None, description="Only posts by this author")
    status: PostStatus | None = Field(default=None, description="Only posts with this status")


@dataclass(frozen=True)
class PostQuery:
    """
    Listing query after visibility rules have been applied.

    Parameters
    ----------
    status : PostStatus | None
        Exact status constraint, or None for no status constraint.
    author_id : UUID | None
        Exact author constraint.
    visible_to : UUID | None
        When set (and ``status`` is None), restrict results to published
        posts plus the drafts authored by this user.
    tag : str | None
        Tag that must be present.
    search : str | None
        Full-text search term over title and content.
    page, limit : int
        Pagination window.
    """

    status: PostStatus | None = None
    author_id: UUID | None = None
    visible_to: UUID | None = None
    tag: str | None = None
    search: str | None = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


class Pagination(BaseModel):
    """Pagination summary returned with every listing."""

    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def from_total(cls, total: int, page: int, limit: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, pages=ceil(total / limit))


class AuthorResponse(BaseModel):
    """Author information embedded in post responses (without sensitive data)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str


class PostResponse(BaseModel):
    """Post response model (safe for API responses)."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    title: str
    slug: str
    content: str
    status: str
    tags: list[str]
    author: AuthorResponse | None = None
    author_id: UUID = Field(alias="authorId")
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")

    @classmethod
    def from_db(cls, post: PostDB) -> "PostResponse":
        return cls(
            id=post.id,
            title=post.title,
            slug=post.slug,
            content=post.content,
            status=post.status,
            tags=list(post.tags or []),
            author=AuthorResponse.model_validate(post.author) if post.author else None,
            authorId=post.author_id,
            createdAt=iso_datetime(post.created_at) or "",
            updatedAt=iso_datetime(post.updated_at) or "",
        )


class PostData(BaseModel):
    post: PostResponse


class PostListData(BaseModel):
    posts: list[PostResponse]
    pagination: Pagination


PostEnvelope = SuccessResponse[PostData]
PostListEnvelope = SuccessResponse[PostListData]
