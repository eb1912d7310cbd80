"""Post repository for database operations."""

from logging import getLogger
from uuid import UUID

from sqlalchemy import ColumnElement, cast, desc, exists, func, or_, select
from sqlalchemy.dialects.postgresql import JSONB

from app.configs import file_logger
from app.errors.database import DuplicateEntryError, SlugConflictError
from app.models.post import PostDB
from app.repositories.base import BaseRepository
from app.schemas.post import PostQuery
from app.utils.helpers import utc_now

logger = file_logger(getLogger(__name__))

SEARCH_CONFIG = "english"


class PostRepository(BaseRepository[PostDB]):
    """
    Repository for Post database operations.

    Every read excludes soft-deleted posts unless ``include_deleted`` is
    passed explicitly. Slug uniqueness among alive posts is enforced by the
    ``uq_posts_slug_alive`` partial index; a violation surfaces as
    ``SlugConflictError`` so callers can pick another candidate.
    """

    model = PostDB

    async def create(self, post: PostDB) -> PostDB:
        """
        Insert a new post.

        Args:
            post: Post to insert, with author and slug already assigned

        Returns:
            PostDB: Inserted post with its author loaded

        Raises:
            SlugConflictError: If another alive post took the slug first
            DatabaseError: For other database errors
        """
        slug = post.slug
        try:
            return await self._add_and_refresh(post)
        except DuplicateEntryError as e:
            raise SlugConflictError(slug) from e

    async def get_by_id(self, post_id: UUID, *, include_deleted: bool = False) -> PostDB | None:
        """
        Get post by ID.

        Args:
            post_id: Post UUID
            include_deleted: Also return soft-deleted posts

        Returns:
            PostDB | None: Post if found, None otherwise
        """
        # pyrefly: ignore [bad-argument-type]
        statement = select(PostDB).where(PostDB.id == post_id)
        if not include_deleted:
            statement = statement.where(self._alive())
        return await self._first(statement)

    async def get_by_slug(self, slug: str, *, include_deleted: bool = False) -> PostDB | None:
        """
        Get post by slug.

        With ``include_deleted`` several posts may share the slug; the alive
        one wins, otherwise the most recently deleted one.

        Args:
            slug: Post slug
            include_deleted: Also consider soft-deleted posts

        Returns:
            PostDB | None: Post if found, None otherwise
        """
        # pyrefly: ignore [bad-argument-type]
        statement = select(PostDB).where(PostDB.slug == slug)
        if include_deleted:
            statement = statement.order_by(
                # pyrefly: ignore [missing-attribute]
                PostDB.deleted_at.is_not(None),
                # pyrefly: ignore [bad-argument-type]
                desc(PostDB.deleted_at),
                # pyrefly: ignore [bad-argument-type]
                desc(PostDB.created_at),
            )
        else:
            statement = statement.where(self._alive())
        return await self._first(statement)

    async def query(self, query: PostQuery) -> tuple[list[PostDB], int]:
        """
        Get one page of posts and the total number of matches.

        Args:
            query: Resolved listing query

        Returns:
            tuple[list[PostDB], int]: Posts newest first, and the total count
                over the same filter
        """
        conditions = self._conditions(query)
        statement = (
            select(PostDB)
            .where(*conditions)
            # pyrefly: ignore [bad-argument-type]
            .order_by(desc(PostDB.created_at), desc(PostDB.id))
            .offset(query.skip)
            .limit(query.limit)
        )

        result = await self.session.execute(statement)
        posts = list(result.scalars().all())
        total = await self._count(*conditions)
        logger.debug(f"Found {total} posts for {query}")
        return posts, total

    async def update(self, post: PostDB, changes: dict[str, object]) -> PostDB:
        """
        Apply ``changes`` to a loaded post.

        Args:
            post: Post to update
            changes: Field values to set

        Returns:
            PostDB: Updated post

        Raises:
            SlugConflictError: If the new slug was taken concurrently
            DatabaseError: For other database errors
        """
        for key, value in changes.items():
            setattr(post, key, value)
        post.updated_at = utc_now()

        slug = post.slug
        try:
            await self._flush()
        except DuplicateEntryError as e:
            raise SlugConflictError(slug) from e
        return post

    async def soft_delete(self, post: PostDB) -> None:
        """
        Mark a post as deleted without removing it.

        Args:
            post: Post to delete
        """
        now = utc_now()
        post.deleted_at = now
        post.updated_at = now
        await self._flush()
        logger.info(f"Post {post.id} soft-deleted")

    async def slug_available(self, candidate: str, exclude_id: UUID | None = None) -> bool:
        """
        Check whether no alive post other than ``exclude_id`` uses ``candidate``.

        Args:
            candidate: Slug to check
            exclude_id: Post being renamed

        Returns:
            bool: True if the slug is free
        """
        return not await self._check_exists_by_field(
            "slug",
            candidate,
            exclude_id,
            self._alive(),
        )

    @staticmethod
    def _alive() -> ColumnElement[bool]:
        # pyrefly: ignore [missing-attribute]
        return PostDB.deleted_at.is_(None)

    def _conditions(self, query: PostQuery) -> list[ColumnElement[bool]]:
        conditions = [self._alive()]

        if query.status is not None:
            # pyrefly: ignore [bad-argument-type]
            conditions.append(PostDB.status == query.status)
        elif query.visible_to is not None:
            conditions.append(
                or_(
                    # pyrefly: ignore [bad-argument-type]
                    PostDB.status == "published",
                    # pyrefly: ignore [bad-argument-type]
                    PostDB.author_id == query.visible_to,
                ),
            )
        if query.author_id is not None:
            # pyrefly: ignore [bad-argument-type]
            conditions.append(PostDB.author_id == query.author_id)
        if query.tag:
            conditions.append(self._has_tag(query.tag))
        if query.search:
            conditions.append(self._matches(query.search))
        return conditions

    def _has_tag(self, tag: str) -> ColumnElement[bool]:
        """Tag membership: JSONB containment on PostgreSQL, ``json_each`` elsewhere."""
        if self.dialect == "postgresql":
            # pyrefly: ignore [missing-attribute]
            return cast(PostDB.tags, JSONB).contains([tag])
        tags = func.json_each(PostDB.tags).table_valued("value")
        return exists().select_from(tags).where(tags.c.value == tag)

    def _matches(self, term: str) -> ColumnElement[bool]:
        """Full-text match on PostgreSQL, case-insensitive substring elsewhere."""
        if self.dialect == "postgresql":
            document = func.to_tsvector(
                SEARCH_CONFIG,
                func.concat_ws(" ", PostDB.title, PostDB.content),
            )
            return document.op("@@")(func.plainto_tsquery(SEARCH_CONFIG, term))

        needle = term.lower()
        return or_(
            func.lower(PostDB.title).contains(needle, autoescape=True),
            func.lower(PostDB.content).contains(needle, autoescape=True),
        )

