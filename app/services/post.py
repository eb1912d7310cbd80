"""
Post service orchestrating slugs, visibility rules and persistence.

The service holds no state beyond its repository. A write that loses a slug
race to a concurrent request is rolled back by the repository and the whole
operation is retried with the losing candidate excluded.
"""

from collections.abc import Awaitable, Callable
from logging import getLogger
from uuid import UUID

from app.auth.permissions import Caller, can_mutate_post, can_view_post, resolve_list_query
from app.configs import file_logger, settings
from app.decorators.with_retry import with_retry
from app.errors import AuthorizationError, NotFoundError, SlugConflictError
from app.models import PostDB
from app.repositories import PostRepository
from app.schemas.post import Pagination, PostCreate, PostFilters, PostUpdate
from app.services.slug import generate_slug

logger = file_logger(getLogger(__name__))

POST_NOT_FOUND = "Post not found"


class PostService:
    """
    Service for the post lifecycle.

    Args:
        repo: Post repository bound to the request session
        slug_retries: Attempts allowed when a slug is taken concurrently
    """

    def __init__(self, repo: PostRepository, slug_retries: int | None = None) -> None:
        self.repo = repo
        self.slug_retries = settings.SLUG_CONFLICT_RETRIES if slug_retries is None else slug_retries

    def _retrying(
        self,
    ) -> Callable[[Callable[[], Awaitable[PostDB]]], Callable[[], Awaitable[PostDB]]]:
        return with_retry(
            max_retries=self.slug_retries,
            base_delay=0,
            max_delay=0,
            exec_retry=SlugConflictError,
        )

    async def create(self, data: PostCreate, author_id: UUID) -> PostDB:
        """
        Create a post owned by ``author_id`` with a fresh unique slug.

        Raises:
            SlugConflictError: If every attempt lost its slug to a concurrent write
        """
        rejected: set[str] = set()

        @self._retrying()
        async def attempt() -> PostDB:
            slug = await generate_slug(data.title, self.repo.slug_available, rejected=rejected)
            post = PostDB(
                author_id=author_id,
                title=data.title,
                slug=slug,
                content=data.content,
                status=data.status,
                tags=list(data.tags),
            )
            try:
                return await self.repo.create(post)
            except SlugConflictError:
                rejected.add(slug)
                raise

        post = await attempt()
        logger.info(f"Post {post.id} created with slug '{post.slug}'")
        return post

    async def get_by_slug(self, slug: str, caller: Caller) -> PostDB:
        """
        Fetch an alive post the caller may read.

        Raises:
            NotFoundError: If no alive post has this slug
            AuthorizationError: If the post is a draft the caller does not own
        """
        post = await self.repo.get_by_slug(slug)
        if post is None:
            raise NotFoundError(POST_NOT_FOUND)
        if not can_view_post(post, caller):
            raise AuthorizationError("You do not have permission to view this post")
        return post

    async def list(self, filters: PostFilters, caller: Caller) -> tuple[list[PostDB], Pagination]:
        """
        List one page of posts visible to the caller, newest first.

        Raises:
            AuthorizationError: If the caller asks for another author's drafts
        """
        query = resolve_list_query(filters, caller)
        posts, total = await self.repo.query(query)
        return posts, Pagination.from_total(total, query.page, query.limit)

    async def update(self, post_id: UUID, changes: PostUpdate, caller_id: UUID) -> PostDB:
        """
        Apply a partial update; the slug is re-derived only when the title changes.

        Raises:
            NotFoundError: If the post does not exist or was deleted
            AuthorizationError: If the caller is not the author
            SlugConflictError: If every attempt lost its slug to a concurrent write
        """
        fields = changes.changes()
        rejected: set[str] = set()

        @self._retrying()
        async def attempt() -> PostDB:
            post = await self._owned_post(post_id, caller_id, "update")
            patch = dict(fields)
            slug = None
            if "title" in patch and patch["title"] != post.title:
                slug = await generate_slug(
                    patch["title"],
                    self.repo.slug_available,
                    exclude_id=post.id,
                    rejected=rejected,
                )
                patch["slug"] = slug
            try:
                return await self.repo.update(post, patch)
            except SlugConflictError:
                if slug is not None:
                    rejected.add(slug)
                raise

        return await attempt()

    async def delete(self, post_id: UUID, caller_id: UUID) -> None:
        """
        Soft-delete a post.

        Raises:
            NotFoundError: If the post does not exist or was already deleted
            AuthorizationError: If the caller is not the author
        """
        post = await self._owned_post(post_id, caller_id, "delete")
        await self.repo.soft_delete(post)

    async def _owned_post(self, post_id: UUID, caller_id: UUID, action: str) -> PostDB:
        post = await self.repo.get_by_id(post_id)
        if post is None:
            raise NotFoundError(POST_NOT_FOUND)
        if not can_mutate_post(post, Caller(caller_id)):
            raise AuthorizationError(f"You can only {action} your own posts")
        return post
