# app/routes/post.py

"""
Post Routes.

CRUD and listing endpoints for blog posts.

Summary
-------
Endpoints include:
  - Create post (authenticated)
  - List posts with filters and pagination (optional authentication)
  - Get post by slug (optional authentication)
  - Update post (author only)
  - Soft-delete post (author only)

Visibility
----------
Anonymous callers only ever see published posts. A draft requested by an
anonymous caller is reported as missing; a draft requested by another user
is reported as forbidden.
"""

from logging import getLogger
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from app.configs import file_logger
from app.configs.settings import MAX_SLUG_LENGTH
from app.dependencies import CallerDep, CurrentUserIdDep, PostFiltersDep, PostServiceDep
from app.errors import AuthorizationError, NotFoundError
from app.schemas.common import ErrorResponse
from app.schemas.post import (
    PostCreate,
    PostData,
    PostEnvelope,
    PostListData,
    PostListEnvelope,
    PostResponse,
    PostUpdate,
)
from app.services.post import POST_NOT_FOUND

router = APIRouter(prefix="/api/posts", tags=["📝 Posts"])

logger = file_logger(getLogger(__name__))

SlugPath = Annotated[str, Path(min_length=1, max_length=MAX_SLUG_LENGTH, description="Post slug")]
PostIdPath = Annotated[UUID, Path(description="Post ID")]

POST_EXAMPLE = {
    "id": "550e8400-e29b-41d4-a716-446655440000",
    "title": "My First Post",
    "slug": "my-first-post",
    "content": "Hello from the very first post.",
    "status": "draft",
    "tags": ["intro"],
    "author": {
        "id": "123e4567-e89b-12d3-a456-426614174000",
        "name": "Ada Lovelace",
        "email": "ada@example.com",
    },
    "authorId": "123e4567-e89b-12d3-a456-426614174000",
    "createdAt": "2025-01-01T00:00:00.000Z",
    "updatedAt": "2025-01-01T00:00:00.000Z",
}


def fail(message: str) -> dict:
    return {
        "model": ErrorResponse,
        "content": {"application/json": {"example": {"status": "fail", "message": message}}},
    }


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=PostEnvelope,
    status_code=HTTP_201_CREATED,
    summary="Create post",
    description="Create a post owned by the authenticated user. The slug is derived from the title.",
    responses={
        201: {
            "content": {
                "application/json": {"example": {"status": "success", "data": {"post": POST_EXAMPLE}}},
            },
        },
        401: {"description": "Unauthorized", **fail("No token provided")},
        409: {"description": "Conflict", **fail("A post with slug 'my-first-post' already exists")},
    },
    operation_id="posts_create",
)
async def create_post(
    post: PostCreate,
    user_id: CurrentUserIdDep,
    service: PostServiceDep,
) -> PostEnvelope:
    """
    Create a new post.

    Parameters
    ----------
    post : PostCreate
        Title, content, optional status (default ``draft``) and tags.
    user_id : UUID
        Authenticated user, who becomes the author.
    service : PostService
        Post service dependency.

    Returns
    -------
    PostEnvelope
        The created post.
    """
    db_post = await service.create(post, user_id)
    return PostEnvelope(data=PostData(post=PostResponse.from_db(db_post)))


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=PostListEnvelope,
    summary="List posts",
    description=(
        "List posts newest first. Anonymous callers only see published posts; "
        "authenticated callers also see their own drafts."
    ),
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "success",
                        "data": {
                            "posts": [POST_EXAMPLE],
                            "pagination": {"page": 1, "limit": 10, "total": 1, "pages": 1},
                        },
                    },
                },
            },
        },
        403: {"description": "Forbidden", **fail("You can only view your own draft posts")},
    },
    operation_id="posts_list",
)
async def list_posts(
    filters: PostFiltersDep,
    caller: CallerDep,
    service: PostServiceDep,
) -> PostListEnvelope:
    """
    List posts with filters and pagination.

    Parameters
    ----------
    filters : PostFilters
        ``page``, ``limit``, ``search``, ``tag``, ``author`` and ``status``.
    caller : Caller
        Authenticated or anonymous caller.
    service : PostService
        Post service dependency.

    Returns
    -------
    PostListEnvelope
        One page of posts and the pagination summary.

    Examples
    --------
    Request
        GET /api/posts?tag=python&page=2&limit=5
    Response
        200 OK
        {"status": "success", "data": {"posts": [ ... ], "pagination": { ... }}}
    """
    posts, pagination = await service.list(filters, caller)
    return PostListEnvelope(
        data=PostListData(
            posts=[PostResponse.from_db(post) for post in posts],
            pagination=pagination,
        ),
    )


@router.get(
    "/{slug}",
    response_class=ORJSONResponse,
    response_model=PostEnvelope,
    summary="Get post by slug",
    description="Get a published post, or one of the caller's own drafts, by slug.",
    responses={
        200: {
            "content": {
                "application/json": {"example": {"status": "success", "data": {"post": POST_EXAMPLE}}},
            },
        },
        403: {"description": "Forbidden", **fail("You do not have permission to view this post")},
        404: {"description": "Not found", **fail(POST_NOT_FOUND)},
    },
    operation_id="posts_get_by_slug",
)
async def get_post(slug: SlugPath, caller: CallerDep, service: PostServiceDep) -> PostEnvelope:
    """
    Get a post by slug.

    Parameters
    ----------
    slug : str
        Post slug.
    caller : Caller
        Authenticated or anonymous caller.
    service : PostService
        Post service dependency.

    Returns
    -------
    PostEnvelope
        The requested post.

    Raises
    ------
    NotFoundError
        If no alive post has the slug, or an anonymous caller asks for a draft.
    AuthorizationError
        If an authenticated caller asks for someone else's draft.
    """
    try:
        db_post = await service.get_by_slug(slug, caller)
    except AuthorizationError as e:
        if caller.is_anonymous:
            raise NotFoundError(POST_NOT_FOUND) from e
        raise
    return PostEnvelope(data=PostData(post=PostResponse.from_db(db_post)))


@router.put(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostEnvelope,
    summary="Update post",
    description="Update any of title, content, status and tags. Only the author may update.",
    responses={
        200: {
            "content": {
                "application/json": {"example": {"status": "success", "data": {"post": POST_EXAMPLE}}},
            },
        },
        400: {"description": "Invalid ID", **fail("Invalid post ID")},
        403: {"description": "Forbidden", **fail("You can only update your own posts")},
        404: {"description": "Not found", **fail(POST_NOT_FOUND)},
    },
    operation_id="posts_update",
)
async def update_post(
    post_id: PostIdPath,
    changes: PostUpdate,
    user_id: CurrentUserIdDep,
    service: PostServiceDep,
) -> PostEnvelope:
    """
    Update a post.

    Parameters
    ----------
    post_id : UUID
        Post ID.
    changes : PostUpdate
        Fields to change; omitted fields are left untouched.
    user_id : UUID
        Authenticated user.
    service : PostService
        Post service dependency.

    Returns
    -------
    PostEnvelope
        The updated post.
    """
    db_post = await service.update(post_id, changes, user_id)
    return PostEnvelope(data=PostData(post=PostResponse.from_db(db_post)))


@router.delete(
    "/{post_id}",
    response_class=Response,
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete post",
    description="Soft-delete a post. Only the author may delete.",
    responses={
        204: {"description": "No Content"},
        403: {"description": "Forbidden", **fail("You can only delete your own posts")},
        404: {"description": "Not found", **fail(POST_NOT_FOUND)},
    },
    operation_id="posts_delete",
)
async def delete_post(
    post_id: PostIdPath,
    user_id: CurrentUserIdDep,
    service: PostServiceDep,
) -> Response:
    """
    Soft-delete a post.

    Parameters
    ----------
    post_id : UUID
        Post ID.
    user_id : UUID
        Authenticated user.
    service : PostService
        Post service dependency.

    Returns
    -------
    Response
        Empty 204 response.
    """
    await service.delete(post_id, user_id)
    logger.info(f"Post {post_id} deleted by {user_id}")
    return Response(status_code=HTTP_204_NO_CONTENT)
