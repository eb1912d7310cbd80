# app/dependencies/dependencies.py

"""Request-scoped dependencies: sessions, repositories, services and callers."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.permissions import ANONYMOUS, Caller
from app.configs.settings import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from app.db import get_session
from app.errors import AuthenticationError
from app.managers.token_manager import decode_access_token
from app.models import UserDB
from app.repositories import PostRepository, UserRepository
from app.schemas.post import PostFilters, PostStatus
from app.services import AuthService, PostService

bearer_scheme = HTTPBearer(auto_error=False, description="Bearer token from /api/auth/login")

SessionDep = Annotated[AsyncSession, Depends(get_session)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_user_repository(session: SessionDep) -> UserRepository:
    """
    Resolve the `UserRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    UserRepository
        Repository instance bound to the session.
    """
    return UserRepository(session)


def get_post_repository(session: SessionDep) -> PostRepository:
    """
    Resolve the `PostRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    PostRepository
        Repository instance bound to the session.
    """
    return PostRepository(session)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]


def get_auth_service(repo: UserRepoDep) -> AuthService:
    return AuthService(repo)


def get_post_service(repo: PostRepoDep) -> PostService:
    return PostService(repo)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
PostServiceDep = Annotated[PostService, Depends(get_post_service)]


async def get_current_user(credentials: CredentialsDep, repo: UserRepoDep) -> UserDB:
    """
    Get the user the bearer token was issued to.

    Parameters
    ----------
    credentials : HTTPAuthorizationCredentials | None
        Parsed ``Authorization: Bearer`` header, if any.
    repo : UserRepository
        User repository.

    Returns
    -------
    UserDB
        Current authenticated user.

    Raises
    ------
    AuthenticationError
        If the token is missing, invalid or expired, or its user no longer exists.
    """
    if credentials is None:
        raise AuthenticationError("No token provided")

    token_data = decode_access_token(credentials.credentials)
    if token_data is None:
        raise AuthenticationError("Invalid or expired token")

    user = await repo.get_by_id(token_data.user_id)
    if user is None:
        raise AuthenticationError("User no longer exists")

    return user


async def get_optional_user(credentials: CredentialsDep, repo: UserRepoDep) -> UserDB | None:
    """
    Get the token's user when a valid token is sent.

    Missing or invalid tokens make the request anonymous instead of failing.
    """
    if credentials is None:
        return None

    token_data = decode_access_token(credentials.credentials)
    if token_data is None:
        return None

    return await repo.get_by_id(token_data.user_id)


UserDBDep = Annotated[UserDB, Depends(get_current_user)]
OptionalUserDep = Annotated[UserDB | None, Depends(get_optional_user)]


def get_caller(user: OptionalUserDep) -> Caller:
    return Caller(user.id) if user else ANONYMOUS


def get_current_user_id(user: UserDBDep) -> UUID:
    return user.id


CallerDep = Annotated[Caller, Depends(get_caller)]
CurrentUserIdDep = Annotated[UUID, Depends(get_current_user_id)]


def get_post_filters(
    page: Annotated[int, Query(ge=1, description="Page number (1-based)")] = DEFAULT_PAGE,
    limit: Annotated[
        int,
        Query(ge=1, le=MAX_PAGE_SIZE, description="Maximum number of posts to return"),
    ] = DEFAULT_PAGE_SIZE,
    search: Annotated[str | None, Query(description="Search in title and content")] = None,
    tag: Annotated[str | None, Query(description="Only posts with this tag")] = None,
    author: Annotated[UUID | None, Query(description="Only posts by this author ID")] = None,
    status: Annotated[PostStatus | None, Query(description="Only posts with this status")] = None,
) -> PostFilters:
    """
    Dependency to construct `PostFilters` from query parameters.

    Returns
    -------
    PostFilters
        Requested listing filters.
    """
    return PostFilters(
        page=page,
        limit=limit,
        search=search,
        tag=tag,
        author=author,
        status=status,
    )


PostFiltersDep = Annotated[PostFilters, Depends(get_post_filters)]
