# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    AuthServiceDep,
    CallerDep,
    CurrentUserIdDep,
    OptionalUserDep,
    PostFiltersDep,
    PostRepoDep,
    PostServiceDep,
    SessionDep,
    UserDBDep,
    UserRepoDep,
    bearer_scheme,
    get_caller,
    get_current_user,
    get_optional_user,
    get_post_filters,
)

__all__ = [
    "AuthServiceDep",
    "CallerDep",
    "CurrentUserIdDep",
    "OptionalUserDep",
    "PostFiltersDep",
    "PostRepoDep",
    "PostServiceDep",
    "SessionDep",
    "UserDBDep",
    "UserRepoDep",
    "bearer_scheme",
    "get_caller",
    "get_current_user",
    "get_optional_user",
    "get_post_filters",
]
