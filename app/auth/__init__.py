"""Authorization rules for posts."""

from app.auth.permissions import (
    ANONYMOUS,
    Caller,
    can_mutate_post,
    can_view_post,
    is_author,
    resolve_list_query,
)

__all__ = [
    "ANONYMOUS",
    "Caller",
    "can_mutate_post",
    "can_view_post",
    "is_author",
    "resolve_list_query",
]
