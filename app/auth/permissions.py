"""
Post visibility and ownership rules.

Pure decision functions with no I/O. Services call them after loading a post
and raise the matching operational error on denial.
"""

from dataclasses import dataclass
from uuid import UUID

from app.errors import AuthorizationError
from app.models import PostDB
from app.schemas.post import PostFilters, PostQuery

PUBLISHED = "published"
DRAFT = "draft"


@dataclass(frozen=True)
class Caller:
    """
    The identity a request acts under.

    ``id`` is None for anonymous callers. Only the id is kept so policy
    decisions never depend on a live ORM instance.
    """

    id: UUID | None = None

    @property
    def is_anonymous(self) -> bool:
        return self.id is None


ANONYMOUS = Caller()


def is_author(post: PostDB, caller: Caller) -> bool:
    return not caller.is_anonymous and caller.id == post.author_id


def can_view_post(post: PostDB, caller: Caller) -> bool:
    """
    Return whether ``caller`` may read ``post``.

    Published posts are visible to everyone. Drafts are visible to their
    author only.
    """
    if post.status == PUBLISHED:
        return True
    return is_author(post, caller)


def can_mutate_post(post: PostDB, caller: Caller) -> bool:
    """Return whether ``caller`` may update or delete ``post`` (author only)."""
    return is_author(post, caller)


def resolve_list_query(filters: PostFilters, caller: Caller) -> PostQuery:
    """
    Turn the requested listing filters into the query actually executed.

    Args:
        filters: Filters as requested by the caller.
        caller: Requesting identity, possibly anonymous.

    Returns:
        PostQuery: Effective query with visibility constraints applied.

    Raises:
        AuthorizationError: If an authenticated caller asks for drafts of
            another author.
    """
    status = filters.status
    author_id = filters.author
    visible_to = None

    if caller.is_anonymous:
        status = PUBLISHED
    elif status == DRAFT:
        if author_id is not None and author_id != caller.id:
            raise AuthorizationError("You can only view your own draft posts")
        author_id = caller.id
    elif status is None:
        visible_to = caller.id

    return PostQuery(
        status=status,
        author_id=author_id,
        visible_to=visible_to,
        tag=filters.tag,
        search=filters.search,
        page=filters.page,
        limit=filters.limit,
    )
