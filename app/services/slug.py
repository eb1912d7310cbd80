"""URL slug derivation for post titles."""

from collections.abc import Awaitable, Callable, Collection, Iterator
from itertools import count
from re import sub
from unicodedata import normalize
from uuid import UUID

from app.configs.settings import MAX_SLUG_LENGTH

type SlugAvailability = Callable[[str, UUID | None], Awaitable[bool]]


def slugify(title: str) -> str:
    """
    Normalise a title into a lowercase ASCII hyphen-separated token.

    Accented characters are folded to their ASCII base letter, anything
    outside ``[a-z0-9]`` becomes a separator and separators never repeat or
    lead or trail. The result may be empty.

    Examples:
        >>> slugify("Hello World")
        'hello-world'
        >>> slugify("  Café -- au lait! ")
        'cafe-au-lait'
    """
    folded = normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    slug = sub(r"[^a-z0-9]+", "-", folded.lower())
    return slug.strip("-")


def _fit(base: str, room: int) -> str:
    return base[:room].rstrip("-") if len(base) > room else base


def candidates(base: str, max_length: int = MAX_SLUG_LENGTH) -> Iterator[str]:
    """
    Yield ``base``, ``base-1``, ``base-2``, ... without end.

    The base is cut so every candidate, suffix included, is at most
    ``max_length`` characters and a cut never leaves a trailing hyphen.
    """
    yield _fit(base, max_length)
    for n in count(1):
        suffix = f"-{n}"
        yield _fit(base, max_length - len(suffix)) + suffix


async def generate_slug(
    title: str,
    is_available: SlugAvailability,
    *,
    exclude_id: UUID | None = None,
    rejected: Collection[str] = (),
) -> str:
    """
    Return the first free slug for ``title``.

    Args:
        title: Post title to derive the slug from.
        is_available: Async check ``(candidate, exclude_id) -> bool`` against
            alive posts.
        exclude_id: Post being renamed, so its own slug does not collide.
        rejected: Candidates that already lost an insert race and must not
            be proposed again.

    Returns:
        str: ``base`` or ``base-N`` for the smallest free ``N``.
    """
    base = slugify(title)
    for candidate in candidates(base):
        if candidate in rejected:
            continue
        if await is_available(candidate, exclude_id):
            return candidate
    raise AssertionError("unreachable")
