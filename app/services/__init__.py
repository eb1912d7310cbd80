from app.services.auth import AuthService
from app.services.post import PostService
from app.services.slug import generate_slug, slugify

__all__ = ["AuthService", "PostService", "generate_slug", "slugify"]
