from app.schemas.auth import AuthData, AuthResponse, LoginRequest, TokenData
from app.schemas.common import ErrorResponse, HealthCheckResponse, SuccessResponse
from app.schemas.post import (
    AuthorResponse,
    Pagination,
    PostCreate,
    PostData,
    PostEnvelope,
    PostFilters,
    PostListData,
    PostListEnvelope,
    PostQuery,
    PostResponse,
    PostStatus,
    PostUpdate,
)
from app.schemas.user import UserCreate, UserResponse

__all__ = [
    "AuthData",
    "AuthResponse",
    "AuthorResponse",
    "ErrorResponse",
    "HealthCheckResponse",
    "LoginRequest",
    "Pagination",
    "PostCreate",
    "PostData",
    "PostEnvelope",
    "PostFilters",
    "PostListData",
    "PostListEnvelope",
    "PostQuery",
    "PostResponse",
    "PostStatus",
    "PostUpdate",
    "SuccessResponse",
    "TokenData",
    "UserCreate",
    "UserResponse",
]
