from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.schemas.common import SuccessResponse
from app.schemas.user import UserResponse, normalize_email


class LoginRequest(BaseModel):
    """Login payload."""

    model_config = ConfigDict(frozen=True)

    email: EmailStr = Field(..., examples=["ada@example.com"])
    password: str = Field(..., min_length=1, examples=["s3cret!"])

    @field_validator("email", mode="before")
    @classmethod
    def normalize(cls, v: object) -> object:
        return normalize_email(v) if isinstance(v, str) else v


class TokenData(BaseModel):
    """Token data schema for extracted token payload."""

    user_id: UUID
    jti: str
    token_type: str


class AuthData(BaseModel):
    """Registered or logged-in user together with a fresh bearer token."""

    user: UserResponse
    token: str


AuthResponse = SuccessResponse[AuthData]
