"""
User schemas for registration and public profile data.

The password hash never leaves the repository layer: ``UserResponse`` only
carries the public fields.
"""

from typing import Annotated
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    SecretStr,
    StringConstraints,
    field_validator,
)

from app.configs.settings import MAX_NAME_LENGTH, MIN_NAME_LENGTH, MIN_PASSWORD_LENGTH
from app.models import UserDB
from app.utils.helpers import iso_datetime

Name = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=MIN_NAME_LENGTH,
        max_length=MAX_NAME_LENGTH,
    ),
]


def normalize_email(value: str) -> str:
    """Trim and lower-case an email address."""
    return value.strip().lower()


class UserCreate(BaseModel):
    """User registration payload."""

    model_config = ConfigDict(frozen=True)

    name: Name = Field(..., description="Display name", examples=["Ada Lovelace"])
    email: EmailStr = Field(..., description="Email address", examples=["ada@example.com"])
    password: SecretStr = Field(
        ...,
        min_length=MIN_PASSWORD_LENGTH,
        description="Password",
        examples=["s3cret!"],
    )

    @field_validator("email", mode="before")
    @classmethod
    def normalize(cls, v: object) -> object:
        return normalize_email(v) if isinstance(v, str) else v


class UserResponse(BaseModel):
    """Public user fields."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    name: str
    email: str
    created_at: str = Field(alias="createdAt")

    @classmethod
    def from_db(cls, user: UserDB) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            createdAt=iso_datetime(user.created_at) or "",
        )
