"""Pydantic schemas for user records: path identifier, partial update, and response shapes."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

Role = Literal["user", "admin"]

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 255

# users.id is a 32-bit INTEGER column.
USER_ID_MAX = 2**31 - 1

# Fields a caller may change through PUT /users/{id}.
UPDATABLE_FIELDS: tuple[str, ...] = ("name", "email", "role")


def normalize_email(value: Any) -> Any:
    """Trim and lower-case an email before syntax validation."""
    if isinstance(value, str):
        return value.strip().lower()
    return value


def strip_text(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value


def check_email_length(value: str | None) -> str | None:
    if value is not None and len(value) > EMAIL_MAX_LENGTH:
        raise ValueError(f"Email must be at most {EMAIL_MAX_LENGTH} characters")
    return value


class UserIdParams(BaseModel):
    """Path parameters for by-id routes; coerces the raw segment to an integer."""

    id: int

    @field_validator("id")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("User ID must be a positive integer")
        if v > USER_ID_MAX:
            raise ValueError(f"User ID must be at most {USER_ID_MAX}")
        return v


class UserUpdate(BaseModel):
    """
    Partial update for a user record.

    Every field is optional, but at least one must be provided and none may
    be null. Unknown keys are ignored.
    """

    model_config = {"extra": "ignore"}

    name: str | None = Field(
        default=None,
        min_length=NAME_MIN_LENGTH,
        max_length=NAME_MAX_LENGTH,
        description="Display name (2-255 characters, trimmed).",
    )
    email: EmailStr | None = Field(
        default=None,
        description="Email address (trimmed and lower-cased).",
    )
    role: Role | None = Field(default=None, description="Role: user or admin.")

    @field_validator("name", "email", "role", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        # Omit a field to leave it unchanged; null is not a value.
        if v is None:
            raise ValueError("Expected string, received null")
        return v

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return strip_text(v)

    @field_validator("email", mode="before")
    @classmethod
    def lowercase_email(cls, v: Any) -> Any:
        return normalize_email(v)

    @field_validator("email")
    @classmethod
    def validate_email_length(cls, v: str | None) -> str | None:
        return check_email_length(v)

    @model_validator(mode="after")
    def require_one_field(self) -> "UserUpdate":
        if all(getattr(self, field) is None for field in UPDATABLE_FIELDS):
            raise ValueError("At least one field must be provided for update")
        return self

    def changes(self) -> dict[str, Any]:
        """Only the fields the caller actually supplied."""
        return self.model_dump(exclude_none=True)


class UserOut(BaseModel):
    """User record as returned by the API (no password)."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str
    role: str
    created_at: datetime
    updated_at: datetime


class DeletedUserOut(BaseModel):
    """Snapshot of a deleted user."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str
    role: str


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    message: str
    users: list[UserOut]
    count: int


class UserResponse(BaseModel):
    message: str
    user: UserOut


class DeletedUserResponse(BaseModel):
    message: str
    user: DeletedUserOut
