"""Request/response schemas for auth endpoints and the decoded identity claim."""

from typing import Any

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.schemas.users import (
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    Role,
    UserOut,
    check_email_length,
    normalize_email,
    strip_text,
)

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 128


class Claim(BaseModel):
    """Verified identity attached to the request by the access guard."""

    id: int
    role: Role
    email: str | None = None
    exp: int | None = None
    iat: int | None = None


class SignUpRequest(BaseModel):
    """Self-service registration. New accounts always get the 'user' role."""

    name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    email: EmailStr
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH
    )

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
    def validate_email_length(cls, v: str) -> str:
        return check_email_length(v)


class SignInRequest(BaseModel):
    """Credentials for sign-in."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LENGTH)

    @field_validator("email", mode="before")
    @classmethod
    def lowercase_email(cls, v: Any) -> Any:
        return normalize_email(v)


class AuthResponse(BaseModel):
    """Response for sign-up and sign-in; the token itself travels in the cookie."""

    message: str
    user: UserOut


class MessageResponse(BaseModel):
    message: str
