"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthResponse,
    Claim,
    MessageResponse,
    SignInRequest,
    SignUpRequest,
)
from app.schemas.health import HealthResponse, RootResponse, StatusResponse
from app.schemas.users import (
    DeletedUserOut,
    DeletedUserResponse,
    Role,
    UserIdParams,
    UserOut,
    UserResponse,
    UsersListResponse,
    UserUpdate,
)

__all__ = [
    "AuthResponse",
    "Claim",
    "DeletedUserOut",
    "DeletedUserResponse",
    "HealthResponse",
    "MessageResponse",
    "Role",
    "RootResponse",
    "SignInRequest",
    "SignUpRequest",
    "StatusResponse",
    "UserIdParams",
    "UserOut",
    "UserResponse",
    "UsersListResponse",
    "UserUpdate",
]
