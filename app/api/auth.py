"""Cookie-JWT access guard (authenticate_token, require_role) and account endpoints."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Request, Response, status
from sqlalchemy.orm import Session

from app.core.database import AppContext, get_context, get_db
from app.core.errors import Conflict, Forbidden, Unauthenticated
from app.core.security import (
    TOKEN_COOKIE,
    InvalidCredential,
    create_access_token,
    verify_credential,
)
from app.core.validation import validate
from app.models import User
from app.schemas.auth import (
    AuthResponse,
    Claim,
    MessageResponse,
    SignInRequest,
    SignUpRequest,
)
from app.schemas.users import UserOut
from app.services.accounts import (
    InvalidCredentialsError,
    authenticate_user,
    create_user,
)
from app.services.users import EmailAlreadyExistsError

logger = logging.getLogger(__name__)
router = APIRouter()


def authenticate_token(
    request: Request,
    ctx: Annotated[AppContext, Depends(get_context)],
) -> Claim:
    """Dependency: require a valid JWT in the 'token' cookie and attach its claim to the request."""
    token = request.cookies.get(TOKEN_COOKIE)
    if not token:
        raise Unauthenticated("No token provided")
    try:
        claim = verify_credential(token, ctx.settings)
    except InvalidCredential as e:
        logger.error("Authentication failed", extra={"reason": e.message})
        raise Unauthenticated("Invalid token") from e
    request.state.claim = claim
    return claim


def get_claim(request: Request) -> Claim:
    """Dependency: the claim attached by authenticate_token. Raises 401 if it never ran."""
    claim = getattr(request.state, "claim", None)
    if claim is None:
        raise Unauthenticated("Authentication required")
    return claim


def require_role(*roles: str):
    """
    Build a dependency that passes only claims whose role is in roles.

    Must run after authenticate_token. With no roles, any authenticated claim passes.
    """
    allowed = frozenset(roles)

    def check_role(claim: Annotated[Claim, Depends(get_claim)]) -> Claim:
        if allowed and claim.role not in allowed:
            raise Forbidden("Insufficient permissions")
        return claim

    return check_role


def _set_token_cookie(response: Response, ctx: AppContext, user: User) -> None:
    settings = ctx.settings
    token = create_access_token(settings, sub=user.id, role=user.role, email=user.email)
    response.set_cookie(
        TOKEN_COOKIE,
        value=token,
        httponly=True,
        samesite="strict",
        secure=settings.cookie_secure,
        max_age=settings.cookie_max_age,
    )


@router.post("/sign-up", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def sign_up(
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
    payload: Annotated[Any, Body()] = None,
) -> AuthResponse:
    """Register a new account with role 'user' and sign it in."""
    body = validate(SignUpRequest, payload)
    try:
        user = create_user(
            db,
            name=body.name,
            email=body.email,
            password=body.password,
            rounds=ctx.settings.BCRYPT_ROUNDS,
        )
    except EmailAlreadyExistsError as e:
        logger.warning("Sign-up rejected: email already registered")
        raise Conflict(e.message) from e
    _set_token_cookie(response, ctx, user)
    logger.info("User registered successfully: id=%s", user.id)
    return AuthResponse(message="User registered", user=UserOut.model_validate(user))


@router.post("/sign-in", response_model=AuthResponse)
def sign_in(
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    ctx: Annotated[AppContext, Depends(get_context)],
    payload: Annotated[Any, Body()] = None,
) -> AuthResponse:
    """Check email and password; on success set the 'token' cookie."""
    body = validate(SignInRequest, payload)
    try:
        user = authenticate_user(db, body.email, body.password)
    except InvalidCredentialsError as e:
        logger.warning("Sign-in failed")
        raise Unauthenticated(e.message, error="Invalid credentials") from e
    _set_token_cookie(response, ctx, user)
    logger.info("User signed in successfully: id=%s", user.id)
    return AuthResponse(
        message="User signed in successfully", user=UserOut.model_validate(user)
    )


@router.post("/sign-out", response_model=MessageResponse)
def sign_out(response: Response) -> MessageResponse:
    """Clear the 'token' cookie. Always succeeds."""
    response.delete_cookie(TOKEN_COOKIE, httponly=True, samesite="strict")
    return MessageResponse(message="User signed out successfully")
