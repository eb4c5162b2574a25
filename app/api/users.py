"""User record endpoints: list (admin), fetch, update and delete (self or admin)."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from app.api.auth import authenticate_token, get_claim, require_role
from app.core.database import get_db
from app.core.errors import Conflict, NotFound
from app.core.validation import validate
from app.schemas.auth import Claim
from app.schemas.users import (
    DeletedUserResponse,
    UserIdParams,
    UserOut,
    UserResponse,
    UsersListResponse,
    UserUpdate,
)
from app.services.policy import (
    DELETE_USER,
    GET_USER,
    LIST_USERS,
    POLICIES,
    UPDATE_USER,
    authorize,
)
from app.services.users import (
    EmailAlreadyExistsError,
    UserNotFoundError,
    delete_user,
    get_user_by_id,
    list_users,
    update_user,
)

logger = logging.getLogger(__name__)

# Every route below requires a valid token cookie.
router = APIRouter(dependencies=[Depends(authenticate_token)])


def _not_found(e: UserNotFoundError) -> NotFound:
    logger.warning("User not found", extra={"user_id": e.user_id})
    return NotFound("The requested user does not exist", error="User not found")


@router.get(
    "",
    response_model=UsersListResponse,
    dependencies=[Depends(require_role(*POLICIES[LIST_USERS].roles))],
)
def fetch_all_users(db: Annotated[Session, Depends(get_db)]) -> UsersListResponse:
    """List all users (admin only)."""
    logger.info("Getting users...")
    users = list_users(db)
    return UsersListResponse(
        message="Successfully retrieved users",
        users=[UserOut.model_validate(u) for u in users],
        count=len(users),
    )


@router.get("/{user_id}", response_model=UserResponse)
def fetch_user_by_id(
    user_id: str,
    claim: Annotated[Claim, Depends(get_claim)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Fetch one user; any authenticated caller."""
    params = validate(UserIdParams, {"id": user_id})
    authorize(GET_USER, claim, params.id)
    logger.info("Getting user by ID: %s", params.id)
    try:
        user = get_user_by_id(db, params.id)
    except UserNotFoundError as e:
        raise _not_found(e) from e
    return UserResponse(
        message="User retrieved successfully", user=UserOut.model_validate(user)
    )


@router.put("/{user_id}", response_model=UserResponse)
def update_user_by_id(
    user_id: str,
    claim: Annotated[Claim, Depends(get_claim)],
    db: Annotated[Session, Depends(get_db)],
    payload: Annotated[Any, Body()] = None,
) -> UserResponse:
    """
    Partially update a user.

    Callers may update their own record; admins may update any record. Changing
    the role field requires the admin role, even on one's own record.
    """
    params = validate(UserIdParams, {"id": user_id})
    updates = validate(UserUpdate, payload)
    changes = updates.changes()
    authorize(UPDATE_USER, claim, params.id, fields=changes)

    logger.info("Updating user ID: %s", params.id, extra={"fields": sorted(changes)})
    try:
        user = update_user(db, params.id, changes)
    except UserNotFoundError as e:
        raise _not_found(e) from e
    except EmailAlreadyExistsError as e:
        raise Conflict(e.message) from e
    return UserResponse(
        message="User updated successfully", user=UserOut.model_validate(user)
    )


@router.delete("/{user_id}", response_model=DeletedUserResponse)
def delete_user_by_id(
    user_id: str,
    claim: Annotated[Claim, Depends(get_claim)],
    db: Annotated[Session, Depends(get_db)],
) -> DeletedUserResponse:
    """Delete a user; callers may delete their own account, admins any account."""
    params = validate(UserIdParams, {"id": user_id})
    authorize(DELETE_USER, claim, params.id)
    logger.info("Deleting user ID: %s", params.id)
    try:
        snapshot = delete_user(db, params.id)
    except UserNotFoundError as e:
        raise _not_found(e) from e
    return DeletedUserResponse(message="User deleted successfully", user=snapshot)
