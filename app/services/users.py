"""Record service for users: list, fetch, update and delete against the store."""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import User
from app.schemas.users import DeletedUserOut

logger = logging.getLogger(__name__)


class UserNotFoundError(Exception):
    """Raised when no user row matches the requested id."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        self.message = "User not found"
        super().__init__(self.message)


class EmailAlreadyExistsError(Exception):
    """Raised when a create or update would violate email uniqueness."""

    def __init__(self, email: str) -> None:
        self.email = email
        self.message = "Email already exists"
        super().__init__(self.message)


def list_users(session: Session) -> list[User]:
    """Return every user ordered by id."""
    return list(session.scalars(select(User).order_by(User.id)))


def get_user_by_id(session: Session, user_id: int, *, for_update: bool = False) -> User:
    """
    Fetch one user by id. Raises UserNotFoundError if absent.

    for_update locks the row (SELECT ... FOR UPDATE) on dialects that support it,
    so a following mutation in the same transaction sees a stable row.
    """
    stmt = select(User).where(User.id == user_id).limit(1)
    if for_update:
        stmt = stmt.with_for_update()
    user = session.scalars(stmt).first()
    if user is None:
        raise UserNotFoundError(user_id)
    return user


def update_user(session: Session, user_id: int, changes: dict[str, Any]) -> User:
    """
    Apply a partial update and stamp updated_at.

    The existence check and the write run in one transaction. Raises
    UserNotFoundError or EmailAlreadyExistsError; the session is rolled back
    on either.
    """
    try:
        user = get_user_by_id(session, user_id, for_update=True)
        for field, value in changes.items():
            setattr(user, field, value)
        user.updated_at = datetime.now(UTC)
        session.commit()
    except UserNotFoundError:
        session.rollback()
        raise
    except IntegrityError as e:
        session.rollback()
        logger.warning(
            "User update rejected by store constraint",
            extra={"user_id": user_id, "fields": sorted(changes)},
        )
        raise EmailAlreadyExistsError(changes.get("email", "")) from e
    session.refresh(user)
    return user


def delete_user(session: Session, user_id: int) -> DeletedUserOut:
    """Delete a user and return the pre-delete snapshot (id, email, name, role)."""
    try:
        user = get_user_by_id(session, user_id, for_update=True)
        snapshot = DeletedUserOut.model_validate(user)
        session.delete(user)
        session.commit()
    except UserNotFoundError:
        session.rollback()
        raise
    return snapshot
