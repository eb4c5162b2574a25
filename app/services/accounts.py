"""Account lifecycle: create users with hashed passwords and authenticate by email."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.security import BCRYPT_ROUNDS, hash_password, verify_password
from app.models import User
from app.services.users import EmailAlreadyExistsError

logger = logging.getLogger(__name__)


class InvalidCredentialsError(Exception):
    """Raised when email/password do not match a stored account."""

    def __init__(self, message: str = "Invalid email or password") -> None:
        self.message = message
        super().__init__(message)


def get_user_by_email(session: Session, email: str) -> User | None:
    return session.scalars(select(User).where(User.email == email).limit(1)).first()


def create_user(
    session: Session,
    name: str,
    email: str,
    password: str,
    role: str = "user",
    rounds: int = BCRYPT_ROUNDS,
) -> User:
    """Insert a new user. Raises EmailAlreadyExistsError if the email is taken."""
    if get_user_by_email(session, email) is not None:
        raise EmailAlreadyExistsError(email)
    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password, rounds=rounds),
        role=role,
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent sign-up for the same email.
        session.rollback()
        raise EmailAlreadyExistsError(email) from e
    session.refresh(user)
    logger.info("User created: id=%s role=%s", user.id, user.role)
    return user


def authenticate_user(session: Session, email: str, password: str) -> User:
    """Return the user for valid credentials; raise InvalidCredentialsError otherwise."""
    user = get_user_by_email(session, email)
    if user is None or not verify_password(password, user.password_hash):
        raise InvalidCredentialsError()
    return user
