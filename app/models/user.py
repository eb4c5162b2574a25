"""ORM model for user records (auth and RBAC)."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Integer, String, func

from app.models.base import Base


def utcnow() -> datetime:
    return datetime.now(UTC)


class User(Base):
    """
    User account for cookie-JWT authentication and role-based access control.

    role: 'admin' or 'user'. The password column holds a bcrypt hash only.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column("password", String(255), nullable=False)
    role = Column(String(50), nullable=False, default="user", server_default="user")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role!r}>"
