"""Shared builders for tests: isolated apps, seeded users and signed cookies."""

from typing import Any

from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.database import AppContext, build_context
from app.core.security import create_access_token, hash_password
from app.main import create_app
from app.models import Base, User

TEST_SECRET = "test-signing-secret-at-least-32-bytes"
DEFAULT_PASSWORD = "secret-pass"


def make_settings(**overrides: Any) -> Settings:
    """Settings for an in-memory SQLite database; each call gets its own database."""
    values: dict[str, Any] = {
        "APP_ENV": "test",
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": TEST_SECRET,
        "BCRYPT_ROUNDS": 4,
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


def make_context(**overrides: Any) -> AppContext:
    ctx = build_context(make_settings(**overrides))
    Base.metadata.create_all(ctx.engine)
    return ctx


def make_app(**overrides: Any) -> FastAPI:
    app = create_app(make_settings(**overrides))
    Base.metadata.create_all(app.state.context.engine)
    return app


def add_user(
    ctx: AppContext,
    name: str = "Ada Lovelace",
    email: str = "ada@mail.com",
    role: str = "user",
    password: str = DEFAULT_PASSWORD,
    **fields: Any,
) -> User:
    """Insert a user directly through the store and return it detached."""
    session = ctx.session_factory()
    try:
        user = User(
            name=name,
            email=email,
            role=role,
            password_hash=hash_password(password, rounds=4),
            **fields,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        return user
    finally:
        session.close()


def token_for(ctx: AppContext, user_id: int, role: str) -> str:
    return create_access_token(ctx.settings, sub=user_id, role=role)


def client_as(app: FastAPI, user_id: int | None = None, role: str = "user") -> TestClient:
    """TestClient carrying a valid token cookie for (user_id, role); anonymous if user_id is None."""
    if user_id is None:
        return TestClient(app)
    token = token_for(app.state.context, user_id, role)
    return TestClient(app, cookies={"token": token})
