"""
Create a user (e.g. first admin). Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user "Site Admin" admin@company.com your-secure-password admin
"""
import argparse
import sys

from app.core.config import get_settings
from app.core.database import build_context
from app.core.errors import RequestValidationFailed
from app.core.logging_setup import configure_logging
from app.core.validation import validate
from app.schemas.auth import SignUpRequest
from app.services.accounts import create_user
from app.services.users import EmailAlreadyExistsError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user (bootstrap admins here).")
    parser.add_argument("name", help="Display name (2-255 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    try:
        body = validate(
            SignUpRequest,
            {"name": args.name, "email": args.email, "password": args.password},
        )
    except RequestValidationFailed as e:
        print(e.message, file=sys.stderr)
        return 1

    ctx = build_context(settings)
    db = ctx.session_factory()
    try:
        user = create_user(
            db,
            name=body.name,
            email=body.email,
            password=body.password,
            role=args.role,
            rounds=settings.BCRYPT_ROUNDS,
        )
    except EmailAlreadyExistsError:
        print(f"User '{body.email}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.email}' (id={user.id}) with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
