"""Unit tests for the input validator: identifier and update schemas and the issue list."""

import unittest

from app.core.errors import RequestValidationFailed, format_validation_error
from app.core.validation import validate
from app.schemas.auth import SignUpRequest
from app.schemas.users import UserIdParams, UserUpdate


class TestUserIdParams(unittest.TestCase):
    """The identifier schema coerces path segments and rejects non-positive or non-numeric ids."""

    def test_coerces_numeric_string(self) -> None:
        self.assertEqual(validate(UserIdParams, {"id": "42"}).id, 42)

    def test_rejects_zero_and_negative(self) -> None:
        for raw in ("0", "-1", "-250"):
            with self.subTest(raw=raw):
                with self.assertRaises(RequestValidationFailed) as ctx:
                    validate(UserIdParams, {"id": raw})
                self.assertEqual(
                    ctx.exception.issues,
                    [{"field": "id", "message": "User ID must be a positive integer"}],
                )

    def test_rejects_non_numeric(self) -> None:
        for raw in ("abc", "1.5", ""):
            with self.subTest(raw=raw):
                with self.assertRaises(RequestValidationFailed) as ctx:
                    validate(UserIdParams, {"id": raw})
                self.assertEqual(ctx.exception.issues[0]["field"], "id")

    def test_rejects_ids_beyond_integer_column(self) -> None:
        self.assertEqual(validate(UserIdParams, {"id": "2147483647"}).id, 2147483647)
        for raw in ("2147483648", "9223372036854775808", "99999999999999999999"):
            with self.subTest(raw=raw):
                with self.assertRaises(RequestValidationFailed) as ctx:
                    validate(UserIdParams, {"id": raw})
                self.assertEqual(
                    ctx.exception.issues,
                    [{"field": "id", "message": "User ID must be at most 2147483647"}],
                )


class TestUserUpdate(unittest.TestCase):
    """The update schema trims, lower-cases, and requires at least one field."""

    def test_empty_body_rejected(self) -> None:
        with self.assertRaises(RequestValidationFailed) as ctx:
            validate(UserUpdate, {})
        self.assertEqual(
            ctx.exception.issues,
            [{"field": "", "message": "At least one field must be provided for update"}],
        )
        self.assertEqual(
            ctx.exception.message,
            "Invalid input: At least one field must be provided for update",
        )

    def test_all_null_fields_rejected(self) -> None:
        with self.assertRaises(RequestValidationFailed) as ctx:
            validate(UserUpdate, {"name": None, "email": None, "role": None})
        self.assertEqual(
            ctx.exception.issues,
            [
                {"field": "name", "message": "Expected string, received null"},
                {"field": "email", "message": "Expected string, received null"},
                {"field": "role", "message": "Expected string, received null"},
            ],
        )

    def test_null_alongside_valid_field_rejected(self) -> None:
        with self.assertRaises(RequestValidationFailed) as ctx:
            validate(UserUpdate, {"name": "Ok name", "email": None})
        self.assertEqual(
            ctx.exception.issues,
            [{"field": "email", "message": "Expected string, received null"}],
        )

    def test_unknown_fields_only_rejected(self) -> None:
        with self.assertRaises(RequestValidationFailed):
            validate(UserUpdate, {"password": "hunter22"})

    def test_email_normalized(self) -> None:
        update = validate(UserUpdate, {"email": "  Foo@Bar.COM "})
        self.assertEqual(update.email, "foo@bar.com")
        self.assertEqual(update.changes(), {"email": "foo@bar.com"})

    def test_name_trimmed_then_length_checked(self) -> None:
        self.assertEqual(validate(UserUpdate, {"name": "  Grace  "}).name, "Grace")
        with self.assertRaises(RequestValidationFailed) as ctx:
            validate(UserUpdate, {"name": "  G  "})
        self.assertEqual(ctx.exception.issues[0]["field"], "name")

    def test_name_too_long(self) -> None:
        with self.assertRaises(RequestValidationFailed):
            validate(UserUpdate, {"name": "x" * 256})

    def test_invalid_email(self) -> None:
        with self.assertRaises(RequestValidationFailed) as ctx:
            validate(UserUpdate, {"email": "not-an-email"})
        self.assertEqual(ctx.exception.issues[0]["field"], "email")

    def test_invalid_role(self) -> None:
        with self.assertRaises(RequestValidationFailed) as ctx:
            validate(UserUpdate, {"role": "root"})
        self.assertEqual(ctx.exception.issues[0]["field"], "role")

    def test_changes_only_include_supplied_fields(self) -> None:
        update = validate(UserUpdate, {"name": "Grace Hopper", "role": "admin", "extra": 1})
        self.assertEqual(update.changes(), {"name": "Grace Hopper", "role": "admin"})

    def test_non_object_body_rejected(self) -> None:
        for body in (None, [], "name", 3):
            with self.subTest(body=body):
                with self.assertRaises(RequestValidationFailed) as ctx:
                    validate(UserUpdate, body)
                self.assertEqual(ctx.exception.issues[0]["field"], "body")


class TestSignUpRequest(unittest.TestCase):
    def test_password_not_trimmed(self) -> None:
        body = validate(
            SignUpRequest,
            {"name": " Ada ", "email": " ADA@Mail.com", "password": " spaced "},
        )
        self.assertEqual(body.name, "Ada")
        self.assertEqual(body.email, "ada@mail.com")
        self.assertEqual(body.password, " spaced ")

    def test_short_password_rejected(self) -> None:
        with self.assertRaises(RequestValidationFailed) as ctx:
            validate(SignUpRequest, {"name": "Ada", "email": "ada@mail.com", "password": "123"})
        self.assertEqual(ctx.exception.issues[0]["field"], "password")


class TestFormatValidationError(unittest.TestCase):
    def test_joins_messages(self) -> None:
        issues = [
            {"field": "name", "message": "too short"},
            {"field": "email", "message": "bad email"},
        ]
        self.assertEqual(format_validation_error(issues), "Invalid input: too short, bad email")

    def test_empty(self) -> None:
        self.assertEqual(format_validation_error([]), "Validation failed")


if __name__ == "__main__":
    unittest.main()
