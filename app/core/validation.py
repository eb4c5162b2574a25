"""Schema-based parsing of raw request input into typed values or a structured issue list."""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from app.core.errors import RequestValidationFailed

ModelT = TypeVar("ModelT", bound=BaseModel)


def issues_from_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Flatten pydantic error dicts into (field, message) pairs."""
    issues: list[dict[str, str]] = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "path", "query")]
        ctx_error = (err.get("ctx") or {}).get("error")
        # Custom validators raise ValueError; report their text without pydantic's prefix.
        if err.get("type") == "value_error" and ctx_error is not None:
            message = str(ctx_error)
        else:
            message = err.get("msg", "Invalid value")
        issues.append({"field": ".".join(loc), "message": message})
    return issues


def validate(model: type[ModelT], data: Any) -> ModelT:
    """Parse data into model; raise RequestValidationFailed with the issue list on failure."""
    if not isinstance(data, dict):
        raise RequestValidationFailed(
            [{"field": "body", "message": "Request body must be a JSON object"}]
        )
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise RequestValidationFailed(issues_from_errors(e.errors())) from e
