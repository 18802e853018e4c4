"""Payload Validation - one shared validation step per record kind.

Invariants:
    - Pure functions: no IO, no logging, no exceptions escape for bad input
    - Every validator returns a ValidationResult; handlers branch on result.ok
    - A failed result carries a client-facing message plus field-level details
    - serialize_answers is lossless: json.loads(serialize_answers(x)) == x

Design Decisions:
    - Pydantic models do the field checks; this module only maps their errors
      onto the messages each endpoint exposes
"""

import json
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from app.schemas.lead import LeadCreate
from app.schemas.quiz import QuizAttemptCreate

T = TypeVar("T", bound=BaseModel)

LEAD_REQUIRED_MESSAGE = "name and email are required"
LEAD_INVALID_MESSAGE = "Invalid lead payload"
QUIZ_NUMERIC_MESSAGE = "score and total must be numeric"
QUIZ_INVALID_MESSAGE = "Invalid quiz payload"


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Outcome of validating one request payload."""
    ok: bool
    value: T | None = None
    message: str | None = None
    details: list[dict] = field(default_factory=list)

    @classmethod
    def success(cls, value: T) -> "ValidationResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, message: str, details: list[dict]) -> "ValidationResult[T]":
        return cls(ok=False, message=message, details=details)


def validate_lead(payload: Any) -> ValidationResult[LeadCreate]:
    """Validate a lead submission body."""
    return _validate(
        LeadCreate, payload,
        key_fields={"name", "email"},
        key_message=LEAD_REQUIRED_MESSAGE,
        fallback_message=LEAD_INVALID_MESSAGE,
    )


def validate_quiz_attempt(payload: Any) -> ValidationResult[QuizAttemptCreate]:
    """Validate a quiz attempt body. Numeric fields are checked strictly."""
    return _validate(
        QuizAttemptCreate, payload,
        key_fields={"score", "total"},
        key_message=QUIZ_NUMERIC_MESSAGE,
        fallback_message=QUIZ_INVALID_MESSAGE,
    )


def serialize_answers(answers: Any) -> str | None:
    """JSON text for storage, or None when no answers were sent."""
    if answers is None:
        return None
    return json.dumps(answers, ensure_ascii=False)


# --- Helpers ------------------------------------------------------------------


def _validate(
    model: type[T],
    payload: Any,
    key_fields: set[str],
    key_message: str,
    fallback_message: str,
) -> ValidationResult[T]:
    if not isinstance(payload, dict):
        return ValidationResult.failure(
            fallback_message,
            [{"field": "body", "message": "Expected a JSON object", "type": "dict_type"}],
        )
    try:
        value = model.model_validate(payload)
    except ValidationError as exc:
        details = _error_details(exc)
        failed = {d["field"] for d in details}
        message = key_message if failed & key_fields else fallback_message
        return ValidationResult.failure(message, details)
    return ValidationResult.success(value)


def _error_details(exc: ValidationError) -> list[dict]:
    """Flatten pydantic errors to field/message/type dicts."""
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
