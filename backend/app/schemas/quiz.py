"""Quiz Attempt Schemas - scored quiz submission contract.

Invariants:
    - score and total are finite JSON numbers; bools and numeric strings rejected
    - user_email: optional string, empty string normalized to None
    - answers: any JSON value, serialized to text before storage
    - ip / user_agent are not part of the body; extra keys are ignored
"""

import math
from datetime import datetime
from typing import Any

from pydantic import BaseModel, StrictStr, field_validator


class QuizAttemptCreate(BaseModel):
    """Quiz attempt submission body."""
    user_email: StrictStr | None = None
    score: float
    total: float
    answers: Any = None

    @field_validator("score", "total", mode="before")
    @classmethod
    def require_number(cls, v: Any) -> Any:
        # bool is an int subclass
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("must be a number")
        try:
            finite = math.isfinite(v)
        except OverflowError:
            finite = False
        if not finite:
            raise ValueError("must be a finite number")
        return v

    @field_validator("user_email")
    @classmethod
    def blank_email_to_none(cls, v: str | None) -> str | None:
        return v or None


class QuizAttemptCreated(BaseModel):
    """Quiz attempt creation response."""
    id: int
    created_at: datetime | None = None
