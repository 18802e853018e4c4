"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - LeadId, QuizAttemptId wrap store-generated integers
    - Readiness is one of three explicit states; handlers never infer it
    - ClientMeta is built from the request context only, never from the body

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

LeadId = NewType("LeadId", int)
QuizAttemptId = NewType("QuizAttemptId", int)


# ─── Enums ───────────────────────────────────────────────────────

class ReadinessState(str, Enum):
    """Persistence layer lifecycle: not_ready -> ready | failed."""
    NOT_READY = "not_ready"
    READY = "ready"
    FAILED = "failed"


class RecordKind(str, Enum):
    """Record kinds accepted by the API. Used in logs and error context."""
    LEAD = "lead"
    QUIZ_ATTEMPT = "quiz_attempt"


# ─── Value Objects ───────────────────────────────────────────────

@dataclass(frozen=True)
class ClientMeta:
    """Request-derived metadata stored alongside a quiz attempt."""
    ip: str | None
    user_agent: str | None
