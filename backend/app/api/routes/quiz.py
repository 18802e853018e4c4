"""Quiz Attempt Submission - POST /api/quiz.

Invariants:
    - Readiness is checked before the body is read (503 for any input)
    - score and total must be JSON numbers; anything else is 400 and writes nothing
    - ip and user_agent come from the request context; body keys with those
      names are ignored
    - answers stored as JSON text; 201 returns id and the store's created_at
"""

import logging

from fastapi import APIRouter, Depends, Request, status

from app.api.dependencies import (
    get_client_meta, get_quiz_repository, read_json_payload,
)
from app.core.domain_types import ClientMeta, RecordKind
from app.core.errors import ErrorContext, PayloadValidationError
from app.core.validation import serialize_answers, validate_quiz_attempt
from app.infrastructure.repositories import QuizAttemptRepository
from app.schemas.quiz import QuizAttemptCreated

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["quiz"])


@router.post(
    "/quiz", response_model=QuizAttemptCreated,
    status_code=status.HTTP_201_CREATED,
)
async def create_quiz_attempt(
    request: Request,
    repo: QuizAttemptRepository = Depends(get_quiz_repository),
    client: ClientMeta = Depends(get_client_meta),
):
    """Store a scored quiz submission."""
    payload = await read_json_payload(request)
    result = validate_quiz_attempt(payload)
    if not result.ok:
        raise PayloadValidationError(
            result.message, result.details,
            ErrorContext(
                path=request.url.path,
                record_kind=RecordKind.QUIZ_ATTEMPT.value,
            ),
        )
    attempt = result.value
    attempt_id, created_at = await repo.add(
        user_email=attempt.user_email,
        score=attempt.score,
        total=attempt.total,
        answers=serialize_answers(attempt.answers),
        client=client,
    )
    logger.info(
        "Quiz attempt saved",
        extra={
            "record_kind": RecordKind.QUIZ_ATTEMPT.value,
            "record_id": attempt_id,
        },
    )
    return QuizAttemptCreated(id=attempt_id, created_at=created_at)
