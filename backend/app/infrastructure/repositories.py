"""Record Repositories - one INSERT ... RETURNING per submission.

Invariants:
    - add() executes exactly one statement and commits; the statement is the
      atomicity boundary (row fully persisted with an id, or not at all)
    - Repositories never update or delete
    - Errors surface as DatabaseError via DatabaseSessionManager.session()
"""

from datetime import datetime

from sqlalchemy import insert, select

from app.core.domain_types import ClientMeta, LeadId, QuizAttemptId
from app.infrastructure.database import DatabaseSessionManager
from app.models.lead import Lead
from app.models.quiz_attempt import QuizAttempt


class LeadRepository:
    """Persistence for Lead records."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def add(
        self, name: str, email: str, message: str | None,
    ) -> LeadId:
        stmt = (
            insert(Lead)
            .values(name=name, email=email, message=message)
            .returning(Lead.id)
        )
        async with self._db.session() as session:
            result = await session.execute(stmt)
            lead_id = result.scalar_one()
            await session.commit()
        return LeadId(lead_id)

    async def get(self, lead_id: int) -> Lead | None:
        async with self._db.session() as session:
            result = await session.execute(
                select(Lead).where(Lead.id == lead_id),
            )
            return result.scalar_one_or_none()


class QuizAttemptRepository:
    """Persistence for QuizAttempt records."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def add(
        self,
        user_email: str | None,
        score: float,
        total: float,
        answers: str | None,
        client: ClientMeta,
    ) -> tuple[QuizAttemptId, datetime | None]:
        stmt = (
            insert(QuizAttempt)
            .values(
                user_email=user_email,
                score=score,
                total=total,
                answers=answers,
                ip=client.ip,
                user_agent=client.user_agent,
            )
            .returning(QuizAttempt.id, QuizAttempt.created_at)
        )
        async with self._db.session() as session:
            result = await session.execute(stmt)
            row = result.one()
            await session.commit()
        return QuizAttemptId(row.id), row.created_at

    async def get(self, attempt_id: int) -> QuizAttempt | None:
        async with self._db.session() as session:
            result = await session.execute(
                select(QuizAttempt).where(QuizAttempt.id == attempt_id),
            )
            return result.scalar_one_or_none()
